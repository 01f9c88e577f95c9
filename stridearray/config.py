"""
The config module holds the runtime configuration of stridearray and is based on the Donfig
python library.

Example:
    Turn on bounds checking for every array created afterwards, or only within a block:

    ```python
    from stridearray.config import config

    config.set({"array.boundscheck": True})

    with config.set({"matrix.on_mismatch": "raise"}):
        ...
    ```

    The same values can be given through environment variables, e.g.
    ``STRIDEARRAY_MATRIX__ON_MISMATCH=raise``. The double underscore ``__`` is used to indicate
    nested access.

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from __future__ import annotations

from typing import Any, cast

from donfig import Config as DConfig

from stridearray.errors import BadConfigError
from stridearray.types import MISMATCH_POLICY


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "STRIDEARRAY_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for stridearray
config = Config(
    "stridearray",
    defaults=[
        {
            "array": {
                "dtype": "float64",
                "boundscheck": False,
            },
            "matrix": {"on_mismatch": "warn"},
        }
    ],
)


def parse_mismatch_policy(data: Any) -> MISMATCH_POLICY:
    if data in ("warn", "raise"):
        return cast(MISMATCH_POLICY, data)
    raise BadConfigError("matrix.on_mismatch", data)


def parse_boundscheck(data: Any) -> bool:
    if isinstance(data, bool):
        return data
    raise BadConfigError("array.boundscheck", data)
