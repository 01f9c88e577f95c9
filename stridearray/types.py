from typing import Literal, Sequence, Union

MISMATCH_POLICY = Literal["warn", "raise"]

ShapeLike = Union[int, Sequence[int]]
