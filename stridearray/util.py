import numbers
from textwrap import TextWrapper
from typing import Any, List, Optional, Tuple

import numpy as np
from numcodecs.compat import ensure_ndarray

from stridearray.config import config
from stridearray.errors import AxisError, InvalidShapeError
from stridearray.types import ShapeLike


def _check_extents(shape: Tuple[Any, ...], given: Any) -> Tuple[int, ...]:
    for s in shape:
        if not isinstance(s, numbers.Integral):
            raise InvalidShapeError(given, "shape entries must be integers")
        if s <= 0:
            raise InvalidShapeError(given, "positive shape needed")
    return tuple(int(s) for s in shape)


def normalize_shape(shape: ShapeLike, ndim: Optional[int] = None) -> Tuple[int, ...]:
    """Convenience function to normalize the `shape` argument.

    An integer is taken as the width of every one of `ndim` axes (a
    hypercube); a sequence gives the extent of each axis and must hold
    exactly `ndim` entries when `ndim` is given.
    """

    if shape is None:
        raise TypeError('shape is None')

    # handle uniform width
    if isinstance(shape, numbers.Integral):
        shape = (shape,) * (1 if ndim is None else ndim)

    shape = tuple(shape)
    if ndim is not None and len(shape) != ndim:
        raise InvalidShapeError(
            shape, "expected {} entries, found {}".format(ndim, len(shape)))
    if len(shape) == 0:
        raise InvalidShapeError(shape, "at least one dimension needed")

    return _check_extents(shape, shape)


def normalize_shape_buffer(buf, ndim: int) -> Tuple[int, ...]:
    """Read the shape of an `ndim`-dimensional array from the first `ndim`
    integers held by an object exposing the buffer protocol."""

    arr = ensure_ndarray(buf).reshape(-1)
    if arr.dtype.kind not in 'ui':
        raise InvalidShapeError(buf, "shape buffer must hold integers, found {}".format(arr.dtype))
    if arr.shape[0] < ndim:
        raise InvalidShapeError(
            buf, "expected at least {} entries, found {}".format(ndim, arr.shape[0]))

    return _check_extents(tuple(int(s) for s in arr[:ndim]), buf)


def compute_strides(shape: Tuple[int, ...]) -> List[int]:
    """Compute the stride table of a row-major array with the given `shape`.

    The table has ``len(shape) + 1`` entries: the last one is the element unit
    and the first one is the total number of elements.
    """

    ndim = len(shape)
    table = [1] * (ndim + 1)
    for i in range(ndim - 1, -1, -1):
        table[i] = table[i + 1] * shape[i]
    return table


def normalize_axis(axis, ndim: int) -> int:

    # normalize type to int
    axis = int(axis)

    if axis < -ndim or axis >= ndim:
        raise AxisError(axis, ndim)

    # handle wraparound
    if axis < 0:
        axis += ndim

    return axis


def normalize_dtype(dtype) -> np.dtype:
    if dtype is None:
        dtype = config.get("array.dtype")
    return np.dtype(dtype)


def human_readable_size(size) -> str:
    if size < 2**10:
        return str(size)
    for power, suffix in enumerate("KMGT", start=1):
        if size < 2**(10 * (power + 1)):
            break
    else:
        power, suffix = 5, "P"
    return "%.1f%s" % (size / float(2**(10 * power)), suffix)


def info_text_report(items: List[Tuple[str, Any]]) -> str:
    """Format `(key, value)` pairs as aligned ``key : value`` lines, wrapping
    long values at 80 columns."""
    width = max(len(k) for k, _ in items)
    lines = []
    for k, v in items:
        wrapper = TextWrapper(width=80,
                              initial_indent=k.ljust(width) + " : ",
                              subsequent_indent=" " * width + " : ")
        lines.append(wrapper.fill(str(v)))
    return "".join(line + "\n" for line in lines)


class InfoReporter(object):
    """Renders the `info_items` of an array when shown."""

    def __init__(self, obj):
        self.obj = obj

    def __repr__(self):
        return info_text_report(self.obj.info_items())


def typestr(o) -> str:
    return f"{type(o).__module__}.{type(o).__name__}"
