"""Offset arithmetic over a stride table.

A stride table for an array with ``ndim`` dimensions holds ``ndim + 1``
integers: ``table[i + 1]`` is the number of elements to skip to advance one
step along axis ``i``, ``table[ndim]`` is the element unit (1 for a freshly
built array) and ``table[0]`` is the element count. After a transposition the
per-axis entries are permuted and no longer decrease monotonically; every
function here reads them as given and never re-sorts them.

The plain functions do no bounds checking. The ``check_*`` functions are the
checked path, used by arrays created with ``boundscheck=True``.
"""
import numbers

from stridearray.errors import BoundsCheckError, err_too_many_indices


def is_integer(x):
    return isinstance(x, numbers.Integral)


def coordinate_offset(coords, table):
    """Flat offset of the element at `coords`, one integer per axis."""
    offset = 0
    for c, s in zip(coords, table[1:]):
        offset += c * s
    return offset


def positional_offset(args, table):
    """Flat offset of the element addressed by up to ``ndim`` positional
    indices, consumed left to right.

    Missing trailing indices are taken as zero, so for a 3-dimensional array
    ``positional_offset((x,), t) == coordinate_offset((x, 0, 0), t)``.
    """
    offset = 0
    for a, s in zip(args, table[1:]):
        offset += a * s
    return offset


def check_integer_selection(dim_sel, dim_len):

    if not is_integer(dim_sel):
        raise TypeError('expected integer index, found {!r}'.format(dim_sel))

    # normalize type to int
    dim_sel = int(dim_sel)

    # handle out of bounds, no wraparound
    if dim_sel >= dim_len or dim_sel < 0:
        raise BoundsCheckError(dim_len)

    return dim_sel


def check_flat_index(rawind, size):
    return check_integer_selection(rawind, size)


def check_positional(args, shape):
    if len(args) > len(shape):
        err_too_many_indices(args, shape)
    return tuple(check_integer_selection(a, n) for a, n in zip(args, shape))


def check_coordinates(coords, shape):
    coords = tuple(coords)
    if len(coords) > len(shape):
        err_too_many_indices(coords, shape)
    if len(coords) < len(shape):
        raise IndexError('too few indices for array; expected {}, got {}'
                         .format(len(shape), len(coords)))
    return tuple(check_integer_selection(c, n) for c, n in zip(coords, shape))


def roll_index(rawind, axis, forward, shape, table):
    """Flat index of the neighbour one step along a non-negative `axis`,
    with a periodic boundary.

    Stepping past either end of the axis wraps around to the other end. For
    a row-major layout the position along the axis equals
    ``(rawind % table[axis]) // table[axis + 1]``; dividing first and then
    taking the remainder gives the same position and stays correct once
    axes have been transposed.
    """
    step = table[axis + 1]
    extent = shape[axis]
    pos = (rawind // step) % extent
    if forward:
        rawind += step
        if pos == extent - 1:
            rawind -= extent * step
    else:
        rawind -= step
        if pos == 0:
            rawind += extent * step
    return rawind


def rollind(rawind, axis, shape, table):
    """Roll `rawind` along an axis whose sign selects the direction.

    * ``axis`` in ``0, 1, ..., ndim - 1`` steps forward along ``axis``.
    * ``axis`` in ``-ndim, 1 - ndim, ..., -1`` steps backward along
      ``axis + ndim``.

    Hence ``rollind(rollind(k, a), a - ndim) == k``.
    """
    if axis < 0:
        return roll_index(rawind, axis + len(shape), False, shape, table)
    else:
        return roll_index(rawind, axis, True, shape, table)


def unravel_index(rawind, shape, table):
    """Coordinates of the element stored at flat index `rawind` under the
    given stride table."""
    return tuple((rawind // table[i + 1]) % shape[i] for i in range(len(shape)))
