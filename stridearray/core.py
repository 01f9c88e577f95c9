import logging
import sys

import numpy as np

from stridearray.config import config, parse_boundscheck
from stridearray.errors import (
    DimensionalityError,
    DimensionMismatchError,
    ReadOnlyError,
)
from stridearray.indexing import (
    check_coordinates,
    check_flat_index,
    check_integer_selection,
    check_positional,
    coordinate_offset,
    is_integer,
    positional_offset,
    roll_index,
    rollind,
    unravel_index,
)
from stridearray.util import (
    InfoReporter,
    compute_strides,
    human_readable_size,
    normalize_axis,
    normalize_dtype,
    normalize_shape,
    normalize_shape_buffer,
    typestr,
)

__all__ = ["NDArray"]

logger = logging.getLogger(__name__)


class NDArray:
    """A contiguous array with a fixed number of dimensions that owns its
    buffer and addresses elements through a stride table.

    Parameters
    ----------
    shape : int, sequence of ints or NDArray, optional
        Array shape. An integer is the width of every axis. A sequence gives
        the extent of each axis and must have `ndim` entries when `ndim` is
        given. Another NDArray is deep copied, converting its elements to
        `dtype`. If not provided, the array is empty.
    dtype : string or dtype, optional
        NumPy dtype. Defaults to the ``array.dtype`` configuration value, or
        to the dtype of the source array when copying.
    ndim : int, optional
        Number of dimensions. Defaults to the length of `shape`, or 1 for an
        integer or missing `shape`.
    fill_value : object, optional
        Value written to every element after allocation. If not provided,
        the buffer is left uninitialized.
    read_only : bool, optional
        True if array should be protected against modification.
    boundscheck : bool, optional
        If True, every index is validated against the shape before it is
        used. Defaults to the ``array.boundscheck`` configuration value.

    Notes
    -----
    The stride table holds ``ndim + 1`` entries. ``strides[i]`` is the number
    of elements to skip to advance one step along axis ``i`` and the extra
    leading entry is the number of elements in the array. :meth:`transpose`
    permutes strides together with the shape, so after a transposition the
    strides need not decrease from the outermost axis inward; see
    :attr:`is_canonical`.

    Without bounds checking, an out-of-range index, coordinate or axis is
    not detected: it may raise or silently address the wrong element.
    """

    _fixed_ndim = None

    def __init__(
        self,
        shape=None,
        dtype=None,
        ndim=None,
        fill_value=None,
        read_only=False,
        boundscheck=None,
    ):
        if self._fixed_ndim is not None:
            if ndim is not None and ndim != self._fixed_ndim:
                raise DimensionalityError(self._fixed_ndim, ndim)
            ndim = self._fixed_ndim

        self._shape = None
        self._stride = None
        self._buffer = None
        self._read_only = False

        if isinstance(shape, NDArray):
            self._init_copy(shape, dtype, ndim, boundscheck)
        else:
            self._dtype = normalize_dtype(dtype)
            if boundscheck is None:
                boundscheck = parse_boundscheck(config.get("array.boundscheck"))
            self._boundscheck = bool(boundscheck)
            if shape is None:
                self._ndim = 1 if ndim is None else int(ndim)
            else:
                shape = normalize_shape(shape, ndim)
                self._ndim = len(shape)
                self._allocate(shape)

        if fill_value is not None:
            self.fill(fill_value)
        self._read_only = bool(read_only)

    @classmethod
    def from_shape_buffer(cls, buf, ndim, dtype=None, **kwargs):
        """Create an array whose shape is read from the first `ndim` integers
        of `buf`, any object exposing the buffer protocol."""
        shape = normalize_shape_buffer(buf, ndim)
        return cls(shape, dtype=dtype, ndim=ndim, **kwargs)

    def _init_copy(self, other, dtype, ndim, boundscheck):
        if ndim is not None and ndim != other._ndim:
            raise DimensionalityError(ndim, other._ndim)
        self._ndim = other._ndim
        self._dtype = other._dtype if dtype is None else np.dtype(dtype)
        self._boundscheck = other._boundscheck if boundscheck is None else bool(boundscheck)
        if not other.empty:
            # shape and strides verbatim, a transposed source stays transposed
            self._shape = list(other._shape)
            self._stride = list(other._stride)
            self._buffer = other._buffer.astype(self._dtype, copy=True)

    def _allocate(self, shape):
        self._shape = list(shape)
        self._stride = compute_strides(shape)
        self._buffer = np.empty(self._stride[0], dtype=self._dtype)
        logger.debug("allocated %s elements of %s for shape %s",
                     self._stride[0], self._dtype, tuple(shape))

    def _reset(self):
        self._shape = None
        self._stride = None
        self._buffer = None

    def _check_writable(self):
        if self._read_only:
            raise ReadOnlyError()

    def _check_ndim(self, other):
        if other._ndim != self._ndim:
            raise DimensionalityError(self._ndim, other._ndim)

    @property
    def ndim(self):
        """Number of dimensions."""
        return self._ndim

    @property
    def shape(self):
        """A tuple of integers describing the length of each dimension of
        the array. Empty for an empty array."""
        if self._shape is None:
            return ()
        return tuple(self._shape)

    @property
    def strides(self):
        """A tuple with the number of elements to skip to advance one step
        along each dimension. Unlike NumPy, strides count elements, not
        bytes."""
        if self._stride is None:
            return ()
        return tuple(self._stride[1:])

    @property
    def size(self):
        """The total number of elements in the array."""
        if self._stride is None:
            return 0
        return self._stride[0]

    @property
    def empty(self):
        """True if the array holds no shape and no buffer."""
        return self._stride is None

    @property
    def dtype(self):
        """The NumPy data type."""
        return self._dtype

    @property
    def itemsize(self):
        """The size in bytes of each item in the array."""
        return self._dtype.itemsize

    @property
    def nbytes(self):
        """The total number of bytes held by the buffer."""
        return self.size * self.itemsize

    @property
    def nbytes_attached(self):
        """Bytes of bookkeeping attached to the array: the instance itself
        plus its shape and stride table."""
        return sys.getsizeof(self) + np.dtype(np.intp).itemsize * (2 * self._ndim + 1)

    @property
    def buffer(self):
        """The flat backing buffer, or None for an empty array."""
        return self._buffer

    @property
    def read_only(self):
        """A boolean, True if modification operations are not permitted."""
        return self._read_only

    @read_only.setter
    def read_only(self, value):
        self._read_only = bool(value)

    @property
    def boundscheck(self):
        """A boolean, True if indices are validated before use."""
        return self._boundscheck

    @property
    def is_canonical(self):
        """True if the strides are those of a freshly created row-major
        array, i.e., no transposition is in effect."""
        if self._stride is None:
            return True
        return self._stride == compute_strides(self._shape)

    def __len__(self):
        return self.size

    def __iter__(self):
        if self._buffer is None:
            return iter(())
        return iter(self._buffer)

    def _flat(self, rawind):
        if not is_integer(rawind):
            raise TypeError('flat index must be an integer, found {!r}; use a '
                            'tuple for positional indexing'.format(rawind))
        if self._boundscheck:
            rawind = check_flat_index(rawind, self.size)
        return rawind

    def _positional(self, args):
        if self._boundscheck:
            args = check_positional(args, self.shape)
        return positional_offset(args, self._stride)

    def _coordinate(self, coords):
        if self._boundscheck:
            coords = check_coordinates(coords, self.shape)
        return coordinate_offset(coords, self._stride)

    def __getitem__(self, key):
        """Retrieve a single element.

        An integer key is a raw index into the flat buffer. A tuple key holds
        up to `ndim` positional indices; missing trailing indices are zero.

        Examples
        --------
        >>> from stridearray import NDArray
        >>> a = NDArray((2, 3, 4), dtype='i4')
        >>> for k in range(a.size):
        ...     a[k] = k
        >>> int(a[5])
        5
        >>> int(a[1, 2, 3])
        23
        >>> int(a[1, 2]) == int(a[1, 2, 0])
        True

        """
        if isinstance(key, tuple):
            return self._buffer[self._positional(key)]
        return self._buffer[self._flat(key)]

    def __setitem__(self, key, value):
        self._check_writable()
        if isinstance(key, tuple):
            self._buffer[self._positional(key)] = value
        else:
            self._buffer[self._flat(key)] = value

    def get_coordinate(self, coords):
        """Retrieve the element at `coords`, a sequence of `ndim` integers."""
        return self._buffer[self._coordinate(coords)]

    def set_coordinate(self, coords, value):
        """Modify the element at `coords`, a sequence of `ndim` integers."""
        self._check_writable()
        self._buffer[self._coordinate(coords)] = value

    def offset(self, *args):
        """Raw index of the element addressed by up to `ndim` positional
        indices, missing trailing indices being zero."""
        return self._positional(args)

    def ravel_index(self, coords):
        """Raw index of the element at `coords`."""
        return self._coordinate(coords)

    def unravel_index(self, rawind):
        """Coordinates of the element stored at raw index `rawind`."""
        if self._boundscheck:
            rawind = check_flat_index(rawind, self.size)
        return unravel_index(rawind, self._shape, self._stride)

    def transpose(self, i=1, j=0):
        """Swap axes `i` and `j` in place by exchanging their extents and
        strides. No data is moved.

        Examples
        --------
        >>> from stridearray import NDArray
        >>> a = NDArray((3, 2), dtype='i4')
        >>> a[2, 1] = 7
        >>> a.transpose().shape
        (2, 3)
        >>> int(a[1, 2])
        7

        """
        if self._stride is None:
            return self
        i = normalize_axis(i, self._ndim)
        j = normalize_axis(j, self._ndim)
        self._shape[i], self._shape[j] = self._shape[j], self._shape[i]
        self._stride[i + 1], self._stride[j + 1] = self._stride[j + 1], self._stride[i + 1]
        return self

    def roll_index(self, rawind, axis, forward=True):
        """Raw index of the neighbour of `rawind` one step along `axis`, with
        a periodic boundary.

        Parameters
        ----------
        rawind : int
            Raw index of the starting element.
        axis : int
            Non-negative axis along which to step.
        forward : bool, optional
            Step towards higher (True) or lower (False) positions.

        """
        if self._boundscheck:
            rawind = check_flat_index(rawind, self.size)
            axis = check_integer_selection(axis, self._ndim)
        return roll_index(rawind, axis, forward, self._shape, self._stride)

    def rollind(self, rawind, axis):
        """Raw index of the neighbour of `rawind` along `axis`, with a
        periodic boundary.

        A non-negative `axis` in ``0, ..., ndim - 1`` steps forward. A
        negative `axis` in ``-ndim, ..., -1`` steps *backward* along
        ``axis + ndim``, so ``rollind(k, -1)`` undoes ``rollind(k, ndim - 1)``.

        Examples
        --------
        >>> from stridearray import NDArray
        >>> a = NDArray((2, 3))
        >>> a.rollind(2, 1)
        0
        >>> a.rollind(0, -1)
        2

        """
        if self._boundscheck:
            rawind = check_flat_index(rawind, self.size)
            normalize_axis(axis, self._ndim)
        return rollind(rawind, axis, self._shape, self._stride)

    def copy(self):
        """Return a deep copy of the array."""
        return type(self)(self)

    def astype(self, dtype):
        """Return a deep copy of the array with every element converted to
        `dtype`.

        Examples
        --------
        >>> from stridearray import NDArray
        >>> a = NDArray(3, dtype='f8', fill_value=2.7)
        >>> b = a.astype('i4')
        >>> b.dtype
        dtype('int32')
        >>> int(b[0])
        2

        """
        return type(self)(self, dtype=dtype)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def move(self):
        """Return a new array that takes over the shape, strides and buffer
        of this one, leaving this array empty."""
        other = type(self)(dtype=self._dtype, ndim=self._ndim,
                           boundscheck=self._boundscheck)
        return other.move_from(self)

    def move_from(self, other):
        """Take over the shape, strides and buffer of `other`, releasing the
        previous buffer of this array and leaving `other` empty.

        Both arrays are modified, so neither may be read-only.
        """
        if other is self:
            return self
        self._check_writable()
        other._check_writable()
        self._check_ndim(other)
        self.release()
        self._shape, self._stride, self._buffer = other._shape, other._stride, other._buffer
        self._dtype = other._dtype
        other._reset()
        return self

    def swap(self, other):
        """Exchange shape, strides and buffer with `other`. Neither array may
        be read-only."""
        self._check_writable()
        other._check_writable()
        self._check_ndim(other)
        self._shape, other._shape = other._shape, self._shape
        self._stride, other._stride = other._stride, self._stride
        self._buffer, other._buffer = other._buffer, self._buffer
        self._dtype, other._dtype = other._dtype, self._dtype

    def assign(self, value):
        """Assign from another array or a scalar.

        An array is deep copied into this one, converting elements to this
        array's dtype; if the copy fails this array is left unmodified. A
        scalar is written to every element, see :meth:`fill`.
        """
        self._check_writable()
        if not isinstance(value, NDArray):
            return self.fill(value)
        if value is self:
            return self
        tmp = type(self)(value, dtype=self._dtype, ndim=self._ndim)
        self.swap(tmp)
        tmp.release()
        return self

    def fill(self, value):
        """Write `value` to every element in flat order. Does nothing on an
        empty array."""
        self._check_writable()
        if self._buffer is None:
            return self
        self._buffer[...] = value
        return self

    def release(self):
        """Drop the buffer, shape and strides together, leaving the array
        empty. Safe to call on an empty array.

        Allowed on a read-only array: no element is written, only ownership
        of the buffer ends.
        """
        if self._buffer is not None:
            logger.debug("released %s elements of %s", self._stride[0], self._dtype)
        self._reset()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()

    def _pm(self, rhs, coeff):
        """Add (`coeff` > 0) or subtract (`coeff` < 0) `rhs` element by
        element in flat buffer order. Foundation of plus and minus."""
        self._check_writable()
        self._check_ndim(rhs)
        if self.size != rhs.size:
            raise DimensionMismatchError(self.shape, rhs.shape)
        if self._buffer is not None:
            ufunc = np.add if coeff > 0 else np.subtract
            ufunc(self._buffer, rhs._buffer, out=self._buffer, casting="unsafe")
        return self

    def __iadd__(self, rhs):
        if not isinstance(rhs, NDArray):
            return NotImplemented
        return self._pm(rhs, 1)

    def __isub__(self, rhs):
        if not isinstance(rhs, NDArray):
            return NotImplemented
        return self._pm(rhs, -1)

    def __add__(self, rhs):
        if not isinstance(rhs, NDArray):
            return NotImplemented
        return self.copy()._pm(rhs, 1)

    def __sub__(self, rhs):
        if not isinstance(rhs, NDArray):
            return NotImplemented
        return self.copy()._pm(rhs, -1)

    def __neg__(self):
        # unsigned dtypes wrap modulo 2**bits; bool raises TypeError as in numpy
        tmp = self.copy()
        if tmp._buffer is not None:
            np.negative(tmp._buffer, out=tmp._buffer)
        return tmp

    def to_numpy(self):
        """Return a NumPy copy of the data laid out as the array is currently
        addressed, transpositions included."""
        if self._buffer is None:
            return np.empty((0,) * self._ndim, dtype=self._dtype)
        view = np.lib.stride_tricks.as_strided(
            self._buffer,
            shape=self.shape,
            strides=tuple(s * self.itemsize for s in self.strides),
            writeable=False,
        )
        return view.copy()

    def __array__(self, *args, **kwargs):
        return np.array(self.to_numpy(), *args, **kwargs)

    def __repr__(self):
        t = type(self)
        r = f"<{t.__module__}.{t.__name__}"
        if self.empty:
            r += f" empty {self._ndim}-d"
        else:
            r += f" {self.shape}"
        r += f" {self.dtype}"
        if self._read_only:
            r += " read-only"
        r += ">"
        return r

    @property
    def info(self):
        """Report some diagnostic information about the array.

        Examples
        --------
        >>> from stridearray import NDArray
        >>> a = NDArray((100, 20), dtype='i4')
        >>> a.info
        Type             : stridearray.core.NDArray
        Data type        : int32
        Shape            : (100, 20)
        Strides          : (20, 1)
        Canonical layout : True
        Read-only        : False
        Bounds checking  : False
        No. bytes        : 8000 (7.8K)
        <BLANKLINE>

        """
        return InfoReporter(self)

    def info_items(self):
        def bytestr(n):
            if n > 2**10:
                return f"{n} ({human_readable_size(n)})"
            else:
                return str(n)

        items = [
            ("Type", typestr(self)),
            ("Data type", str(self.dtype)),
        ]
        if self.empty:
            items += [("Shape", f"empty ({self._ndim} dimensions)")]
        else:
            items += [
                ("Shape", str(self.shape)),
                ("Strides", str(self.strides)),
                ("Canonical layout", str(self.is_canonical)),
            ]
        items += [
            ("Read-only", str(self.read_only)),
            ("Bounds checking", str(self.boundscheck)),
            ("No. bytes", bytestr(self.nbytes)),
        ]
        return items
