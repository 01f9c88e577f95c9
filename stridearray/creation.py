import numpy as np
from numcodecs.compat import ensure_ndarray

from stridearray.core import NDArray
from stridearray.matrix import Matrix


def create(
    shape=None,
    dtype=None,
    ndim=None,
    fill_value=None,
    read_only=False,
    boundscheck=None,
    matrix=False,
):
    """Create an array.

    Parameters
    ----------
    shape : int or tuple of ints, optional
        Array shape. An integer is the width of every one of `ndim` axes. If
        not provided, an empty array is returned.
    dtype : string or dtype, optional
        NumPy dtype. Defaults to the ``array.dtype`` configuration value.
    ndim : int, optional
        Number of dimensions. Defaults to the length of `shape`.
    fill_value : object, optional
        Value written to every element. If not provided, the contents are
        left uninitialized.
    read_only : bool, optional
        True if array should be protected against modification.
    boundscheck : bool, optional
        If True, indices are validated against the shape. Defaults to the
        ``array.boundscheck`` configuration value.
    matrix : bool, optional
        If True, return a :class:`stridearray.matrix.Matrix`; `shape` must
        then describe two dimensions.

    Returns
    -------
    a : stridearray.core.NDArray

    Examples
    --------
    >>> import stridearray
    >>> stridearray.create((100, 20))
    <stridearray.core.NDArray (100, 20) float64>
    >>> stridearray.create(4, ndim=3, dtype='i2')
    <stridearray.core.NDArray (4, 4, 4) int16>
    >>> stridearray.create((3, 3), matrix=True)
    <stridearray.matrix.Matrix (3, 3) float64>

    """
    cls = Matrix if matrix else NDArray
    return cls(shape, dtype=dtype, ndim=ndim, fill_value=fill_value,
               read_only=read_only, boundscheck=boundscheck)


def empty(shape, **kwargs):
    """Create an array without initializing its contents.

    For parameter definitions see :func:`stridearray.creation.create`.

    Notes
    -----
    Any values may be read back from an array created this way until they
    have been written.

    """
    return create(shape=shape, fill_value=None, **kwargs)


def zeros(shape, **kwargs):
    """Create an array filled with zeros.

    For parameter definitions see :func:`stridearray.creation.create`.

    Examples
    --------
    >>> import stridearray
    >>> a = stridearray.zeros((2, 2))
    >>> a.to_numpy()
    array([[0., 0.],
           [0., 0.]])

    """

    return create(shape=shape, fill_value=0, **kwargs)


def ones(shape, **kwargs):
    """Create an array filled with ones.

    For parameter definitions see :func:`stridearray.creation.create`.

    """

    return create(shape=shape, fill_value=1, **kwargs)


def full(shape, fill_value, **kwargs):
    """Create an array filled with `fill_value`.

    For parameter definitions see :func:`stridearray.creation.create`.

    Examples
    --------
    >>> import stridearray
    >>> a = stridearray.full((2, 2), fill_value=42)
    >>> a.to_numpy()
    array([[42., 42.],
           [42., 42.]])

    """

    return create(shape=shape, fill_value=fill_value, **kwargs)


def array(data, **kwargs):
    """Create an array holding a copy of `data`.

    The `data` argument may be an NDArray, a NumPy array, a nested sequence
    or any object exposing the buffer protocol. Data is copied in row-major
    order; a scalar becomes a one-element array. For other parameter
    definitions see :func:`stridearray.creation.create`.

    Examples
    --------
    >>> import stridearray
    >>> a = stridearray.array([[1, 2, 3], [4, 5, 6]], dtype='i4')
    >>> a
    <stridearray.core.NDArray (2, 3) int32>
    >>> int(a[1, 2])
    6

    """

    if isinstance(data, NDArray):
        cls = Matrix if kwargs.pop("matrix", False) else NDArray
        read_only = kwargs.pop("read_only", False)
        z = cls(data, **kwargs)
        z.read_only = read_only
        return z

    # ensure data is array-like
    if not hasattr(data, "shape") or not hasattr(data, "dtype"):
        if isinstance(data, (list, tuple)) or np.isscalar(data):
            data = np.asanyarray(data)
        else:
            data = ensure_ndarray(data)
    if data.ndim == 0:
        data = data.reshape(1)

    # setup dtype
    if kwargs.get("dtype") is None:
        kwargs["dtype"] = data.dtype

    # pop read-only to apply after storing the data
    read_only = kwargs.pop("read_only", False)

    # instantiate array
    z = create(shape=data.shape, **kwargs)

    # fill with data
    z.buffer[...] = np.ravel(data, order="C")

    # set read_only property afterwards
    z.read_only = read_only

    return z


def _like_args(a, kwargs):
    if isinstance(a, NDArray):
        kwargs.setdefault("shape", None if a.empty else a.shape)
        kwargs.setdefault("ndim", a.ndim)
        kwargs.setdefault("matrix", isinstance(a, Matrix))
        kwargs.setdefault("boundscheck", a.boundscheck)
    else:
        kwargs.setdefault("shape", a.shape)

    if hasattr(a, "dtype"):
        kwargs.setdefault("dtype", a.dtype)


def empty_like(a, **kwargs):
    """Create an empty array like `a`."""
    _like_args(a, kwargs)
    return empty(**kwargs)


def zeros_like(a, **kwargs):
    """Create an array of zeros like `a`."""
    _like_args(a, kwargs)
    return zeros(**kwargs)


def ones_like(a, **kwargs):
    """Create an array of ones like `a`."""
    _like_args(a, kwargs)
    return ones(**kwargs)


def full_like(a, fill_value, **kwargs):
    """Create a filled array like `a`."""
    _like_args(a, kwargs)
    return full(fill_value=fill_value, **kwargs)
