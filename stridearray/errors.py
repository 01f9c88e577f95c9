class _BaseArrayError(ValueError):
    _msg = ""

    def __init__(self, *args):
        super().__init__(self._msg.format(*args))


class _BaseArrayIndexError(IndexError):
    _msg = ""

    def __init__(self, *args):
        super().__init__(self._msg.format(*args))


class InvalidShapeError(_BaseArrayError):
    _msg = "invalid shape {0!r}; {1}"


class DimensionalityError(_BaseArrayError):
    _msg = "expected a {0}-dimensional array, found {1} dimensions"


class DimensionMismatchError(_BaseArrayError):
    _msg = "dimension mismatch: {0} and {1}"


class BadConfigError(_BaseArrayError):
    _msg = "bad config value for {0!r}: {1!r}"


class AxisError(_BaseArrayIndexError):
    _msg = "axis {0} is out of bounds for array of dimension {1}"


class BoundsCheckError(_BaseArrayIndexError):
    _msg = "index out of bounds for dimension with length {0}"


class ReadOnlyError(PermissionError):
    def __init__(self):
        super().__init__("object is read-only")


def err_too_many_indices(selection, shape):
    raise IndexError(f"too many indices for array; expected {len(shape)}, got {len(selection)}")
