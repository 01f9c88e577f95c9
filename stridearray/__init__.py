# flake8: noqa
from stridearray.core import NDArray
from stridearray.creation import (array, create, empty, empty_like, full, full_like,
                                  ones, ones_like, zeros, zeros_like)
from stridearray.config import config
from stridearray.errors import (AxisError, BoundsCheckError, DimensionalityError,
                                DimensionMismatchError, InvalidShapeError, ReadOnlyError)
from stridearray.matrix import Matrix
from stridearray.version import version as __version__
