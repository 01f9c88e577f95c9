import logging
import sys

import numpy as np

from stridearray.config import config, parse_mismatch_policy
from stridearray.core import NDArray
from stridearray.errors import DimensionMismatchError
from stridearray.indexing import check_integer_selection

__all__ = ["Matrix"]

logger = logging.getLogger(__name__)


class Matrix(NDArray):
    """A two-dimensional :class:`NDArray` with row and column helpers and
    matrix multiplication.

    Takes the same parameters as :class:`NDArray`, with `ndim` fixed to 2;
    an integer `shape` creates a square matrix.

    Examples
    --------
    >>> from stridearray import Matrix
    >>> a = Matrix((2, 3), dtype='i8')
    >>> for k in range(a.size):
    ...     a[k] = k + 1
    >>> b = Matrix((3, 2), dtype='i8')
    >>> for k in range(b.size):
    ...     b[k] = k + 7
    >>> c = a * b
    >>> c.shape
    (2, 2)
    >>> int(c[1, 0]), int(c[1, 1])
    (139, 154)

    """

    _fixed_ndim = 2

    @property
    def nrow(self):
        """Number of rows, 0 if the matrix is empty."""
        return 0 if self.empty else self._shape[0]

    @property
    def ncol(self):
        """Number of columns, 0 if the matrix is empty."""
        return 0 if self.empty else self._shape[1]

    def row(self, i):
        """Return a copy of row `i` as a one-dimensional array."""
        if self.empty:
            return NDArray(dtype=self._dtype, ndim=1)
        if self._boundscheck:
            i = check_integer_selection(i, self.nrow)
        out = NDArray(self.ncol, dtype=self._dtype, ndim=1)
        for j in range(self.ncol):
            out[j] = self[i, j]
        return out

    def col(self, j):
        """Return a copy of column `j` as a one-dimensional array."""
        if self.empty:
            return NDArray(dtype=self._dtype, ndim=1)
        if self._boundscheck:
            j = check_integer_selection(j, self.ncol)
        out = NDArray(self.nrow, dtype=self._dtype, ndim=1)
        for i in range(self.nrow):
            out[i] = self[i, j]
        return out

    def _format(self):
        lines = []
        for i in range(self.nrow):
            lines.append(''.join(f"{self[i, j]}\t" for j in range(self.ncol)))
        return ''.join(line + '\n' for line in lines)

    def print(self, file=None):
        """Write the matrix one row per line, each element followed by a tab."""
        if file is None:
            file = sys.stdout
        file.write(self._format())

    def __str__(self):
        return self._format()

    def dot(self, rhs):
        """Naive matrix product of this matrix and `rhs`.

        The result has ``self.nrow`` rows and ``rhs.ncol`` columns and is
        zeroed before accumulating. If the inner dimensions disagree, the
        ``matrix.on_mismatch`` configuration value decides: ``"warn"`` logs a
        warning and returns the zero-filled result, ``"raise"`` raises
        :class:`stridearray.errors.DimensionMismatchError`. A `rhs` that is
        not two-dimensional raises
        :class:`stridearray.errors.DimensionalityError`.
        """
        self._check_ndim(rhs)
        rhs_shape = rhs.shape
        dtype = np.result_type(self._dtype, rhs.dtype)
        if self.empty or rhs.empty:
            return Matrix(dtype=dtype)

        c = Matrix((self.nrow, rhs_shape[1]), dtype=dtype, fill_value=0)
        if self.ncol != rhs_shape[0]:
            policy = parse_mismatch_policy(config.get("matrix.on_mismatch"))
            if policy == "raise":
                raise DimensionMismatchError(self.shape, rhs_shape)
            logger.warning("dimension not match: %s and %s; returning zeros",
                           self.shape, rhs_shape)
            return c

        for i in range(c.nrow):
            for j in range(c.ncol):
                for k in range(self.ncol):
                    c[i, j] += self[i, k] * rhs[k, j]
        return c

    def __mul__(self, rhs):
        if not isinstance(rhs, NDArray) or rhs.ndim != 2:
            return NotImplemented
        return self.dot(rhs)

    __matmul__ = __mul__
