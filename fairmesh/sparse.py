# Copyright 2024, m3shware
#
# Permission is hereby granted, free of charge, to any person obtaining a
# copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS
# IN THE SOFTWARE.

""" Sparse linear systems.

Matrices are assembled from (row, column, value) triplets with a
:class:`Triplets` builder. Contributions sharing the same coordinates are
summed, never overwritten. Assembled systems are handed to one of two
direct solvers built on SciPy's SuperLU interface:

    - :func:`solve_symmetric` for symmetric positive definite systems
      (symmetric ordering without pivoting, i.e. an LDL^T factorization
      whose pivots are checked for positivity),
    - :func:`solve_general` for general square systems (partial pivoting).

Both solve for all right-hand side columns at once and raise
:class:`SolverError` instead of returning an unusable result.
"""

import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as spla


class Triplets:
    """ Sparse matrix builder.

    Collects matrix entries as (row, column, value) triplets.

    Parameters
    ----------
    shape : (int, int)
        Matrix shape.


    Entries with equal coordinates are summed on conversion:

    >>> A = Triplets((2, 2))
    >>> A.append(0, 0, 1.0)
    >>> A.append(0, 0, 2.0)
    >>> float(A.tocsc()[0, 0])
    3.0
    """

    def __init__(self, shape):
        self._shape = shape
        self._rows = []
        self._cols = []
        self._vals = []

    def __len__(self):
        return len(self._vals)

    @property
    def shape(self):
        """ Matrix shape.

        :type: (int, int)
        """
        return self._shape

    def append(self, row, col, value):
        """ Add matrix entry.

        Parameters
        ----------
        row : int
            Row index.
        col : int
            Column index.
        value : float
            Value added to the entry at (`row`, `col`).
        """
        self._rows.append(int(row))
        self._cols.append(int(col))
        self._vals.append(float(value))

    def tocsc(self):
        """ Compressed sparse column matrix.

        Returns
        -------
        ~scipy.sparse.csc_matrix
            Assembled matrix, duplicate entries summed.
        """
        A = sp.coo_matrix((self._vals, (self._rows, self._cols)),
                          shape=self._shape, dtype=float).tocsc()
        A.sum_duplicates()

        return A


class SolverError(Exception):
    """ Linear solver exception.

    Raised if a sparse system cannot be factored or solved, e.g. for
    singular or indefinite matrices.
    """

    pass


def _check(X, what):
    if not np.all(np.isfinite(X)):
        raise SolverError(f'{what}: solution contains non-finite values')

    return X


def solve_symmetric(A, B, what='linear solve'):
    """ Solve symmetric positive definite system.

    The matrix is factored as :math:`P^T A P = L D L^T` using a symmetric
    fill-reducing ordering and no pivoting. Positive definiteness is
    verified by inspecting the pivots :math:`D`.

    Parameters
    ----------
    A : ~scipy.sparse.spmatrix, shape (n, n)
        Symmetric matrix.
    B : ~numpy.ndarray, shape (n, ) or (n, k)
        Right-hand side.
    what : str, optional
        Name of the operation, used in error messages.

    Raises
    ------
    SolverError
        If the matrix is singular or not positive definite, or if the
        solution contains non-finite values.

    Returns
    -------
    ~numpy.ndarray
        Solution of the same shape as `B`.
    """
    try:
        lu = spla.splu(sp.csc_matrix(A), permc_spec='MMD_AT_PLUS_A',
                       diag_pivot_thresh=0.0,
                       options=dict(SymmetricMode=True))
    except RuntimeError as e:
        raise SolverError(f'{what}: factorization failed ({e})') from e

    # Without pivoting the row permutation equals the column permutation
    # and the diagonal of U holds the pivots of the LDL^T factorization.
    if (not np.array_equal(lu.perm_r, lu.perm_c)
            or np.any(lu.U.diagonal() <= 0.0)):
        raise SolverError(f'{what}: matrix is not positive definite')

    return _check(lu.solve(np.asarray(B, dtype=float)), what)


def solve_general(A, B, what='linear solve'):
    """ Solve general square system.

    LU factorization with partial pivoting. A factorization whose
    smallest pivot is negligible relative to the largest one is rejected
    as numerically singular.

    Parameters
    ----------
    A : ~scipy.sparse.spmatrix, shape (n, n)
        Square matrix.
    B : ~numpy.ndarray, shape (n, ) or (n, k)
        Right-hand side.
    what : str, optional
        Name of the operation, used in error messages.

    Raises
    ------
    SolverError
        If the matrix is singular or the solution contains non-finite
        values.

    Returns
    -------
    ~numpy.ndarray
        Solution of the same shape as `B`.
    """
    try:
        lu = spla.splu(sp.csc_matrix(A))
    except RuntimeError as e:
        raise SolverError(f'{what}: factorization failed ({e})') from e

    pivots = np.abs(lu.U.diagonal())

    if (pivots.size > 0 and pivots.min()
            <= pivots.size * np.finfo(float).eps * pivots.max()):
        raise SolverError(f'{what}: matrix is numerically singular')

    return _check(lu.solve(np.asarray(B, dtype=float)), what)
