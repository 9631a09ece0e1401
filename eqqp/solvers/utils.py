"""
Numerical helper routines for the KKT solve.

These helpers wrap the SciPy decompositions used by the two solve strategies
and report the numerical rank they detect so that callers can log it.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import scipy.linalg as la


def try_cholesky(matrix: np.ndarray) -> Optional[Tuple[np.ndarray, bool]]:
    """
    Attempt a Cholesky factorization ``matrix = L L^T``.

    Only the lower triangle of ``matrix`` is read.

    Returns:
        The ``(factor, lower)`` pair accepted by :func:`scipy.linalg.cho_solve`,
        or ``None`` if the matrix is not numerically positive definite.
    """

    try:
        return la.cho_factor(matrix, lower=True)
    except la.LinAlgError:
        return None


def pivoted_qr_lstsq(
    matrix: np.ndarray, rhs: np.ndarray, threshold: Optional[float] = None
) -> Tuple[np.ndarray, int]:
    """
    Least-squares solve of ``matrix @ sol = rhs`` through a pivoted QR.

    The factorization ``matrix[:, perm] = Q R`` uses column pivoting so that
    ``|R[k, k]|`` is non-increasing. Diagonal entries below
    ``threshold * |R[0, 0]|`` mark the numerical rank ``r``; the basic
    solution solves the leading ``r x r`` triangle and sets the remaining
    (permuted) unknowns to zero.

    Args:
        matrix: Square or rectangular coefficient matrix.
        rhs: Right-hand side vector.
        threshold: Relative pivot threshold. Defaults to
            ``eps * max(matrix.shape)``.

    Returns:
        Tuple ``(solution, rank)``.
    """

    rows, cols = matrix.shape
    sol = np.zeros(cols)
    if rows == 0 or cols == 0:
        return sol, 0

    q_mat, r_mat, perm = la.qr(matrix, mode="economic", pivoting=True)
    if threshold is None:
        threshold = np.finfo(float).eps * max(rows, cols)

    diag = np.abs(np.diag(r_mat))
    if diag[0] == 0.0:
        return sol, 0
    rank = int(np.count_nonzero(diag > threshold * diag[0]))

    qtb = q_mat[:, :rank].T @ rhs
    sol[perm[:rank]] = la.solve_triangular(r_mat[:rank, :rank], qtb, lower=False)
    return sol, rank


def svd_lstsq(
    matrix: np.ndarray, rhs: np.ndarray, rcond: Optional[float] = None
) -> Tuple[np.ndarray, int]:
    """
    Minimum-norm least-squares solve of ``matrix @ sol = rhs``.

    Uses the SVD-based ``gelsd`` LAPACK driver, so singular or rank-deficient
    matrices return the minimum-norm best fit instead of failing.

    Returns:
        Tuple ``(solution, rank)``.
    """

    if matrix.size == 0:
        return np.zeros(matrix.shape[1]), 0
    sol, _, rank, _ = la.lstsq(matrix, rhs, cond=rcond, lapack_driver="gelsd")
    return sol, int(rank)


__all__ = ["try_cholesky", "pivoted_qr_lstsq", "svd_lstsq"]
