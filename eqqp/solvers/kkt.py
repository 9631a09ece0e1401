"""
Direct KKT solve for equality-constrained convex quadratic programs.

Two strategies share one contract, ``(G, c, A, b) -> KKTSolution``:

- :func:`range_space_solve` is used when ``G`` is positive definite. It
  factors ``G = L L^T`` once, forms the Schur complement
  ``S = A G^{-1} A^T`` and solves ``S y = A G^{-1} c + b`` with a pivoted QR
  least-squares solve, then recovers ``x`` from ``G x = A^T y - c``.
- :func:`full_kkt_solve` is the fallback for indefinite or singular ``G``.
  It solves the augmented system

  ```
      | G  -A^T | | x |   | -c |
      | A    0  | | y | = |  b |
  ```

  by SVD-based least squares.

:func:`solve_kkt` picks the strategy from a single Cholesky attempt; there is
no retry between the two.

References:
    - Nocedal & Wright, *Numerical Optimization* (2006), Section 16.2
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np
import scipy.linalg as la

from ..diagnostics.debug_mode import is_debug_enabled
from ..logging import get_logger
from .core import KKTSolution, SolverConfig
from .utils import pivoted_qr_lstsq, svd_lstsq, try_cholesky

logger = get_logger(__name__)


def quadratic_objective(hessian: np.ndarray, linear: np.ndarray, x: np.ndarray) -> float:
    """Return ``1/2 x^T G x + c^T x``."""

    return float(0.5 * x @ (hessian @ x) + linear @ x)


def _check_shapes(
    hessian: np.ndarray, linear: np.ndarray, a_mat: np.ndarray, b_vec: np.ndarray
) -> None:
    n = linear.shape[0]
    if hessian.shape != (n, n):
        raise ValueError("G must be square and match the dimension of c")
    if a_mat.ndim != 2 or a_mat.shape[1] != n:
        raise ValueError("A must have one column per variable")
    if b_vec.shape[0] != a_mat.shape[0]:
        raise ValueError("b must have one entry per row of A")


def range_space_solve(
    hessian: np.ndarray,
    linear: np.ndarray,
    a_mat: np.ndarray,
    b_vec: np.ndarray,
    factor: Optional[Tuple[np.ndarray, bool]] = None,
    qr_threshold: Optional[float] = None,
) -> KKTSolution:
    """
    Solve the KKT system through the Schur complement of the constraint block.

    Args:
        hessian: Positive definite ``n x n`` Hessian ``G``.
        linear: Linear cost ``c``.
        a_mat: ``m x n`` constraint matrix ``A``.
        b_vec: Right-hand side ``b``.
        factor: Precomputed Cholesky factor of ``G`` as returned by
            :func:`scipy.linalg.cho_factor`. Computed here when omitted.
        qr_threshold: Relative rank threshold for the Schur complement solve.

    Returns:
        Solution with ``strategy="range_space"``.

    Raises:
        scipy.linalg.LinAlgError: If ``factor`` is omitted and ``G`` is not
            positive definite.
    """

    if factor is None:
        factor = la.cho_factor(hessian, lower=True)

    m = a_mat.shape[0]
    if m:
        # G is symmetric, so (G^{-1} A^T)^T = A G^{-1}.
        ginv_at = la.cho_solve(factor, a_mat.T)
        schur = a_mat @ ginv_at
        y, rank = pivoted_qr_lstsq(schur, ginv_at.T @ linear + b_vec, threshold=qr_threshold)
        logger.debug("Schur complement rank %d of %d", rank, m)
        if rank < m:
            logger.warning(
                "Schur complement is rank deficient (rank %d of %d); "
                "constraints are redundant or inconsistent",
                rank,
                m,
            )
    else:
        y, rank = np.zeros(0), 0

    x = la.cho_solve(factor, a_mat.T @ y - linear)
    return KKTSolution(
        x=x,
        y=y,
        fun=quadratic_objective(hessian, linear, x),
        strategy="range_space",
        rank=rank,
    )


def full_kkt_solve(
    hessian: np.ndarray,
    linear: np.ndarray,
    a_mat: np.ndarray,
    b_vec: np.ndarray,
    rcond: Optional[float] = None,
) -> KKTSolution:
    """
    Solve the augmented ``(n + m) x (n + m)`` KKT system by SVD least squares.

    Works for indefinite or singular Hessians and rank-deficient constraints;
    a singular system yields the minimum-norm least-squares solution.
    """

    n = hessian.shape[0]
    m = a_mat.shape[0]
    kkt_matrix = np.block([[hessian, -a_mat.T], [a_mat, np.zeros((m, m))]])
    rhs = np.concatenate([-linear, b_vec])

    sol, rank = svd_lstsq(kkt_matrix, rhs, rcond=rcond)
    logger.debug("Augmented KKT matrix rank %d of %d", rank, n + m)

    x = sol[:n]
    return KKTSolution(
        x=x,
        y=sol[n:],
        fun=quadratic_objective(hessian, linear, x),
        strategy="full_kkt",
        rank=rank,
    )


def solve_kkt(
    hessian: np.ndarray,
    linear: np.ndarray,
    a_mat: Optional[np.ndarray] = None,
    b_vec: Optional[np.ndarray] = None,
    config: Optional[SolverConfig] = None,
) -> KKTSolution:
    """
    Solve ``minimize 1/2 x^T G x + c^T x  s.t.  A x = b``.

    The range-space strategy runs when ``G`` admits a Cholesky factorization;
    otherwise the augmented system is solved. A solution is always returned.

    Example:
        >>> import numpy as np
        >>> sol = solve_kkt(2.0 * np.eye(2), np.zeros(2), np.ones((1, 2)), np.ones(1))
        >>> sol.x, sol.fun
        (array([0.5, 0.5]), 0.5)
    """

    config = config or SolverConfig()
    hessian = np.asarray(hessian, dtype=float)
    linear = np.asarray(linear, dtype=float).reshape(-1)
    n = linear.shape[0]
    a_mat = np.zeros((0, n)) if a_mat is None else np.asarray(a_mat, dtype=float)
    b_vec = (
        np.zeros(a_mat.shape[0]) if b_vec is None else np.asarray(b_vec, dtype=float).reshape(-1)
    )
    _check_shapes(hessian, linear, a_mat, b_vec)

    if n == 0:
        return KKTSolution(
            x=np.zeros(0), y=np.zeros(a_mat.shape[0]), fun=0.0, strategy="full_kkt", rank=0
        )

    m = a_mat.shape[0]
    factor = None if config.force_full_kkt else try_cholesky(hessian)
    if factor is not None:
        logger.debug("Hessian is positive definite; range-space solve (n=%d, m=%d)", n, m)
        solution = range_space_solve(
            hessian, linear, a_mat, b_vec, factor=factor, qr_threshold=config.qr_threshold
        )
    else:
        logger.debug("Solving full KKT system (n=%d, m=%d)", n, m)
        solution = full_kkt_solve(hessian, linear, a_mat, b_vec, rcond=config.svd_rcond)

    if config.check_residuals or is_debug_enabled():
        residuals = kkt_residuals(hessian, linear, a_mat, b_vec, solution.x, solution.y)
        logger.debug("KKT residuals: %s", residuals)
        if max(residuals.values()) > config.residual_tol:
            logger.warning(
                "KKT residuals above tolerance %.1e: primal=%.3e dual=%.3e",
                config.residual_tol,
                residuals["primal"],
                residuals["dual"],
            )
    return solution


def kkt_residuals(
    hessian: np.ndarray,
    linear: np.ndarray,
    a_mat: Optional[np.ndarray],
    b_vec: Optional[np.ndarray],
    x: np.ndarray,
    y: Optional[np.ndarray] = None,
) -> Dict[str, float]:
    """
    Compute infinity norms of the KKT residuals.

    ``primal`` is ``||A x - b||`` and ``dual`` is ``||G x + c - A^T y||``.
    Missing multipliers are treated as zero.
    """

    x = np.asarray(x, dtype=float).reshape(-1)
    hess = np.asarray(hessian, dtype=float)
    stationarity = hess @ x + np.asarray(linear, dtype=float).reshape(-1)
    primal = 0.0
    if a_mat is not None and np.asarray(a_mat).size:
        mat_eq = np.asarray(a_mat, dtype=float)
        lam = np.zeros(mat_eq.shape[0]) if y is None else np.asarray(y, dtype=float).reshape(-1)
        stationarity = stationarity - mat_eq.T @ lam
        primal = float(np.linalg.norm(mat_eq @ x - np.asarray(b_vec, dtype=float), ord=np.inf))

    dual = float(np.linalg.norm(stationarity, ord=np.inf)) if stationarity.size else 0.0
    return {"primal": primal, "dual": dual}


def is_kkt_optimal(
    hessian: np.ndarray,
    linear: np.ndarray,
    a_mat: Optional[np.ndarray],
    b_vec: Optional[np.ndarray],
    x: np.ndarray,
    y: Optional[np.ndarray] = None,
    tol: float = 1e-6,
) -> bool:
    """
    Return True if all KKT residuals are below ``tol``.
    """

    residuals = kkt_residuals(hessian, linear, a_mat, b_vec, x, y)
    return all(value <= tol for value in residuals.values())


__all__ = [
    "quadratic_objective",
    "range_space_solve",
    "full_kkt_solve",
    "solve_kkt",
    "kkt_residuals",
    "is_kkt_optimal",
]
