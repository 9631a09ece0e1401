import numpy as np

from eqqp.solvers.utils import pivoted_qr_lstsq, svd_lstsq, try_cholesky


def test_try_cholesky_accepts_positive_definite():
    factor = try_cholesky(np.array([[4.0, 2.0], [2.0, 3.0]]))
    assert factor is not None
    lower, is_lower = factor
    assert is_lower
    low = np.tril(lower)
    assert np.allclose(low @ low.T, [[4.0, 2.0], [2.0, 3.0]])


def test_try_cholesky_rejects_semidefinite_and_indefinite():
    assert try_cholesky(np.zeros((2, 2))) is None
    assert try_cholesky(np.diag([1.0, -1.0])) is None


def test_pivoted_qr_full_rank(rng):
    matrix = rng.standard_normal((4, 4)) + 4.0 * np.eye(4)
    rhs = rng.standard_normal(4)
    sol, rank = pivoted_qr_lstsq(matrix, rhs)
    assert rank == 4
    assert np.allclose(matrix @ sol, rhs)


def test_pivoted_qr_rank_deficient_consistent_system():
    matrix = np.array([[1.0, 1.0], [1.0, 1.0]])
    sol, rank = pivoted_qr_lstsq(matrix, np.array([2.0, 2.0]))
    assert rank == 1
    assert np.allclose(matrix @ sol, [2.0, 2.0])
    # basic solution: one unknown pinned to zero
    assert np.count_nonzero(sol) == 1


def test_pivoted_qr_zero_matrix():
    sol, rank = pivoted_qr_lstsq(np.zeros((2, 2)), np.ones(2))
    assert rank == 0
    assert np.array_equal(sol, np.zeros(2))


def test_svd_lstsq_minimum_norm():
    matrix = np.array([[1.0, 1.0]])
    sol, rank = svd_lstsq(matrix, np.array([2.0]))
    assert rank == 1
    assert np.allclose(sol, [1.0, 1.0])
