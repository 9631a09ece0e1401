"""
Assembly of dense QP data from sparse per-term contributions.

Each cost or constraint term acts on a subset of the global decision
variables, given by their zero-based indices. The assembler scatters the
local blocks into dense arrays over all ``n`` variables:

- quadratic costs ``1/2 z^T Q z + b^T z`` are *added* into ``G`` and ``c``,
  so terms that share variables accumulate;
- equality constraints ``A_local z = rhs`` are stacked row-wise into ``A`` and
  ``b`` in the order the terms are given.

Index validity is the caller's responsibility and is not checked here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence

import numpy as np


class QuadraticTerm(NamedTuple):
    """Local quadratic cost ``1/2 z^T Q z + b^T z`` over ``z = x[indices]``."""

    Q: np.ndarray
    b: np.ndarray
    indices: Sequence[int]


class EqualityTerm(NamedTuple):
    """Local equality constraint ``A z = rhs`` over ``z = x[indices]``."""

    A: np.ndarray
    rhs: np.ndarray
    indices: Sequence[int]


@dataclass(frozen=True)
class AssembledProblem:
    """
    Dense data of ``minimize 1/2 x^T G x + c^T x  s.t.  A x = b``.

    ``G`` is ``n x n``, ``c`` has length ``n``, ``A`` is ``m x n`` and ``b``
    has length ``m``. Each array is copied and the copy marked read-only, so
    the arrays passed in stay writeable.
    """

    G: np.ndarray
    c: np.ndarray
    A: np.ndarray
    b: np.ndarray

    def __post_init__(self) -> None:
        for name in ("G", "c", "A", "b"):
            frozen = np.array(getattr(self, name), dtype=float)
            frozen.setflags(write=False)
            object.__setattr__(self, name, frozen)

    @property
    def num_vars(self) -> int:
        return self.c.shape[0]

    @property
    def num_constraints(self) -> int:
        return self.b.shape[0]


def assemble_cost(
    num_vars: int, costs: Iterable[QuadraticTerm]
) -> tuple[np.ndarray, np.ndarray]:
    """Accumulate quadratic cost terms into a dense Hessian and linear vector."""

    hessian = np.zeros((num_vars, num_vars))
    linear = np.zeros(num_vars)
    for term in costs:
        idx = np.asarray(term.indices, dtype=int)
        # np.add.at keeps repeated indices within one term additive as well.
        np.add.at(hessian, np.ix_(idx, idx), np.asarray(term.Q, dtype=float))
        np.add.at(linear, idx, np.asarray(term.b, dtype=float).reshape(-1))
    return hessian, linear


def assemble_constraints(
    num_vars: int, constraints: Sequence[EqualityTerm]
) -> tuple[np.ndarray, np.ndarray]:
    """Stack equality constraint terms into a dense ``(A, b)`` pair."""

    num_rows = sum(np.asarray(term.A).shape[0] for term in constraints)
    a_mat = np.zeros((num_rows, num_vars))
    b_vec = np.zeros(num_rows)

    row = 0
    for term in constraints:
        local = np.asarray(term.A, dtype=float)
        rows = local.shape[0]
        for col, var_index in enumerate(term.indices):
            a_mat[row : row + rows, var_index] = local[:, col]
        b_vec[row : row + rows] = np.asarray(term.rhs, dtype=float).reshape(-1)
        row += rows
    return a_mat, b_vec


def assemble_problem(
    num_vars: int,
    costs: Iterable[QuadraticTerm],
    constraints: Sequence[EqualityTerm],
) -> AssembledProblem:
    """
    Build the dense problem ``(G, c, A, b)`` over ``num_vars`` variables.

    Example:
        >>> import numpy as np
        >>> costs = [
        ...     QuadraticTerm(2.0 * np.eye(2), np.zeros(2), [0, 1]),
        ...     QuadraticTerm(np.array([[3.0]]), np.zeros(1), [1]),
        ... ]
        >>> assemble_problem(2, costs, []).G
        array([[2., 0.],
               [0., 5.]])
    """

    hessian, linear = assemble_cost(num_vars, costs)
    a_mat, b_vec = assemble_constraints(num_vars, constraints)
    return AssembledProblem(G=hessian, c=linear, A=a_mat, b=b_vec)


__all__ = [
    "QuadraticTerm",
    "EqualityTerm",
    "AssembledProblem",
    "assemble_cost",
    "assemble_constraints",
    "assemble_problem",
]
