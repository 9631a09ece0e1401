"""
Mathematical program container consumed by the solvers.

A :class:`MathematicalProgram` owns its decision variables, keeps ordered
lists of cost and constraint bindings, and stores whatever a solver writes
back: variable values, the optimal cost and the identity of the solver that
produced them.

Example:
    >>> import numpy as np
    >>> from eqqp import MathematicalProgram
    >>> prog = MathematicalProgram()
    >>> x = prog.new_continuous_variables(2, "x")
    >>> cost = prog.add_quadratic_cost(2.0 * np.eye(2), np.zeros(2), x)
    >>> con = prog.add_linear_equality_constraint(np.ones((1, 2)), np.ones(1), x)
    >>> prog.solve()
    <SolutionResult.SOLUTION_FOUND: 'solution_found'>
    >>> prog.get_solution(x)
    array([0.5, 0.5])
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Generic, List, Optional, Sequence, TypeVar, Union

import numpy as np

if TYPE_CHECKING:
    from .solvers.core import SolutionResult
    from .solvers.identity import SolverId

_variable_ids = itertools.count()


@dataclass(frozen=True)
class Variable:
    """A scalar decision variable; identity is the unique ``uid``."""

    name: str
    uid: int = field(default_factory=lambda: next(_variable_ids))

    def __repr__(self) -> str:
        return f"Variable({self.name!r})"


class QuadraticCost:
    """Cost ``1/2 z^T Q z + b^T z`` over the bound variables ``z``."""

    def __init__(self, Q: np.ndarray, b: np.ndarray) -> None:
        Q = np.atleast_2d(np.asarray(Q, dtype=float))
        b = np.asarray(b, dtype=float).reshape(-1)
        if Q.shape[0] != Q.shape[1]:
            raise ValueError("Q must be square")
        if b.shape[0] != Q.shape[0]:
            raise ValueError("b must match the dimension of Q")
        self.Q = Q
        self.b = b

    @property
    def num_vars(self) -> int:
        return self.Q.shape[0]


class LinearEqualityConstraint:
    """Constraint ``A z = beq``; both bounds equal ``beq``."""

    def __init__(self, A: np.ndarray, beq: np.ndarray) -> None:
        A = np.atleast_2d(np.asarray(A, dtype=float))
        beq = np.asarray(beq, dtype=float).reshape(-1)
        if beq.shape[0] != A.shape[0]:
            raise ValueError("beq must have one entry per row of A")
        self.A = A
        self.lower_bound = beq
        self.upper_bound = beq

    @property
    def num_vars(self) -> int:
        return self.A.shape[1]

    @property
    def num_constraints(self) -> int:
        return self.A.shape[0]


E = TypeVar("E")


@dataclass(frozen=True)
class Binding(Generic[E]):
    """Pairs a cost or constraint with the variables it acts on."""

    evaluator: E
    variables: np.ndarray


class MathematicalProgram:
    """
    Container for decision variables, costs and constraints.

    Only quadratic costs and linear equality constraints have dedicated
    ``add_*`` methods. The remaining lists hold the kinds of terms other
    solvers handle; the equality-constrained QP solver requires them empty.
    """

    def __init__(self) -> None:
        self._variables: List[Variable] = []
        self._index: Dict[Variable, int] = {}
        self.quadratic_costs: List[Binding[QuadraticCost]] = []
        self.linear_equality_constraints: List[Binding[LinearEqualityConstraint]] = []
        self.generic_costs: List[Binding[Any]] = []
        self.generic_constraints: List[Binding[Any]] = []
        self.linear_constraints: List[Binding[Any]] = []
        self.bounding_box_constraints: List[Binding[Any]] = []
        self.linear_complementarity_constraints: List[Binding[Any]] = []

        self._x_values = np.zeros(0)
        self._optimal_cost: Optional[float] = None
        self._solver_id: Optional[SolverId] = None
        self._solver_result: Optional[int] = None

    @property
    def num_vars(self) -> int:
        return len(self._variables)

    @property
    def decision_variables(self) -> np.ndarray:
        return np.array(self._variables, dtype=object)

    def new_continuous_variables(self, rows: int, name: str = "x") -> np.ndarray:
        """Append ``rows`` new variables named ``name(0)``, ``name(1)``, ..."""

        new_vars = [Variable(f"{name}({i})") for i in range(rows)]
        for var in new_vars:
            self._index[var] = len(self._variables)
            self._variables.append(var)
        self._x_values = np.concatenate([self._x_values, np.full(rows, np.nan)])
        return np.array(new_vars, dtype=object)

    def find_decision_variable_index(self, var: Variable) -> int:
        """
        Return the global index of ``var``.

        Raises:
            KeyError: If ``var`` was not created by this program.
        """

        try:
            return self._index[var]
        except KeyError:
            raise KeyError(f"{var!r} is not a decision variable of this program") from None

    def find_decision_variable_indices(self, variables: Sequence[Variable]) -> List[int]:
        return [self.find_decision_variable_index(var) for var in np.ravel(variables)]

    def add_quadratic_cost(
        self, Q: np.ndarray, b: np.ndarray, variables: Sequence[Variable]
    ) -> Binding[QuadraticCost]:
        """Add ``1/2 z^T Q z + b^T z`` over ``variables``."""

        cost = QuadraticCost(Q, b)
        binding = Binding(cost, self._bind(variables, cost.num_vars))
        self.quadratic_costs.append(binding)
        return binding

    def add_linear_equality_constraint(
        self, A: np.ndarray, beq: np.ndarray, variables: Sequence[Variable]
    ) -> Binding[LinearEqualityConstraint]:
        """Add ``A z = beq`` over ``variables``."""

        constraint = LinearEqualityConstraint(A, beq)
        binding = Binding(constraint, self._bind(variables, constraint.num_vars))
        self.linear_equality_constraints.append(binding)
        return binding

    def _bind(self, variables: Sequence[Variable], expected: int) -> np.ndarray:
        bound = np.array(np.ravel(variables), dtype=object)
        if bound.shape[0] != expected:
            raise ValueError(
                f"Expected {expected} variables for this term, got {bound.shape[0]}"
            )
        self.find_decision_variable_indices(bound)
        return bound

    # Solver write-back

    def set_decision_variable_values(self, values: np.ndarray) -> None:
        values = np.asarray(values, dtype=float).reshape(-1)
        if values.shape[0] != self.num_vars:
            raise ValueError("One value per decision variable is required")
        self._x_values = values.copy()

    def get_solution(self, variables: Union[Variable, Sequence[Variable]]) -> Any:
        """Return the stored value of a variable, or an array for many."""

        if isinstance(variables, Variable):
            return float(self._x_values[self.find_decision_variable_index(variables)])
        idx = self.find_decision_variable_indices(variables)
        return self._x_values[idx].reshape(np.shape(variables))

    def set_optimal_cost(self, cost: float) -> None:
        self._optimal_cost = float(cost)

    def get_optimal_cost(self) -> Optional[float]:
        return self._optimal_cost

    def set_solver_result(self, solver_id: SolverId, result: int) -> None:
        self._solver_id = solver_id
        self._solver_result = result

    def get_solver_id(self) -> Optional[SolverId]:
        return self._solver_id

    def get_solver_result(self) -> Optional[int]:
        return self._solver_result

    def solve(self, solver: Optional[Any] = None) -> SolutionResult:
        """Solve with ``solver`` (default: :class:`EqualityConstrainedQPSolver`)."""

        if solver is None:
            from .solvers.equality_qp import EqualityConstrainedQPSolver

            solver = EqualityConstrainedQPSolver()
        return solver.solve(self)


__all__ = [
    "Variable",
    "QuadraticCost",
    "LinearEqualityConstraint",
    "Binding",
    "MathematicalProgram",
]
