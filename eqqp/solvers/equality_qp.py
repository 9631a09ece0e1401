"""
Equality-constrained QP solver acting on a :class:`MathematicalProgram`.

The solver reads the program's quadratic costs and linear equality
constraints, assembles the dense data ``(G, c, A, b)``, runs the direct KKT
solve and writes the result back onto the program. It never iterates and
always reports :attr:`SolutionResult.SOLUTION_FOUND`.

The program must contain no other kind of cost or constraint. This is a
caller contract checked with assertions.
"""

from __future__ import annotations

from typing import Optional

from ..logging import get_logger
from ..program import MathematicalProgram
from .assembly import AssembledProblem, EqualityTerm, QuadraticTerm, assemble_problem
from .core import KKTSolution, SolutionResult, SolverConfig
from .identity import SolverId, identity_accessor
from .kkt import solve_kkt

logger = get_logger(__name__)

EQUALITY_CONSTRAINED_QP = "Equality constrained QP"


def assemble_program(prog: MathematicalProgram) -> AssembledProblem:
    """Translate the program's bindings into index-based terms and assemble them."""

    costs = [
        QuadraticTerm(
            binding.evaluator.Q,
            binding.evaluator.b,
            prog.find_decision_variable_indices(binding.variables),
        )
        for binding in prog.quadratic_costs
    ]
    constraints = [
        EqualityTerm(
            binding.evaluator.A,
            binding.evaluator.lower_bound,
            prog.find_decision_variable_indices(binding.variables),
        )
        for binding in prog.linear_equality_constraints
    ]
    return assemble_problem(prog.num_vars, costs, constraints)


class EqualityConstrainedQPSolver:
    """
    Direct solver for ``minimize 1/2 x^T G x + c^T x  s.t.  A x = b``.

    Args:
        config: Numerical settings. Defaults to :class:`SolverConfig()`.
    """

    id = staticmethod(identity_accessor(EQUALITY_CONSTRAINED_QP))

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()

    def available(self) -> bool:
        return True

    def solver_id(self) -> SolverId:
        return self.id()

    def solve_assembled(self, problem: AssembledProblem) -> KKTSolution:
        """Run the KKT solve on already assembled data."""

        return solve_kkt(problem.G, problem.c, problem.A, problem.b, config=self.config)

    def solve(self, prog: MathematicalProgram) -> SolutionResult:
        """Solve ``prog`` and write values, cost and solver identity back onto it."""

        assert not prog.generic_constraints, "generic constraints are not supported"
        assert not prog.generic_costs, "generic costs are not supported"
        assert not prog.linear_constraints, "linear inequality constraints are not supported"
        assert not prog.bounding_box_constraints, "bounding box constraints are not supported"
        assert (
            not prog.linear_complementarity_constraints
        ), "linear complementarity constraints are not supported"

        problem = assemble_program(prog)
        logger.debug(
            "Assembled %d quadratic costs and %d equality constraints into n=%d, m=%d",
            len(prog.quadratic_costs),
            len(prog.linear_equality_constraints),
            problem.num_vars,
            problem.num_constraints,
        )
        solution = self.solve_assembled(problem)

        prog.set_decision_variable_values(solution.x)
        prog.set_optimal_cost(solution.fun)
        prog.set_solver_result(self.solver_id(), 0)
        return SolutionResult.SOLUTION_FOUND


__all__ = ["EqualityConstrainedQPSolver", "assemble_program", "EQUALITY_CONSTRAINED_QP"]
