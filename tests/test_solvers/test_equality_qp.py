import numpy as np
import pytest

from eqqp.program import Binding, MathematicalProgram
from eqqp.solvers.core import SolutionResult, SolverConfig
from eqqp.solvers.equality_qp import EqualityConstrainedQPSolver, assemble_program


def _simple_program():
    prog = MathematicalProgram()
    x = prog.new_continuous_variables(2, "x")
    prog.add_quadratic_cost(2.0 * np.eye(2), np.zeros(2), x)
    prog.add_linear_equality_constraint(np.array([[1.0, 1.0]]), np.array([1.0]), x)
    return prog, x


def test_solve_writes_back_solution():
    prog, x = _simple_program()
    solver = EqualityConstrainedQPSolver()
    result = solver.solve(prog)

    assert result is SolutionResult.SOLUTION_FOUND
    assert np.allclose(prog.get_solution(x), [0.5, 0.5])
    assert pytest.approx(0.5) == prog.get_optimal_cost()
    assert prog.get_solver_id() == EqualityConstrainedQPSolver.id()
    assert prog.get_solver_result() == 0


def test_assemble_program_maps_variables_to_global_indices():
    prog = MathematicalProgram()
    x = prog.new_continuous_variables(2, "x")
    z = prog.new_continuous_variables(1, "z")
    prog.add_quadratic_cost(2.0 * np.eye(2), np.zeros(2), x)
    prog.add_quadratic_cost(np.array([[3.0]]), np.array([1.0]), [x[1]])
    prog.add_linear_equality_constraint(np.array([[1.0, -1.0]]), np.array([0.0]), [z[0], x[0]])

    problem = assemble_program(prog)
    assert problem.G[1, 1] == 5.0
    assert problem.c[1] == 1.0
    assert np.array_equal(problem.A, np.array([[-1.0, 0.0, 1.0]]))


def test_degenerate_program_uses_fallback():
    prog = MathematicalProgram()
    x = prog.new_continuous_variables(2)
    prog.add_linear_equality_constraint(np.eye(2), np.array([3.0, 4.0]), x)

    assert prog.solve() is SolutionResult.SOLUTION_FOUND
    assert np.allclose(prog.get_solution(x), [3.0, 4.0])
    assert prog.get_optimal_cost() == pytest.approx(0.0, abs=1e-12)


def test_variables_split_across_terms():
    # Minimize (x - 1)^2 + (y - 2)^2 subject to x = y, written as separate terms.
    prog = MathematicalProgram()
    x = prog.new_continuous_variables(1, "x")
    y = prog.new_continuous_variables(1, "y")
    prog.add_quadratic_cost(np.array([[2.0]]), np.array([-2.0]), x)
    prog.add_quadratic_cost(np.array([[2.0]]), np.array([-4.0]), y)
    prog.add_linear_equality_constraint(np.array([[1.0, -1.0]]), np.array([0.0]), [x[0], y[0]])

    prog.solve()
    assert prog.get_solution(x[0]) == pytest.approx(1.5)
    assert prog.get_solution(y[0]) == pytest.approx(1.5)
    # constant terms 1 + 4 are not part of the program
    assert prog.get_optimal_cost() == pytest.approx(0.5 - 5.0)


def test_forced_full_kkt_config_matches_default():
    prog_a, x_a = _simple_program()
    prog_b, x_b = _simple_program()
    EqualityConstrainedQPSolver().solve(prog_a)
    EqualityConstrainedQPSolver(SolverConfig(force_full_kkt=True)).solve(prog_b)
    assert np.allclose(prog_a.get_solution(x_a), prog_b.get_solution(x_b))


@pytest.mark.parametrize(
    "attr",
    [
        "generic_costs",
        "generic_constraints",
        "linear_constraints",
        "bounding_box_constraints",
        "linear_complementarity_constraints",
    ],
)
def test_unsupported_terms_trip_precondition(attr):
    prog, x = _simple_program()
    getattr(prog, attr).append(Binding(object(), x))
    with pytest.raises(AssertionError):
        EqualityConstrainedQPSolver().solve(prog)


def test_solver_identity_accessors():
    solver = EqualityConstrainedQPSolver()
    assert solver.available()
    assert solver.solver_id() is EqualityConstrainedQPSolver.id()
    assert solver.solver_id().name == "Equality constrained QP"


def test_solution_found_is_the_only_outcome():
    assert [member.name for member in SolutionResult] == ["SOLUTION_FOUND"]
