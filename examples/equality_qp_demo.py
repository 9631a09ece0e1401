"""
Example: Equality-constrained quadratic programming with eqqp

Shows the program-level API and the low-level KKT solve on three small
problems: a strictly convex QP (range-space path), a problem without cost
(full KKT fallback) and a chain of springs whose Hessian is singular.
"""

import numpy as np

from eqqp import (
    EqualityConstrainedQPSolver,
    MathematicalProgram,
    SolverConfig,
    is_kkt_optimal,
    kkt_residuals,
    solve_kkt,
)


def example_strictly_convex():
    """Example: minimize x1^2 + x2^2 subject to x1 + x2 = 1."""
    print("=" * 60)
    print("Example 1: Strictly convex QP")
    print("=" * 60)

    prog = MathematicalProgram()
    x = prog.new_continuous_variables(2, "x")
    prog.add_quadratic_cost(2.0 * np.eye(2), np.zeros(2), x)
    prog.add_linear_equality_constraint(np.array([[1.0, 1.0]]), np.array([1.0]), x)

    result = prog.solve()
    print(f"Result: {result}")
    print(f"Solution: {prog.get_solution(x)}")
    print(f"Optimal cost: {prog.get_optimal_cost()}")
    print(f"Solver: {prog.get_solver_id().name}")
    print()


def example_degenerate():
    """Example: no cost at all, only x = [3, 4]."""
    print("=" * 60)
    print("Example 2: Zero Hessian (full KKT fallback)")
    print("=" * 60)

    G = np.zeros((2, 2))
    c = np.zeros(2)
    A = np.eye(2)
    b = np.array([3.0, 4.0])

    sol = solve_kkt(G, c, A, b)
    print(f"Strategy: {sol.strategy}")
    print(f"Solution: {sol.x}")
    print(f"Optimal cost: {sol.fun}")
    print()


def example_spring_chain():
    """Example: masses on springs with pinned ends."""
    print("=" * 60)
    print("Example 3: Spring chain (singular Hessian)")
    print("=" * 60)

    n = 6
    prog = MathematicalProgram()
    p = prog.new_continuous_variables(n, "p")
    spring = np.array([[1.0, -1.0], [-1.0, 1.0]])
    for i in range(n - 1):
        prog.add_quadratic_cost(spring, np.zeros(2), [p[i], p[i + 1]])
    prog.add_linear_equality_constraint(np.eye(1), np.array([0.0]), [p[0]])
    prog.add_linear_equality_constraint(np.eye(1), np.array([1.0]), [p[n - 1]])

    solver = EqualityConstrainedQPSolver(SolverConfig(check_residuals=True))
    prog.solve(solver)
    print(f"Positions: {prog.get_solution(p)}")
    print(f"Stored energy: {prog.get_optimal_cost():.4f}")
    print()


def example_compare_strategies():
    """Example: both strategies agree on a random strictly convex QP."""
    print("=" * 60)
    print("Example 4: Range-space vs. full KKT")
    print("=" * 60)

    rng = np.random.default_rng(0)
    n, m = 8, 3
    root = rng.standard_normal((n, n))
    G = root @ root.T + np.eye(n)
    c = rng.standard_normal(n)
    A = rng.standard_normal((m, n))
    b = rng.standard_normal(m)

    fast = solve_kkt(G, c, A, b)
    full = solve_kkt(G, c, A, b, config=SolverConfig(force_full_kkt=True))
    residuals = kkt_residuals(G, c, A, b, fast.x, fast.y)
    print(f"Max |x_fast - x_full|: {np.max(np.abs(fast.x - full.x)):.2e}")
    print(f"KKT optimal: {is_kkt_optimal(G, c, A, b, fast.x, fast.y)}")
    print(f"Primal residual: {residuals['primal']:.2e}")
    print(f"Dual residual: {residuals['dual']:.2e}")
    print()


if __name__ == "__main__":
    example_strictly_convex()
    example_degenerate()
    example_spring_chain()
    example_compare_strategies()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
