"""eqqp - direct solvers for equality-constrained convex quadratic programs."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import debug_context, is_debug_enabled, set_debug_enabled

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Program container
from .program import (
    Binding,
    LinearEqualityConstraint,
    MathematicalProgram,
    QuadraticCost,
    Variable,
)

# Solvers
from .solvers import (
    AssembledProblem,
    EqualityConstrainedQPSolver,
    EqualityTerm,
    IpoptSolver,
    KKTSolution,
    QuadraticTerm,
    SolutionResult,
    SolverConfig,
    SolverId,
    assemble_problem,
    full_kkt_solve,
    is_kkt_optimal,
    kkt_residuals,
    range_space_solve,
    solve_kkt,
)

__all__ = [
    # Version
    "__version__",
    # Program
    "Variable",
    "QuadraticCost",
    "LinearEqualityConstraint",
    "Binding",
    "MathematicalProgram",
    # Solvers
    "SolutionResult",
    "SolverConfig",
    "KKTSolution",
    "SolverId",
    "QuadraticTerm",
    "EqualityTerm",
    "AssembledProblem",
    "assemble_problem",
    "solve_kkt",
    "range_space_solve",
    "full_kkt_solve",
    "kkt_residuals",
    "is_kkt_optimal",
    "EqualityConstrainedQPSolver",
    "IpoptSolver",
    # Diagnostics
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
