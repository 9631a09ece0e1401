"""
Direct solvers for equality-constrained convex quadratic programs.

The pipeline is assembler -> KKT solve -> write-back:

- :mod:`~eqqp.solvers.assembly` scatters sparse per-term data into dense
  ``(G, c, A, b)``;
- :mod:`~eqqp.solvers.kkt` solves the KKT system, using the range-space
  (Schur complement) method for positive definite ``G`` and the full
  augmented system otherwise;
- :mod:`~eqqp.solvers.equality_qp` drives both on a
  :class:`~eqqp.program.MathematicalProgram`.
"""

from . import assembly, core, equality_qp, identity, ipopt, kkt, utils
from .assembly import AssembledProblem, EqualityTerm, QuadraticTerm, assemble_problem
from .core import KKTSolution, SolutionResult, SolverConfig
from .equality_qp import EqualityConstrainedQPSolver
from .identity import SolverId
from .ipopt import IpoptSolver
from .kkt import full_kkt_solve, is_kkt_optimal, kkt_residuals, range_space_solve, solve_kkt

__all__ = [
    "assembly",
    "core",
    "equality_qp",
    "identity",
    "ipopt",
    "kkt",
    "utils",
    # Core types
    "SolutionResult",
    "SolverConfig",
    "KKTSolution",
    "SolverId",
    # Assembly
    "QuadraticTerm",
    "EqualityTerm",
    "AssembledProblem",
    "assemble_problem",
    # Solvers
    "solve_kkt",
    "range_space_solve",
    "full_kkt_solve",
    "kkt_residuals",
    "is_kkt_optimal",
    "EqualityConstrainedQPSolver",
    "IpoptSolver",
]
