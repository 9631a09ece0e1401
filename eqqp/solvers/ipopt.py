"""Identity-only wrapper for the IPOPT nonlinear solver."""

from __future__ import annotations

from ..program import MathematicalProgram
from .core import SolutionResult
from .identity import SolverId, identity_accessor

IPOPT = "IPOPT"


class IpoptSolver:
    """
    Placeholder exposing the IPOPT identity.

    No IPOPT backend ships with eqqp, so the solver reports itself as
    unavailable and refuses to solve.
    """

    id = staticmethod(identity_accessor(IPOPT))

    def available(self) -> bool:
        return False

    def solver_id(self) -> SolverId:
        return self.id()

    def solve(self, prog: MathematicalProgram) -> SolutionResult:
        raise RuntimeError("IPOPT is not available in this build")


__all__ = ["IpoptSolver", "IPOPT"]
