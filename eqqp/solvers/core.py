"""
Core result and configuration containers for the equality-constrained QP solver.

The solver works on the problem

```
    minimize    1/2 x^T G x + c^T x
    subject to  A x = b
```

and characterizes its optimum through the KKT system

```
    | G  -A^T | | x |   | -c |
    | A    0  | | y | = |  b |
```

with Lagrange multipliers ``y``. Every container here is shared by the
assembler, the two solve strategies and the program-level glue.

References:
    - Nocedal & Wright, *Numerical Optimization* (2006), Chapter 16
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

import numpy as np

Strategy = Literal["range_space", "full_kkt"]


class SolutionResult(Enum):
    """
    Outcome reported to the program after a solve.

    A direct KKT solve always produces a point, so success is the only
    outcome.
    """

    SOLUTION_FOUND = "solution_found"


@dataclass(frozen=True)
class SolverConfig:
    """
    Numerical settings for the KKT solve.

    Args:
        force_full_kkt: Skip the positive-definiteness test and always solve
            the augmented KKT system. Defaults to False.
        qr_threshold: Relative pivot threshold used to decide the numerical
            rank of the Schur complement. ``None`` uses
            ``eps * max(rows, cols)``.
        svd_rcond: Singular value cutoff for the augmented-system least
            squares. ``None`` lets LAPACK scale machine precision by the
            matrix size.
        check_residuals: Evaluate KKT residuals after each solve and log them.
            Debug mode turns this on as well.
        residual_tol: Tolerance above which residuals are reported as a
            warning when residual checking is on.
    """

    force_full_kkt: bool = False
    qr_threshold: Optional[float] = None
    svd_rcond: Optional[float] = None
    check_residuals: bool = False
    residual_tol: float = 1e-6


@dataclass
class KKTSolution:
    """
    Result of a single KKT solve.

    Attributes:
        x: Primal solution vector.
        y: Lagrange multipliers for ``A x = b`` in the convention
            ``G x + c - A^T y = 0``.
        fun: Objective ``1/2 x^T G x + c^T x`` at ``x``.
        strategy: Which branch produced the solution.
        rank: Numerical rank of the matrix handed to the least-squares solve
            (the Schur complement or the augmented KKT matrix).
    """

    x: np.ndarray
    y: np.ndarray
    fun: float
    strategy: Strategy
    rank: int


__all__ = ["Strategy", "SolutionResult", "SolverConfig", "KKTSolution"]
