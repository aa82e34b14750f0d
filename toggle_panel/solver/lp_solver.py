"""
ILP backend for "minimize the sum of non-negative integer variables subject
to linear equality constraints".

This module:
  - Takes constraints from ConstraintBuilder
  - Creates integer variables x[i] >= 0
  - Minimizes sum(x)
  - Solves using PuLP's CBC solver
  - Returns a (num_variables,) numpy int array

Any callable with the IntegerProgramBackend signature can stand in for
solve_min_sum; the joltage solver only depends on that signature.
"""

import logging
from typing import Callable, Optional

import numpy as np
import pulp

from toggle_panel.constraints.builder import ConstraintBuilder
from toggle_panel.core.errors import InfeasibleModelError


logger = logging.getLogger(__name__)

IntegerProgramBackend = Callable[[ConstraintBuilder], np.ndarray]


def solve_min_sum(
    builder: ConstraintBuilder,
    time_limit: Optional[int] = None,
) -> np.ndarray:
    """
    Solve min sum(x) s.t. builder constraints, x integer, x >= 0.

    Args:
        builder: ConstraintBuilder with the equality constraints
        time_limit: Optional CBC time limit in seconds

    Returns:
        x: numpy int array of shape (builder.num_variables,)

    Raises:
        InfeasibleModelError: if the model is infeasible or no optimal
            solution is found

    Example:
        >>> builder = ConstraintBuilder(num_variables=2)
        >>> builder.add_sum_eq([0, 1], 3)
        >>> builder.add_sum_eq([1], 1)
        >>> solve_min_sum(builder).tolist()
        [2, 1]
    """
    n = builder.num_variables

    # Constraints without variables are decided here; CBC rejects empty rows
    for k, lc in enumerate(builder.constraints):
        if not lc.indices and lc.rhs != 0:
            raise InfeasibleModelError(
                f"Constraint {k} has no variables but requires {lc.rhs}"
            )

    if n == 0:
        return np.zeros(0, dtype=int)

    # 1. Create model and variables
    prob = pulp.LpProblem("joltage_ilp", pulp.LpMinimize)
    x = [pulp.LpVariable(f"x_{i}", lowBound=0, cat=pulp.LpInteger) for i in range(n)]

    # 2. Objective: total presses
    prob += pulp.lpSum(x)

    # 3. Equality constraints
    for k, lc in enumerate(builder.constraints):
        if not lc.indices:
            continue
        expr = pulp.lpSum(coeff * x[idx] for idx, coeff in zip(lc.indices, lc.coeffs))
        prob += (expr == lc.rhs), f"eq_{k}"

    # 4. Solve
    status = prob.solve(pulp.PULP_CBC_CMD(msg=False, timeLimit=time_limit))
    status_str = pulp.LpStatus[status]
    logger.debug("CBC status %s for %d variables, %d constraints",
                 status_str, n, len(builder.constraints))

    if status_str != "Optimal":
        raise InfeasibleModelError(
            f"Solver status: {status_str}. "
            f"Model may be infeasible or unbounded."
        )

    # 5. Extract integer solution; round away float noise from CBC
    x_sol = np.zeros(n, dtype=int)
    for i, var in enumerate(x):
        val = pulp.value(var)
        x_sol[i] = int(round(val)) if val is not None else 0

    # 6. Sanity check: the rounded vector must satisfy every constraint
    A, b = builder.as_matrix()
    if np.any(x_sol < 0) or not np.array_equal(A @ x_sol, b):
        raise AssertionError(
            f"Rounded solution {x_sol.tolist()} violates constraints "
            f"(A @ x = {(A @ x_sol).tolist()}, b = {b.tolist()})"
        )

    return x_sol
