"""
Exact joltage solver.

Pressing a button only ever adds 1 to each channel it touches, so reaching
the targets exactly is a pure integer linear program:

    minimize    sum_b x[b]
    subject to  sum_{b touches c} x[b] = channel_targets[c]   for every c
                x[b] integer, x[b] >= 0

The constraints come from build_joltage_constraints; solving is delegated
to an IntegerProgramBackend (PuLP / CBC by default).
"""

import numpy as np

from toggle_panel.constraints.builder import build_joltage_constraints
from toggle_panel.core.panel import Panel
from toggle_panel.solver.lp_solver import IntegerProgramBackend, solve_min_sum


def joltage_press_counts(
    panel: Panel,
    backend: IntegerProgramBackend = solve_min_sum,
) -> np.ndarray:
    """
    Per-button press counts of one optimal joltage solution.

    Args:
        panel: Panel to solve
        backend: Integer program solver for the built constraints

    Returns:
        numpy int array of shape (panel.num_buttons,)

    Raises:
        InfeasibleModelError: If no non-negative integer solution exists
        MalformedPanelError: If a button index has no matching channel
    """
    builder = build_joltage_constraints(panel)
    return backend(builder)


def solve_joltages(
    panel: Panel,
    backend: IntegerProgramBackend = solve_min_sum,
) -> int:
    """
    Minimum total presses that reach every channel target exactly.

    Example:
        >>> solve_joltages(parse_panel_line("[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}"))
        10
    """
    return int(joltage_press_counts(panel, backend).sum())
