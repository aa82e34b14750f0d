"""
Panel profiler.

Sizes a panel's two search spaces *before* solving so the kernel can decide
which solvers are affordable:

1. Light space: 2**L patterns, always small (L <= 16)
2. Joltage space: prod(target + 1) count vectors bound the A* search
3. Dead channels: a non-zero target on a channel no button touches makes
   the joltage system infeasible without running any solver
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from toggle_panel.core.panel import Panel


# Cross-checking with A* beyond this many count vectors is too slow in practice
DEFAULT_MAX_ASTAR_STATES = 2_000_000


@dataclass
class PanelProfile:
    """
    Size profile for a panel.

    Attributes:
        num_lights: Light pattern width L
        num_buttons: Number of buttons
        light_states: Size of the toggle-state graph (2**L)
        joltage_state_bound: Upper bound on A* count vectors, prod(target + 1)
        active_channels: Channels with a non-zero target
        dead_channels: Active channels that no button touches
    """
    num_lights: int
    num_buttons: int
    light_states: int
    joltage_state_bound: int
    active_channels: List[int]
    dead_channels: List[int]

    @property
    def trivially_infeasible(self) -> bool:
        """True if some non-zero target can never be incremented."""
        return len(self.dead_channels) > 0

    def allows_astar_cross_check(self, max_states: int = DEFAULT_MAX_ASTAR_STATES) -> bool:
        """
        True if the A* count-vector space is small enough to explore.

        The bound ignores pruning, so small panels with large targets may
        still be rejected.
        """
        return self.joltage_state_bound <= max_states


def profile_panel(panel: Panel) -> PanelProfile:
    """
    Build a PanelProfile without running any solver.

    Raises:
        MalformedPanelError: If a button index has no matching channel

    Example:
        >>> profile = profile_panel(panel)
        >>> if profile.allows_astar_cross_check():
        ...     solve_joltages_astar(panel)
    """
    A = panel.incidence_matrix()
    targets = np.array(panel.channel_targets, dtype=object)

    touched = A.sum(axis=1) > 0
    active = [int(c) for c in np.flatnonzero(np.array(panel.channel_targets) > 0)]
    dead = [c for c in active if not touched[c]]

    # Python ints via dtype=object: the product overflows int64 for large targets
    joltage_state_bound = int(np.prod(targets + 1))

    return PanelProfile(
        num_lights=panel.num_lights,
        num_buttons=panel.num_buttons,
        light_states=2 ** panel.num_lights,
        joltage_state_bound=joltage_state_bound,
        active_channels=active,
        dead_channels=dead,
    )
