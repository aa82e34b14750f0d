"""
Light configuration solver.

The toggle-state graph has one vertex per light pattern (2**L of them) and
an edge s -- s ^ toggle(b) for every button b. XOR is its own inverse, so
the graph is undirected and all edges have unit weight: breadth-first
search from the all-off pattern finds the minimum number of presses.

A target outside the all-off pattern's connected component is not an error;
the solver returns UNREACHABLE.
"""

import logging
from collections import deque
from typing import Dict, List, Optional, Tuple

from toggle_panel.core.bitmask import apply_toggle
from toggle_panel.core.panel import Panel


logger = logging.getLogger(__name__)

UNREACHABLE = None


def solve_lights(panel: Panel) -> Optional[int]:
    """
    Minimum number of presses turning all-off lights into panel.target_lights.

    Args:
        panel: Panel to solve

    Returns:
        Minimum press count, or UNREACHABLE (None) if no press sequence
        reaches the target

    Example:
        >>> solve_lights(parse_panel_line("[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}"))
        2
    """
    toggles = panel.light_toggles()
    start = 0

    queue = deque([(start, 0)])
    visited = {start}

    while queue:
        lights, presses = queue.popleft()
        if lights == panel.target_lights:
            logger.debug("Lights solved in %d presses, %d patterns seen", presses, len(visited))
            return presses

        for toggle in toggles:
            new_lights = apply_toggle(lights, toggle)
            if new_lights not in visited:
                visited.add(new_lights)
                queue.append((new_lights, presses + 1))

    logger.debug("Lights unreachable after exploring %d patterns", len(visited))
    return UNREACHABLE


def light_press_sequence(panel: Panel) -> Optional[List[int]]:
    """
    One minimal sequence of button indices reaching panel.target_lights.

    Same search as solve_lights, with a parent pointer per discovered
    pattern so the path can be walked back from the target.

    Returns:
        Button indices in press order (empty if the target is all-off),
        or None if the target is unreachable
    """
    toggles = panel.light_toggles()
    start = 0

    # pattern -> (previous pattern, button pressed to get here)
    parents: Dict[int, Tuple[int, int]] = {}
    queue = deque([start])
    visited = {start}

    while queue:
        lights = queue.popleft()
        if lights == panel.target_lights:
            sequence = []
            while lights != start:
                lights, b_idx = parents[lights]
                sequence.append(b_idx)
            sequence.reverse()
            return sequence

        for b_idx, toggle in enumerate(toggles):
            new_lights = apply_toggle(lights, toggle)
            if new_lights not in visited:
                visited.add(new_lights)
                parents[new_lights] = (lights, b_idx)
                queue.append(new_lights)

    return None
