"""
A* joltage solver, kept to cross-validate the exact solver on small panels.

State: the tuple of per-channel counts accumulated so far (MAX_CHANNELS
entries), starting from all zeros. A press adds 1 to every channel of the
button; a state where any channel exceeds its target is dropped, since
counts never decrease.

Priority is g + h, with g = presses so far and h a lower bound on the
presses still needed. The distance sum |target - count| drops by at most
the widest button's channel count per press, and the largest single channel
deficit drops by at most 1, so h is the larger of ceil(distance / widest)
and that deficit. Neither term changes by more than 1 per press.

best_known maps each count vector to the fewest presses that reached it;
the first time the target vector is popped its g is optimal.
"""

import heapq
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from toggle_panel.core.errors import InfeasibleModelError, SearchLimitExceeded
from toggle_panel.core.panel import MAX_CHANNELS, Panel


logger = logging.getLogger(__name__)

Counts = Tuple[int, ...]


@dataclass
class JoltageSearchResult:
    """
    Outcome of an A* joltage search.

    Attributes:
        presses: Minimum total presses reaching the targets
        best_known: Fewest presses found for every count vector discovered
        expanded: Number of states popped and expanded
    """
    presses: int
    best_known: Dict[Counts, int]
    expanded: int


def press_button(
    counts: Counts,
    button: Sequence[int],
    targets: Sequence[int],
) -> Optional[Counts]:
    """
    Apply one press to a count vector.

    Returns:
        New count vector, or None if any channel would exceed its target
    """
    new_counts = list(counts)
    for c in button:
        new_counts[c] += 1
        if new_counts[c] > targets[c]:
            return None
    return tuple(new_counts)


def remaining_distance(counts: Sequence[int], targets: Sequence[int]) -> int:
    """Sum over channels of |target - count|."""
    return sum(abs(t - c) for c, t in zip(counts, targets))


def presses_lower_bound(counts: Sequence[int], targets: Sequence[int], widest: int) -> int:
    """
    Admissible estimate of the presses still needed.

    Args:
        counts: Current count vector
        targets: Target count vector
        widest: Largest number of channels any single button touches

    Example:
        >>> presses_lower_bound((0, 0, 0), (1, 1, 0), widest=2)
        1
    """
    deficit = max((t - c for c, t in zip(counts, targets)), default=0)
    if widest <= 0:
        return deficit
    distance = remaining_distance(counts, targets)
    return max(deficit, -(-distance // widest))


def search_joltages(panel: Panel, max_states: Optional[int] = None) -> JoltageSearchResult:
    """
    Run A* from the all-zero count vector to panel.channel_targets.

    Args:
        panel: Panel to solve
        max_states: Optional cap on discovered states

    Returns:
        JoltageSearchResult

    Raises:
        InfeasibleModelError: If the open set empties before the target is reached
        SearchLimitExceeded: If more than max_states states are discovered
        MalformedPanelError: If a button index has no matching channel
    """
    targets: Counts = tuple(panel.channel_targets)
    buttons = panel.channel_increments()
    widest = max((len(button) for button in buttons), default=0)
    start: Counts = (0,) * MAX_CHANNELS

    best_known: Dict[Counts, int] = {start: 0}
    open_set = [(presses_lower_bound(start, targets, widest), 0, start)]
    expanded = 0

    while open_set:
        _priority, presses, counts = heapq.heappop(open_set)

        if counts == targets:
            logger.debug("A* reached targets in %d presses (%d expanded, %d discovered)",
                         presses, expanded, len(best_known))
            return JoltageSearchResult(presses=presses, best_known=best_known, expanded=expanded)

        # Stale entry; a cheaper path to this state was pushed later
        if presses > best_known[counts]:
            continue
        expanded += 1

        for button in buttons:
            new_counts = press_button(counts, button, targets)
            if new_counts is None:
                continue

            new_presses = presses + 1
            if new_presses < best_known.get(new_counts, new_presses + 1):
                best_known[new_counts] = new_presses
                if max_states is not None and len(best_known) > max_states:
                    raise SearchLimitExceeded(max_states)
                priority = new_presses + presses_lower_bound(new_counts, targets, widest)
                heapq.heappush(open_set, (priority, new_presses, new_counts))

    raise InfeasibleModelError(
        f"No press combination reaches targets {list(targets)} "
        f"({len(best_known)} states explored)"
    )


def solve_joltages_astar(panel: Panel, max_states: Optional[int] = None) -> int:
    """
    Minimum total presses reaching every channel target, by A*.

    Same contract as joltage_ilp.solve_joltages.
    """
    return search_joltages(panel, max_states=max_states).presses
