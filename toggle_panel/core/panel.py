"""
Panel model for the toggle-panel optimizer.

A Panel is one immutable puzzle instance:
  - target_lights: bitmask of width num_lights (L <= 16), desired light pattern
  - buttons: ordered index lists; each list is BOTH
      * a light toggle-set (pressing flips those lights), and
      * a channel increment-set (pressing adds 1 to those channels)
  - channel_targets: exactly MAX_CHANNELS non-negative integers

Solvers only read a Panel; nothing mutates it after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

from toggle_panel.core.bitmask import indices_to_bitmask, lights_to_bitmask
from toggle_panel.core.errors import MalformedPanelError


MAX_LIGHTS = 16
MAX_CHANNELS = 10


@dataclass(frozen=True)
class Panel:
    """
    Immutable panel description.

    Attributes:
        target_lights: Desired light pattern, bit i = light i
        num_lights: Pattern width L (0 <= L <= MAX_LIGHTS)
        buttons: One tuple of zero-based indices per button
        channel_targets: Per-channel press-count targets, length MAX_CHANNELS

    Raises:
        MalformedPanelError: If any invariant is violated

    Example:
        >>> panel = make_panel([False, True, True, False],
        ...                    [[3], [1, 3], [2], [2, 3], [0, 2], [0, 1]],
        ...                    [3, 5, 4, 7])
        >>> panel.target_lights
        6
        >>> len(panel.channel_targets)
        10
    """
    target_lights: int
    num_lights: int
    buttons: Tuple[Tuple[int, ...], ...]
    channel_targets: Tuple[int, ...]

    def __post_init__(self) -> None:
        if not 0 <= self.num_lights <= MAX_LIGHTS:
            raise MalformedPanelError(
                f"Light pattern width must be in 0..{MAX_LIGHTS}, got {self.num_lights}"
            )
        if self.target_lights < 0 or self.target_lights >> self.num_lights:
            raise MalformedPanelError(
                f"Target pattern {self.target_lights:#x} does not fit in {self.num_lights} lights"
            )
        for b_idx, button in enumerate(self.buttons):
            # An empty button would be a self-loop in the toggle-state graph
            if not button:
                raise MalformedPanelError(f"Button {b_idx} has no indices")
            for idx in button:
                if not 0 <= idx < self.num_lights:
                    raise MalformedPanelError(
                        f"Button {b_idx} references index {idx}, "
                        f"panel has {self.num_lights} lights"
                    )
        if len(self.channel_targets) != MAX_CHANNELS:
            raise MalformedPanelError(
                f"Expected {MAX_CHANNELS} channel targets, got {len(self.channel_targets)}"
            )
        for c, target in enumerate(self.channel_targets):
            if target < 0:
                raise MalformedPanelError(f"Channel {c} has negative target {target}")

    @property
    def num_buttons(self) -> int:
        return len(self.buttons)

    def light_toggles(self) -> Tuple[int, ...]:
        """One toggle bitmask per button, in button order."""
        return tuple(indices_to_bitmask(button) for button in self.buttons)

    def channel_increments(self) -> Tuple[Tuple[int, ...], ...]:
        """
        One sorted, de-duplicated channel index tuple per button.

        A button's light indices double as channel indices, so a panel wider
        than MAX_CHANNELS can only be used for channel solving if no button
        touches a light beyond the last channel.

        Raises:
            MalformedPanelError: If a button index has no matching channel
        """
        increments = []
        for b_idx, button in enumerate(self.buttons):
            channels = tuple(sorted(set(button)))
            if channels and channels[-1] >= MAX_CHANNELS:
                raise MalformedPanelError(
                    f"Button {b_idx} references channel {channels[-1]}, "
                    f"only {MAX_CHANNELS} channels exist"
                )
            increments.append(channels)
        return tuple(increments)

    def incidence_matrix(self) -> np.ndarray:
        """
        Channel-by-button 0/1 matrix A, so that A @ presses == channel counts.

        Returns:
            numpy int array of shape (MAX_CHANNELS, num_buttons)
        """
        A = np.zeros((MAX_CHANNELS, self.num_buttons), dtype=int)
        for b_idx, channels in enumerate(self.channel_increments()):
            for c in channels:
                A[c, b_idx] = 1
        return A


def make_panel(
    lights: Sequence[bool],
    buttons: Iterable[Iterable[int]],
    targets: Iterable[int],
) -> Panel:
    """
    Build a Panel from already-tokenized parts.

    Channel targets are truncated to MAX_CHANNELS entries and padded with
    zeros when fewer are supplied.

    Args:
        lights: One on/off flag per light
        buttons: One index list per button
        targets: Channel targets (any length)

    Returns:
        Validated Panel

    Raises:
        MalformedPanelError: If the parts violate a Panel invariant
    """
    channel_targets = list(targets)[:MAX_CHANNELS]
    channel_targets += [0] * (MAX_CHANNELS - len(channel_targets))

    return Panel(
        target_lights=lights_to_bitmask(lights),
        num_lights=len(lights),
        buttons=tuple(tuple(button) for button in buttons),
        channel_targets=tuple(channel_targets),
    )
