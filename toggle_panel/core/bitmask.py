"""
Bit-vector helpers for light patterns.

Conventions:
  - Light i corresponds to bit (1 << i), i.e. the leftmost character of a
    pattern like "[.##.]" is bit 0
  - A toggle-set is a bitmask of the lights a button flips
  - Pressing a button is XOR with its toggle-set

This is pure bit math with no dependencies on the panel or solvers.
"""

from typing import Iterable, List


def lights_to_bitmask(flags: Iterable[bool]) -> int:
    """
    Pack a sequence of on/off flags into a bitmask.

    Args:
        flags: one bool per light, light 0 first

    Returns:
        Integer with bit i set iff flags[i] is True

    Example:
        >>> lights_to_bitmask([False, True, True, False])
        6
    """
    mask = 0
    for i, on in enumerate(flags):
        if on:
            mask |= 1 << i
    return mask


def indices_to_bitmask(indices: Iterable[int]) -> int:
    """
    Convert a list of light indices to a toggle bitmask.

    Duplicate indices collapse to a single bit.

    Example:
        >>> indices_to_bitmask([1, 3])
        10
    """
    mask = 0
    for i in indices:
        mask |= 1 << i
    return mask


def bitmask_to_indices(mask: int, width: int) -> List[int]:
    """
    Inverse of indices_to_bitmask, restricted to the first `width` bits.

    Example:
        >>> bitmask_to_indices(10, 4)
        [1, 3]
    """
    return [i for i in range(width) if mask & (1 << i)]


def apply_toggle(pattern: int, toggle: int) -> int:
    """Press a button: flip every light in `toggle`."""
    return pattern ^ toggle
