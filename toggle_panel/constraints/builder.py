"""
Linear constraint builder for the joltage integer program.

Decision variables are x[0..n-1], one per button, each a non-negative
integer press count. Constraints have the form:

    sum_i coeffs[i] * x[indices[i]] = rhs

and the objective is always "minimize sum(x)". This is the whole interface
an integer-program backend needs; it knows nothing about panels.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from toggle_panel.core.panel import Panel


@dataclass
class LinearConstraint:
    """
    A single linear equality constraint over the x vector.

    Attributes:
        indices: Variable indices (0 .. num_variables-1)
        coeffs: Coefficients (same length as indices)
        rhs: Right-hand side value

    Example:
        # x[0] + x[2] = 5
        LinearConstraint(indices=[0, 2], coeffs=[1, 1], rhs=5)
    """
    indices: List[int]
    coeffs: List[int]
    rhs: int


@dataclass
class ConstraintBuilder:
    """
    Collects linear equality constraints over num_variables integer variables.

    Attributes:
        num_variables: Number of decision variables
        constraints: Collected LinearConstraint objects
    """
    num_variables: int
    constraints: List[LinearConstraint] = field(default_factory=list)

    def add_eq(self, indices: List[int], coeffs: List[int], rhs: int) -> None:
        """
        Add sum_i coeffs[i] * x[indices[i]] = rhs.

        Raises:
            AssertionError: If indices and coeffs have different lengths
            IndexError: If an index is outside 0..num_variables-1
        """
        assert len(indices) == len(coeffs), \
            f"indices and coeffs must have same length, got {len(indices)} != {len(coeffs)}"

        for idx in indices:
            if not 0 <= idx < self.num_variables:
                raise IndexError(
                    f"Variable index {idx} out of range for {self.num_variables} variables"
                )

        self.constraints.append(
            LinearConstraint(indices=list(indices), coeffs=list(coeffs), rhs=rhs)
        )

    def add_sum_eq(self, indices: List[int], rhs: int) -> None:
        """Add sum_i x[indices[i]] = rhs (all coefficients 1)."""
        self.add_eq(indices, [1] * len(indices), rhs)

    def as_matrix(self):
        """
        Dense form (A, b) of the constraint system, A @ x == b.

        Returns:
            (A, b): int arrays of shape (num_constraints, num_variables)
                    and (num_constraints,)
        """
        A = np.zeros((len(self.constraints), self.num_variables), dtype=int)
        b = np.zeros(len(self.constraints), dtype=int)
        for row, lc in enumerate(self.constraints):
            for idx, coeff in zip(lc.indices, lc.coeffs):
                A[row, idx] += coeff
            b[row] = lc.rhs
        return A, b


def build_joltage_constraints(panel: Panel) -> ConstraintBuilder:
    """
    Encode a panel's joltage targets as equality constraints.

    One variable per button; for every channel c:

        sum over buttons b touching c of x[b] = channel_targets[c]

    Channels with a zero target still get a constraint, which forces every
    button touching them to stay unpressed. A channel no button touches
    yields an empty constraint "0 = target"; it is kept so that a non-zero
    target makes the system infeasible.

    Args:
        panel: Panel to encode

    Returns:
        ConstraintBuilder with MAX_CHANNELS constraints

    Raises:
        MalformedPanelError: If a button index has no matching channel

    Example:
        >>> builder = build_joltage_constraints(panel)
        >>> len(builder.constraints)
        10
    """
    increments = panel.channel_increments()
    builder = ConstraintBuilder(num_variables=panel.num_buttons)

    for channel, target in enumerate(panel.channel_targets):
        touching = [b_idx for b_idx, channels in enumerate(increments) if channel in channels]
        builder.add_sum_eq(touching, target)

    return builder
