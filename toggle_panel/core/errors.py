"""
Error taxonomy for panel solving.

  - MalformedPanelError: input could not be decoded into a valid Panel
  - InfeasibleModelError: joltage system has no non-negative integer solution
  - SearchLimitExceeded: A* gave up after its configured state budget

An unreachable light target is NOT an exception. The light solver returns
the UNREACHABLE sentinel for it.
"""


class PanelError(Exception):
    """Base class for all panel solving errors."""
    pass


class MalformedPanelError(PanelError, ValueError):
    """Raised when a panel description is structurally invalid."""
    pass


class InfeasibleModelError(PanelError):
    """Raised when the joltage system is infeasible or no optimum was found."""
    pass


class SearchLimitExceeded(PanelError):
    """Raised when a bounded search exhausts its state budget."""

    def __init__(self, max_states: int):
        super().__init__(f"Search exceeded {max_states} explored states")
        self.max_states = max_states
