"""
Result and diagnostics structures for panel solving.

  - PanelDiagnostics: everything about one panel's solve attempt
  - RunSummary: totals across a whole input (the two aggregate answers)
  - summarize: folds a list of PanelDiagnostics into a RunSummary
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional


# Status of a panel solve attempt
PanelStatus = Literal["ok", "unreachable", "infeasible", "malformed", "mismatch", "error"]

# Joltage solver used for the reported joltage answer
JoltageMethod = Literal["ilp", "astar"]


@dataclass
class PanelDiagnostics:
    """
    Diagnostics for a single panel.

    Attributes:
        line_no: 1-based input line number
        line: Raw input line
        status: Solve outcome - one of:
            - "ok": both answers computed (and cross-check agreed, if run)
            - "unreachable": light target not reachable; joltage may still be set.
              A later joltage failure takes over the status and error_message
              keeps both reasons
            - "infeasible": joltage system has no solution
            - "malformed": line could not be decoded into a Panel
            - "mismatch": exact and A* joltage answers disagree
            - "error": unexpected error while solving
        light_presses: Minimum light presses, None if unreachable or not computed
        joltage_presses: Minimum joltage presses, None if not computed
        joltage_method: Solver that produced joltage_presses
        num_variables: Number of ILP variables (buttons)
        num_constraints: Number of ILP constraints (channels)
        cross_check_presses: A* answer when cross-checking ran
        error_message: Optional error detail
    """
    line_no: int
    line: str
    status: PanelStatus = "ok"

    light_presses: Optional[int] = None
    joltage_presses: Optional[int] = None
    joltage_method: JoltageMethod = "ilp"

    num_variables: int = 0
    num_constraints: int = 0

    cross_check_presses: Optional[int] = None
    error_message: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        """Plain dict, for JSONL failure logs."""
        return asdict(self)


@dataclass
class RunSummary:
    """
    Totals across all panels of one input.

    Attributes:
        light_total: Sum of light presses over panels with a light answer
        joltage_total: Sum of joltage presses over panels with a joltage answer
        num_panels: Number of panels processed
        status_counts: Number of panels per status
    """
    light_total: int = 0
    joltage_total: int = 0
    num_panels: int = 0
    status_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def all_ok(self) -> bool:
        return self.status_counts.get("ok", 0) == self.num_panels


def summarize(diagnostics: List[PanelDiagnostics]) -> RunSummary:
    """
    Sum per-panel answers and count statuses.

    Panels without an answer (unreachable lights, infeasible joltages,
    malformed lines) contribute nothing to the corresponding total.

    Example:
        >>> summary = summarize([
        ...     PanelDiagnostics(1, "...", light_presses=2, joltage_presses=10),
        ...     PanelDiagnostics(2, "...", light_presses=3, joltage_presses=12),
        ... ])
        >>> (summary.light_total, summary.joltage_total)
        (5, 22)
    """
    summary = RunSummary()
    for diag in diagnostics:
        summary.num_panels += 1
        summary.status_counts[diag.status] = summary.status_counts.get(diag.status, 0) + 1
        if diag.light_presses is not None:
            summary.light_total += diag.light_presses
        if diag.joltage_presses is not None:
            summary.joltage_total += diag.joltage_presses
    return summary
