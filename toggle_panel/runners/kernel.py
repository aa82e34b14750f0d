"""
Core kernel runner for the toggle-panel optimizer.

For every input line:
  1. Parse the line into a Panel
  2. Solve the light pattern (BFS)
  3. Profile the panel and solve the joltage targets (ILP or A*)
  4. Optionally cross-check the joltage answer with the other solver
  5. Record a PanelDiagnostics

Solvers raise; this module is the only place that turns their exceptions
into statuses, so one bad panel never stops the rest of an input.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from toggle_panel.core.errors import (
    InfeasibleModelError,
    MalformedPanelError,
    SearchLimitExceeded,
)
from toggle_panel.core.panel import MAX_CHANNELS, Panel
from toggle_panel.core.panel_io import load_panel_lines, parse_panel_line
from toggle_panel.diagnostics.profiler import DEFAULT_MAX_ASTAR_STATES, profile_panel
from toggle_panel.runners.results import (
    JoltageMethod,
    PanelDiagnostics,
    PanelStatus,
    RunSummary,
    summarize,
)
from toggle_panel.solver.joltage_astar import solve_joltages_astar
from toggle_panel.solver.joltage_ilp import solve_joltages
from toggle_panel.solver.lights import UNREACHABLE, solve_lights
from toggle_panel.solver.lp_solver import IntegerProgramBackend, solve_min_sum


logger = logging.getLogger(__name__)


def _record_failure(diag: PanelDiagnostics, status: PanelStatus, message: str) -> None:
    # The joltage outcome wins the status; an unreachable light target stays in the message
    if diag.status == "unreachable":
        message = f"{diag.error_message}; {message}"
    diag.status = status
    diag.error_message = message


def _solve_joltage(
    panel: Panel,
    method: JoltageMethod,
    backend: IntegerProgramBackend,
    max_astar_states: int,
) -> int:
    if method == "ilp":
        return solve_joltages(panel, backend=backend)
    elif method == "astar":
        return solve_joltages_astar(panel, max_states=max_astar_states)
    else:
        raise ValueError(f"Unknown joltage method: {method}")


def solve_panel_with_diagnostics(
    line: str,
    line_no: int = 1,
    method: JoltageMethod = "ilp",
    cross_check: bool = False,
    backend: IntegerProgramBackend = solve_min_sum,
    max_astar_states: int = DEFAULT_MAX_ASTAR_STATES,
) -> PanelDiagnostics:
    """
    Solve one panel line and return its diagnostics.

    Args:
        line: Panel description line
        line_no: 1-based line number, for reporting
        method: Joltage solver producing the reported answer ("ilp" or "astar")
        cross_check: If True, also run the other joltage solver and compare;
                     skipped when the profile says A* would be too large
        backend: Integer program backend used by the ILP solver
        max_astar_states: State budget for every A* run

    Returns:
        PanelDiagnostics with status:
          "ok" | "unreachable" | "infeasible" | "malformed" | "mismatch" | "error"

    Example:
        >>> diag = solve_panel_with_diagnostics(
        ...     "[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}", cross_check=True)
        >>> (diag.status, diag.light_presses, diag.joltage_presses)
        ('ok', 2, 10)
    """
    diag = PanelDiagnostics(line_no=line_no, line=line, joltage_method=method)

    try:
        # 1. Parse
        panel = parse_panel_line(line)
        diag.num_variables = panel.num_buttons
        diag.num_constraints = MAX_CHANNELS

        # 2. Lights
        diag.light_presses = solve_lights(panel)
        if diag.light_presses is UNREACHABLE:
            diag.status = "unreachable"
            diag.error_message = "Light target not reachable from all-off"

        # 3. Joltages
        profile = profile_panel(panel)
        if profile.trivially_infeasible:
            raise InfeasibleModelError(
                f"Channels {profile.dead_channels} have targets but no button touches them"
            )
        diag.joltage_presses = _solve_joltage(panel, method, backend, max_astar_states)

        # 4. Cross-check
        if cross_check:
            other: JoltageMethod = "astar" if method == "ilp" else "ilp"
            if other == "astar" and not profile.allows_astar_cross_check(max_astar_states):
                logger.info("Line %d: skipping A* cross-check, state bound %d",
                            line_no, profile.joltage_state_bound)
            else:
                try:
                    diag.cross_check_presses = _solve_joltage(
                        panel, other, backend, max_astar_states
                    )
                except SearchLimitExceeded as e:
                    logger.info("Line %d: cross-check abandoned: %s", line_no, e)
                else:
                    if diag.cross_check_presses != diag.joltage_presses:
                        _record_failure(
                            diag, "mismatch",
                            f"{method} found {diag.joltage_presses} presses, "
                            f"{other} found {diag.cross_check_presses}",
                        )

    except MalformedPanelError as e:
        _record_failure(diag, "malformed", f"Malformed panel: {e}")

    except InfeasibleModelError as e:
        _record_failure(diag, "infeasible", f"Joltage system infeasible: {e}")

    except SearchLimitExceeded as e:
        _record_failure(diag, "error", f"A* gave up: {e}")

    except Exception as e:
        logger.exception("Unexpected error on line %d: %s", line_no, e)
        _record_failure(diag, "error", f"{type(e).__name__}: {e}")

    if diag.status == "ok":
        logger.debug("Line %d: lights=%s joltages=%s", line_no,
                     diag.light_presses, diag.joltage_presses)
    else:
        logger.warning("Line %d: %s (%s)", line_no, diag.status, diag.error_message)

    return diag


def solve_panel_lines(
    lines: Iterable[str],
    method: JoltageMethod = "ilp",
    cross_check: bool = False,
    backend: IntegerProgramBackend = solve_min_sum,
    max_astar_states: int = DEFAULT_MAX_ASTAR_STATES,
    max_panels: Optional[int] = None,
) -> Tuple[RunSummary, List[PanelDiagnostics]]:
    """
    Solve every panel line and aggregate the two totals.

    Args:
        lines: Panel description lines (blank lines are skipped)
        method, cross_check, backend, max_astar_states:
            Passed through to solve_panel_with_diagnostics
        max_panels: If not None, stop after this many panels

    Returns:
        (summary, diagnostics), diagnostics in input order

    Example:
        >>> summary, _ = solve_panel_lines(example_lines)
        >>> (summary.light_total, summary.joltage_total)
        (7, 33)
    """
    diagnostics: List[PanelDiagnostics] = []

    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        if max_panels is not None and len(diagnostics) >= max_panels:
            logger.info("Stopping after %d panels", max_panels)
            break
        diagnostics.append(solve_panel_with_diagnostics(
            line.strip(),
            line_no=line_no,
            method=method,
            cross_check=cross_check,
            backend=backend,
            max_astar_states=max_astar_states,
        ))

    summary = summarize(diagnostics)
    logger.info("Solved %d panels: %s", summary.num_panels, summary.status_counts)
    return summary, diagnostics


def solve_input_file(
    path: Path,
    **kwargs,
) -> Tuple[RunSummary, List[PanelDiagnostics]]:
    """Read an input file and run solve_panel_lines over it."""
    logger.info("Loading panels from %s", path)
    return solve_panel_lines(load_panel_lines(path), **kwargs)
