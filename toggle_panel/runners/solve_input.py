"""
Command-line runner: solve every panel of an input file.

Usage:
    # Default input (input/raw.txt), exact joltage solver
    python -m toggle_panel.runners.solve_input

    # A* joltages, cross-checked against the ILP
    python -m toggle_panel.runners.solve_input --input input/raw.txt \
        --method astar --cross-check

    # Log failing panels and fail the run on any of them
    python -m toggle_panel.runners.solve_input --failure-log logs/failures.jsonl --strict

Output:
    Part 1 result: <sum of minimum light presses>
    Part 2 result: <sum of minimum joltage presses>
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from toggle_panel.diagnostics.profiler import DEFAULT_MAX_ASTAR_STATES
from toggle_panel.runners.kernel import solve_input_file
from toggle_panel.runners.results import PanelDiagnostics


logger = logging.getLogger(__name__)

DEFAULT_INPUT_PATH = Path("input/raw.txt")


def write_failure_log(diagnostics: List[PanelDiagnostics], failure_log_path: Path) -> int:
    """
    Append one JSON object per non-ok panel to a JSONL file.

    Returns:
        Number of records written
    """
    failures = [diag for diag in diagnostics if diag.status != "ok"]
    if not failures:
        return 0

    failure_log_path.parent.mkdir(parents=True, exist_ok=True)
    with failure_log_path.open("a", encoding="utf-8") as f:
        for diag in failures:
            f.write(json.dumps(diag.to_record()) + "\n")

    logger.info("Wrote %d failure records to %s", len(failures), failure_log_path)
    return len(failures)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute minimum button presses for every panel of an input file."
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=DEFAULT_INPUT_PATH,
        help="Path to the panel input file (one panel per line).",
    )
    parser.add_argument(
        "--method",
        choices=["ilp", "astar"],
        default="ilp",
        help="Joltage solver producing the reported answer.",
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Also run the other joltage solver and flag disagreements.",
    )
    parser.add_argument(
        "--max-astar-states",
        type=int,
        default=DEFAULT_MAX_ASTAR_STATES,
        help="State budget for A* searches.",
    )
    parser.add_argument(
        "--max-panels",
        type=int,
        default=None,
        help="Optional limit on number of panels to solve (for quick tests).",
    )
    parser.add_argument(
        "--failure-log",
        type=Path,
        default=None,
        help="Optional JSONL file receiving diagnostics of non-ok panels.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any panel is not ok.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log solver details at DEBUG level.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint. Returns the process exit code."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    summary, diagnostics = solve_input_file(
        args.input,
        method=args.method,
        cross_check=args.cross_check,
        max_astar_states=args.max_astar_states,
        max_panels=args.max_panels,
    )

    print(f"Part 1 result: {summary.light_total}")
    print(f"Part 2 result: {summary.joltage_total}")

    if args.failure_log is not None:
        write_failure_log(diagnostics, args.failure_log)

    if args.strict and not summary.all_ok:
        num_failed = summary.num_panels - summary.status_counts.get("ok", 0)
        logger.error("%d of %d panels not ok", num_failed, summary.num_panels)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
