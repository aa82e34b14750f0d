"""
Smoke test for the kernel runner.

Runs the full per-panel pipeline (parse, lights, profile, joltages,
cross-check) and checks totals and statuses, including the failure paths
that must not stop the remaining panels.
"""

from toggle_panel.runners.kernel import solve_panel_lines, solve_panel_with_diagnostics
from toggle_panel.solver.lp_solver import solve_min_sum


EXAMPLE_LINES = [
    "[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}",
    "[...#.] (0,2,3,4) (2,3) (0,4) (0,1,2) (1,2,3,4) {7,5,12,7,2}",
    "[.###.#] (0,1,2,3,4) (0,3,4) (0,1,2,4,5) (1,2) {10,11,11,5,10,5}",
]


def test_kernel_example_totals():
    print("\n" + "=" * 70)
    print("KERNEL SMOKE TEST")
    print("=" * 70)

    summary, diagnostics = solve_panel_lines(EXAMPLE_LINES)

    print(f"  Part 1: {summary.light_total}")
    print(f"  Part 2: {summary.joltage_total}")
    print(f"  Statuses: {summary.status_counts}")

    assert summary.light_total == 7
    assert summary.joltage_total == 33
    assert summary.num_panels == 3
    assert summary.all_ok
    assert [d.light_presses for d in diagnostics] == [2, 3, 2]
    assert [d.joltage_presses for d in diagnostics] == [10, 12, 11]

    print("  ✓ test_kernel_example_totals: PASSED")


def test_kernel_astar_with_cross_check():
    summary, diagnostics = solve_panel_lines(EXAMPLE_LINES, method="astar", cross_check=True)

    assert summary.joltage_total == 33
    assert all(d.status == "ok" for d in diagnostics)
    assert [d.cross_check_presses for d in diagnostics] == [10, 12, 11]
    assert all(d.joltage_method == "astar" for d in diagnostics)


def test_ilp_cross_check_records_astar_answer():
    diag = solve_panel_with_diagnostics(EXAMPLE_LINES[0], cross_check=True)

    assert diag.status == "ok"
    assert diag.joltage_presses == 10
    assert diag.cross_check_presses == 10
    assert diag.num_variables == 6
    assert diag.num_constraints == 10


def test_cross_check_skipped_when_too_large():
    diag = solve_panel_with_diagnostics(
        EXAMPLE_LINES[2], cross_check=True, max_astar_states=10
    )

    assert diag.status == "ok"
    assert diag.cross_check_presses is None


def test_mismatch_detected():
    def off_by_one_backend(builder):
        x = solve_min_sum(builder)
        x[0] += 1
        return x

    diag = solve_panel_with_diagnostics(
        EXAMPLE_LINES[0], cross_check=True, backend=off_by_one_backend
    )

    assert diag.status == "mismatch"
    assert diag.joltage_presses == 11
    assert diag.cross_check_presses == 10


def test_failure_statuses_do_not_stop_the_run():
    lines = [
        EXAMPLE_LINES[0],
        "[.x] (0) {1}",                # malformed
        "[#...] (0,1) (2,3) {1,1,1,1}",  # lights unreachable, joltages fine
        "[..] (0,1) {2,3}",            # joltages infeasible
        "[...] (0) (1) {1,1,4}",       # dead channel
        "",
        EXAMPLE_LINES[1],
    ]

    summary, diagnostics = solve_panel_lines(lines)
    statuses = [d.status for d in diagnostics]

    assert statuses == ["ok", "malformed", "unreachable", "infeasible", "infeasible", "ok"]
    # Blank line skipped, numbering follows the input
    assert [d.line_no for d in diagnostics] == [1, 2, 3, 4, 5, 7]

    unreachable = diagnostics[2]
    assert unreachable.light_presses is None
    assert unreachable.joltage_presses == 2

    infeasible = diagnostics[3]
    assert infeasible.light_presses == 0
    assert infeasible.joltage_presses is None

    assert summary.light_total == 2 + 0 + 0 + 3
    assert summary.joltage_total == 10 + 2 + 12
    assert summary.status_counts == {"ok": 2, "malformed": 1, "unreachable": 1, "infeasible": 2}
    assert not summary.all_ok


def test_channel_beyond_last_is_malformed():
    # Valid as a light panel, but index 11 has no channel
    diag = solve_panel_with_diagnostics("[" + "." * 12 + "] (0,11) {0}")

    assert diag.status == "malformed"
    assert diag.light_presses == 0


def test_non_ascii_digits_are_malformed():
    for line in ("[.] (0) {²}", "[.] (²) {1}"):
        diag = solve_panel_with_diagnostics(line)
        assert diag.status == "malformed", f"{line}: got {diag.status}"
        assert diag.error_message.startswith("Malformed panel")


def test_unreachable_kept_when_joltages_fail():
    # Lights unreachable, and the only button also raises channel 1 past its target
    diag = solve_panel_with_diagnostics("[#.] (0,1) {1,0}")

    assert diag.status == "infeasible"
    assert diag.light_presses is None
    assert "Light target not reachable" in diag.error_message
    assert "Joltage system infeasible" in diag.error_message


def test_primary_astar_over_budget_is_error():
    diag = solve_panel_with_diagnostics(EXAMPLE_LINES[1], method="astar", max_astar_states=5)

    assert diag.status == "error"
    assert diag.light_presses == 3
    assert diag.joltage_presses is None


def test_max_panels():
    summary, diagnostics = solve_panel_lines(EXAMPLE_LINES, max_panels=2)

    assert summary.num_panels == 2
    assert summary.light_total == 5


if __name__ == "__main__":
    test_kernel_example_totals()
    test_kernel_astar_with_cross_check()
    test_failure_statuses_do_not_stop_the_run()
    print("\n✓ Kernel smoke tests passed")
