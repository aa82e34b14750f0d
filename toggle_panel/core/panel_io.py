"""
Panel text IO.

One panel per line:

    [.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}

  - [...]: light pattern, '.' = off, '#' = on; its length is L
  - (...): zero or more buttons, comma-separated zero-based indices
  - {...}: channel targets, comma-separated non-negative integers

Tokens are whitespace-separated. Anything that does not decode raises
MalformedPanelError naming the offending token.
"""

from pathlib import Path
from typing import List

from toggle_panel.core.errors import MalformedPanelError
from toggle_panel.core.panel import Panel, make_panel


LIGHT_OFF = "."
LIGHT_ON = "#"


def _strip_delimiters(token: str, opening: str, closing: str) -> str:
    if not (token.startswith(opening) and token.endswith(closing)) or len(token) < 2:
        raise MalformedPanelError(
            f"Expected token wrapped in '{opening}{closing}', got {token!r}"
        )
    return token[1:-1]


def _parse_int_list(body: str, token: str) -> List[int]:
    # "{}" decodes to an empty list; Panel rejects an empty button "()"
    if not body.strip():
        return []
    values = []
    for part in body.split(","):
        part = part.strip()
        # isdigit alone admits non-ASCII digits such as "²" that int() rejects
        if not (part.isascii() and part.isdigit()):
            raise MalformedPanelError(f"Non-numeric entry {part!r} in {token!r}")
        values.append(int(part))
    return values


def parse_lights(token: str) -> List[bool]:
    """
    Decode a bracketed light pattern.

    Example:
        >>> parse_lights("[.##.]")
        [False, True, True, False]
    """
    body = _strip_delimiters(token, "[", "]")
    lights = []
    for ch in body:
        if ch == LIGHT_OFF:
            lights.append(False)
        elif ch == LIGHT_ON:
            lights.append(True)
        else:
            raise MalformedPanelError(f"Unexpected light symbol {ch!r} in {token!r}")
    return lights


def parse_panel_line(line: str) -> Panel:
    """
    Parse one input line into a Panel.

    Args:
        line: Panel description (see module docstring)

    Returns:
        Validated Panel

    Raises:
        MalformedPanelError: If the line is structurally invalid or the
            decoded parts violate a Panel invariant

    Example:
        >>> panel = parse_panel_line("[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}")
        >>> panel.num_buttons
        6
    """
    parts = line.split()
    if len(parts) < 2:
        raise MalformedPanelError(f"Panel line needs lights and targets, got {line!r}")

    lights = parse_lights(parts[0])
    targets = _parse_int_list(_strip_delimiters(parts[-1], "{", "}"), parts[-1])
    buttons = [
        _parse_int_list(_strip_delimiters(token, "(", ")"), token)
        for token in parts[1:-1]
    ]

    return make_panel(lights, buttons, targets)


def load_panel_lines(path: Path) -> List[str]:
    """
    Read every line of an input file, blank ones included.

    Blank lines are kept so that list position + 1 is the file line number.

    Args:
        path: Path to a text file with one panel per line

    Returns:
        List of lines without trailing newlines
    """
    with open(path, "r", encoding="utf-8") as f:
        return f.read().splitlines()


def load_panels(path: Path) -> List[Panel]:
    """
    Parse every panel in an input file.

    Raises:
        MalformedPanelError: On the first undecodable line
    """
    return [parse_panel_line(line) for line in load_panel_lines(path) if line.strip()]


if __name__ == "__main__":
    # Self-test: parse the three reference panels
    examples = [
        "[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}",
        "[...#.] (0,2,3,4) (2,3) (0,4) (0,1,2) (1,2,3,4) {7,5,12,7,2}",
        "[.###.#] (0,1,2,3,4) (0,3,4) (0,1,2,4,5) (1,2) {10,11,11,5,10,5}",
    ]
    for line in examples:
        panel = parse_panel_line(line)
        print(f"L={panel.num_lights} buttons={panel.num_buttons} "
              f"targets={panel.channel_targets}")
    print("panel_io.py self-test passed.")
