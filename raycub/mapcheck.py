"""Validation of the map grid of a scene: characters, borders and enclosure."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

PLAYER_CHARS = frozenset("NSEW")
MAP_CHARS = frozenset(" 012")
_EDGE_CHARS = frozenset("0NWSE2")

_BORDER_ERROR = "Map error 1 end"


class CubError(Exception):
    """Raised when a scene description or its map is invalid."""


def scan_row(row: str) -> tuple[int, str] | None:
    """Check the characters of one map row.

    Returns the column and direction letter of the player start found in
    the row, or None when the row holds no player.
    """
    found: tuple[int, str] | None = None
    for column, char in enumerate(row):
        if char in PLAYER_CHARS:
            if found is not None:
                raise CubError("Multiple position player")
            found = (column, char)
        elif char not in MAP_CHARS:
            raise CubError("Wrong caracter map")
    return found


def check_row_ends(row: str) -> tuple[int, int]:
    """Check that a row neither starts nor ends on an open cell.

    Leading and trailing spaces are skipped. Returns the indices of the
    first and last characters that were examined.
    """
    first = len(row) - len(row.lstrip(" "))
    if first < len(row) and row[first] in _EDGE_CHARS:
        raise CubError("Map error 1 start")
    last = max(len(row) - 1, 0)
    while last != 0 and row[last] == " ":
        last -= 1
    if last < len(row) and row[last] in _EDGE_CHARS:
        raise CubError(_BORDER_ERROR)
    return first, last


def check_open_cell(grid: Sequence[str], x: int, y: int) -> None:
    """Check that the open cell at column x, row y is not next to the void."""
    if y < 1 or y + 1 >= len(grid) or x < 1:
        raise CubError(_BORDER_ERROR)
    above, row, below = grid[y - 1], grid[y], grid[y + 1]
    if len(above) < x + 1 or len(below) < x + 1:
        raise CubError(_BORDER_ERROR)
    if above[x] == " " or below[x] == " ":
        raise CubError(_BORDER_ERROR)
    if row[x - 1] == " ":
        raise CubError(_BORDER_ERROR)
    if x + 1 < len(row) and row[x + 1] == " ":
        raise CubError(_BORDER_ERROR)


def _walk(cells: Iterator[str], message: str) -> None:
    for cell in cells:
        if cell == "1":
            return
        if cell == "0":
            raise CubError(message)


def _column_up(grid: Sequence[str], x: int, y: int) -> Iterator[str]:
    # The top row itself is never examined on the way up.
    for k in range(y, 0, -1):
        if x >= len(grid[k]):
            return
        yield grid[k][x]


def _column_down(grid: Sequence[str], x: int, y: int) -> Iterator[str]:
    for row in grid[y:]:
        if x >= len(row):
            return
        yield row[x]


def check_space(grid: Sequence[str], x: int, y: int) -> None:
    """Check that no floor cell is reachable from the space at (x, y).

    From the space, each of the four directions is followed until a wall;
    meeting a floor cell first means the map is open.
    """
    row = grid[y]
    # The first cell of the row is never examined on the way left.
    _walk((row[k] for k in range(x, 0, -1)), "Map error 1 la")
    _walk(iter(row[x:]), "Map error 2")
    _walk(_column_up(grid, x, y), "Map error 3")
    _walk(_column_down(grid, x, y), "Map error 4")


def validate_grid(
    grid: Sequence[str], player_x: float, player_y: float
) -> tuple[str, ...]:
    """Check that the map is closed around the player and every open cell.

    Returns the rows of the grid as a tuple.
    """
    rows = tuple(grid)
    if not rows:
        raise CubError("Missing information")
    check_open_cell(rows, int(player_x), int(player_y))
    for y, row in enumerate(rows):
        check_row_ends(row)
        for x, cell in enumerate(row):
            if cell in ("0", "2"):
                check_open_cell(rows, x, y)
            elif cell == " ":
                check_space(rows, x, y)
    return rows