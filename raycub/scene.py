"""Reading of scene description files: header keys, colours and the map."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import takewhile
from os import PathLike
from pathlib import Path

from raycub.mapcheck import CubError, scan_row, validate_grid

_BLANKS = " \b\t\n\v\f\r"
_DIGITS = "0123456789"
_WALL_KEYS = ("NO", "SO", "WE", "EA")
_HEADER_STARTS = frozenset(("", " ", "R", "C", "F", "S"))

# Direction vector and camera plane for each starting orientation.
_ORIENTATIONS = {
    "N": (0.0, -1.0, 0.66, 0.0),
    "S": (0.0, 1.0, -0.66, 0.0),
    "E": (1.0, 0.0, 0.0, 0.66),
    "W": (-1.0, 0.0, 0.0, -0.66),
}


@dataclass(frozen=True)
class Color:
    """An 8-bit colour with an alpha byte."""

    r: int
    g: int
    b: int
    a: int = 0


@dataclass(kw_only=True)
class Scene:
    """A parsed scene: resolution, textures, colours, map and player state."""

    width: int
    height: int
    north: str
    south: str
    west: str
    east: str
    sprite: str
    floor: Color
    ceiling: Color
    grid: tuple[str, ...]
    pos_x: float
    pos_y: float
    direction: str
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    def orient(self) -> None:
        """Set the view direction and camera plane from the start letter."""
        try:
            self.dir_x, self.dir_y, self.plane_x, self.plane_y = _ORIENTATIONS[
                self.direction
            ]
        except KeyError:
            raise CubError(f"Unknown player direction {self.direction!r}") from None


def parse_int(text: str) -> int:
    """Read a leading integer the way atoi does; 0 when there is none."""
    rest = text.lstrip(_BLANKS)
    negative = rest.startswith("-")
    if rest[:1] in ("+", "-"):
        rest = rest[1:]
    digits = "".join(takewhile(lambda char: char in _DIGITS, rest))
    value = int(digits) if digits else 0
    return -value if negative else value


def parse_resolution(text: str) -> tuple[int, int]:
    """Parse the value of an R line into a (width, height) pair."""
    stripped = text.lstrip(_BLANKS)
    if stripped and stripped[0] not in _DIGITS:
        raise CubError("Wrong path resolution")
    width = parse_int(stripped)
    height = parse_int(stripped.lstrip(_DIGITS))
    if width <= 0 or height <= 0:
        raise CubError("Wrong resolution")
    return width, height


def parse_color(text: str) -> Color:
    """Parse the value of a C or F line, "r,g,b", into a colour.

    Each component keeps only its low eight bits.
    """
    stripped = text.lstrip(_BLANKS)
    if not stripped or stripped[0] not in _DIGITS:
        raise CubError("Wrong path color")
    _, sep, rest = stripped.partition(",")
    if not sep:
        raise CubError("Wrong path color")
    _, sep, last = rest.partition(",")
    if not sep:
        raise CubError("Wrong path color")
    return Color(
        parse_int(stripped) & 0xFF,
        parse_int(rest) & 0xFF,
        parse_int(last) & 0xFF,
    )


def texture_path(text: str) -> str:
    """Return the texture path of a key line; it must start with "./"."""
    stripped = text.lstrip(_BLANKS)
    if not stripped.startswith("./"):
        raise CubError("Wrong map path")
    return stripped


@dataclass
class _Header:
    paths: dict[str, str] = field(default_factory=dict)
    resolution: tuple[int, int] | None = None
    ceiling: Color | None = None
    floor: Color | None = None

    def feed(self, line: str) -> None:
        key = line[:2]
        head = line[:1]
        if key in _WALL_KEYS:
            if key in self.paths:
                raise CubError(f"Duplicate {key} key")
            self.paths[key] = texture_path(line[2:])
        if head == "R":
            size = parse_resolution(line[1:])
            if self.resolution is not None:
                raise CubError("Dup caracter")
            self.resolution = size
        elif head == "C":
            color = parse_color(line[1:])
            if self.ceiling is not None:
                raise CubError("Dup caracter")
            self.ceiling = color
        elif head == "F":
            color = parse_color(line[1:])
            if self.floor is not None:
                raise CubError("Dup caracter")
            self.floor = color
        elif head == "S" and key != "SO":
            if "S" in self.paths:
                raise CubError("Duplicate S key")
            self.paths["S"] = texture_path(line[1:])
        if head not in _HEADER_STARTS and key not in _WALL_KEYS:
            raise CubError("Error invalid caracter")

    @property
    def complete(self) -> bool:
        return (
            all(name in self.paths for name in (*_WALL_KEYS, "S"))
            and self.resolution is not None
            and self.ceiling is not None
            and self.floor is not None
        )


def _read_grid(
    rows: Sequence[str], tail: str
) -> tuple[list[str], tuple[float, float, str] | None]:
    """Collect the map rows and locate the player start."""
    all_rows = [*rows, tail] if tail else list(rows)
    tail_index = len(rows) if tail else None
    grid: list[str] = []
    player: tuple[float, float, str] | None = None
    for y, row in enumerate(all_rows):
        found = scan_row(row)
        if found is not None:
            if player is not None:
                raise CubError("Multiple position player")
            column, letter = found
            # The first two rows share the same vertical coordinate.
            player = (column + 0.5, max(y, 1) + 0.5, letter)
        if (y == 0 or y == tail_index) and "0" in row:
            raise CubError("Map error 1")
        grid.append(row)
    return grid, player


def parse_scene(lines: Iterable[str]) -> Scene:
    """Build a scene from the lines of a description, newlines removed.

    The lines are those of ``text.split("\\n")``: the last item is what
    follows the final newline. That unterminated tail is read as a map row
    when the map has started and is ignored otherwise.
    """
    items = list(lines) or [""]
    terminated, tail = items[:-1], items[-1]
    header = _Header()
    grid: list[str] = []
    player: tuple[float, float, str] | None = None
    for index, line in enumerate(terminated):
        if line[:1] == " " or line[:1] in _DIGITS and line:
            grid, player = _read_grid(terminated[index:], tail)
            break
        header.feed(line)
    if not header.complete or player is None:
        raise CubError("Missing information")
    pos_x, pos_y, letter = player
    rows = validate_grid(grid, pos_x, pos_y)
    width, height = header.resolution
    scene = Scene(
        width=width,
        height=height,
        north=header.paths["NO"],
        south=header.paths["SO"],
        west=header.paths["WE"],
        east=header.paths["EA"],
        sprite=header.paths["S"],
        floor=header.floor,
        ceiling=header.ceiling,
        grid=rows,
        pos_x=pos_x,
        pos_y=pos_y,
        direction=letter,
    )
    scene.orient()
    return scene


def load_scene(path: str | PathLike[str]) -> Scene:
    """Read and parse a scene description file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise CubError("Missing information") from exc
    return parse_scene(text.split("\n"))