"""Player controls: key state, movement with wall collision and turning."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from raycub.scene import Scene

KEY_ESCAPE = 65307
KEY_FORWARD = 122
KEY_BACK = 115
KEY_STRAFE_RIGHT = 100
KEY_STRAFE_LEFT = 113
KEY_TURN_LEFT = 65361
KEY_TURN_RIGHT = 65363

_BINDINGS = {
    KEY_ESCAPE: "escape",
    KEY_FORWARD: "forward",
    KEY_BACK: "back",
    KEY_STRAFE_RIGHT: "strafe_right",
    KEY_STRAFE_LEFT: "strafe_left",
    KEY_TURN_LEFT: "left",
    KEY_TURN_RIGHT: "right",
}

_STEP = 0.2
_REACH = 0.4
_MARGIN = 0.01
_TURN = 0.1


@dataclass
class Keys:
    """Which control keys are currently held down."""

    left: bool = False
    right: bool = False
    forward: bool = False
    back: bool = False
    strafe_left: bool = False
    strafe_right: bool = False
    escape: bool = False

    def _set(self, key: int, state: bool) -> bool:
        name = _BINDINGS.get(key)
        if name is None:
            return False
        setattr(self, name, state)
        return True

    def press(self, key: int) -> bool:
        """Mark a key as held; return whether the key is a control key."""
        return self._set(key, True)

    def release(self, key: int) -> bool:
        """Mark a key as released; return whether the key is a control key."""
        return self._set(key, False)


def _is_wall(grid: Sequence[str], x: int, y: int) -> bool:
    if 0 <= y < len(grid):
        row = grid[y]
        if 0 <= x < len(row):
            return row[x] == "1"
    return True


def _move(scene: Scene, dx: float, dy: float) -> None:
    grid = scene.grid
    probe_x = int(scene.pos_x + dx * _REACH)
    rows = (
        int(scene.pos_y),
        int(scene.pos_y + _MARGIN),
        int(scene.pos_y - _MARGIN),
    )
    if not any(_is_wall(grid, probe_x, row) for row in rows):
        scene.pos_x += dx * _STEP
    probe_y = int(scene.pos_y + dy * _REACH)
    columns = (
        int(scene.pos_x),
        int(scene.pos_x + _MARGIN),
        int(scene.pos_x - _MARGIN),
    )
    if not any(_is_wall(grid, column, probe_y) for column in columns):
        scene.pos_y += dy * _STEP


def _rotate(scene: Scene, angle: float) -> None:
    c, s = math.cos(angle), math.sin(angle)
    scene.dir_x, scene.dir_y = (
        scene.dir_x * c - scene.dir_y * s,
        scene.dir_x * s + scene.dir_y * c,
    )
    scene.plane_x, scene.plane_y = (
        scene.plane_x * c - scene.plane_y * s,
        scene.plane_x * s + scene.plane_y * c,
    )


def move_forward(scene: Scene) -> None:
    """Step along the view direction unless a wall is in the way."""
    _move(scene, scene.dir_x, scene.dir_y)


def move_back(scene: Scene) -> None:
    """Step against the view direction unless a wall is in the way."""
    _move(scene, -scene.dir_x, -scene.dir_y)


def strafe_left(scene: Scene) -> None:
    """Step sideways to the left unless a wall is in the way."""
    _move(scene, -scene.plane_x, -scene.plane_y)


def strafe_right(scene: Scene) -> None:
    """Step sideways to the right unless a wall is in the way."""
    _move(scene, scene.plane_x, scene.plane_y)


def turn_left(scene: Scene) -> None:
    """Rotate the view to the left."""
    _rotate(scene, -_TURN)


def turn_right(scene: Scene) -> None:
    """Rotate the view to the right."""
    _rotate(scene, _TURN)


def apply_keys(scene: Scene, keys: Keys) -> bool:
    """Apply one frame of the held keys to the scene.

    Returns True when escape is held and the game should quit; nothing is
    moved in that case.
    """
    if keys.escape:
        return True
    actions = (
        (keys.left, turn_left),
        (keys.right, turn_right),
        (keys.back, move_back),
        (keys.forward, move_forward),
        (keys.strafe_left, strafe_left),
        (keys.strafe_right, strafe_right),
    )
    for held, action in actions:
        if held:
            action(scene)
    return False