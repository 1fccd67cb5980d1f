"""Casting rays through the map grid and drawing textured wall columns."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from raycub.framebuffer import Frame, Texture
from raycub.mapcheck import CubError
from raycub.scene import Scene


@dataclass(frozen=True)
class Hit:
    """Where a ray met a wall.

    side is 0 when the ray crossed a vertical grid line (an x side) and 1
    when it crossed a horizontal one. wall_x is the fractional position of
    the hit along the wall face.
    """

    distance: float
    side: int
    ray_x: float
    ray_y: float
    wall_x: float
    map_x: int
    map_y: int


@dataclass(frozen=True)
class WallTextures:
    """The four wall textures of a scene."""

    north: Texture
    south: Texture
    west: Texture
    east: Texture

    def select(self, hit: Hit) -> Texture:
        """Return the texture drawn for the wall face that was hit."""
        if hit.side == 0 and hit.ray_x < 0:
            return self.east
        if hit.side == 0 and hit.ray_x > 0:
            return self.west
        if hit.side == 1 and hit.ray_y > 0:
            return self.north
        return self.south


def _inverse(value: float) -> float:
    return math.inf if value == 0 else abs(1 / value)


def _is_wall(grid: Sequence[str], width: int, x: int, y: int) -> bool:
    if not (0 <= y < len(grid) and 0 <= x < width):
        raise CubError("Ray left the map")
    row = grid[y]
    return x < len(row) and row[x] == "1"


def cast_ray(scene: Scene, column: int) -> Hit:
    """Follow the ray of one screen column until it meets a wall."""
    map_x, map_y = int(scene.pos_x), int(scene.pos_y)
    camera = 2 * column / scene.width - 1
    ray_x = scene.dir_x + scene.plane_x * camera
    ray_y = scene.dir_y + scene.plane_y * camera
    delta_x, delta_y = _inverse(ray_x), _inverse(ray_y)

    if ray_x < 0:
        step_x, side_x = -1, (scene.pos_x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - scene.pos_x) * delta_x
    if ray_y < 0:
        step_y, side_y = -1, (scene.pos_y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - scene.pos_y) * delta_y

    grid = scene.grid
    grid_width = max((len(row) for row in grid), default=0)
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _is_wall(grid, grid_width, map_x, map_y):
            break

    if side == 0:
        distance = (map_x - scene.pos_x + (1 - step_x) // 2) / ray_x
        wall = scene.pos_y + distance * ray_y
    else:
        distance = (map_y - scene.pos_y + (1 - step_y) // 2) / ray_y
        wall = scene.pos_x + distance * ray_x
    wall -= math.floor(wall)
    return Hit(
        distance=max(distance, 0.0),
        side=side,
        ray_x=ray_x,
        ray_y=ray_y,
        wall_x=wall,
        map_x=map_x,
        map_y=map_y,
    )


def wall_intensity(distance: float) -> float:
    """Return the shading factor applied to a wall at that distance."""
    if distance > 10:
        return 0.5
    if distance > 7:
        return 0.6
    if distance > 4:
        return 0.7
    return 1.0


def _texture_column(hit: Hit, width: int) -> int:
    tex_x = int(hit.wall_x * width)
    if (hit.side == 0 and hit.ray_x > 0) or (hit.side == 1 and hit.ray_y < 0):
        tex_x = width - tex_x - 1
    return tex_x


def draw_column(
    frame: Frame, scene: Scene, column: int, hit: Hit, textures: WallTextures
) -> None:
    """Draw ceiling, floor and the textured wall slice of one column."""
    height = frame.height
    texture = textures.select(hit)
    tex_x = _texture_column(hit, texture.width)
    intensity = wall_intensity(hit.distance)

    line = height if hit.distance == 0 else int(height / hit.distance)
    start = max(-(line // 2) + height // 2, 0)
    end = line // 2 + height // 2

    for y in range(start):
        frame.put(column, y, scene.ceiling)
    for y in range(end, height):
        frame.put(column, y, scene.floor)

    end = min(end, height - 1)
    step = texture.height / max(line, 1)
    tex_pos = (start - height // 2 + line // 2) * step
    for y in range(start, end + 1):
        frame.put(column, y, texture.pixel(tex_x, int(tex_pos), intensity))
        tex_pos += step


def render_walls(frame: Frame, scene: Scene, textures: WallTextures) -> list[float]:
    """Draw every column of the frame and return the wall distance of each."""
    if (frame.width, frame.height) != (scene.width, scene.height):
        raise ValueError(
            f"frame is {frame.width}x{frame.height}, "
            f"scene is {scene.width}x{scene.height}"
        )
    depth: list[float] = []
    for column in range(scene.width):
        hit = cast_ray(scene, column)
        draw_column(frame, scene, column, hit, textures)
        depth.append(hit.distance)
    return depth