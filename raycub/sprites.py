"""Sprite placement, depth ordering and projection onto the frame."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from raycub.framebuffer import Frame, Texture
from raycub.scene import Scene

SPRITE_CELL = "2"


@dataclass(frozen=True)
class Sprite:
    """A sprite standing at a point of the map."""

    x: float = -1.0
    y: float = -1.0


def _distance_sq(sprite: Sprite, x: float, y: float) -> float:
    return (x - sprite.x) * (x - sprite.x) + (y - sprite.y) * (y - sprite.y)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def find_sprites(grid: Iterable[str]) -> list[Sprite]:
    """Return a sprite at the centre of every sprite cell, row by row."""
    return [
        Sprite(x + 0.5, y + 0.5)
        for y, row in enumerate(grid)
        for x, cell in enumerate(row)
        if cell == SPRITE_CELL
    ]


def sort_by_distance(sprites: Iterable[Sprite], x: float, y: float) -> list[Sprite]:
    """Return the sprites ordered from farthest to nearest to (x, y)."""
    return sorted(sprites, key=lambda sprite: _distance_sq(sprite, x, y), reverse=True)


def _draw_one(
    frame: Frame,
    texture: Texture,
    depth: Sequence[float],
    transform_x: float,
    transform_y: float,
) -> None:
    width, height = frame.width, frame.height
    screen_x = int((width // 2) * (1 + transform_x / transform_y))
    size = abs(int(height / transform_y))

    start_y = max(-(size // 2) + height // 2, 0)
    end_y = min(size // 2 + height // 2, height - 1)
    left = -(size // 2) + screen_x
    start_x = max(left, 0)
    end_x = min(size // 2 + screen_x, width - 1)

    for stripe in range(start_x + 1, end_x + 1):
        if not (0 < stripe < width and transform_y < depth[stripe]):
            continue
        tex_x = min((256 * (stripe - left) * texture.width // size) // 256, texture.width)
        for y in range(start_y + 1, end_y + 1):
            d = y * 256 - height * 128 + size * 128
            tex_y = min(
                _trunc_div(_trunc_div(d * texture.height, size), 256), texture.height
            )
            color = texture.pixel(tex_x, tex_y, 1.0)
            if color.r or color.g or color.b:
                frame.put(stripe, y, color)


def draw_sprites(
    frame: Frame,
    scene: Scene,
    sprites: Iterable[Sprite],
    texture: Texture,
    depth: Sequence[float],
) -> None:
    """Draw the sprites farthest first, hidden where a wall is nearer.

    depth holds the wall distance of every screen column. Black texels are
    transparent.
    """
    if (frame.width, frame.height) != (scene.width, scene.height):
        raise ValueError(
            f"frame is {frame.width}x{frame.height}, "
            f"scene is {scene.width}x{scene.height}"
        )
    det = scene.plane_x * scene.dir_y - scene.dir_x * scene.plane_y
    if det == 0:
        raise ValueError("camera plane is parallel to the view direction")
    inv_det = 1.0 / det
    for sprite in sort_by_distance(sprites, scene.pos_x, scene.pos_y):
        rel_x = sprite.x - scene.pos_x
        rel_y = sprite.y - scene.pos_y
        transform_x = inv_det * (scene.dir_y * rel_x - scene.dir_x * rel_y)
        transform_y = inv_det * (-scene.plane_y * rel_x + scene.plane_x * rel_y)
        if transform_y <= 0:
            continue
        _draw_one(frame, texture, depth, transform_x, transform_y)