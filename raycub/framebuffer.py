"""Pixel storage for rendered frames and wall or sprite textures."""

from __future__ import annotations

from dataclasses import dataclass, field

from raycub.scene import Color

_BYTES_PER_PIXEL = 4


def _offset(width: int, height: int, x: int, y: int) -> int:
    if not (0 <= x < width and 0 <= y < height):
        raise IndexError(f"pixel ({x}, {y}) is outside a {width}x{height} image")
    return (y * width + x) * _BYTES_PER_PIXEL


@dataclass
class Frame:
    """An image being drawn, stored row by row as blue, green, red, alpha bytes."""

    width: int
    height: int
    pixels: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid frame size {self.width}x{self.height}")
        self.pixels = bytearray(self.width * self.height * _BYTES_PER_PIXEL)

    def put(self, x: int, y: int, color: Color) -> None:
        """Write one pixel."""
        start = _offset(self.width, self.height, x, y)
        self.pixels[start : start + _BYTES_PER_PIXEL] = bytes(
            (color.b, color.g, color.r, color.a)
        )

    def get(self, x: int, y: int) -> Color:
        """Read one pixel."""
        start = _offset(self.width, self.height, x, y)
        b, g, r, a = self.pixels[start : start + _BYTES_PER_PIXEL]
        return Color(r, g, b, a)


@dataclass(frozen=True)
class Texture:
    """A read-only image stored row by row as blue, green, red, alpha bytes."""

    width: int
    height: int
    data: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid texture size {self.width}x{self.height}")
        expected = self.width * self.height * _BYTES_PER_PIXEL
        if len(self.data) != expected:
            raise ValueError(
                f"texture data holds {len(self.data)} bytes, expected {expected}"
            )
        object.__setattr__(self, "data", bytes(self.data))

    def pixel(self, x: int, y: int, intensity: float) -> Color:
        """Return the texel at (x, y) with every byte scaled by intensity.

        Coordinates outside the texture are clamped to its edge.
        """
        x = min(max(x, 0), self.width - 1)
        y = min(max(y, 0), self.height - 1)
        start = (y * self.width + x) * _BYTES_PER_PIXEL
        b, g, r, a = self.data[start : start + _BYTES_PER_PIXEL]
        return Color(
            int(r * intensity),
            int(g * intensity),
            int(b * intensity),
            int(a * intensity),
        )