"""Writing a rendered frame as a 24-bit BMP image."""

from __future__ import annotations

from os import PathLike

from raycub.framebuffer import Frame
from raycub.mapcheck import CubError

HEADER_SIZE = 54
_INFO_SIZE = 40
_BITS_PER_PIXEL = 24


def _u32(value: int) -> bytes:
    return (value & 0xFFFFFFFF).to_bytes(4, "little")


def bmp_header(file_size: int, width: int, height: int) -> bytes:
    """Return the 54-byte file and information header."""
    header = bytearray(HEADER_SIZE)
    header[0:2] = b"BM"
    header[2:6] = _u32(file_size)
    header[10] = HEADER_SIZE
    header[14] = _INFO_SIZE
    header[18:22] = _u32(width)
    header[22:26] = _u32(height)
    header[27] = 1
    header[28] = _BITS_PER_PIXEL
    return bytes(header)


def encode_bmp(frame: Frame) -> bytes:
    """Encode a frame: bottom row first, blue, green, red per pixel.

    Rows are not padded and the size field counts one byte per pixel.
    """
    width, height = frame.width, frame.height
    stride = width * 4
    parts = [bmp_header(HEADER_SIZE + width * height, width, height)]
    for y in reversed(range(height)):
        row = frame.pixels[y * stride : (y + 1) * stride]
        parts.append(bytes(v for i, v in enumerate(row) if i % 4 != 3))
    return b"".join(parts)


def save_bmp(frame: Frame, path: str | PathLike[str] = "image.bmp") -> None:
    """Write a frame to a BMP file."""
    data = encode_bmp(frame)
    try:
        with open(path, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise CubError("Error open") from exc