"""Ray-casting maze explorer driven by .cub scene files."""

__version__ = "0.1.0"
__all__ = ["app", "bmp", "framebuffer", "mapcheck", "player", "raycast", "scene", "sprites"]