"""The game: texture loading, frame rendering, the window loop and the command."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from PIL import Image

from raycub.bmp import save_bmp
from raycub.framebuffer import Frame, Texture
from raycub.mapcheck import CubError
from raycub.player import (
    KEY_BACK,
    KEY_ESCAPE,
    KEY_FORWARD,
    KEY_STRAFE_LEFT,
    KEY_STRAFE_RIGHT,
    KEY_TURN_LEFT,
    KEY_TURN_RIGHT,
    Keys,
    apply_keys,
)
from raycub.raycast import WallTextures, render_walls
from raycub.scene import Scene, load_scene
from raycub.sprites import Sprite, draw_sprites, find_sprites

TITLE = "Cub3D"
SAVE_FLAG = "--save"
DEFAULT_IMAGE = "image.bmp"
_FPS = 60


def load_texture(path: str | PathLike[str]) -> Texture:
    """Load an image file as a texture."""
    try:
        with Image.open(Path(path)) as image:
            rgba = image.convert("RGBA")
            data = rgba.tobytes("raw", "BGRA")
            return Texture(rgba.width, rgba.height, data)
    except (OSError, ValueError) as exc:
        raise CubError(f"Cannot load texture {path}") from exc


@dataclass
class Game:
    """A scene with its textures, sprites, key state and the frame it draws."""

    scene: Scene
    walls: WallTextures
    sprite_texture: Texture
    screen_size: tuple[int, int] | None = None
    keys: Keys = field(default_factory=Keys)
    sprites: list[Sprite] = field(init=False)
    frame: Frame = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.screen_size is not None:
            max_width, max_height = self.screen_size
            self.scene.width = min(self.scene.width, max_width)
            self.scene.height = min(self.scene.height, max_height)
        self.sprites = find_sprites(self.scene.grid)
        self.frame = Frame(self.scene.width, self.scene.height)

    def render(self) -> Frame:
        """Draw walls, floor, ceiling and sprites into the frame and return it."""
        depth = render_walls(self.frame, self.scene, self.walls)
        draw_sprites(self.frame, self.scene, self.sprites, self.sprite_texture, depth)
        return self.frame

    def save(self, path: str | PathLike[str] = DEFAULT_IMAGE) -> None:
        """Render one frame and write it as a BMP image."""
        save_bmp(self.render(), path)


def check_arguments(argv: Sequence[str]) -> tuple[str, bool]:
    """Check the command arguments.

    Returns the scene path and whether the first frame is to be saved
    instead of opening a window.
    """
    if not argv:
        raise CubError("No map.cub")
    if len(argv) == 1:
        name = argv[0]
        if len(name) < 5 or not name.endswith(".cub"):
            raise CubError("Problem with .cub name")
    if len(argv) > 2:
        raise CubError("Too many arguments")
    if len(argv) == 2:
        if argv[1] != SAVE_FLAG:
            raise CubError("Unknown arguments")
        return argv[0], True
    return argv[0], False


def _load(path: str, message: str) -> Texture:
    try:
        return load_texture(path)
    except CubError as exc:
        raise CubError(message) from exc


def _build_game(scene: Scene, screen_size: tuple[int, int] | None = None) -> Game:
    east = _load(scene.east, "Wrong texture path EA")
    north = _load(scene.north, "Wrong texture path NO")
    west = _load(scene.west, "Wrong texture path WE")
    south = _load(scene.south, "Wrong texture path SO")
    sprite = _load(scene.sprite, "Wrong path sprite")
    walls = WallTextures(north=north, south=south, west=west, east=east)
    return Game(scene, walls, sprite, screen_size)


def _frame_rgb(frame: Frame) -> bytes:
    image = Image.frombuffer(
        "RGBA", (frame.width, frame.height), bytes(frame.pixels), "raw", "BGRA", 0, 1
    )
    return image.convert("RGB").tobytes()


def _run(scene: Scene) -> None:
    import pygame

    key_codes = {
        pygame.K_ESCAPE: KEY_ESCAPE,
        pygame.K_z: KEY_FORWARD,
        pygame.K_s: KEY_BACK,
        pygame.K_d: KEY_STRAFE_RIGHT,
        pygame.K_q: KEY_STRAFE_LEFT,
        pygame.K_LEFT: KEY_TURN_LEFT,
        pygame.K_RIGHT: KEY_TURN_RIGHT,
    }
    pygame.init()
    try:
        info = pygame.display.Info()
        size = None
        if info.current_w > 0 and info.current_h > 0:
            size = (info.current_w, info.current_h)
        game = _build_game(scene, size)
        dimensions = (game.scene.width, game.scene.height)
        screen = pygame.display.set_mode(dimensions)
        pygame.display.set_caption(TITLE)
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN and event.key in key_codes:
                    game.keys.press(key_codes[event.key])
                elif event.type == pygame.KEYUP and event.key in key_codes:
                    game.keys.release(key_codes[event.key])
            if apply_keys(game.scene, game.keys):
                return
            frame = game.render()
            surface = pygame.image.frombuffer(_frame_rgb(frame), dimensions, "RGB")
            screen.blit(surface, (0, 0))
            pygame.display.flip()
            clock.tick(_FPS)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on a scene file, or save its first frame with --save."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        path, save = check_arguments(args)
        scene = load_scene(path)
        if save:
            _build_game(scene).save(DEFAULT_IMAGE)
        else:
            _run(scene)
    except CubError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())