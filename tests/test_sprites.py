import pytest

from raycub.framebuffer import Frame, Texture
from raycub.scene import Color, Scene
from raycub.sprites import Sprite, draw_sprites, find_sprites, sort_by_distance

RED = Color(255, 0, 0, 0)


def _scene(pos_x=2.5, pos_y=4.5, size=20):
    scene = Scene(
        width=size,
        height=size,
        north="./n.xpm",
        south="./s.xpm",
        west="./w.xpm",
        east="./e.xpm",
        sprite="./sprite.xpm",
        floor=Color(0, 0, 0),
        ceiling=Color(0, 0, 0),
        grid=("11111", "10001", "10201", "10001", "10N01", "11111"),
        pos_x=pos_x,
        pos_y=pos_y,
        direction="N",
    )
    scene.orient()
    return scene


def _solid(b, g, r, size=4):
    return Texture(size, size, bytes((b, g, r, 0)) * (size * size))


def test_default_sprite_position():
    assert Sprite() == Sprite(-1.0, -1.0)


def test_find_sprites_centres_cells_in_row_order():
    grid = ["1111", "1201", "1021", "1111"]
    assert find_sprites(grid) == [Sprite(1.5, 1.5), Sprite(2.5, 2.5)]


def test_find_sprites_none():
    assert find_sprites(["111", "101", "111"]) == []


def test_sort_by_distance_farthest_first():
    sprites = [Sprite(1.5, 1.5), Sprite(8.5, 8.5), Sprite(4.5, 4.5)]
    ordered = sort_by_distance(sprites, 0.0, 0.0)
    assert ordered == [Sprite(8.5, 8.5), Sprite(4.5, 4.5), Sprite(1.5, 1.5)]


def test_sort_by_distance_keeps_elements_and_is_non_increasing():
    sprites = [Sprite(x + 0.5, y + 0.5) for x in range(4) for y in range(3)]
    ordered = sort_by_distance(sprites, 2.0, 1.0)
    assert sorted(ordered, key=lambda s: (s.x, s.y)) == sorted(
        sprites, key=lambda s: (s.x, s.y)
    )
    dists = [(s.x - 2.0) ** 2 + (s.y - 1.0) ** 2 for s in ordered]
    assert all(a >= b for a, b in zip(dists, dists[1:]))


def test_sprite_ahead_is_drawn_at_screen_centre():
    scene = _scene()
    frame = Frame(20, 20)
    depth = [float("inf")] * 20
    draw_sprites(frame, scene, [Sprite(2.5, 2.5)], _solid(0, 0, 255), depth)
    assert frame.get(10, 10) == RED


def test_black_texels_are_transparent():
    scene = _scene()
    frame = Frame(20, 20)
    depth = [float("inf")] * 20
    draw_sprites(frame, scene, [Sprite(2.5, 2.5)], _solid(0, 0, 0), depth)
    assert frame.pixels == bytearray(20 * 20 * 4)


def test_sprite_hidden_by_nearer_wall():
    scene = _scene()
    frame = Frame(20, 20)
    depth = [1.0] * 20
    draw_sprites(frame, scene, [Sprite(2.5, 2.5)], _solid(0, 0, 255), depth)
    assert frame.pixels == bytearray(20 * 20 * 4)


def test_sprite_behind_player_not_drawn():
    scene = _scene(pos_y=1.5)
    frame = Frame(20, 20)
    depth = [float("inf")] * 20
    draw_sprites(frame, scene, [Sprite(2.5, 3.5)], _solid(0, 0, 255), depth)
    assert frame.pixels == bytearray(20 * 20 * 4)


def test_frame_size_must_match_scene():
    with pytest.raises(ValueError):
        draw_sprites(Frame(10, 10), _scene(), [], _solid(0, 0, 255), [1.0] * 10)