import pytest
from PIL import Image

from raycub.app import Game, check_arguments, load_texture, main
from raycub.bmp import HEADER_SIZE, encode_bmp
from raycub.mapcheck import CubError
from raycub.scene import Color, parse_scene

WALL_RGB = (200, 100, 50)
SPRITE_RGB = (0, 255, 0)


def _grid(with_sprite):
    sprite_row = "100020001" if with_sprite else "100000001"
    return [
        "111111111",
        "100000001",
        sprite_row,
        "100000001",
        "100000001",
        "100000001",
        "1000N0001",
        "100000001",
        "111111111",
    ]


def _scene_text(with_sprite=True):
    header = [
        "R 80 60",
        "NO ./wall.png",
        "SO ./wall.png",
        "WE ./wall.png",
        "EA ./wall.png",
        "S ./sprite.png",
        "F 10,20,30",
        "C 40,50,60",
        "",
    ]
    return "\n".join(header + _grid(with_sprite)) + "\n"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Image.new("RGB", (2, 2), WALL_RGB).save(tmp_path / "wall.png")
    Image.new("RGB", (2, 2), SPRITE_RGB).save(tmp_path / "sprite.png")
    (tmp_path / "scene.cub").write_text(_scene_text())
    return tmp_path


def _game(with_sprite=True, screen_size=None):
    from raycub.raycast import WallTextures

    scene = parse_scene(_scene_text(with_sprite).split("\n"))
    wall = load_texture("./wall.png")
    walls = WallTextures(north=wall, south=wall, west=wall, east=wall)
    return Game(scene, walls, load_texture("./sprite.png"), screen_size)


def test_check_arguments_no_map():
    with pytest.raises(CubError, match="No map.cub"):
        check_arguments([])


@pytest.mark.parametrize("name", ["map.txt", ".cub", "mapcub"])
def test_check_arguments_bad_name(name):
    with pytest.raises(CubError, match="Problem with .cub name"):
        check_arguments([name])


def test_check_arguments_plain():
    assert check_arguments(["a.cub"]) == ("a.cub", False)


def test_check_arguments_save():
    assert check_arguments(["a.cub", "--save"]) == ("a.cub", True)


def test_check_arguments_name_unchecked_with_flag():
    assert check_arguments(["a.txt", "--save"]) == ("a.txt", True)


@pytest.mark.parametrize("flag", ["--sav", "--saves", "save"])
def test_check_arguments_unknown(flag):
    with pytest.raises(CubError, match="Unknown arguments"):
        check_arguments(["a.cub", flag])


def test_check_arguments_too_many():
    with pytest.raises(CubError, match="Too many arguments"):
        check_arguments(["a.cub", "--save", "x"])


def test_load_texture_round_trip(tmp_path):
    path = tmp_path / "t.png"
    image = Image.new("RGB", (3, 2), (0, 0, 0))
    image.putpixel((2, 1), (11, 22, 33))
    image.save(path)
    texture = load_texture(path)
    assert (texture.width, texture.height) == (3, 2)
    assert texture.pixel(2, 1, 1.0) == Color(11, 22, 33, 255)
    assert texture.pixel(0, 0, 1.0) == Color(0, 0, 0, 255)


def test_load_texture_missing(tmp_path):
    with pytest.raises(CubError):
        load_texture(tmp_path / "absent.png")


def test_load_texture_not_an_image(tmp_path):
    path = tmp_path / "bad.png"
    path.write_text("not an image")
    with pytest.raises(CubError):
        load_texture(path)


def test_render_ceiling_floor_and_wall(workdir):
    game = _game(with_sprite=False)
    frame = game.render()
    middle = frame.width // 2
    assert frame.get(middle, 0) == game.scene.ceiling
    assert frame.get(middle, frame.height - 1) == game.scene.floor
    wall = frame.get(middle, frame.height // 2)
    assert wall not in (game.scene.ceiling, game.scene.floor)
    assert wall.r > wall.g > wall.b


def test_render_draws_sprite(workdir):
    game = _game(with_sprite=True)
    assert len(game.sprites) == 1
    frame = game.render()
    assert frame.get(frame.width // 2, frame.height // 2) == Color(*SPRITE_RGB, 255)


def test_screen_size_clamps_resolution(workdir):
    game = _game(screen_size=(40, 30))
    assert (game.scene.width, game.scene.height) == (40, 30)
    assert (game.frame.width, game.frame.height) == (40, 30)


def test_save_writes_encoded_frame(workdir):
    game = _game()
    target = workdir / "out.bmp"
    game.save(target)
    data = target.read_bytes()
    assert data[:2] == b"BM"
    assert len(data) == HEADER_SIZE + 80 * 60 * 3
    assert data == encode_bmp(game.frame)


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "No map.cub" in capsys.readouterr().err


def test_main_save_mode(workdir):
    assert main(["scene.cub", "--save"]) == 0
    data = (workdir / "image.bmp").read_bytes()
    assert data[:2] == b"BM"
    assert len(data) == HEADER_SIZE + 80 * 60 * 3


def test_main_missing_texture(workdir, capsys):
    (workdir / "sprite.png").unlink()
    assert main(["scene.cub", "--save"]) == 1
    assert "Wrong path sprite" in capsys.readouterr().err