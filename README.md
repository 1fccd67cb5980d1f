# raycub

raycub is a small first-person maze explorer. It reads a `.cub` scene file
that gives the screen resolution, the wall and sprite textures, the floor
and ceiling colours and a map. It then draws the maze in a window with a ray
caster, or it renders one frame to a BMP file.

## Installing

```
pip install .
```

This installs Pillow, which loads the textures, and pygame, which runs the
window.

## Running

Open a scene in a window:

```
raycub maps/level.cub
```

The window resolution is cut down to the size of the display.

Render the first frame to `image.bmp` in the current directory and exit
without opening a window:

```
raycub maps/level.cub --save
```

When only a scene path is given, its name must end in `.cub` and be at least
five characters long. The only second argument accepted is `--save`, and
more than two arguments are refused. If the arguments, the scene or a texture
is wrong, the command prints the message on standard error and exits with
status 1.

### Controls

| Key         | Action         |
|-------------|----------------|
| `z`         | move forward   |
| `s`         | move back      |
| `q`         | strafe left    |
| `d`         | strafe right   |
| Left arrow  | turn left      |
| Right arrow | turn right     |
| Escape      | quit           |

Closing the window also quits. The player cannot walk into walls.

## Scene files

Each setting starts its own line. The map comes last and starts at the first
line that begins with a space or a digit.

```
R 800 600
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
S ./textures/sprite.xpm
F 120,120,120
C 40,40,200

1111111
1000001
1020N01
1000001
1111111
```

- `R` gives the width and the height. Both must be positive.
- `NO`, `SO`, `WE` and `EA` give the wall texture paths, and `S` gives the
  sprite texture path. Each path must start with `./`. A texture can be any
  image that Pillow can open.
- `F` and `C` give the floor and ceiling colours as `r,g,b`. Only the low
  eight bits of each component are kept.
- Map cells are `1` for a wall, `0` for floor, `2` for a sprite and a space
  for outside the map. Exactly one of `N`, `S`, `E` or `W` marks where the
  player starts and which way they face.

Each setting must appear exactly once. The map must be closed: no floor,
sprite or player cell may touch a space or the edge of the map. An error
names the problem, for example `Missing information`,
`Multiple position player` or `Duplicate NO key`.

Sprites are drawn in front of walls only where they are nearer. Black texels
of the sprite texture are transparent. Walls get darker with distance.

## Using it as a library

```python
from raycub.scene import load_scene
from raycub.app import Game, load_texture
from raycub.raycast import WallTextures

scene = load_scene("maps/level.cub")
print(scene.width, scene.height, scene.pos_x, scene.pos_y, scene.direction)

walls = WallTextures(
    north=load_texture(scene.north),
    south=load_texture(scene.south),
    west=load_texture(scene.west),
    east=load_texture(scene.east),
)
game = Game(scene, walls, load_texture(scene.sprite))
frame = game.render()          # a raycub.framebuffer.Frame
game.save("shot.bmp")
```

The modules:

- `raycub.scene`: `load_scene`, `parse_scene`, the `Scene` and `Color`
  types, and the helpers `parse_int`, `parse_resolution`, `parse_color` and
  `texture_path`.
- `raycub.mapcheck`: map checks (`validate_grid` and friends). It also holds
  `CubError`, the exception that every scene, argument and texture error
  raises.
- `raycub.framebuffer`: `Frame`, the image being drawn, and `Texture`, both
  stored as blue, green, red, alpha bytes.
- `raycub.raycast`: `cast_ray`, `draw_column`, `render_walls` and
  `WallTextures`.
- `raycub.sprites`: `find_sprites`, `sort_by_distance` and `draw_sprites`.
- `raycub.player`: the `Keys` state, the movement and turning functions, and
  `apply_keys`.
- `raycub.bmp`: `bmp_header`, `encode_bmp` and `save_bmp`.
- `raycub.app`: `Game`, `load_texture`, `check_arguments` and `main`.

## Limits

- Saved BMP files are 24-bit, bottom row first, with no row padding. The
  size field in the header counts one byte per pixel.
- There is no sound, no minimap and no way to save or restore a game.

## Tests

```
pip install .[test]
pytest
```