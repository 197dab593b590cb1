# cubscape

cubscape reads a `.cub` scene description, checks that it describes a closed
maze, and opens a window onto it.

## Installing

```
pip install .
```

## Running

```
cubscape path/to/level.cub
```

The command takes exactly one argument, a file name ending in `.cub`. If the
argument is missing or wrong, or the scene is rejected, a message goes to
standard error and the command exits with status 1. Otherwise it opens an
1280×800 window titled `cub3D` and runs until the window is closed or Escape
is pressed.

## Scene files

Blank lines (lines holding only whitespace) are ignored. The first six lines
that are not blank hold the textures and colours, and the map grid follows
them:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0
111111
100101
1010N1
111111
```

- `NO`, `SO`, `WE` and `EA` each name a texture; the line must end in
  `.png`. Each must appear exactly once, among the first six lines.
- `F` (floor) and `C` (ceiling) each hold three comma-separated whole
  numbers, none above 255. Each must appear exactly once, among the first
  six lines.
- The grid uses `1` for walls, `0` for open floor and spaces for nothing.
  Exactly one of `N`, `S`, `E` or `W` marks where the player starts and which
  way they face. Any other character is an error.
- Walls must close the area reachable from the start. Reaching a space, or
  leaving the grid, is an error.

## Controls

| Key          | Action            |
|--------------|-------------------|
| W / S        | forward / back    |
| A / D        | strafe left/right |
| Left / Right | turn              |
| Escape       | quit              |

Moves go 10 units (a tile is 64 units) and are refused if they would land in
a wall tile or off the grid. Turns go 30 degrees.

## Limitations

- The view is drawn from the player's starting tile and starting direction
  only; moving and turning change the player's state but not the picture.
- Each column's wall distance comes from the first grid lines the ray
  crosses, not from the walls in the map, so the view does not show the
  maze's layout.
- Only the north texture is drawn, on every wall; floor and ceiling are
  filled with their colours.

## Using it as a library

```python
from cubscape.scene import load_scene
from cubscape.raycast import cast_rays

scene = load_scene("level.cub")
for ray_slice in cast_rays(scene):
    print(ray_slice.index, ray_slice.distance, ray_slice.start, ray_slice.end)
```

- `cubscape.mapfile`: `read_scene_lines`, `parse_rgb`, `get_path`,
  `find_position` and other helpers for scene lines. Raises `SceneError`.
- `cubscape.validate`: `check_for_errors(lines)` runs every check and returns
  the map rows; `check_paths`, `check_colors`, `check_order` and `check_map`
  run one check each.
- `cubscape.scene`: `load_scene(path)` and `build_scene(lines)` give a
  `Scene` holding `MapData`, `Player` and `Raycast`; `rgb_to_int` packs
  a colour as `0xRRGGBB`.
- `cubscape.movement`: `move_player`, `turn_left`, `turn_right`, and
  `apply_actions(scene, actions)` taking `Action` values; it returns `False`
  when `Action.QUIT` is among them.
- `cubscape.raycast`: `cast_rays(scene)` yields one `RaySlice` per screen
  column, built from `ray_angle`, `closest_wall_distance`,
  `correct_fishbowl` and `slice_bounds`.
- `cubscape.image`: `Image` (an RGBA buffer with `put_pixel`, `get_pixel`,
  nearest-neighbour `resize` and `add_instance`), `Texture`, `load_png`,
  `texture_to_image` and `get_texoffset` for font atlas offsets.
- `cubscape.xpm42`: `load_xpm42(path)` and `parse_xpm42(stream)` read the
  XPM42 format: a `!XPM42` line, a `width height colors chars-per-pixel mode`
  line (mode `c` for colour, `m` for grayscale), one `<chars> #RRGGBBAA` line
  per colour, then the pixel rows.
- `cubscape.renderqueue`: `RenderQueue` of `DrawCall`s with `add`,
  `remove_image`, `sort` by depth and `visible`.
- `cubscape.pixels`: `draw_pixel`, `fnv_hash`, `rgba_to_mono`, and
  `GraphicsError` with its `ErrorCode` and `strerror` message.

## Running the tests

```
pip install ".[test]"
pytest
```