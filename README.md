# flightsim

The simulation core of a small flight game, in plain Python on top of
numpy. It computes what a renderer needs: view and projection matrices,
mesh and line geometry, and the state of the simulation. Matrices are
row-major numpy arrays that multiply column vectors (`m @ v`).

## Modules

- `flightsim.vecmath`: `vec3`, `normalize`, `look_at`, `perspective`,
  `ortho`, `translate`, `scale`, `pre_multiply` and `transform_normal`.
  Degenerate input (a zero vector, a zero-extent volume, a point at
  infinity) raises `ValueError`.
- `flightsim.camera`: `Camera`, a free-look camera driven by yaw and pitch,
  with `view_matrix()`, `projection_matrix(aspect)`, `vp_matrix(aspect)`,
  `view_position()` and the input handlers `process_keyboard` (taking a
  `CameraMovement`), `process_mouse_movement` and `process_mouse_scroll`.
- `flightsim.bounding_box`: `BoundingBox`, a box that follows an object's
  model matrix; `contains(point)`, `corners()` and `edges()`.
- `flightsim.aircraft`: `Aircraft`, the flight model (thrust, lift, drag,
  stick control from the cursor position) which is also a cockpit camera.
  `update(dt)` advances it, `keyboard_control(keys, dt)` reads `"F1"` and
  `"F4"` from a collection of held key names to lower or raise the target
  thrust, `heading()` gives the compass heading and `detect_crash(point)`
  tests the hit boxes. `AroundCamera` orbits the aircraft, steered with
  `"W"`, `"A"`, `"S"`, `"D"` and the scroll wheel.
- `flightsim.glyphs`: a stroke font; `glyph_segments`, `string_segments`
  and `number_segments` return line segments `((x1, y1), (x2, y2))`.
- `flightsim.hud`: `hud_lines(aircraft, screen, scene)` lays out the whole
  head-up display for a `HudScreen` (flight, paused, reset and exit
  prompts, crash). The flight screen has the speed and altitude tapes, the
  pitch ladder, the compass, the `throttle_gauge` and the scene name.
- `flightsim.heightgen`: `HeightGenerator`, seeded octave value noise for
  terrain heights, built on a 32-bit Mersenne Twister `MT19937`.
- `flightsim.terrain`: `build_grid`, `compute_normals` and `build_patch`
  produce a `Mesh` (vertices, uvs, indices, normals) from a `PatchSpec`.
- `flightsim.surfaces`: placement of the airport ground: `asphalt_transforms`,
  `cross_transforms`, `paint_transforms`, and `tree_quad` for billboards.
- `flightsim.mount` and `flightsim.mounts`: `Mount` is one 64 by 64 mountain
  chunk; `Mounts` builds chunks around the viewer (`visible_chunks`) and
  answers ground height queries (`height_at`) by barycentric interpolation.
- `flightsim.particle` and `flightsim.flame`: flame `Particle`s, a `KDTree`
  for neighbour search and the `Flame` emitter with `update` and `positions`.
- `flightsim.cloud`: the CPU side of the cloud renderer: `light_matrices`
  fits a light camera around the view frustum, `sort_particles` orders
  particles back to front, `pack_screen_block`, `pack_view_block` and
  `pack_timings` pack uniform data, and `CloudState` keeps per-frame state.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from flightsim.aircraft import Aircraft
from flightsim.hud import HudScreen, hud_lines

plane = Aircraft(1280, 720)
for _ in range(60):
    plane.keyboard_control({"F4"}, 1 / 60)
    plane.update(1 / 60)

print("heading:", plane.heading())
segments = hud_lines(plane, HudScreen.FLIGHT, scene=0)
print(len(segments), "HUD line segments")
```

```python
from flightsim.heightgen import HeightGenerator
from flightsim.mounts import Mounts

terrain = Mounts(HeightGenerator(seed=42), cache_size=1)
print(terrain.height_at(10.0, -25.0))
```

## What it does not do

The package draws nothing. It opens no window, reads no keyboard or mouse
devices, loads no models, textures or shaders and talks to no graphics
interface. There is no game loop and no command to start a game: an
application supplies the input, calls `update` each frame and hands the
matrices, meshes and line segments to a renderer of its own.