# pumasim

A scene model for a six-axis PUMA robot arm whose tool traces a circle on a
tilted metal sheet while sparks fly. The package holds the state and the
mathematics behind the scene: camera, meshes, robot kinematics, particles
and input handling.

## Modules

- `pumasim.camera`: `Camera`, a yaw/pitch fly camera with a perspective
  projection (`view_matrix`, `projection_matrix`, `rotate_yaw`,
  `rotate_pitch`, `translate`, `set_perspective_projection`, and settable
  `fov`, `aspect`, `near`, `far`), plus the matrix helpers `look_at`,
  `perspective`, `translation_matrix`, `rotation_matrix`, `rotate_y` and
  `rotate_z`. Pitch is clamped to ±89 degrees, and yaw is kept within
  ±360 degrees.
- `pumasim.clock`: `FPSClock`, a frame timer. `query()` records a frame and
  returns its length in seconds. `frame_time`, `frame_ticks` and `fps`
  (averaged over `2 ** log2_samples` frames) report the timings. The timer
  function and its tick frequency can be supplied.
- `pumasim.events`: the input events `KeyEvent`, `MouseClickEvent`,
  `MouseMoveEvent`, `MouseScrollEvent` and `ResizeEvent`, the enums
  `EventType`, `Action` and `Button`, and the modifier flags `Mods`. An
  unknown action or button raises `ValueError`. Mouse clicks accept only
  press and release.
- `pumasim.mesh`: `VertexPosNormal`, `VerticesData` and the abstract `Mesh`.
  `Mesh.initialize()` builds `vertex_buffer`, `index_buffer` and
  `edge_buffer` as numpy arrays.
- `pumasim.shapes`: the room `Box`, the `Cylinder`, the tilted `Sheet`
  (`center_position`, `slope_angle`) and the `Floor` line grid.
- `pumasim.arm`: `Arm`, a mesh read from a text file, with `parse_mesh` and
  `remaining_index`.
- `pumasim.robot`: `Robot`, which holds five joint angles. It has keyboard
  joint control (`handle_key`: R/F, T/G, Y/H, U/J and I/K, with Shift for
  ten times the step), inverse kinematics (`set_arm_position`) and a
  circle-tracing animation (`start_animation`, `stop_animation`, `update`).
- `pumasim.particles`: `ParticlesSystem`, `Particle`, `ParticleSettings` and
  `VertexPosNormalAge`. The system emits particles at a fixed rate up to a
  cap, pulls them down with gravity, and drops them once they exceed the
  maximum age. `line_vertices()` gives two line vertices per particle.
- `pumasim.handlers`: `InputHandler`, `CameraMovementInputHandler` and
  `RobotMovementInputHandler`, plus `CameraSubscriber`, which
  `CameraMovementInputHandler` holds by weak reference.
  - `CameraMovementInputHandler`: a left drag rotates the camera, a right
    drag pans it, and W/S/A/D/Q/E move it.
  - `RobotMovementInputHandler`: C starts or stops the robot animation.
- `pumasim.gl_formats`: texture format enums (`TextureType`,
  `InternalFormat`, `DataFormat`, `DataType`, `DepthCompareFunc`) and the
  rules `is_depth_format`, `matching_format_and_type` and
  `validate_format_correspondence`. It also has `IndexType` with
  `index_type_size`, and `TextureUnitRegistry`, which tracks which texture
  occupies each unit.
- `pumasim.scene`: `Scene` and `Renderer`.
  - `Scene` builds the camera, robot, room, sheet, cylinder, floor and
    particles. It routes events (`handle_event`) and advances the
    animation (`update`).
  - `Renderer` steps a scene with an `FPSClock` and passes resizes on.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from pumasim.camera import Camera

camera = Camera(90.0, 800 / 600, 0.1, 100.0)
camera.rotate_yaw(30.0)
camera.rotate_pitch(-10.0)
camera.translate((0.0, 1.0, 1.0))
view = camera.view_matrix
```

```python
from pumasim.clock import FPSClock

clock = FPSClock()
dt = clock.query()
```

## Robot arm meshes

`Robot()` without arguments loads its six segments from `./res/mesh1.txt`
to `./res/mesh6.txt`. `Scene(width, height)` does the same unless you pass
it a robot. Each segment is an `Arm`, and its file is plain text with four
sections. Each section starts with a line holding its count, followed by
that many lines:

- positions: `x y z`
- vertices: `position_index nx ny nz`
- triangles: `i1 i2 i3`
- edges: `i1 i2 t1 t2`, where `t1` and `t2` are the indices of the two
  triangles that share the edge

A missing or malformed file raises an error. To avoid files, pass any six
`Mesh` objects as `Robot(arms)`.

With the mesh files in place:

```python
from pumasim.events import KeyEvent
from pumasim.robot import Robot
from pumasim.scene import Scene

robot = Robot()
robot.set_arm_position((-1.5, 0.25, 0.0), (1.0, 0.0, 0.0))

scene = Scene(800, 600)
scene.handle_event(KeyEvent(ord("C"), 0, 1, 0))  # press C: toggle the animation
scene.update(0.016)
```

`set_arm_position` raises `ValueError` for a zero normal or a point out of
reach.

## Units

- Camera angles are in degrees.
- Joint angles and the sheet's slope are in radians.
- `perspective` takes its field of view in radians. `Camera` passes its
  `fov` to it unchanged.

## What this package does not do

The package opens no window and draws nothing. It has no OpenGL context,
shaders, GUI or command-line program. It produces the matrices, vertex and
index arrays and scene state that a renderer would consume. Window events
must be turned into `pumasim.events` objects by the caller.