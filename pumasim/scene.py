"""The workshop scene: robot, sheet, cylinder, room, sparks and camera, and the frame driver."""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from .camera import Camera, rotate_z, rotation_matrix, translation_matrix
from .clock import FPSClock
from .events import Action, EventType
from .handlers import CameraMovementInputHandler, RobotMovementInputHandler
from .particles import ParticlesSystem
from .robot import Robot
from .shapes import Box, Cylinder, Floor, Sheet

SCR_WIDTH = 800
SCR_HEIGHT = 600
OPENGL_MAJOR = 4
OPENGL_MINOR = 5
SHADERS_DIR = "./src/gl/shaders/"

_KEY_C = 67
_X_AXIS = (1.0, 0.0, 0.0)
_Z_AXIS = (0.0, 0.0, 1.0)


def _aspect(width, height) -> float:
    if height == 0:
        raise ValueError("framebuffer height must not be zero")
    return float(width) / float(height)


class Scene:
    """Everything in the world, stepped by :meth:`update` and steered by input events."""

    BG_COLOR: Tuple[float, float, float] = (0.2, 0.2, 0.4)
    CIRCLE_RADIUS = 0.25
    CAMERA_FOV = 90
    CAMERA_NEAR = 0.1
    CAMERA_FAR = 100.0

    def __init__(self, frame_width, frame_height, robot=None):
        self.camera = Camera(
            self.CAMERA_FOV,
            _aspect(frame_width, frame_height),
            self.CAMERA_NEAR,
            self.CAMERA_FAR,
        )
        self.camera_movement_handler = CameraMovementInputHandler(self.camera)
        self.floor = Floor(50, 50)
        self.robot = robot if robot is not None else Robot()
        self.room_box = Box()
        self.metal_sheet = Sheet((-1.5, 0.0, 0.0), math.radians(30.0))
        self.cylinder = Cylinder()
        self.particles = ParticlesSystem((0.001, 0.0, 0.0))

        self.camera.translate((0.0, 1.0, 1.0))
        self.room_box.initialize()
        self.metal_sheet.initialize()
        self.cylinder.initialize()

        self.robot_movement_handler = RobotMovementInputHandler(self.metal_sheet, self.robot)
        self._animation_on = False
        self._time = 0.0

    @property
    def animation_on(self) -> bool:
        return self._animation_on

    @property
    def time(self) -> float:
        """Seconds of animation played so far."""
        return self._time

    def _set_light(self, enable) -> None:
        self.robot.set_light(enable)
        self.metal_sheet.set_light(enable)
        self.cylinder.set_light(enable)
        self.room_box.set_light(enable)

    def handle_event(self, event) -> None:
        """Route an input event to the robot controls and the input handlers."""
        if event.type is EventType.KEY:
            if event.action in (Action.PRESS, Action.REPEAT):
                self.robot.handle_key(event)
            if event.action is Action.PRESS and event.key == _KEY_C:
                self._animation_on = not self._animation_on
        self.camera_movement_handler.process_input(event)
        self.robot_movement_handler.process_input(event)

    def set_framebuffer_size(self, width, height) -> None:
        self.camera.aspect = _aspect(width, height)

    def update(self, dt) -> None:
        """Move the tool around the circle on the sheet and emit sparks there."""
        if not self._animation_on:
            return
        self._time += dt
        slope = self.metal_sheet.slope_angle
        model = translation_matrix(self.metal_sheet.center_position) @ rotation_matrix(
            slope, _Z_AXIS
        )
        local = np.array(
            [
                0.0,
                self.CIRCLE_RADIUS * math.cos(self._time),
                self.CIRCLE_RADIUS * math.sin(self._time),
                1.0,
            ]
        )
        pos = (model @ local)[:3]
        normal = rotate_z(_X_AXIS, slope)
        self.robot.set_arm_position(pos, normal)
        self.particles.update(dt, pos)

    def is_scene_moving(self) -> bool:
        return self.camera_movement_handler.is_camera_moving()


class Renderer:
    """Drives the scene once per frame and keeps track of the framebuffer size."""

    def __init__(self, scene, clock: Optional[FPSClock] = None):
        self.scene = scene
        self.clock = clock if clock is not None else FPSClock()
        self.framebuffer_width = SCR_WIDTH
        self.framebuffer_height = SCR_HEIGHT

    def update(self) -> float:
        """Advance the scene by the time since the previous frame and return it."""
        self.clock.query()
        dt = self.clock.frame_time
        self.scene.update(dt)
        return dt

    def resize(self, width, height) -> None:
        self.scene.set_framebuffer_size(width, height)
        self.framebuffer_width = int(width)
        self.framebuffer_height = int(height)