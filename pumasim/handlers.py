"""Input handlers that steer the camera and toggle the robot animation."""

from __future__ import annotations

import abc
import weakref
from typing import List, Optional, Tuple

from .events import Action, Button, EventType

_KEY_A = 65
_KEY_C = 67
_KEY_D = 68
_KEY_E = 69
_KEY_Q = 81
_KEY_S = 83
_KEY_W = 87


class InputHandler(abc.ABC):
    """Something that reacts to window input events."""

    @abc.abstractmethod
    def process_input(self, event) -> None:
        """React to one input event."""


class CameraSubscriber(abc.ABC):
    """Listener told whenever the camera is moved with the mouse."""

    def add_subject(self, camera_handler) -> None:
        camera_handler.add_subscriber(self)

    @abc.abstractmethod
    def notify_camera_move(self) -> None:
        """Called after the camera has moved."""


class CameraMovementInputHandler(InputHandler):
    """Mouse drag rotates (left) or pans (right) the camera; WSADQE move it."""

    ROTATION_SENSITIVITY = 0.3
    TRANSLATION_SENSITIVITY = 0.005
    MOVE_STEP = 0.05

    _KEY_MOVES = {
        _KEY_W: (0.0, 0.0, -1.0),
        _KEY_S: (0.0, 0.0, 1.0),
        _KEY_A: (-1.0, 0.0, 0.0),
        _KEY_D: (1.0, 0.0, 0.0),
        _KEY_Q: (0.0, -1.0, 0.0),
        _KEY_E: (0.0, 1.0, 0.0),
    }

    def __init__(self, camera):
        self.camera = camera
        self._rotation_on = False
        self._translation_on = False
        self._last_mouse_pos: Optional[Tuple[float, float]] = None
        self._subscribers: List[weakref.ref] = []

    def process_input(self, event) -> None:
        if event.type is EventType.MOUSE_CLICK:
            self._handle_mouse_click(event)
        elif event.type is EventType.MOUSE_MOVE:
            self._handle_mouse_move(event)
        elif event.type is EventType.KEY:
            self._handle_key(event)

    def is_camera_moving(self) -> bool:
        return self._rotation_on or self._translation_on

    def add_subscriber(self, subscriber) -> None:
        """Register ``subscriber`` without keeping it alive."""
        self._subscribers.append(weakref.ref(subscriber))

    def _handle_mouse_click(self, event) -> None:
        if event.button not in (Button.LEFT, Button.RIGHT):
            return
        pressed = event.action is Action.PRESS
        if event.button is Button.LEFT:
            self._rotation_on = pressed
        else:
            self._translation_on = pressed
        if not pressed:
            self._last_mouse_pos = None

    def _handle_mouse_move(self, event) -> None:
        if not self.is_camera_moving():
            return
        current = (float(event.xpos), float(event.ypos))
        last = self._last_mouse_pos if self._last_mouse_pos is not None else current
        dx, dy = current[0] - last[0], current[1] - last[1]
        self._last_mouse_pos = current

        if self._rotation_on:
            # Window y grows downwards.
            self.camera.rotate_pitch(-dy * self.ROTATION_SENSITIVITY)
            self.camera.rotate_yaw(dx * self.ROTATION_SENSITIVITY)
        if self._translation_on:
            # The camera moves opposite to the dragged scene.
            self.camera.translate(
                (-dx * self.TRANSLATION_SENSITIVITY, 0.0, -dy * self.TRANSLATION_SENSITIVITY)
            )
        self._notify_subscribers()

    def _handle_key(self, event) -> None:
        if event.action not in (Action.PRESS, Action.REPEAT):
            return
        direction = self._KEY_MOVES.get(event.key)
        if direction is not None:
            self.camera.translate(tuple(self.MOVE_STEP * c for c in direction))

    def _notify_subscribers(self) -> None:
        alive = []
        for ref in self._subscribers:
            subscriber = ref()
            if subscriber is not None:
                alive.append(ref)
                subscriber.notify_camera_move()
        self._subscribers = alive


class RobotMovementInputHandler(InputHandler):
    """Pressing C starts or stops the robot tracing a circle on the sheet."""

    CIRCLE_RADIUS = 0.25

    def __init__(self, sheet, robot):
        self.sheet = sheet
        self.robot = robot
        self._animation_on = False

    def process_input(self, event) -> None:
        if event.type is not EventType.KEY:
            return
        if event.key == _KEY_C and event.action is Action.PRESS:
            if self._animation_on:
                self.robot.stop_animation()
            else:
                self.robot.start_animation(
                    self.sheet.center_position, self.CIRCLE_RADIUS, self.sheet.slope_angle
                )
            self._animation_on = not self._animation_on