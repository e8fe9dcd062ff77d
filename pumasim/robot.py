"""Six-segment industrial robot with keyboard control and inverse kinematics."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from .arm import Arm
from .camera import rotate_y, rotate_z, rotation_matrix, translation_matrix
from .mesh import Mesh

_ARM_COUNT = 6

# Link lengths and joint offsets of the robot model.
_L1 = 0.91
_L2 = 0.81
_L3 = 0.33
_DY = 0.27
_DZ = 0.26

_X_AXIS = (1.0, 0.0, 0.0)
_Y_AXIS = (0.0, 1.0, 0.0)
_Z_AXIS = (0.0, 0.0, 1.0)

_KEY_F = 70
_KEY_G = 71
_KEY_H = 72
_KEY_I = 73
_KEY_J = 74
_KEY_K = 75
_KEY_R = 82
_KEY_T = 84
_KEY_U = 85
_KEY_Y = 89

# key -> (joint index, direction)
_KEY_JOINTS = {
    _KEY_R: (0, 1.0),
    _KEY_F: (0, -1.0),
    _KEY_T: (1, 1.0),
    _KEY_G: (1, -1.0),
    _KEY_Y: (2, 1.0),
    _KEY_H: (2, -1.0),
    _KEY_U: (3, 1.0),
    _KEY_J: (3, -1.0),
    _KEY_I: (4, 1.0),
    _KEY_K: (4, -1.0),
}


def _about(angle: float, axis, pivot) -> np.ndarray:
    """Rotation by ``angle`` about ``axis`` passing through ``pivot``."""
    pivot = np.asarray(pivot, dtype=float)
    return translation_matrix(pivot) @ rotation_matrix(angle, axis) @ translation_matrix(-pivot)


def _vector(values, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=float).reshape(-1)
    if arr.size < 3:
        raise ValueError(f"{name} needs 3 components")
    return arr[:3].copy()


class Robot:
    """Robot built from six arm meshes driven by five joint angles in radians."""

    ANGLE_STEP = 0.01

    def __init__(self, arms=None):
        if arms is None:
            arms = [Arm(f"mesh{i}.txt") for i in range(1, _ARM_COUNT + 1)]
        self._arms: Tuple[Mesh, ...] = tuple(arms)
        if len(self._arms) != _ARM_COUNT:
            raise ValueError(f"a robot needs {_ARM_COUNT} arms, got {len(self._arms)}")
        for arm in self._arms:
            arm.initialize()
        self._angles = [0.0] * 5
        self._animation = False
        self._time = 0.0
        self._circle_center = np.zeros(3)
        self._circle_radius = 1.0
        self._slope_angle = 0.0

    @property
    def arms(self) -> Tuple[Mesh, ...]:
        return self._arms

    @property
    def angles(self) -> Tuple[float, ...]:
        return tuple(self._angles)

    @property
    def animation(self) -> bool:
        return self._animation

    @property
    def time(self) -> float:
        return self._time

    @property
    def circle_center(self) -> np.ndarray:
        return self._circle_center.copy()

    @property
    def circle_radius(self) -> float:
        return self._circle_radius

    @property
    def slope_angle(self) -> float:
        return self._slope_angle

    def update(self, dt) -> None:
        """Advance the circle-tracing animation, if it runs, by ``dt`` seconds."""
        if not self._animation:
            return
        self._time += dt
        model = translation_matrix(self._circle_center) @ rotation_matrix(
            self._slope_angle, _Z_AXIS
        )
        local = np.array(
            [
                0.0,
                self._circle_radius * math.cos(self._time),
                self._circle_radius * math.sin(self._time),
                1.0,
            ]
        )
        pos = model @ local
        normal = rotate_z(_X_AXIS, self._slope_angle)
        self.set_arm_position(pos[:3], normal)

    def handle_key(self, key_event) -> bool:
        """Turn a joint for a control key; return whether the key was used."""
        joint = _KEY_JOINTS.get(key_event.key)
        if joint is None:
            return False
        step = 10 * self.ANGLE_STEP if key_event.mods.is_shift_down() else self.ANGLE_STEP
        index, direction = joint
        self._angles[index] += direction * step
        self._update_arms()
        return True

    def start_animation(self, circle_center, circle_radius, slope_angle) -> None:
        self._circle_center = _vector(circle_center, "circle_center")
        self._circle_radius = float(circle_radius)
        self._slope_angle = float(slope_angle)
        self._animation = True

    def stop_animation(self) -> None:
        self._animation = False

    def set_light(self, enable) -> None:
        for arm in self._arms:
            arm.set_light(enable)

    def _update_arms(self) -> None:
        a = self._angles
        model = rotation_matrix(a[0], _Y_AXIS)
        self._arms[1].model = model
        model = model @ _about(-a[1], _Z_AXIS, (0.0, _DY, 0.0))
        self._arms[2].model = model
        model = model @ _about(-a[2], _Z_AXIS, (-_L1, _DY, 0.0))
        self._arms[3].model = model
        model = model @ _about(a[3], _X_AXIS, (0.0, _DY, -_DZ))
        self._arms[4].model = model
        model = model @ _about(-a[4], _Z_AXIS, (-(_L1 + _L2), _DY, 0.0))
        self._arms[5].model = model

    def set_arm_position(self, pos, normal) -> None:
        """Solve the joint angles that put the tool at ``pos`` facing along ``normal``."""
        pos = _vector(pos, "pos")
        normal = _vector(normal, "normal")
        length = float(np.linalg.norm(normal))
        if length == 0.0:
            raise ValueError("normal must not be a zero vector")
        unit = normal / length
        pos1 = pos + normal * _L3

        e_sq = pos1[2] ** 2 + pos1[0] ** 2 - _DZ**2
        if e_sq < 0.0:
            raise ValueError("position is out of the robot's reach")
        e = math.sqrt(e_sq)
        a1 = -math.atan2(pos1[2], -pos1[0]) - math.atan2(_DZ, e)

        p2x, p2y = e, pos1[1] - _DY
        cos_a3 = min(1.0, (p2x * p2x + p2y * p2y - _L1 * _L1 - _L2 * _L2) / (2.0 * _L1 * _L2))
        if cos_a3 < -1.0:
            raise ValueError("position is out of the robot's reach")
        a3 = -math.acos(cos_a3)

        k = _L1 + _L2 * math.cos(a3)
        lat = _L2 * math.sin(a3)
        a2 = -math.atan2(p2y, math.sqrt(p2x * p2x)) - math.atan2(lat, k)

        normal1 = rotate_z(rotate_y(unit, -a1), -(a2 + a3))
        a5 = math.acos(min(1.0, max(-1.0, float(normal1[0]))))
        a4 = math.atan2(normal1[2], normal1[1])

        # Signs flip because the solution above works in a left-handed frame.
        self._angles = [-a1, -a2, -a3, -a4, -a5]
        self._update_arms()