"""Fly-through camera and the 3D transform helpers it relies on."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def _vec3(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


def _normalize(v: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(v)
    if norm == 0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / norm


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye, center, up = _vec3(eye), _vec3(center), _vec3(up)
    f = _normalize(center - eye)
    s = _normalize(np.cross(f, up))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye)
    m[1, 3] = -np.dot(u, eye)
    m[2, 3] = np.dot(f, eye)
    return m


def perspective(fovy, aspect, near, far) -> np.ndarray:
    """Right-handed perspective projection to clip space with depth in [-1, 1].

    ``fovy`` is in radians.
    """
    if aspect == 0:
        raise ValueError("aspect ratio must not be zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fovy / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def translation_matrix(offset) -> np.ndarray:
    """4x4 matrix translating points by ``offset``."""
    m = np.identity(4)
    m[:3, 3] = _vec3(offset)
    return m


def rotation_matrix(angle, axis) -> np.ndarray:
    """4x4 matrix rotating by ``angle`` radians counter-clockwise about ``axis``."""
    a = _normalize(_vec3(axis))
    c, s = math.cos(angle), math.sin(angle)
    cross = np.array(
        [
            [0.0, -a[2], a[1]],
            [a[2], 0.0, -a[0]],
            [-a[1], a[0], 0.0],
        ]
    )
    m = np.identity(4)
    m[:3, :3] = c * np.identity(3) + (1.0 - c) * np.outer(a, a) + s * cross
    return m


def _as_rotatable(vector) -> np.ndarray:
    arr = np.array(vector, dtype=float)
    if arr.ndim != 1 or arr.size < 3:
        raise ValueError("expected a vector with at least 3 components")
    return arr


def rotate_y(vector, angle) -> np.ndarray:
    """Rotate ``vector`` about the Y axis by ``angle`` radians; extra components are kept."""
    v = _as_rotatable(vector)
    c, s = math.cos(angle), math.sin(angle)
    x, z = v[0], v[2]
    v[0] = x * c + z * s
    v[2] = -x * s + z * c
    return v


def rotate_z(vector, angle) -> np.ndarray:
    """Rotate ``vector`` about the Z axis by ``angle`` radians; extra components are kept."""
    v = _as_rotatable(vector)
    c, s = math.cos(angle), math.sin(angle)
    x, y = v[0], v[1]
    v[0] = x * c - y * s
    v[1] = x * s + y * c
    return v


class Camera:
    """Camera with yaw and pitch in degrees and a perspective projection.

    A yaw of -90 degrees looks down the negative Z axis. The field of view
    is handed to :func:`perspective` unchanged.
    """

    YAW_ZERO = -90.0
    PITCH_LIMIT = 89.0

    def __init__(self, fov, aspect, near, far):
        self._translation = np.zeros(3)
        self._pitch = 0.0
        self._yaw = self.YAW_ZERO
        self._view = np.identity(4)
        self._projection = np.identity(4)
        self._update_view()
        self.set_perspective_projection(fov, aspect, near, far)

    def _update_view(self) -> None:
        p = math.radians(self._pitch)
        y = math.radians(self._yaw)
        direction = np.array(
            [math.cos(p) * math.cos(y), math.sin(p), math.cos(p) * math.sin(y)]
        )
        self._view = look_at(
            self._translation, self._translation + direction, (0.0, 1.0, 0.0)
        )

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view.copy()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection.copy()

    @property
    def translation(self) -> np.ndarray:
        return self._translation.copy()

    @property
    def pitch(self) -> float:
        return self._pitch

    @property
    def yaw(self) -> float:
        return self._yaw

    def rotate_yaw(self, angle) -> None:
        """Rotate about the Y axis by ``angle`` degrees."""
        self._yaw = math.fmod(self._yaw + angle, 360.0)
        self._update_view()

    def rotate_pitch(self, angle) -> None:
        """Tilt towards the poles by ``angle`` degrees, stopping short of them."""
        self._pitch = min(max(self._pitch + angle, -self.PITCH_LIMIT), self.PITCH_LIMIT)
        self._update_view()

    def translate(self, vector) -> None:
        """Move by ``vector`` given in the camera's yaw-rotated frame."""
        fixed = rotate_y(_vec3(vector), math.radians(self.YAW_ZERO - self._yaw))
        self._translation = self._translation + fixed
        self._update_view()

    def set_perspective_projection(self, fov, aspect, near, far) -> None:
        self._fov, self._aspect, self._near, self._far = fov, aspect, near, far
        self._projection = perspective(fov, aspect, near, far)

    def _update_perspective(self) -> None:
        self.set_perspective_projection(self._fov, self._aspect, self._near, self._far)

    @property
    def fov(self) -> float:
        return self._fov

    @fov.setter
    def fov(self, value) -> None:
        self._fov = value
        self._update_perspective()

    @property
    def aspect(self) -> float:
        return self._aspect

    @aspect.setter
    def aspect(self, value) -> None:
        self._aspect = value
        self._update_perspective()

    @property
    def near(self) -> float:
        return self._near

    @near.setter
    def near(self, value) -> None:
        self._near = value
        self._update_perspective()

    @property
    def far(self) -> float:
        return self._far

    @far.setter
    def far(self, value) -> None:
        self._far = value
        self._update_perspective()