"""Spark particles emitted from a point and pulled down by gravity."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .camera import rotate_z
from .mesh import Vec3

_LINE_NORMAL: Vec3 = (1.0, 0.0, 0.0)
_TRAIL_LENGTH = 200.0


def _vec3(values, name: str) -> np.ndarray:
    arr = np.array(values, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"{name} needs 3 components")
    return arr


@dataclass(frozen=True)
class VertexPosNormalAge:
    """A line vertex with its normal and the age of its particle."""

    position: Vec3
    normal: Vec3
    age: float


@dataclass
class ParticleSettings:
    """Tunable emission parameters."""

    count_cap: int = 256
    max_age: float = 5.0
    emission_rate: float = 50.0
    gravity: Tuple[float, float, float] = (0.0, -0.000981, 0.0)

    def __post_init__(self) -> None:
        if self.count_cap < 0:
            raise ValueError("count_cap must not be negative")
        if self.emission_rate <= 0:
            raise ValueError("emission_rate must be positive")


class Particle:
    """A single particle; its velocity is a displacement per update."""

    __slots__ = ("prev_position", "position", "velocity", "age")

    def __init__(self, position, velocity):
        self.position = _vec3(position, "position")
        self.prev_position = self.position.copy()
        self.velocity = _vec3(velocity, "velocity")
        self.age = 0.0

    def update(self, dt, acceleration) -> None:
        self.velocity = self.velocity + np.asarray(acceleration, dtype=float) * dt
        self.prev_position = self.position
        self.position = self.position + self.velocity
        self.age += dt


class ParticlesSystem:
    """Emits particles at a steady rate up to a cap and retires them by age."""

    def __init__(self, start_velocity, settings=None, rng=None):
        self.start_velocity = _vec3(start_velocity, "start_velocity")
        self.settings: ParticleSettings = settings if settings is not None else ParticleSettings()
        self._rng: random.Random = rng if rng is not None else random.Random()
        self._particles: List[Particle] = []
        self._cumulated_time = 0.0

    @property
    def particles(self) -> Tuple[Particle, ...]:
        return tuple(self._particles)

    @property
    def cumulated_time(self) -> float:
        """Time not yet spent on emitting particles."""
        return self._cumulated_time

    def update(self, dt, source_position) -> None:
        """Move particles, drop old ones and emit new ones at ``source_position``."""
        settings = self.settings
        self._cumulated_time += dt
        gravity = np.asarray(settings.gravity, dtype=float)

        for particle in self._particles:
            particle.update(dt, gravity)
        self._particles = [p for p in self._particles if p.age <= settings.max_age]

        to_create = settings.count_cap - len(self._particles)
        if to_create > 0:
            to_create = min(to_create, int(self._cumulated_time * settings.emission_rate))
            self._cumulated_time -= to_create / settings.emission_rate
            source = _vec3(source_position, "source_position")
            self._particles.extend(self._random_particle(source) for _ in range(to_create))

    def _random_particle(self, position: np.ndarray) -> Particle:
        angle = self._rng.uniform(-math.pi / 2, math.pi / 2)
        return Particle(position, rotate_z(self.start_velocity, angle))

    def line_vertices(self) -> List[VertexPosNormalAge]:
        """Two vertices per particle: its previous position and a stretched trail end."""
        vertices: List[VertexPosNormalAge] = []
        for particle in self._particles:
            direction = particle.position - particle.prev_position
            tail = particle.position + _TRAIL_LENGTH * direction
            vertices.append(
                VertexPosNormalAge(tuple(particle.prev_position.tolist()), _LINE_NORMAL, particle.age)
            )
            vertices.append(VertexPosNormalAge(tuple(tail.tolist()), _LINE_NORMAL, particle.age))
        return vertices