"""Static scene geometry: the room box, the cylinder, the metal sheet and the floor grid."""

from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np

from .camera import rotation_matrix, translation_matrix
from .mesh import Mesh, Vec3, VertexPosNormal, VerticesData, _as_vec3


def _v(position, normal) -> VertexPosNormal:
    return VertexPosNormal(position, normal)


class Box(Mesh):
    """Room enclosing the scene, with normals facing inwards."""

    def __init__(self) -> None:
        super().__init__()
        self.color = (1.0, 1.0, 0.5)

    def vertices_data(self) -> VerticesData:
        up, down = (0.0, 1.0, 0.0), (0.0, -1.0, 0.0)
        fwd, back = (0.0, 0.0, 1.0), (0.0, 0.0, -1.0)
        right, left = (1.0, 0.0, 0.0), (-1.0, 0.0, 0.0)
        vertices = [
            # bottom
            _v((-10, -1, -10), up), _v((10, -1, -10), up),
            _v((10, -1, 10), up), _v((-10, -1, 10), up),
            # top
            _v((-10, 9, -10), down), _v((10, 9, -10), down),
            _v((10, 9, 10), down), _v((-10, 9, 10), down),
            # front
            _v((-10, -1, -10), fwd), _v((10, -1, -10), fwd),
            _v((10, 9, -10), fwd), _v((-10, 9, -10), fwd),
            # back
            _v((-10, -1, 10), back), _v((10, -1, 10), back),
            _v((10, 9, 10), back), _v((-10, 9, 10), back),
            # left
            _v((-10, -1, -10), right), _v((-10, -1, 10), right),
            _v((-10, 9, 10), right), _v((-10, 9, -10), right),
            # right
            _v((10, -1, -10), left), _v((10, -1, 10), left),
            _v((10, 9, 10), left), _v((10, 9, -10), left),
        ]
        triangles = [
            (2, 1, 0), (3, 2, 0),
            (4, 5, 6), (4, 6, 7),
            (8, 9, 10), (8, 10, 11),
            (14, 13, 12), (15, 14, 12),
            (18, 17, 16), (19, 18, 16),
            (20, 21, 22), (20, 22, 23),
        ]
        return VerticesData(24, 12, vertices, triangles)


class Cylinder(Mesh):
    """Closed cylinder lying along the X axis."""

    CENTER: Vec3 = (0.5, -1.0, -2.0)
    RADIUS = 0.5
    HEIGHT = 4.0
    SLICES = 20

    def __init__(self) -> None:
        super().__init__()
        self.color = (0.0, 0.5, 0.0)

    def vertices_data(self) -> VerticesData:
        slices = self.SLICES
        vertex_count = 4 * slices + 2
        triangle_count = 4 * slices
        cx, cy, cz = self.CENTER
        half = self.HEIGHT / 2.0
        normal = (1.0, 0.0, 0.0)
        neg_normal = (-1.0, 0.0, 0.0)

        front: List[VertexPosNormal] = []
        rear: List[VertexPosNormal] = []
        side_front: List[VertexPosNormal] = []
        side_rear: List[VertexPosNormal] = []
        for i in range(slices):
            alpha = 2.0 * math.pi * i / slices
            dy = self.RADIUS * math.cos(alpha)
            dz = self.RADIUS * math.sin(alpha)
            pos1 = (cx + half, cy + dy, cz + dz)
            pos2 = (cx - half, cy + dy, cz + dz)
            radial = (0.0, math.cos(alpha), math.sin(alpha))
            front.append(_v(pos1, normal))
            rear.append(_v(pos2, neg_normal))
            side_front.append(_v(pos1, radial))
            side_rear.append(_v(pos2, radial))

        vertices = front + rear + side_front + side_rear
        vertices.append(_v((cx + half, cy, cz), normal))
        vertices.append(_v((cx - half, cy, cz), neg_normal))

        caps_front: List[Tuple[int, int, int]] = []
        caps_rear: List[Tuple[int, int, int]] = []
        sides_a: List[Tuple[int, int, int]] = []
        sides_b: List[Tuple[int, int, int]] = []
        for i in range(slices):
            nxt = (i + 1) % slices
            caps_front.append((i, nxt, vertex_count - 2))
            caps_rear.append((slices + i, vertex_count - 1, slices + nxt))
            sides_a.append((2 * slices + i, 3 * slices + i, 2 * slices + nxt))
            sides_b.append((3 * slices + i, 3 * slices + nxt, 2 * slices + nxt))
        triangles = caps_front + caps_rear + sides_a + sides_b

        return VerticesData(vertex_count, triangle_count, vertices, triangles)


class Sheet(Mesh):
    """Two-sided square sheet placed at ``position`` and tilted by ``angle`` radians about Z."""

    def __init__(self, position, angle):
        super().__init__()
        self._position = _as_vec3(position)
        self._angle = float(angle)
        self.color = (0.5, 0.5, 0.5)
        self.model = translation_matrix(self._position) @ rotation_matrix(
            self._angle, (0.0, 0.0, 1.0)
        )

    @property
    def center_position(self) -> Vec3:
        return self._position

    @property
    def slope_angle(self) -> float:
        return self._angle

    def vertices_data(self) -> VerticesData:
        normal = (1.0, 0.0, 0.0)
        neg_normal = (-1.0, 0.0, 0.0)
        corners = [(0.0, -1.0, -1.0), (0.0, -1.0, 1.0), (0.0, 1.0, 1.0), (0.0, 1.0, -1.0)]
        vertices = [_v(c, normal) for c in corners] + [_v(c, neg_normal) for c in corners]
        triangles = [(2, 1, 0), (3, 2, 0), (4, 5, 6), (4, 6, 7)]
        return VerticesData(8, 4, vertices, triangles)


class Floor:
    """Line grid on the XZ plane spanning ``[-x_units, x_units] x [-z_units, z_units]``."""

    def __init__(self, x_units, z_units):
        x_units, z_units = int(x_units), int(z_units)
        if x_units < 1 or z_units < 1:
            raise ValueError("floor needs at least one unit in each direction")
        self.x_units = x_units
        self.z_units = z_units
        self.color: Vec3 = (0.3, 0.3, 0.3)

        points: List[Tuple[float, float, float]] = []
        for i in range(-x_units, x_units + 1):
            points.append((float(i), 0.0, float(-z_units)))
            points.append((float(i), 0.0, float(z_units)))
        for i in range(-z_units + 1, z_units):
            points.append((float(-x_units), 0.0, float(i)))
            points.append((float(x_units), 0.0, float(i)))

        indices = list(range(len(points)))
        indices += [0, 4 * x_units, 1, 4 * x_units + 1]

        self.vertices = np.array(points, dtype=np.float32)
        self.indices = np.array(indices, dtype=np.uint32)

    @property
    def index_count(self) -> int:
        """Number of line indices drawn."""
        return 4 * (self.x_units + self.z_units + 1)