"""Triangle meshes with shadow-volume edge data, ready for upload as flat buffers."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]


def _as_vec3(values: Sequence[float]) -> Vec3:
    items = tuple(float(v) for v in values)
    if len(items) != 3:
        raise ValueError(f"expected 3 components, got {len(items)}")
    return items  # type: ignore[return-value]


@dataclass(frozen=True)
class VertexPosNormal:
    """A vertex position together with its normal vector."""

    position: Vec3
    normal: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _as_vec3(self.position))
        object.__setattr__(self, "normal", _as_vec3(self.normal))


@dataclass
class VerticesData:
    """Geometry of a mesh.

    Each edge holds the two vertices on the edge followed by the remaining
    vertex of each of the two triangles that share it.
    """

    vertex_count: int
    triangle_count: int
    vertices: List[VertexPosNormal]
    triangles: List[Tuple[int, int, int]]
    edges: List[Tuple[int, int, int, int]] = field(default_factory=list)


class Mesh(abc.ABC):
    """A renderable triangle mesh lit by a single point light."""

    LIGHT_POSITION: Vec3 = (-1.0, 4.0, 5.0)

    def __init__(self) -> None:
        self.color: Vec3 = (1.0, 1.0, 1.0)
        self.model = np.identity(4)
        self.light_enabled = False
        self.triangle_count = 0
        self._initialized = False
        self._vertex_buffer = np.zeros((0, 6), dtype=np.float32)
        self._index_buffer = np.zeros(0, dtype=np.uint32)
        self._edge_buffer = np.zeros(0, dtype=np.uint32)

    @abc.abstractmethod
    def vertices_data(self) -> VerticesData:
        """Build the mesh geometry."""

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Build the vertex, triangle-index and edge-adjacency buffers."""
        data = self.vertices_data()
        if len(data.vertices) < data.vertex_count:
            raise ValueError(
                f"mesh declares {data.vertex_count} vertices but holds {len(data.vertices)}"
            )
        if len(data.triangles) < data.triangle_count:
            raise ValueError(
                f"mesh declares {data.triangle_count} triangles but holds {len(data.triangles)}"
            )
        self.triangle_count = data.triangle_count
        rows = [
            (*vertex.position, *vertex.normal)
            for vertex in data.vertices[: data.vertex_count]
        ]
        self._vertex_buffer = np.array(rows, dtype=np.float32).reshape(-1, 6)
        self._index_buffer = np.asarray(
            data.triangles[: data.triangle_count], dtype=np.uint32
        ).reshape(-1)
        self._edge_buffer = np.asarray(data.edges, dtype=np.uint32).reshape(-1)
        self._initialized = True

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.initialize()

    @property
    def vertex_buffer(self) -> np.ndarray:
        """Interleaved position and normal rows, one per vertex."""
        self._ensure_initialized()
        return self._vertex_buffer

    @property
    def index_buffer(self) -> np.ndarray:
        """Flat triangle indices, three per triangle."""
        self._ensure_initialized()
        return self._index_buffer

    @property
    def edge_buffer(self) -> np.ndarray:
        """Flat edge-adjacency indices, four per edge."""
        self._ensure_initialized()
        return self._edge_buffer

    def set_light(self, enable) -> None:
        self.light_enabled = bool(enable)