"""Robot arm segments loaded from text mesh files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .mesh import Mesh, Vec3, VertexPosNormal, VerticesData

_log = logging.getLogger(__name__)


class _Reader:
    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)

    def fields(self, what: str) -> List[str]:
        try:
            line = next(self._lines)
        except StopIteration:
            raise ValueError(f"unexpected end of mesh data while reading {what}") from None
        fields = line.split()
        if not fields:
            raise ValueError(f"empty line while reading {what}")
        return fields

    def count(self, what: str) -> int:
        token = self.fields(what)[0]
        try:
            value = int(token)
        except ValueError:
            raise ValueError(f"invalid {what} count: {token!r}") from None
        if value < 0:
            raise ValueError(f"negative {what} count: {value}")
        return value

    def values(self, what: str, kinds: Sequence[type]) -> list:
        fields = self.fields(what)
        if len(fields) < len(kinds):
            raise ValueError(f"expected {len(kinds)} values for {what}, got {len(fields)}")
        try:
            return [kind(token) for kind, token in zip(kinds, fields)]
        except ValueError:
            raise ValueError(f"malformed {what} line: {' '.join(fields)!r}") from None


def remaining_index(data: VerticesData, positions: Sequence[Vec3], triangle_index, v1, v2) -> int:
    """Index of the vertex of a triangle that lies at neither end of edge ``v1``-``v2``."""
    triangle = data.triangles[triangle_index]
    pos1 = positions[v1]
    pos2 = positions[v2]
    for index in triangle[:2]:
        position = data.vertices[index].position
        if position != pos1 and position != pos2:
            return index
    return triangle[2]


def parse_mesh(lines: Iterable[str]) -> VerticesData:
    """Parse positions, vertices, triangles and edges from mesh text lines."""
    reader = _Reader(lines)

    positions: List[Vec3] = []
    for _ in range(reader.count("position")):
        x, y, z = reader.values("position", (float, float, float))
        positions.append((x, y, z))

    vertex_count = reader.count("vertex")
    vertices: List[VertexPosNormal] = []
    for i in range(vertex_count):
        index, nx, ny, nz = reader.values("vertex", (int, float, float, float))
        if not 0 <= index < len(positions):
            raise ValueError(f"vertex refers to unknown position {index}")
        if i < len(positions) and index != i:
            _log.warning("Index mismatch: %d %d", i, index)
        vertices.append(VertexPosNormal(positions[index], (nx, ny, nz)))

    triangle_count = reader.count("triangle")
    triangles = [
        tuple(reader.values("triangle", (int, int, int)))
        for _ in range(triangle_count)
    ]
    data = VerticesData(vertex_count, triangle_count, vertices, triangles)  # type: ignore[arg-type]

    for _ in range(reader.count("edge")):
        i1, i2, t1, t2 = reader.values("edge", (int, int, int, int))
        i3 = remaining_index(data, positions, t1, i1, i2)
        i4 = remaining_index(data, positions, t2, i1, i2)
        data.edges.append((i1, i2, i3, i4))

    return data


class Arm(Mesh):
    """One rigid segment of the robot, read from ``resource_dir / filename``."""

    def __init__(self, filename, resource_dir="./res"):
        super().__init__()
        self.filename = str(filename)
        self.resource_dir = Path(resource_dir)

    @property
    def path(self) -> Path:
        return self.resource_dir / self.filename

    def vertices_data(self) -> VerticesData:
        with self.path.open("r", encoding="utf-8") as stream:
            return parse_mesh(stream)