import math

import numpy as np
import pytest

from pumasim.shapes import Box, Cylinder, Floor, Sheet


def _check_consistent(data):
    assert len(data.vertices) == data.vertex_count
    assert len(data.triangles) == data.triangle_count
    for tri in data.triangles:
        assert all(0 <= i < data.vertex_count for i in tri)


def _check_winding(data):
    for a, b, c in data.triangles:
        pa = np.array(data.vertices[a].position)
        pb = np.array(data.vertices[b].position)
        pc = np.array(data.vertices[c].position)
        face = np.cross(pb - pa, pc - pa)
        assert np.dot(face, data.vertices[a].normal) > 0


@pytest.mark.parametrize("mesh", [Box(), Cylinder(), Sheet((0, 0, 0), 0.0)])
def test_meshes_are_consistent_and_wound_with_normals(mesh):
    data = mesh.vertices_data()
    _check_consistent(data)
    _check_winding(data)
    for v in data.vertices:
        assert np.linalg.norm(v.normal) == pytest.approx(1.0)


def test_box_counts_and_color():
    box = Box()
    data = box.vertices_data()
    assert data.vertex_count == 24
    assert data.triangle_count == 12
    assert box.color == (1.0, 1.0, 0.5)
    assert data.edges == []


def test_box_initializes_buffers():
    box = Box()
    box.initialize()
    assert box.vertex_buffer.shape == (24, 6)
    assert len(box.index_buffer) == 3 * 12


def test_cylinder_geometry():
    cyl = Cylinder()
    data = cyl.vertices_data()
    cx, cy, cz = Cylinder.CENTER
    slices = Cylinder.SLICES
    assert data.vertex_count == 4 * slices + 2
    for v in data.vertices[: 4 * slices]:
        x, y, z = v.position
        assert abs(x - cx) == pytest.approx(Cylinder.HEIGHT / 2)
        assert math.hypot(y - cy, z - cz) == pytest.approx(Cylinder.RADIUS)
    assert data.vertices[-2].position == (cx + Cylinder.HEIGHT / 2, cy, cz)
    assert data.vertices[-1].position == (cx - Cylinder.HEIGHT / 2, cy, cz)
    assert cyl.color == (0.0, 0.5, 0.0)


def test_sheet_properties_and_counts():
    sheet = Sheet((-1.5, 0.0, 0.0), math.radians(30))
    assert sheet.center_position == (-1.5, 0.0, 0.0)
    assert sheet.slope_angle == pytest.approx(math.radians(30))
    data = sheet.vertices_data()
    assert data.vertex_count == 8
    assert data.triangle_count == 4
    assert sheet.color == (0.5, 0.5, 0.5)


def test_sheet_model_matrix():
    sheet = Sheet((2.0, 3.0, 4.0), math.pi / 2)
    origin = sheet.model @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(origin, [2.0, 3.0, 4.0, 1.0])
    axis = sheet.model @ np.array([1.0, 0.0, 0.0, 0.0])
    assert np.allclose(axis, [0.0, 1.0, 0.0, 0.0])


def test_floor_grid():
    floor = Floor(2, 3)
    assert len(floor.vertices) == 4 * (2 + 3)
    assert len(floor.indices) == floor.index_count
    assert int(floor.indices.max()) < len(floor.vertices)
    assert np.allclose(floor.vertices[:, 1], 0.0)
    assert np.all(np.abs(floor.vertices[:, 0]) <= 2)
    assert np.all(np.abs(floor.vertices[:, 2]) <= 3)
    assert floor.vertices[0].tolist() == [-2.0, 0.0, -3.0]
    assert floor.vertices[8].tolist() == [2.0, 0.0, -3.0]
    assert floor.indices[-4:].tolist() == [0, 8, 1, 9]
    assert floor.color == (0.3, 0.3, 0.3)


@pytest.mark.parametrize("x, z", [(0, 1), (1, 0), (-1, 2)])
def test_floor_rejects_empty_grid(x, z):
    with pytest.raises(ValueError):
        Floor(x, z)