import logging

import pytest

from pumasim.arm import Arm, parse_mesh, remaining_index

QUAD = """4
0 0 0
1 0 0
0 1 0
1 1 0
4
0 0 0 1
1 0 0 1
2 0 0 1
3 0 0 1
2
0 1 2
1 3 2
1
1 2 0 1
"""


def test_parse_mesh_counts_and_vertices():
    data = parse_mesh(QUAD.splitlines())
    assert data.vertex_count == 4
    assert data.triangle_count == 2
    assert data.vertices[3].position == (1.0, 1.0, 0.0)
    assert data.vertices[0].normal == (0.0, 0.0, 1.0)
    assert data.triangles == [(0, 1, 2), (1, 3, 2)]


def test_parse_mesh_edge_adjacency():
    data = parse_mesh(QUAD.splitlines())
    assert data.edges == [(1, 2, 0, 3)]
    for i1, i2, i3, i4 in data.edges:
        assert i3 not in (i1, i2)
        assert i4 not in (i1, i2)


def test_remaining_index_picks_opposite_vertex():
    data = parse_mesh(QUAD.splitlines())
    positions = [v.position for v in data.vertices]
    assert remaining_index(data, positions, 0, 0, 1) == 2
    assert remaining_index(data, positions, 0, 1, 2) == 0
    assert remaining_index(data, positions, 1, 3, 2) == 1


def test_truncated_data_raises():
    lines = QUAD.splitlines()[:-2]
    with pytest.raises(ValueError):
        parse_mesh(lines)


def test_malformed_count_raises():
    with pytest.raises(ValueError):
        parse_mesh(["abc"])


def test_unknown_position_index_raises():
    with pytest.raises(ValueError):
        parse_mesh(["1", "0 0 0", "1", "5 0 0 1", "0", "0"])


def test_index_mismatch_is_logged(caplog):
    lines = ["2", "0 0 0", "1 0 0", "2", "1 0 0 1", "0 0 0 1", "0", "0"]
    with caplog.at_level(logging.WARNING, logger="pumasim.arm"):
        data = parse_mesh(lines)
    assert data.vertices[0].position == (1.0, 0.0, 0.0)
    assert "Index mismatch" in caplog.text


def test_arm_reads_from_resource_dir(tmp_path):
    (tmp_path / "mesh1.txt").write_text(QUAD, encoding="utf-8")
    arm = Arm("mesh1.txt", tmp_path)
    arm.initialize()
    assert arm.triangle_count == 2
    assert arm.index_buffer.tolist() == [0, 1, 2, 1, 3, 2]
    assert arm.edge_buffer.tolist() == [1, 2, 0, 3]
    assert arm.path == tmp_path / "mesh1.txt"


def test_arm_missing_file(tmp_path):
    arm = Arm("absent.txt", tmp_path)
    with pytest.raises(FileNotFoundError):
        arm.vertices_data()