import xml.etree.ElementTree as ET

import numpy as np
import pytest

from noakit.domain import Domain, TriangleMesh, generate_2d_grid


def _grid(nx=3, ny=2, dx=0.5, dy=0.25):
    domain = Domain(2)
    generate_2d_grid(domain, nx, ny, dx, dy)
    return domain


def test_new_domain_is_clean_with_empty_layers():
    domain = Domain(2)
    assert domain.is_clean()
    assert [domain.get_layers(d).count() for d in range(3)] == [0, 0, 0]


def test_get_layers_out_of_range():
    with pytest.raises(IndexError):
        Domain(2).get_layers(3)


def test_mesh_of_clean_domain_raises():
    with pytest.raises(RuntimeError):
        _ = Domain(2).mesh


def test_grid_entity_counts_and_euler():
    nx, ny = 3, 2
    domain = _grid(nx, ny)
    mesh = domain.mesh
    v = mesh.entities_count(0)
    e = mesh.entities_count(1)
    f = mesh.entities_count(2)
    assert v == (nx + 1) * (ny + 1)
    assert f == 2 * nx * ny
    assert v - e + f == 1


def test_grid_point_coordinates():
    nx, ny, dx, dy = 3, 2, 0.5, 0.25
    mesh = _grid(nx, ny, dx, dy).mesh
    for iy in range(ny + 1):
        for ix in range(nx + 1):
            assert tuple(mesh.points[ix + (nx + 1) * iy]) == (ix * dx, iy * dy)


def test_grid_first_cells():
    mesh = _grid(2, 1).mesh
    assert mesh.cells[0].tolist() == [4, 1, 3]
    assert mesh.cells[1].tolist() == [0, 3, 1]


def test_grid_each_cell_has_distinct_corners():
    mesh = _grid(4, 3).mesh
    assert all(len(set(c)) == 3 for c in mesh.cells.tolist())


def test_layers_resized_after_grid():
    domain = Domain(2)
    domain.get_layers(2).add(np.float32, 1.5)
    generate_2d_grid(domain, 3, 2, 1.0, 1.0)
    for dim in range(3):
        assert domain.get_layers(dim).size == domain.mesh.entities_count(dim)
    assert len(domain.get_layers(2).get(0)) == domain.mesh.entities_count(2)


def test_grid_on_non_clean_domain_raises():
    domain = _grid()
    with pytest.raises(RuntimeError):
        generate_2d_grid(domain, 1, 1, 1.0, 1.0)


def test_grid_unsupported_topology():
    with pytest.raises(NotImplementedError):
        generate_2d_grid(Domain(3), 1, 1, 1.0, 1.0)


def test_clear_removes_mesh_and_layers():
    domain = _grid()
    domain.get_layers(0).add()
    domain.clear()
    assert domain.is_clean()
    assert domain.get_layers(0).count() == 0


def test_clear_layers_keeps_mesh():
    domain = _grid()
    domain.get_layers(2).add()
    domain.clear_layers()
    assert not domain.is_clean()
    assert domain.get_layers(2).count() == 0


def test_write_clean_domain_raises(tmp_path):
    with pytest.raises(RuntimeError):
        Domain(2).write(tmp_path / "out.vtu")


def test_write_load_round_trip(tmp_path):
    original = _grid(3, 2, 0.5, 0.25)
    path = tmp_path / "grid.vtu"
    original.write(path)
    loaded = Domain(2)
    loaded.load_from(path)
    assert loaded.mesh == original.mesh
    assert loaded.get_layers(1).size == original.mesh.entities_count(1)


def test_write_exports_only_hinted_layers(tmp_path):
    domain = _grid(2, 2)
    cells = domain.get_layers(2)
    hinted = cells.add(np.float64, 2.5)
    cells.get_layer(hinted).export_hint = True
    cells.add(np.int32, 7)
    points = domain.get_layers(0)
    idx = points.add(np.int16, 3)
    points.get_layer(idx).export_hint = True
    points.get_layer(idx).alias = "height"
    path = tmp_path / "layers.vtu"
    domain.write(path)

    piece = ET.parse(path).getroot().find("./UnstructuredGrid/Piece")
    cell_arrays = piece.findall("./CellData/DataArray")
    assert [a.get("Name") for a in cell_arrays] == ["cell_layer_0"]
    assert [float(v) for v in cell_arrays[0].text.split()] == [2.5] * 8
    point_arrays = piece.findall("./PointData/DataArray")
    assert [a.get("Name") for a in point_arrays] == ["height"]
    assert point_arrays[0].get("type") == "Int16"


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Domain(2).load_from(tmp_path / "missing.vtu")


def test_load_into_non_clean_domain(tmp_path):
    path = tmp_path / "grid.vtu"
    _grid().write(path)
    with pytest.raises(RuntimeError):
        _grid().load_from(path)


def test_load_mismatched_dimension(tmp_path):
    path = tmp_path / "grid.vtu"
    _grid().write(path)
    with pytest.raises(RuntimeError):
        Domain(3).load_from(path)


def test_load_garbage_file(tmp_path):
    path = tmp_path / "bad.vtu"
    path.write_text("not xml at all")
    with pytest.raises(RuntimeError):
        Domain(2).load_from(path)


def test_triangle_mesh_rejects_bad_cells():
    with pytest.raises(ValueError):
        TriangleMesh([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], [[0, 1, 5]])


def test_triangle_mesh_bad_dimension():
    mesh = TriangleMesh([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], [[0, 1, 2]])
    assert mesh.entities_count(1) == 3
    with pytest.raises(ValueError):
        mesh.entities_count(3)