"""A triangle mesh together with data layers over its entities."""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import numpy as np

from noakit.layers import LayerManager

_VTK_TRIANGLE = 5

_VTK_TYPE_NAMES: dict[np.dtype, str] = {
    np.dtype(np.int8): "Int8",
    np.dtype(np.uint8): "UInt8",
    np.dtype(np.int16): "Int16",
    np.dtype(np.uint16): "UInt16",
    np.dtype(np.int32): "Int32",
    np.dtype(np.uint32): "UInt32",
    np.dtype(np.int64): "Int64",
    np.dtype(np.uint64): "UInt64",
    np.dtype(np.float32): "Float32",
    np.dtype(np.float64): "Float64",
}


class TriangleMesh:
    """An unstructured 2D mesh of triangles with points, edges and cells."""

    def __init__(self, points: Any, cells: Any) -> None:
        points = np.asarray(points, dtype=np.float64)
        cells = np.asarray(cells, dtype=np.int64)
        if points.size == 0:
            points = points.reshape(0, 2)
        if cells.size == 0:
            cells = cells.reshape(0, 3)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(f"Points must have shape (n, 2), got {points.shape}")
        if cells.ndim != 2 or cells.shape[1] != 3:
            raise ValueError(f"Cells must have shape (m, 3), got {cells.shape}")
        if cells.size and (cells.min() < 0 or cells.max() >= len(points)):
            raise ValueError("Cell corner refers to a point that does not exist")
        self.points = points
        self.cells = cells
        self._edges: np.ndarray | None = None

    @property
    def edges(self) -> np.ndarray:
        """Unique edges as sorted pairs of point indices."""
        if self._edges is None:
            if len(self.cells) == 0:
                self._edges = np.empty((0, 2), dtype=np.int64)
            else:
                pairs = np.concatenate(
                    (self.cells[:, [0, 1]], self.cells[:, [1, 2]], self.cells[:, [2, 0]])
                )
                self._edges = np.unique(np.sort(pairs, axis=1), axis=0)
        return self._edges

    def entities_count(self, dimension: int) -> int:
        """Number of entities of the given dimension: points, edges or cells."""
        if dimension == 0:
            return len(self.points)
        if dimension == 1:
            return len(self.edges)
        if dimension == 2:
            return len(self.cells)
        raise ValueError(f"Triangle mesh has no entities of dimension {dimension}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TriangleMesh):
            return NotImplemented
        return np.array_equal(self.points, other.points) and np.array_equal(
            self.cells, other.cells
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TriangleMesh(points={len(self.points)}, cells={len(self.cells)})"


class Domain:
    """A mesh and one layer manager per mesh dimension."""

    def __init__(self, dimension: int = 2) -> None:
        if dimension < 0:
            raise ValueError(f"Mesh dimension must be non-negative, got {dimension}")
        self.dimension = dimension
        self._mesh: TriangleMesh | None = None
        self._layers = [LayerManager() for _ in range(dimension + 1)]

    @property
    def mesh(self) -> TriangleMesh:
        """The stored mesh."""
        if self._mesh is None:
            raise RuntimeError("Domain holds no mesh")
        return self._mesh

    def _set_mesh(self, mesh: TriangleMesh) -> None:
        self._mesh = mesh
        self._update_layer_sizes()

    def _update_layer_sizes(self) -> None:
        for dim, manager in enumerate(self._layers):
            manager.set_size(0 if self._mesh is None else self._mesh.entities_count(dim))

    def clear(self) -> None:
        """Drop the mesh and all layers."""
        if self.is_clean():
            return
        self._mesh = None
        self.clear_layers()

    def clear_layers(self) -> None:
        """Remove every layer of every dimension."""
        for manager in self._layers:
            manager.clear()

    def is_clean(self) -> bool:
        """True when no mesh is stored."""
        return self._mesh is None

    def get_layers(self, dimension: int) -> LayerManager:
        """The layer manager for entities of `dimension`."""
        if not 0 <= dimension < len(self._layers):
            raise IndexError(f"No layers for dimension {dimension}")
        return self._layers[dimension]

    def load_from(self, filename: str | os.PathLike) -> None:
        """Load a triangle mesh from an ASCII VTU file."""
        if not self.is_clean():
            raise RuntimeError("Mesh data is not empty, cannot load!")
        path = Path(filename)
        if not path.exists():
            raise FileNotFoundError(f"Mesh file not found: {path}!")
        try:
            root = ET.parse(path).getroot()
        except ET.ParseError as exc:
            raise RuntimeError(f"Could not load mesh from {path}: {exc}") from exc

        piece = root.find("./UnstructuredGrid/Piece")
        if root.get("type") != "UnstructuredGrid" or piece is None:
            raise RuntimeError(f"Could not load mesh from {path}: not an unstructured grid")

        points_array = piece.find("./Points/DataArray")
        cells_node = piece.find("./Cells")
        if points_array is None or cells_node is None:
            raise RuntimeError(f"Could not load mesh from {path}: missing points or cells")
        cell_arrays = {a.get("Name"): a for a in cells_node.findall("DataArray")}
        if not {"connectivity", "offsets", "types"} <= cell_arrays.keys():
            raise RuntimeError(f"Could not load mesh from {path}: incomplete cell data")

        components = int(points_array.get("NumberOfComponents", "3"))
        coords = _read_array(points_array, np.float64).reshape(-1, components)
        types = _read_array(cell_arrays["types"], np.int64)
        connectivity = _read_array(cell_arrays["connectivity"], np.int64)
        offsets = _read_array(cell_arrays["offsets"], np.int64)

        if self.dimension != 2 or np.any(types != _VTK_TRIANGLE):
            raise RuntimeError("Read mesh type differs from expected!")
        if not np.array_equal(offsets, 3 * np.arange(1, len(types) + 1)):
            raise RuntimeError("Read mesh type differs from expected!")
        if components < 2:
            raise RuntimeError(f"Could not load mesh from {path}: bad point components")

        self._set_mesh(TriangleMesh(coords[:, :2], connectivity.reshape(-1, 3)))

    def write(self, filename: str | os.PathLike) -> None:
        """Write the mesh and the layers marked for export to an ASCII VTU file."""
        if self.is_clean():
            raise RuntimeError("Mesh data is empty, nothing to save!")
        mesh = self.mesh

        root = ET.Element(
            "VTKFile",
            type="UnstructuredGrid",
            version="1.0",
            byte_order="LittleEndian",
            header_type="UInt64",
        )
        grid = ET.SubElement(root, "UnstructuredGrid")
        piece = ET.SubElement(
            grid,
            "Piece",
            NumberOfPoints=str(len(mesh.points)),
            NumberOfCells=str(len(mesh.cells)),
        )

        coords = np.zeros((len(mesh.points), 3), dtype=np.float64)
        coords[:, :2] = mesh.points
        points = ET.SubElement(piece, "Points")
        _write_array(points, coords.reshape(-1), "Points", components=3)

        cells = ET.SubElement(piece, "Cells")
        _write_array(cells, mesh.cells.reshape(-1), "connectivity")
        _write_array(cells, 3 * np.arange(1, len(mesh.cells) + 1, dtype=np.int64), "offsets")
        _write_array(cells, np.full(len(mesh.cells), _VTK_TRIANGLE, dtype=np.uint8), "types")

        point_data = cell_data = field_data = None
        for dim, manager in enumerate(self._layers):
            for i, layer in enumerate(manager):
                if not layer.export_hint:
                    continue
                if dim == self.dimension:
                    if cell_data is None:
                        cell_data = ET.SubElement(piece, "CellData")
                    name = layer.alias or f"cell_layer_{i}"
                    _write_array(cell_data, layer.data, name)
                elif dim == 0:
                    if point_data is None:
                        point_data = ET.Element("PointData")
                        piece.insert(0, point_data)
                    name = layer.alias or f"point_layer_{i}"
                    _write_array(point_data, layer.data, name)
                else:
                    if field_data is None:
                        field_data = ET.Element("FieldData")
                        grid.insert(0, field_data)
                    name = layer.alias or f"dim{dim}_layer_{i}"
                    _write_array(field_data, layer.data, name)

        tree = ET.ElementTree(root)
        ET.indent(tree)
        try:
            tree.write(filename, encoding="utf-8", xml_declaration=True)
        except OSError as exc:
            raise RuntimeError(f"Cannot open file {filename}!") from exc


def _write_array(
    parent: ET.Element, values: np.ndarray, name: str, components: int = 1
) -> ET.Element:
    attributes = {"type": _VTK_TYPE_NAMES[np.dtype(values.dtype)], "Name": name}
    if components != 1:
        attributes["NumberOfComponents"] = str(components)
    attributes["format"] = "ascii"
    element = ET.SubElement(parent, "DataArray", attributes)
    element.text = " ".join(str(v) for v in values.tolist())
    return element


def _read_array(element: ET.Element, dtype: Any) -> np.ndarray:
    if element.get("format", "ascii") != "ascii":
        raise RuntimeError("Could not load mesh: only ascii data arrays are supported")
    text = (element.text or "").split()
    try:
        return np.array([float(v) for v in text], dtype=np.float64).astype(dtype)
    except ValueError as exc:
        raise RuntimeError(f"Could not load mesh: {exc}") from exc


def generate_2d_grid(domain: Domain, nx: int, ny: int, dx: float, dy: float) -> None:
    """Fill a clean 2D domain with an nx by ny grid of rectangles split in two triangles."""
    if domain.dimension != 2:
        raise NotImplementedError("generate_2d_grid is not implemented for this topology!")
    if not domain.is_clean():
        raise RuntimeError("Mesh data is not empty, cannot create grid!")

    iy, ix = np.meshgrid(np.arange(ny + 1), np.arange(nx + 1), indexing="ij")
    points = np.column_stack((ix.ravel() * dx, iy.ravel() * dy))

    def point_id(x: np.ndarray, y: np.ndarray) -> np.ndarray:
        return x + (nx + 1) * y

    cy, cx = np.meshgrid(np.arange(ny), np.arange(nx), indexing="ij")
    cx, cy = cx.ravel(), cy.ravel()
    lower = np.column_stack(
        (point_id(cx + 1, cy + 1), point_id(cx + 1, cy), point_id(cx, cy + 1))
    )
    upper = np.column_stack((point_id(cx, cy), point_id(cx, cy + 1), point_id(cx + 1, cy)))
    cells = np.empty((2 * nx * ny, 3), dtype=np.int64)
    cells[0::2] = lower
    cells[1::2] = upper

    domain._set_mesh(TriangleMesh(points, cells))