# tests/test_mesh_builder.py
"""
Test the QuadMesh sink and the grid mesh builder.
"""

import numpy as np
import pytest
from shapely.geometry import Polygon

from slabgrid.generative.grid import StationGrid
from slabgrid.generative.mesh_builder import build_grid_mesh
from slabgrid.kernel.mesh import QuadMesh
from slabgrid.kernel.region import PlanarRegion
from slabgrid.model import ControlPoint

TOL = 1e-4
SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
STATIONS = [0.0, 5.0, 10.0]


def _control(x, y, accepted=True):
    p = (float(x), float(y), 0.0)
    return ControlPoint(source=p, u=p[0], v=p[1], projected=p, position=p, accepted=accepted)


# =============================================================================
# QuadMesh
# =============================================================================

class TestQuadMesh:

    def _unit_square(self):
        mesh = QuadMesh()
        for p in [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]:
            mesh.add_vertex(p)
        return mesh

    def test_add_vertex_and_face(self):
        mesh = self._unit_square()
        assert mesh.add_face(0, 1, 2, 3) == 0
        assert mesh.n_vertices == 4
        assert mesh.n_faces == 1
        assert mesh.face_array().shape == (1, 4)

    def test_face_needs_distinct_existing_vertices(self):
        mesh = self._unit_square()
        with pytest.raises(ValueError):
            mesh.add_face(0, 1, 1, 3)
        with pytest.raises(ValueError):
            mesh.add_face(0, 1, 2, 7)

    def test_normals_follow_winding(self):
        mesh = self._unit_square()
        mesh.add_face(0, 1, 2, 3)
        normals = mesh.compute_normals()
        np.testing.assert_allclose(normals, [[0, 0, 1]] * 4)

    def test_vertex_without_face_has_zero_normal(self):
        mesh = self._unit_square()
        mesh.add_vertex((5, 5, 0))
        mesh.add_face(0, 1, 2, 3)
        normals = mesh.compute_normals()
        np.testing.assert_allclose(normals[4], [0, 0, 0])

    def test_compact_renumbers_faces(self):
        mesh = QuadMesh()
        mesh.add_vertex((9, 9, 9))
        for p in [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]:
            mesh.add_vertex(p)
        mesh.add_face(1, 2, 3, 4)
        mesh.compute_normals()

        removed = mesh.compact()

        assert removed == 1
        assert mesh.faces == [(0, 1, 2, 3)]
        np.testing.assert_allclose(mesh.vertex_array()[0], [0, 0, 0])
        assert mesh.normals.shape == (4, 3)

    def test_compact_without_unused_vertices(self):
        mesh = self._unit_square()
        mesh.add_face(0, 1, 2, 3)
        assert mesh.compact() == 0


# =============================================================================
# Grid mesh builder
# =============================================================================

class TestBuildGridMesh:

    def test_full_grid(self):
        region = PlanarRegion.from_polygon(Polygon(SQUARE))
        grid = StationGrid.build(region, STATIONS, STATIONS, TOL)
        mesh = build_grid_mesh(grid, [], TOL)

        assert mesh.n_faces == 4
        assert mesh.n_vertices == 9
        np.testing.assert_allclose(mesh.normals, [[0, 0, 1]] * 9)

    def test_opening_at_cell_center_removes_face(self):
        """
        The opening misses all four corners of the lower-left cell but
        contains its center, so that face must go.
        """
        region = PlanarRegion.from_polygon(Polygon(SQUARE, [[(2, 2), (3, 2), (3, 3), (2, 3)]]))
        grid = StationGrid.build(region, STATIONS, STATIONS, TOL)
        mesh = build_grid_mesh(grid, [], TOL)

        assert mesh.n_faces == 3, f"Expected 3 faces, got {mesh.n_faces}"
        assert mesh.n_vertices == 8, "Corner node of the dropped cell is unreferenced"
        verts = mesh.vertex_array()
        assert not np.any(np.all(np.isclose(verts, [0, 0, 0]), axis=1))
        print("✓ Center check removes a cell around a small opening")

    def test_outside_nodes_drop_faces(self):
        """L-shaped slab: the missing quadrant has no faces."""
        l_shape = Polygon([(0, 0), (10, 0), (10, 5), (5, 5), (5, 10), (0, 10)])
        region = PlanarRegion.from_polygon(l_shape)
        grid = StationGrid.build(region, STATIONS, STATIONS, TOL)
        mesh = build_grid_mesh(grid, [], TOL)

        assert mesh.n_faces == 3
        assert mesh.n_vertices == 8

    def test_control_point_vertex_replaces_grid_node(self):
        region = PlanarRegion.from_polygon(Polygon(SQUARE))
        grid = StationGrid.build(region, STATIONS, STATIONS, TOL)
        mesh = build_grid_mesh(grid, [_control(5, 5)], TOL)

        assert mesh.n_faces == 4
        assert mesh.n_vertices == 9, "Coincident node must reuse the control point vertex"
        np.testing.assert_allclose(mesh.vertex_array()[0], [5, 5, 0])
        assert all(0 in face for face in mesh.faces)

    def test_control_point_just_off_edge_keeps_grid_node(self):
        """
        A control point 8*tol outside the edge passes the loose acceptance
        check but is off the slab at tol; the grid node keeps its own vertex.
        """
        region = PlanarRegion.from_polygon(Polygon(SQUARE))
        grid = StationGrid.build(region, STATIONS, STATIONS, TOL)
        mesh = build_grid_mesh(grid, [_control(-8 * TOL, 5)], TOL)

        assert mesh.n_faces == 4
        assert mesh.n_vertices == 9
        verts = mesh.vertex_array()
        assert np.all(verts[:, 0] >= 0.0), "No vertex may sit outside the slab edge"
        assert any(np.allclose(v, [0, 5, 0]) for v in verts)

    def test_unreferenced_control_point_is_compacted_away(self):
        region = PlanarRegion.from_polygon(Polygon(SQUARE))
        grid = StationGrid.build(region, STATIONS, STATIONS, TOL)
        mesh = build_grid_mesh(grid, [_control(2, 2)], TOL)

        assert mesh.n_faces == 4
        assert mesh.n_vertices == 9

    def test_rejected_control_point_adds_no_vertex(self):
        region = PlanarRegion.from_polygon(Polygon(SQUARE))
        grid = StationGrid.build(region, STATIONS, STATIONS, TOL)
        mesh = build_grid_mesh(grid, [_control(5, 5, accepted=False)], TOL)

        assert mesh.n_vertices == 9
        # Every vertex is a grid node, none of them duplicated
        assert len({tuple(v) for v in mesh.vertex_array().round(6)}) == 9
