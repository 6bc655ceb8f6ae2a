# slabgrid/generative/mesh_builder.py
"""
GRID MESH BUILDER: Quad Faces Over the Slab
===========================================

    1. Accepted control points that classify inside-or-on at tol become
       the first vertices. Control points are accepted at a looser
       tolerance, so one may sit just off the slab edge; it gets no vertex.
    2. Every inside grid node becomes a vertex, unless it lies within
       vertex_merge_factor * tol of a control point vertex; such a node
       reuses the control point vertex instead (control points win).
    3. A cell becomes a quad face only if all four corners have vertices
       AND its parametric center is inside-or-on the region.

The center test catches an opening smaller than a cell and centered in it,
which the corner test alone would miss. It is not full polygon clipping: an
opening that clips a cell's side without touching a corner or the center
still leaves the face in place.

Finally normals are computed and unreferenced vertices are removed.
"""

import logging
from typing import Dict, Iterable

import numpy as np
from scipy.spatial import cKDTree

from ..config import DEFAULT_CONFIG, GridConfig
from ..kernel.classify import classify_point
from ..kernel.mesh import QuadMesh
from ..model import ControlPoint
from .grid import NodeKey, StationGrid

logger = logging.getLogger(__name__)


def build_grid_mesh(
    grid: StationGrid,
    control_points: Iterable[ControlPoint],
    tol: float,
    config: GridConfig = DEFAULT_CONFIG,
) -> QuadMesh:
    mesh = QuadMesh()

    on_slab = [
        cp for cp in control_points
        if cp.accepted and classify_point(grid.region, cp.position, tol).is_inside_or_on
    ]
    cp_indices = [mesh.add_vertex(cp.position) for cp in on_slab]
    tree = cKDTree(np.array([cp.position for cp in on_slab])) if on_slab else None
    merge_dist = config.vertex_merge_factor * tol

    node_index: Dict[NodeKey, int] = {}
    for key in grid.inside_nodes():
        pt = grid.points[key]
        if tree is not None:
            dist, k = tree.query(pt)
            if dist < merge_dist:
                node_index[key] = cp_indices[k]
                continue
        node_index[key] = mesh.add_vertex(pt)

    skipped_center = 0
    for cell in grid.cells():
        keys = cell.corner_keys
        if not all(k in node_index for k in keys):
            continue
        quad = [node_index[k] for k in keys]
        if len(set(quad)) < 4:
            continue
        if not grid.center_inside(cell):
            skipped_center += 1
            continue
        mesh.add_face(*quad)

    mesh.compute_normals()
    removed = mesh.compact()
    logger.debug(
        "Mesh: %d faces, %d vertices (%d unreferenced removed, %d cells with outside center)",
        mesh.n_faces, mesh.n_vertices, removed, skipped_center,
    )
    return mesh
