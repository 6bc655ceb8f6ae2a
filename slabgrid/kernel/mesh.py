# slabgrid/kernel/mesh.py
"""
QUAD MESH: The Mesh Sink
========================

A minimal vertex/quad-face container with exactly the operations the grid
builder needs:

    add_vertex(point) -> index
    add_face(a, b, c, d) -> index      (counter-clockwise about the slab normal)
    compute_normals()                  per-vertex, area-weighted
    compact()                          drop vertices no face references

Faces may only reference vertices that already exist.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np


@dataclass
class QuadMesh:
    """
    Vertex list + quad-face list.

    Attributes:
    -----------
    vertices : List[np.ndarray]
        World points, shape (3,) each
    faces : List[Tuple[int, int, int, int]]
        Vertex indices of each quad
    normals : Optional[np.ndarray]
        (n_vertices, 3) unit normals, set by compute_normals()
    """
    vertices: List[np.ndarray] = field(default_factory=list)
    faces: List[Tuple[int, int, int, int]] = field(default_factory=list)
    normals: Optional[np.ndarray] = None

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def n_faces(self) -> int:
        return len(self.faces)

    def add_vertex(self, point) -> int:
        self.vertices.append(np.asarray(point, dtype=float).copy())
        self.normals = None
        return len(self.vertices) - 1

    def add_face(self, a: int, b: int, c: int, d: int) -> int:
        quad = (int(a), int(b), int(c), int(d))
        if len(set(quad)) != 4:
            raise ValueError(f"Quad face needs 4 distinct vertices, got {quad}")
        n = len(self.vertices)
        for idx in quad:
            if idx < 0 or idx >= n:
                raise ValueError(f"Face references vertex {idx}, mesh has {n} vertices")
        self.faces.append(quad)
        return len(self.faces) - 1

    def vertex_array(self) -> np.ndarray:
        return np.array(self.vertices, dtype=float).reshape(-1, 3)

    def face_array(self) -> np.ndarray:
        return np.array(self.faces, dtype=int).reshape(-1, 4)

    def compute_normals(self) -> np.ndarray:
        """
        Per-vertex normals from the quads that share each vertex.

        The quad normal is the cross product of its diagonals, whose length
        is twice the quad area, so larger faces weigh more.
        Vertices without faces get a zero vector.
        """
        verts = self.vertex_array()
        normals = np.zeros_like(verts)
        for a, b, c, d in self.faces:
            n = np.cross(verts[c] - verts[a], verts[d] - verts[b])
            for idx in (a, b, c, d):
                normals[idx] += n

        lengths = np.linalg.norm(normals, axis=1)
        nonzero = lengths > 0
        normals[nonzero] /= lengths[nonzero][:, None]
        self.normals = normals
        return normals

    def compact(self) -> int:
        """
        Remove vertices that no face references and renumber the faces.

        Returns the number of vertices removed.
        """
        used = sorted({idx for face in self.faces for idx in face})
        removed = len(self.vertices) - len(used)
        if removed == 0:
            return 0

        remap = {old: new for new, old in enumerate(used)}
        self.vertices = [self.vertices[old] for old in used]
        self.faces = [tuple(remap[idx] for idx in face) for face in self.faces]
        if self.normals is not None:
            self.normals = self.normals[used]
        return removed
