# slabgrid/model.py
"""
MODEL DEFINITIONS: Lines, Control Points and the Grid Result
============================================================

Plain frozen dataclasses, built fresh on every call and never shared.

    Line3D          a straight tie segment (orthogonal, diagonal or connector)
    ControlPoint    a column/wall location and what the slab made of it
    SlabGridResult  everything generate_slab_grid() returns
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .kernel.line import Line3D, Point3
from .kernel.mesh import QuadMesh


@dataclass(frozen=True)
class ControlPoint:
    """
    A support location (column or wall point) offered to the grid.

    Parameters:
    -----------
    source : Point3
        The point as supplied by the caller
    u, v : float
        Closest region parameters
    projected : Point3
        Closest point on the slab plane
    position : Point3
        The point registered on the slab: `projected` when it is close to
        the source, else the surface point at (u, v)
    accepted : bool
        False when `position` is off the slab; rejected points take no part
        in the grid
    """
    source: Point3
    u: float
    v: float
    projected: Point3
    position: Point3
    accepted: bool


@dataclass(frozen=True)
class SlabGridResult:
    """
    Output of generate_slab_grid().

    orthogonal_lines holds the clipped grid lines followed by the control
    point connectors; connector_lines repeats the connectors on their own.
    """
    mesh: QuadMesh
    orthogonal_lines: List[Line3D]
    diagonal_lines: List[Line3D]
    connector_lines: List[Line3D] = field(default_factory=list)
    u_stations: Optional[np.ndarray] = None
    v_stations: Optional[np.ndarray] = None
    control_points: List[ControlPoint] = field(default_factory=list)
    spacing: float = 0.0

    @property
    def accepted_control_points(self) -> List[ControlPoint]:
        return [cp for cp in self.control_points if cp.accepted]

    def summary(self) -> Dict[str, float]:
        return {
            "spacing": self.spacing,
            "n_u_stations": 0 if self.u_stations is None else len(self.u_stations),
            "n_v_stations": 0 if self.v_stations is None else len(self.v_stations),
            "n_vertices": self.mesh.n_vertices,
            "n_faces": self.mesh.n_faces,
            "n_orthogonal_lines": len(self.orthogonal_lines),
            "n_diagonal_lines": len(self.diagonal_lines),
            "n_connector_lines": len(self.connector_lines),
            "n_control_points": len(self.control_points),
            "n_rejected_control_points": len(self.control_points) - len(self.accepted_control_points),
        }
