# slabgrid/generative/grid.py
"""
STATION GRID: Nodes and Cells Shared by Every Grid Step
=======================================================

Once both station sets are final, the grid nodes are evaluated and
classified exactly once. The mesh builder, the connector search and the
diagonal generator all read from the same StationGrid, so a node that is
outside for one step is outside for all of them.

Indexing:
    node (i, j)  ->  region.point_at(u_stations[i], v_stations[j])
    cell (i, j)  ->  nodes (i, j), (i+1, j), (i+1, j+1), (i, j+1)
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

import numpy as np

from ..kernel.classify import classify_point

NodeKey = Tuple[int, int]


@dataclass(frozen=True)
class GridCell:
    """A quad between adjacent stations (i, i+1) x (j, j+1)."""
    i: int
    j: int
    u0: float
    u1: float
    v0: float
    v1: float

    @property
    def center(self) -> Tuple[float, float]:
        return 0.5 * (self.u0 + self.u1), 0.5 * (self.v0 + self.v1)

    @property
    def corner_keys(self) -> List[NodeKey]:
        """Counter-clockwise about the slab normal."""
        i, j = self.i, self.j
        return [(i, j), (i + 1, j), (i + 1, j + 1), (i, j + 1)]


@dataclass
class StationGrid:
    """
    Evaluated and classified grid nodes.

    Attributes:
    -----------
    u_stations, v_stations : np.ndarray
        Final station parameters
    points : np.ndarray
        (len(u), len(v), 3) world positions of the nodes
    inside : np.ndarray
        (len(u), len(v)) True where the node is inside-or-on the region
    """
    region: object
    tol: float
    u_stations: np.ndarray
    v_stations: np.ndarray
    points: np.ndarray
    inside: np.ndarray
    _center_cache: Dict[NodeKey, bool] = field(default_factory=dict, repr=False)

    @classmethod
    def build(cls, region, u_stations, v_stations, tol: float) -> "StationGrid":
        us = np.asarray(u_stations, dtype=float)
        vs = np.asarray(v_stations, dtype=float)
        points = np.zeros((len(us), len(vs), 3))
        inside = np.zeros((len(us), len(vs)), dtype=bool)
        for i, u in enumerate(us):
            for j, v in enumerate(vs):
                pt = region.point_at(u, v)
                points[i, j] = pt
                inside[i, j] = classify_point(region, pt, tol).is_inside_or_on
        return cls(region=region, tol=tol, u_stations=us, v_stations=vs,
                   points=points, inside=inside)

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.u_stations), len(self.v_stations)

    def inside_nodes(self) -> List[NodeKey]:
        return [(int(i), int(j)) for i, j in zip(*np.nonzero(self.inside))]

    def cells(self) -> Iterator[GridCell]:
        us, vs = self.u_stations, self.v_stations
        for i in range(len(us) - 1):
            for j in range(len(vs) - 1):
                yield GridCell(i, j, us[i], us[i + 1], vs[j], vs[j + 1])

    def center_inside(self, cell: GridCell) -> bool:
        """Whether the cell's parametric center classifies inside-or-on."""
        key = (cell.i, cell.j)
        if key not in self._center_cache:
            pt = self.region.point_at(*cell.center)
            self._center_cache[key] = classify_point(self.region, pt, self.tol).is_inside_or_on
        return self._center_cache[key]
