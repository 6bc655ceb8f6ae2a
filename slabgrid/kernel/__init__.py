# slabgrid/kernel - Geometry kernel and leaf algorithms
"""
KERNEL: REGION, CLASSIFICATION, CLIPPING, MESH
===============================================

The pieces every grid step stands on:

    region.py     PlanarRegion: trimmed planar face backed by shapely
    classify.py   one containment policy (INSIDE / ON_BOUNDARY / OUTSIDE)
    clip.py       exact and sampled line clipping against the region
    line.py       Line3D segment type
    mesh.py       QuadMesh sink (vertices, quads, normals, compaction)
    errors.py     exception taxonomy

Nothing here knows about stations, control points or spacing.
"""

from .errors import (
    SlabGridError,
    InvalidArgumentError,
    PreconditionError,
    GeometryConstructionError,
)
from .region import PlanarRegion, Interval, as_point
from .classify import Containment, classify_point, is_inside_or_on
from .line import Line3D
from .clip import clip_line, clip_line_sampled
from .mesh import QuadMesh

__all__ = [
    'SlabGridError', 'InvalidArgumentError', 'PreconditionError', 'GeometryConstructionError',
    'PlanarRegion', 'Interval', 'as_point',
    'Containment', 'classify_point', 'is_inside_or_on',
    'Line3D', 'clip_line', 'clip_line_sampled',
    'QuadMesh',
]
