# slabgrid - Strut-and-tie grid generation for trimmed planar slabs
"""
SLABGRID: Strut-and-Tie Idealization Grids
==========================================

This package provides:
- A shapely-backed planar region (slab outline with openings)
- Point classification and exact line clipping against the region
- Adaptive station sets that snap to support points
- Quad mesh + orthogonal/diagonal tie lines over the slab

ARCHITECTURE:
-------------
    kernel/         Region, classification, clipping, mesh sink, errors
    generative/     Stations, control points, mesh builder, orchestrator
    config.py       UnitSystem and GridConfig
    model.py        ControlPoint, SlabGridResult (Line3D re-exported)
    logging_config  setup_logging() for applications
"""

from .kernel import (
    PlanarRegion,
    QuadMesh,
    Line3D,
    Containment,
    classify_point,
    clip_line,
    SlabGridError,
    InvalidArgumentError,
    PreconditionError,
    GeometryConstructionError,
)
from .config import UnitSystem, GridConfig, DEFAULT_CONFIG
from .model import ControlPoint, SlabGridResult
from .generative import generate_slab_grid, build_stations

__version__ = "0.1.0"
