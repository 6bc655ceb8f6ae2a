# slabgrid/generative/slab_grid.py
"""
SLAB GRID GENERATOR: Strut-and-Tie Idealization Grids for Slabs
================================================================

PURPOSE:
--------
Turn a trimmed planar slab (outline plus openings) and a set of support
points into:

    - a quad mesh covering the slab
    - orthogonal tie lines along every station, clipped to the slab
    - connector ties from each support to its nearest grid nodes
    - optionally, both diagonals of every cell

ENGINEERING CONTEXT:
--------------------
A strut-and-tie model idealizes a slab as a network of straight members.
Grid lines should pass through the supports (columns, wall points) and must
never cross an opening: a tie over a stair shaft carries nothing. The grid
therefore adapts its stations to the supports and clips every line against
the true slab boundary, holes included.

PIPELINE:
---------
    1. Validate inputs (region, points, tolerance, spacing)
    2. Register control points on the slab         (control_points.py)
    3. Build u and v stations with pivots          (stations.py)
    4. Evaluate and classify the grid nodes once   (grid.py)
    5. Orthogonal lines, connectors, diagonals     (clipped via kernel/clip.py)
    6. Quad mesh                                   (mesh_builder.py)

USAGE:
------
    from shapely.geometry import Polygon
    from slabgrid import generate_slab_grid, PlanarRegion, UnitSystem

    slab = Polygon([(0, 0), (8000, 0), (8000, 6000), (0, 6000)],
                   holes=[[(3000, 2000), (4000, 2000), (4000, 3000), (3000, 3000)]])
    result = generate_slab_grid(
        PlanarRegion.from_polygon(slab),
        control_points=[(0, 0, 0), (4500, 3500, 0)],
        unit_system=UnitSystem.METRIC,
        add_diagonals=True,
    )
    print(result.summary())
"""

import logging
import math
from typing import Iterable, List, Optional

from shapely.geometry.base import BaseGeometry

from ..config import DEFAULT_CONFIG, GridConfig, UnitSystem, resolve_spacing
from ..kernel.clip import clip_line
from ..kernel.errors import (
    GeometryConstructionError,
    InvalidArgumentError,
    PreconditionError,
)
from ..kernel.line import Line3D
from ..kernel.region import PlanarRegion, as_point
from ..model import SlabGridResult
from .control_points import (
    connect_control_points,
    control_point_pivots,
    integrate_control_points,
)
from .grid import StationGrid
from .mesh_builder import build_grid_mesh
from .stations import build_stations

logger = logging.getLogger(__name__)

_REGION_QUERIES = (
    'domain', 'point_at', 'closest_parameter', 'project',
    'is_point_inside', 'closest_boundary_point', 'boundary_curves',
)


def _coerce_region(region):
    if region is None:
        raise InvalidArgumentError("Slab region is required.")
    if isinstance(region, PlanarRegion):
        return region
    if isinstance(region, BaseGeometry):
        return PlanarRegion.from_polygon(region)
    missing = [name for name in _REGION_QUERIES if not hasattr(region, name)]
    if missing:
        raise InvalidArgumentError(
            f"Slab region must be a PlanarRegion or shapely polygon; "
            f"{type(region).__name__} lacks {', '.join(missing)}."
        )
    return region


def _coerce_control_points(control_points) -> list:
    if control_points is None:
        raise InvalidArgumentError("Control points are required.")
    points = [as_point(p) for p in control_points]
    if not points:
        raise InvalidArgumentError("At least 1 control point is required.")
    return points


def _check_tolerance(tol) -> float:
    try:
        tol = float(tol)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Invalid tolerance: {tol!r}") from e
    if not math.isfinite(tol) or tol <= 0:
        raise InvalidArgumentError(f"Invalid tolerance: {tol!r}. Tolerance must be positive.")
    return tol


def _checked_domain(region, tol: float):
    try:
        u_dom, v_dom = region.domain
        curves = list(region.boundary_curves)
    except Exception as e:
        raise PreconditionError(f"Could not extract slab domain or boundary: {e}") from e
    if not curves:
        raise PreconditionError("Slab region has no boundary.")
    if u_dom.length <= tol or v_dom.length <= tol:
        raise PreconditionError(
            f"Slab domain is degenerate (u length {u_dom.length:g}, v length {v_dom.length:g})."
        )
    return u_dom, v_dom


def orthogonal_lines(region, grid: StationGrid, tol: float, clip_options: dict) -> List[Line3D]:
    """One line per station, edge to edge across the domain, clipped to the slab."""
    us, vs = grid.u_stations, grid.v_stations
    lines = []
    for u in us:
        line = Line3D.between(region.point_at(u, vs[0]), region.point_at(u, vs[-1]))
        lines.extend(clip_line(line, region, tol, **clip_options))
    for v in vs:
        line = Line3D.between(region.point_at(us[0], v), region.point_at(us[-1], v))
        lines.extend(clip_line(line, region, tol, **clip_options))
    return lines


def diagonal_lines(region, grid: StationGrid, tol: float, clip_options: dict) -> List[Line3D]:
    """Both diagonals of every cell whose center is on the slab, clipped."""
    lines = []
    for cell in grid.cells():
        if not grid.center_inside(cell):
            continue
        rising = Line3D.between(region.point_at(cell.u0, cell.v0), region.point_at(cell.u1, cell.v1))
        falling = Line3D.between(region.point_at(cell.u1, cell.v0), region.point_at(cell.u0, cell.v1))
        lines.extend(clip_line(rising, region, tol, **clip_options))
        lines.extend(clip_line(falling, region, tol, **clip_options))
    return lines


def generate_slab_grid(
    region,
    control_points: Iterable,
    unit_system: UnitSystem = UnitSystem.METRIC,
    spacing: Optional[float] = None,
    add_diagonals: bool = False,
    tol: float = 1e-4,
    config: Optional[GridConfig] = None,
) -> SlabGridResult:
    """
    Generate the slab mesh and tie lines.

    Parameters:
    -----------
    region : PlanarRegion or shapely Polygon
        The trimmed slab face. A bare polygon is taken to lie on z = 0.
    control_points : iterable of points
        Support locations (2D or 3D). At least one is required; points off
        the slab are ignored.
    unit_system : UnitSystem or str
        Selects the default spacing (1000 metric, 48 imperial)
    spacing : float, optional
        Explicit grid spacing, overrides the unit default
    add_diagonals : bool
        Also generate both diagonals of every cell
    tol : float
        Model tolerance
    config : GridConfig, optional
        Algorithm constants and variant switches

    Returns:
    --------
    SlabGridResult

    Raises:
    -------
    InvalidArgumentError
        Missing region, no control points, bad spacing or tolerance
    PreconditionError
        Region is not a single bounded planar face
    GeometryConstructionError
        No mesh face could be built
    """
    config = (config or DEFAULT_CONFIG).validate()
    region = _coerce_region(region)
    points = _coerce_control_points(control_points)
    tol = _check_tolerance(tol)
    step = resolve_spacing(unit_system, spacing)
    u_dom, v_dom = _checked_domain(region, tol)

    control = integrate_control_points(region, points, step, tol, config)
    if config.snap_to_control_points:
        u_pivots, v_pivots = control_point_pivots(control)
    else:
        u_pivots, v_pivots = [], []

    station_options = dict(tol=tol, max_spans=config.max_spans, snap_fraction=config.snap_fraction)
    us = build_stations(u_dom.length, step, u_pivots, start=u_dom.t0, **station_options)
    vs = build_stations(v_dom.length, step, v_pivots, start=v_dom.t0, **station_options)

    grid = StationGrid.build(region, us, vs, tol)
    clip_options = config.clip_options()

    ortho = orthogonal_lines(region, grid, tol, clip_options)
    connectors = []
    if config.connect_control_points:
        connectors = connect_control_points(region, control, grid, step, tol, config)
    diagonals = diagonal_lines(region, grid, tol, clip_options) if add_diagonals else []

    mesh = build_grid_mesh(grid, control, tol, config)
    if mesh.n_faces == 0:
        raise GeometryConstructionError(
            f"No grid cell lies fully on the slab at spacing {step:g}; try a smaller spacing."
        )

    result = SlabGridResult(
        mesh=mesh,
        orthogonal_lines=ortho + connectors,
        diagonal_lines=diagonals,
        connector_lines=connectors,
        u_stations=us,
        v_stations=vs,
        control_points=control,
        spacing=step,
    )
    logger.info(
        "Slab grid: %dx%d stations, %d faces, %d orthogonal, %d diagonal, %d/%d control points",
        len(us), len(vs), mesh.n_faces, len(result.orthogonal_lines), len(diagonals),
        len(result.accepted_control_points), len(control),
    )
    return result
