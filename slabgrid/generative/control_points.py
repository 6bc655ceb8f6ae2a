# slabgrid/generative/control_points.py
"""
CONTROL POINT INTEGRATOR: Columns and Walls Shape the Grid
==========================================================

PURPOSE:
--------
A slab grid should have a node where the slab sits on a column. Control
points are the support locations supplied by the caller. This module:

    1. Registers each point on the slab
       - closest region parameter (u, v)
       - plane projection, used when it is within projection_fraction * spacing
         of the input; otherwise the surface point at (u, v)
    2. Accepts the registered point only if it classifies inside-or-on at
       control_tol_factor * tol. Rejected points are kept in the report but
       take no further part.
    3. Hands the accepted (u, v) to the station builder as pivots.
    4. After the stations are final, ties each accepted point to its nearest
       inside grid nodes with short connector lines.

ENGINEERING CONTEXT:
--------------------
A connector that crosses an opening is not a load path. A connector whose
clipped piece falls short of connector_coverage of its length is dropped
rather than shortened, so every connector in the result is a real tie.
"""

import logging
from typing import Iterable, List, Tuple

import numpy as np
from scipy.spatial import cKDTree

from ..config import DEFAULT_CONFIG, GridConfig
from ..kernel.classify import classify_point
from ..kernel.clip import clip_line
from ..kernel.line import Line3D
from ..kernel.region import as_point
from ..model import ControlPoint
from .grid import StationGrid

logger = logging.getLogger(__name__)


def register_control_point(
    region,
    point,
    spacing: float,
    tol: float,
    config: GridConfig = DEFAULT_CONFIG,
) -> ControlPoint:
    """Project one input point onto the region and classify it."""
    source = as_point(point)
    u, v = region.closest_parameter(source)
    surface_pt = np.asarray(region.point_at(u, v), dtype=float)
    projected = np.asarray(region.project(source), dtype=float)

    if np.linalg.norm(projected - source) < config.projection_fraction * spacing:
        position = projected
    else:
        position = surface_pt

    containment = classify_point(region, position, config.control_tol_factor * tol)
    return ControlPoint(
        source=tuple(source.tolist()),
        u=float(u),
        v=float(v),
        projected=tuple(projected.tolist()),
        position=tuple(position.tolist()),
        accepted=containment.is_inside_or_on,
    )


def integrate_control_points(
    region,
    points: Iterable,
    spacing: float,
    tol: float,
    config: GridConfig = DEFAULT_CONFIG,
) -> List[ControlPoint]:
    """
    Register every input point, in input order.

    A point that lands within vertex_merge_factor * tol of an earlier
    accepted point is rejected as a duplicate, so no two control point
    vertices coincide.
    """
    merge_dist = config.vertex_merge_factor * tol
    registered = []
    accepted_positions = []

    for point in points:
        cp = register_control_point(region, point, spacing, tol, config)
        pos = np.asarray(cp.position)

        if cp.accepted and any(np.linalg.norm(pos - q) < merge_dist for q in accepted_positions):
            logger.debug("Control point %s duplicates an earlier one, ignored", cp.source)
            cp = ControlPoint(cp.source, cp.u, cp.v, cp.projected, cp.position, accepted=False)
        elif not cp.accepted:
            logger.debug("Control point %s is off the slab, ignored", cp.source)
        else:
            accepted_positions.append(pos)

        registered.append(cp)

    return registered


def control_point_pivots(control_points: Iterable[ControlPoint]) -> Tuple[List[float], List[float]]:
    """(u pivots, v pivots) of the accepted control points."""
    accepted = [cp for cp in control_points if cp.accepted]
    return [cp.u for cp in accepted], [cp.v for cp in accepted]


def connect_control_points(
    region,
    control_points: Iterable[ControlPoint],
    grid: StationGrid,
    spacing: float,
    tol: float,
    config: GridConfig = DEFAULT_CONFIG,
) -> List[Line3D]:
    """
    Connector lines from each accepted control point to nearby grid nodes.

    Candidates are inside nodes within connection_fraction * spacing and
    farther than min_connection_factor * tol; the nearest max_connections
    are tried, and each connector survives only if a single clipped piece
    covers connector_coverage of its length.
    """
    accepted = [cp for cp in control_points if cp.accepted]
    keys = grid.inside_nodes()
    if not accepted or not keys or config.max_connections == 0:
        return []

    node_pts = np.array([grid.points[k] for k in keys])
    tree = cKDTree(node_pts)
    radius = config.connection_fraction * spacing
    min_dist = config.min_connection_factor * tol
    clip_options = config.clip_options()

    connectors = []
    for cp in accepted:
        pos = np.asarray(cp.position)
        nearby = tree.query_ball_point(pos, radius)
        candidates = sorted(
            (float(np.linalg.norm(node_pts[k] - pos)), k) for k in nearby
        )
        candidates = [(d, k) for d, k in candidates if d > min_dist][:config.max_connections]

        for _, k in candidates:
            line = Line3D.between(pos, node_pts[k])
            pieces = clip_line(line, region, tol, **clip_options)
            kept = [p for p in pieces if p.length >= config.connector_coverage * line.length]
            if not kept:
                logger.debug("Connector from %s to node %s interrupted, dropped", cp.position, keys[k])
            connectors.extend(kept)

    return connectors
