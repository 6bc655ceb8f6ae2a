# slabgrid/generative/stations.py
"""
STATION BUILDER: Where the Grid Lines Go Along One Axis
=======================================================

A station is a parameter value at which a grid line is placed.

    1. Regular stations split the domain into round(L / spacing) equal
       spans, clamped to [1, max_spans].
    2. Each pivot (a control point parameter) is inserted unless an
       existing station is within snap_fraction * span of it. Stations
       inserted by earlier pivots count as existing.

Example (L=4000, spacing=1000, pivot 2500):
    regular:   0   1000   2000        3000   4000
    pivot:                      2500                  -> 500 > 400, inserted
    result:    0   1000   2000  2500  3000   4000

A pivot at 2100 would snap to 2000 (100 <= 400) and add nothing.
"""

import bisect
import logging
from typing import Iterable

import numpy as np

from ..kernel.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def regular_span_count(domain_length: float, spacing: float, max_spans: int = 200) -> int:
    """Number of equal spans, round(L / spacing) clamped to [1, max_spans]."""
    n = int(round(domain_length / spacing))
    return max(1, min(n, max_spans))


def build_stations(
    domain_length: float,
    spacing: float,
    pivots: Iterable[float] = (),
    tol: float = 1e-4,
    start: float = 0.0,
    max_spans: int = 200,
    snap_fraction: float = 0.4,
) -> np.ndarray:
    """
    Build the ascending station array for one parametric axis.

    Parameters:
    -----------
    domain_length : float
        Length of the parameter interval
    spacing : float
        Target distance between regular stations
    pivots : iterable of float
        Parameters to force into the set (control point u or v values).
        Pivots outside [start, start + domain_length] by more than tol
        are ignored; those within tol are clamped onto the domain.
    tol : float
        Model tolerance; stations are never closer than this
    start : float
        Parameter at the start of the domain

    Returns:
    --------
    np.ndarray
        Strictly increasing station parameters, first = start,
        last = start + domain_length
    """
    if not domain_length > 0:
        raise InvalidArgumentError(f"Domain length must be positive, got {domain_length}")
    if not spacing > 0:
        raise InvalidArgumentError(f"Invalid spacing: {spacing}")

    n = regular_span_count(domain_length, spacing, max_spans)
    end = start + domain_length
    stations = np.linspace(start, end, n + 1).tolist()

    span = domain_length / n
    snap = max(snap_fraction * span, tol)

    for p in pivots:
        p = float(p)
        if p < start - tol or p > end + tol:
            logger.debug("Pivot %.6g outside domain [%.6g, %.6g], ignored", p, start, end)
            continue
        p = min(max(p, start), end)

        i = bisect.bisect_left(stations, p)
        nearest = min(abs(stations[k] - p) for k in (i - 1, i) if 0 <= k < len(stations))
        if nearest <= snap:
            continue
        stations.insert(i, p)

    return np.array(stations, dtype=float)
