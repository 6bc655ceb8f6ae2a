# slabgrid/kernel/clip.py
"""
LINE CLIPPER: Keep Only the Parts of a Tie That Lie on the Slab
===============================================================

Two strategies:

EXACT (default)
    Intersect the line with every boundary ring, add the end parameters
    0 and 1, sort and de-duplicate. Each piece between consecutive
    parameters is kept if its midpoint classifies inside-or-on. Pieces
    never span a hole because every hole crossing is a split parameter.

SAMPLED (fallback)
    Classify points spaced at max(min_samples, L / (pitch_factor * tol))
    samples along the line and join each run of >= 2 consecutive inside
    samples into one segment, first sample to last.

    KNOWN APPROXIMATION: a hole narrower than the sampling pitch that
    falls between two samples is bridged. Use EXACT when that matters.

The sampled strategy is used when configured, or when the region cannot
answer intersect_line().
"""

import logging
from typing import List, Literal

from .classify import classify_point
from .line import Line3D

logger = logging.getLogger(__name__)

ClipStrategy = Literal["exact", "sampled"]


def clip_line(
    line: Line3D,
    region,
    tol: float,
    strategy: ClipStrategy = "exact",
    pitch_factor: float = 50.0,
    min_samples: int = 20,
    max_samples: int = 5000,
) -> List[Line3D]:
    """
    Clip a straight line to a trimmed planar region.

    Returns the inside sub-segments in order along the line. A line shorter
    than `tol` yields an empty list.
    """
    if line.length < tol:
        return []
    if strategy == "sampled":
        return clip_line_sampled(line, region, tol, pitch_factor, min_samples, max_samples)
    if strategy != "exact":
        raise ValueError(f"Unknown clip strategy: {strategy}")

    intersect = getattr(region, "intersect_line", None)
    if intersect is None:
        logger.warning("Region has no intersect_line(); using sampled clipping")
        return clip_line_sampled(line, region, tol, pitch_factor, min_samples, max_samples)
    try:
        hits = intersect(line.start, line.end, tol)
    except Exception as e:
        logger.warning("Boundary intersection failed (%s); using sampled clipping", e)
        return clip_line_sampled(line, region, tol, pitch_factor, min_samples, max_samples)

    return _split_at_parameters(line, region, tol, hits)


def _split_at_parameters(line: Line3D, region, tol: float, hits) -> List[Line3D]:
    length = line.length
    params = sorted([0.0, 1.0] + [t for t in hits if 0.0 <= t <= 1.0])

    # Collapse parameters closer than tol in world distance
    kept = [0.0]
    for t in params[1:]:
        if (t - kept[-1]) * length > tol:
            kept.append(t)
    kept[-1] = 1.0

    segments = []
    for t0, t1 in zip(kept[:-1], kept[1:]):
        mid = line.point_at(0.5 * (t0 + t1))
        if classify_point(region, mid, tol).is_inside_or_on:
            segments.append(Line3D.between(line.point_at(t0), line.point_at(t1)))
    return segments


def clip_line_sampled(
    line: Line3D,
    region,
    tol: float,
    pitch_factor: float = 50.0,
    min_samples: int = 20,
    max_samples: int = 5000,
) -> List[Line3D]:
    """Sampled clipping; see the module docstring for its hole-bridging limit."""
    length = line.length
    if length < tol:
        return []

    n = max(min_samples, int(length / (tol * pitch_factor)))
    n = min(n, max_samples)

    segments = []
    run = []
    for i in range(n + 1):
        pt = line.point_at(i / n)
        if classify_point(region, pt, tol).is_inside_or_on:
            run.append(pt)
            continue
        if len(run) >= 2:
            segments.append(Line3D.between(run[0], run[-1]))
        run = []
    if len(run) >= 2:
        segments.append(Line3D.between(run[0], run[-1]))
    return segments
