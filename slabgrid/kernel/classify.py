# slabgrid/kernel/classify.py
"""
POINT CLASSIFIER: Inside, On, or Outside the Slab
=================================================

The single containment policy used by every other component:

    1. INSIDE       if the region reports strict interior containment at tol
    2. ON_BOUNDARY  else if the nearest boundary point, searched out to
                    search_factor * tol, lies within accept_factor * tol
    3. OUTSIDE      otherwise

The search radius is looser than the acceptance radius so solver noise near
the edge does not turn into a missed boundary hit.

Classification fails closed: if the region raises while answering, the
point is OUTSIDE. A failed query never puts geometry into the result.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)

SEARCH_FACTOR = 5.0
ACCEPT_FACTOR = 2.0


class Containment(Enum):
    INSIDE = "inside"
    ON_BOUNDARY = "on_boundary"
    OUTSIDE = "outside"

    @property
    def is_inside_or_on(self) -> bool:
        return self is not Containment.OUTSIDE


def classify_point(
    region,
    point,
    tol: float,
    search_factor: float = SEARCH_FACTOR,
    accept_factor: float = ACCEPT_FACTOR,
) -> Containment:
    """
    Classify a world point against a trimmed planar region.

    Parameters:
    -----------
    region : PlanarRegion (or anything with the same two queries)
        Must provide is_point_inside(point, tol, strict) and
        closest_boundary_point(point, max_distance) -> (point, distance, found)
    point : array-like
        World coordinates
    tol : float
        Model tolerance

    Returns:
    --------
    Containment
    """
    try:
        if region.is_point_inside(point, tol, strict=True):
            return Containment.INSIDE
        _, distance, found = region.closest_boundary_point(point, search_factor * tol)
    except Exception as e:
        logger.debug("Classification query failed at %s, treating as outside: %s", point, e)
        return Containment.OUTSIDE

    if found and distance <= accept_factor * tol:
        return Containment.ON_BOUNDARY
    return Containment.OUTSIDE


def is_inside_or_on(region, point, tol: float) -> bool:
    return classify_point(region, point, tol).is_inside_or_on
