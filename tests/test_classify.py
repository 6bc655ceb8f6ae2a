# tests/test_classify.py
"""
Test the inside / on-boundary / outside classifier.
"""

import pytest
from shapely.geometry import Polygon

from slabgrid.kernel.classify import Containment, classify_point, is_inside_or_on
from slabgrid.kernel.region import PlanarRegion

TOL = 1e-3


@pytest.fixture
def square():
    return PlanarRegion.from_polygon(Polygon([(0, 0), (10, 0), (10, 10), (0, 10)]))


class BrokenRegion:
    """A region whose queries always fail."""

    def is_point_inside(self, point, tol, strict=True):
        raise RuntimeError("kernel failure")

    def closest_boundary_point(self, point, max_distance):
        raise RuntimeError("kernel failure")


def test_interior_point_is_inside(square):
    assert classify_point(square, (5, 5, 0), TOL) is Containment.INSIDE


def test_point_on_edge_is_on_boundary(square):
    assert classify_point(square, (10, 5, 0), TOL) is Containment.ON_BOUNDARY
    assert classify_point(square, (0, 0, 0), TOL) is Containment.ON_BOUNDARY


def test_acceptance_band_outside_the_edge(square):
    """Within 2*tol of the edge counts as on; beyond that it is outside."""
    assert classify_point(square, (10 + 1.5 * TOL, 5, 0), TOL) is Containment.ON_BOUNDARY
    assert classify_point(square, (10 + 3.0 * TOL, 5, 0), TOL) is Containment.OUTSIDE
    assert classify_point(square, (10 + 10.0 * TOL, 5, 0), TOL) is Containment.OUTSIDE


def test_far_point_is_outside(square):
    assert classify_point(square, (50, 50, 0), TOL) is Containment.OUTSIDE


def test_point_in_hole_is_outside():
    region = PlanarRegion.from_polygon(
        Polygon([(0, 0), (10, 0), (10, 10), (0, 10)], [[(4, 4), (6, 4), (6, 6), (4, 6)]])
    )
    assert classify_point(region, (5, 5, 0), TOL) is Containment.OUTSIDE
    assert classify_point(region, (4, 5, 0), TOL) is Containment.ON_BOUNDARY


def test_failed_query_fails_closed():
    assert classify_point(BrokenRegion(), (0, 0, 0), TOL) is Containment.OUTSIDE
    print("✓ Kernel failure classifies as outside")


def test_is_inside_or_on(square):
    assert is_inside_or_on(square, (5, 5, 0), TOL)
    assert is_inside_or_on(square, (10, 5, 0), TOL)
    assert not is_inside_or_on(square, (11, 5, 0), TOL)
    assert Containment.ON_BOUNDARY.is_inside_or_on
    assert not Containment.OUTSIDE.is_inside_or_on
