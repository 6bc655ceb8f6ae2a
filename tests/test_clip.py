# tests/test_clip.py
"""
Test line clipping against a trimmed region.

WHY THESE TESTS?
---------------
A clipped tie must never cross an opening. The exact clipper guarantees
that; the sampled clipper is allowed to bridge a hole narrower than its
pitch, and the tests pin down both behaviors.
"""

import logging

import pytest
from shapely.geometry import Polygon

from slabgrid.kernel.clip import clip_line, clip_line_sampled
from slabgrid.kernel.line import Line3D
from slabgrid.kernel.region import PlanarRegion

TOL = 1e-4


@pytest.fixture
def square_with_hole():
    return PlanarRegion.from_polygon(
        Polygon([(0, 0), (10, 0), (10, 10), (0, 10)], [[(4, 4), (6, 4), (6, 6), (4, 6)]])
    )


@pytest.fixture
def narrow_hole_strip():
    """A 10 x 2 strip with a slot 0.3 wide, narrower than the sampling pitch."""
    outer = [(0, -1), (10, -1), (10, 1), (0, 1)]
    slot = [(2.1, -0.15), (2.4, -0.15), (2.4, 0.15), (2.1, 0.15)]
    return PlanarRegion.from_polygon(Polygon(outer, [slot]))


class NoIntersectRegion:
    """Exposes only the classification queries of a region."""

    def __init__(self, region):
        self._region = region

    def is_point_inside(self, point, tol, strict=True):
        return self._region.is_point_inside(point, tol, strict)

    def closest_boundary_point(self, point, max_distance):
        return self._region.closest_boundary_point(point, max_distance)


class FailingIntersectRegion(NoIntersectRegion):
    def intersect_line(self, start, end, tol):
        raise RuntimeError("intersection failed")


class CountingRegion(NoIntersectRegion):
    def __init__(self, region):
        super().__init__(region)
        self.calls = 0

    def is_point_inside(self, point, tol, strict=True):
        self.calls += 1
        return super().is_point_inside(point, tol, strict)


class TestExactClip:

    def test_line_fully_inside_is_unchanged(self, square_with_hole):
        line = Line3D.between((1, 2, 0), (9, 2, 0))
        pieces = clip_line(line, square_with_hole, TOL)
        assert pieces == [line]

    def test_line_across_hole_is_split(self, square_with_hole):
        line = Line3D.between((0, 5, 0), (10, 5, 0))
        pieces = clip_line(line, square_with_hole, TOL)

        assert len(pieces) == 2, f"Expected 2 pieces around the hole, got {len(pieces)}"
        assert pieces[0].start == pytest.approx((0, 5, 0))
        assert pieces[0].end == pytest.approx((4, 5, 0))
        assert pieces[1].start == pytest.approx((6, 5, 0))
        assert pieces[1].end == pytest.approx((10, 5, 0))

    def test_overhanging_line_is_trimmed(self, square_with_hole):
        line = Line3D.between((-5, 2, 0), (15, 2, 0))
        pieces = clip_line(line, square_with_hole, TOL)
        assert len(pieces) == 1
        assert pieces[0].start == pytest.approx((0, 2, 0))
        assert pieces[0].end == pytest.approx((10, 2, 0))

    def test_line_along_edge_is_kept(self, square_with_hole):
        line = Line3D.between((0, 0, 0), (10, 0, 0))
        assert clip_line(line, square_with_hole, TOL) == [line]

    def test_line_outside_gives_nothing(self, square_with_hole):
        line = Line3D.between((-5, -5, 0), (-1, -1, 0))
        assert clip_line(line, square_with_hole, TOL) == []

    def test_line_shorter_than_tolerance(self, square_with_hole):
        line = Line3D.between((5, 1, 0), (5, 1 + TOL / 2, 0))
        assert clip_line(line, square_with_hole, TOL) == []

    def test_narrow_hole_is_not_bridged(self, narrow_hole_strip):
        line = Line3D.between((0, 0, 0), (10, 0, 0))
        pieces = clip_line(line, narrow_hole_strip, 0.05)
        assert len(pieces) == 2
        assert pieces[0].end[0] == pytest.approx(2.1)
        assert pieces[1].start[0] == pytest.approx(2.4)

    def test_unknown_strategy(self, square_with_hole):
        line = Line3D.between((1, 1, 0), (9, 1, 0))
        with pytest.raises(ValueError, match="Unknown clip strategy"):
            clip_line(line, square_with_hole, TOL, strategy="bogus")


class TestSampledClip:

    def test_split_around_wide_hole(self, square_with_hole):
        line = Line3D.between((0, 5, 0), (10, 5, 0))
        pieces = clip_line(line, square_with_hole, 1e-3, strategy="sampled")
        assert len(pieces) == 2
        # Runs end at the last inside sample, never past the hole edge
        assert pieces[0].end[0] <= 4.0 + 1e-9
        assert pieces[1].start[0] >= 6.0 - 1e-9

    def test_narrow_hole_is_bridged(self, narrow_hole_strip):
        """Known approximation: a slot between two samples is not seen."""
        line = Line3D.between((0, 0, 0), (10, 0, 0))
        pieces = clip_line(line, narrow_hole_strip, 0.05, strategy="sampled")
        assert len(pieces) == 1
        assert pieces[0].length == pytest.approx(10.0)

    def test_sample_count_is_capped(self, square_with_hole):
        region = CountingRegion(square_with_hole)
        line = Line3D.between((1, 2, 0), (9, 2, 0))
        pieces = clip_line_sampled(line, region, 1e-6, pitch_factor=50.0, min_samples=20, max_samples=100)
        assert region.calls == 101
        assert len(pieces) == 1

    def test_min_samples_for_short_lines(self, square_with_hole):
        region = CountingRegion(square_with_hole)
        line = Line3D.between((1, 2, 0), (2, 2, 0))
        clip_line_sampled(line, region, 1.0, min_samples=20)
        assert region.calls == 21


class TestFallback:

    def test_region_without_intersection_uses_sampling(self, narrow_hole_strip, caplog):
        line = Line3D.between((0, 0, 0), (10, 0, 0))
        with caplog.at_level(logging.WARNING, logger="slabgrid"):
            pieces = clip_line(line, NoIntersectRegion(narrow_hole_strip), 0.05)
        assert len(pieces) == 1
        assert "sampled" in caplog.text

    def test_failed_intersection_uses_sampling(self, square_with_hole, caplog):
        line = Line3D.between((0, 5, 0), (10, 5, 0))
        with caplog.at_level(logging.WARNING, logger="slabgrid"):
            pieces = clip_line(line, FailingIntersectRegion(square_with_hole), 1e-3)
        assert len(pieces) == 2
        assert "intersection failed" in caplog.text
