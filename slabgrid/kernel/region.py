# slabgrid/kernel/region.py
"""
PLANAR REGION: The Geometry Kernel Behind the Grid
===================================================

PURPOSE:
--------
Everything the grid generator knows about the slab comes through this class.
A PlanarRegion is a trimmed planar face:

    - a plane frame (origin, x_axis, y_axis, normal) in world space
    - a shapely Polygon in plane-local (u, v) coordinates, whose exterior is
      the slab edge and whose interiors are openings (shafts, stairs, voids)

Because the frame is orthonormal, one parameter unit is one world length
unit. A grid spacing of 1000 in u is 1000 mm on the slab.

QUERIES:
--------
    domain                  (Interval u, Interval v) from the polygon bounds
    point_at(u, v)          parameter -> world point
    closest_parameter(p)    world point -> (u, v), clamped to the domain
    project(p)              closest point on the (untrimmed) plane
    is_point_inside(...)    containment test with tolerance and strictness
    closest_boundary_point  nearest point on any boundary ring, with search radius
    intersect_line(...)     ordered hit parameters of a segment with the boundary

The region is read-only: no query modifies the polygon or the frame.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import LineString, MultiPolygon, Point, Polygon
from shapely.ops import nearest_points
from shapely.validation import explain_validity

from .errors import InvalidArgumentError, PreconditionError


@dataclass(frozen=True)
class Interval:
    """A closed parameter interval [t0, t1]."""
    t0: float
    t1: float

    @property
    def length(self) -> float:
        return self.t1 - self.t0

    def clamp(self, t: float) -> float:
        return min(max(t, self.t0), self.t1)


def as_point(p) -> np.ndarray:
    """
    Coerce a 2D or 3D coordinate sequence to a float array of shape (3,).

    2D input is lifted to z=0.
    """
    try:
        arr = np.asarray(p, dtype=float).reshape(-1)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Expected a 2D or 3D point, got {p!r}") from e
    if arr.shape == (2,):
        arr = np.append(arr, 0.0)
    if arr.shape != (3,) or not np.all(np.isfinite(arr)):
        raise InvalidArgumentError(f"Expected a finite 2D or 3D point, got {p!r}")
    return arr


def _as_point_array(points: Sequence) -> np.ndarray:
    return np.array([as_point(p) for p in points], dtype=float).reshape(-1, 3)


def _hit_coords(geom) -> List[Tuple[float, float]]:
    # Points, overlap segments and collections all reduce to vertex coordinates
    if geom.is_empty:
        return []
    if hasattr(geom, "geoms"):
        coords = []
        for part in geom.geoms:
            coords.extend(_hit_coords(part))
        return coords
    return [(c[0], c[1]) for c in geom.coords]


class PlanarRegion:
    """
    A bounded planar face with zero or more holes.

    Parameters:
    -----------
    polygon : shapely Polygon (or single-part MultiPolygon)
        Face outline in plane-local (u, v) coordinates
    origin : point
        World position of local (0, 0)
    x_axis, y_axis : vectors
        In-plane directions. They are normalized, and y_axis is
        re-orthogonalized against x_axis.

    Raises:
    -------
    PreconditionError
        If the polygon is not exactly one valid, non-degenerate face, or the
        axes do not span a plane.
    """

    def __init__(
        self,
        polygon,
        origin=(0.0, 0.0, 0.0),
        x_axis=(1.0, 0.0, 0.0),
        y_axis=(0.0, 1.0, 0.0),
    ):
        if isinstance(polygon, MultiPolygon):
            if len(polygon.geoms) != 1:
                raise PreconditionError(
                    f"Slab region must have exactly 1 face, got {len(polygon.geoms)}."
                )
            polygon = polygon.geoms[0]
        if not isinstance(polygon, Polygon):
            kind = getattr(polygon, "geom_type", type(polygon).__name__)
            raise PreconditionError(f"Slab region must be a bounded planar face, got {kind}.")
        if polygon.is_empty or polygon.area <= 0.0:
            raise PreconditionError("Slab region has no area.")
        if not polygon.is_valid:
            raise PreconditionError(
                f"Slab region is not a valid face: {explain_validity(polygon)}"
            )

        x = as_point(x_axis)
        y = as_point(y_axis)
        x_len = np.linalg.norm(x)
        if x_len == 0.0:
            raise PreconditionError("Plane x axis has zero length.")
        x = x / x_len
        y = y - np.dot(y, x) * x
        y_len = np.linalg.norm(y)
        if y_len < 1e-12:
            raise PreconditionError("Plane axes are parallel; they do not span a plane.")
        y = y / y_len

        self.origin = as_point(origin)
        self.x_axis = x
        self.y_axis = y
        self.normal = np.cross(x, y)
        self.polygon = polygon
        self._boundary = polygon.boundary

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_polygon(cls, polygon, elevation: float = 0.0) -> "PlanarRegion":
        """Region on the horizontal plane z = elevation, with u=x and v=y."""
        return cls(polygon, origin=(0.0, 0.0, elevation))

    @classmethod
    def from_boundary(
        cls,
        outer: Sequence,
        holes: Sequence[Sequence] = (),
        tol: float = 1e-4,
    ) -> "PlanarRegion":
        """
        Build a region from world-space boundary loops.

        A best-fit plane is computed through every vertex (SVD of the
        centered coordinates). Horizontal slabs keep world X/Y as their
        parameter axes; inclined slabs take the longest outer edge as u.

        Raises:
        -------
        PreconditionError
            If any loop has fewer than 3 vertices, any vertex lies farther
            than `tol` from the fitted plane, or the loops do not form a face.
        """
        outer_pts = _as_point_array(outer)
        if len(outer_pts) < 3:
            raise PreconditionError("Slab boundary needs at least 3 vertices.")
        hole_pts = [_as_point_array(h) for h in holes]
        for k, pts in enumerate(hole_pts):
            if len(pts) < 3:
                raise PreconditionError(
                    f"Opening {k} needs at least 3 vertices, got {len(pts)}."
                )

        all_pts = np.vstack([outer_pts] + hole_pts)
        centroid = all_pts.mean(axis=0)
        _, _, vt = np.linalg.svd(all_pts - centroid)
        normal = vt[2]

        deviation = float(np.max(np.abs((all_pts - centroid) @ normal)))
        if deviation > tol:
            raise PreconditionError(
                f"Slab face is not planar within tolerance "
                f"(max deviation {deviation:.3g} > {tol:.3g})."
            )

        if abs(abs(normal[2]) - 1.0) < 1e-12:
            origin = np.array([0.0, 0.0, centroid[2]])
            x_axis = np.array([1.0, 0.0, 0.0])
            y_axis = np.array([0.0, 1.0, 0.0])
        else:
            edges = np.diff(np.vstack([outer_pts, outer_pts[:1]]), axis=0)
            longest = edges[np.argmax(np.linalg.norm(edges, axis=1))]
            x_axis = longest - np.dot(longest, normal) * normal
            y_axis = np.cross(normal, x_axis)
            origin = outer_pts[0] - np.dot(outer_pts[0] - centroid, normal) * normal

        def to_uv(pts: np.ndarray) -> List[Tuple[float, float]]:
            x = x_axis / np.linalg.norm(x_axis)
            y = y_axis / np.linalg.norm(y_axis)
            d = pts - origin
            return list(zip((d @ x).tolist(), (d @ y).tolist()))

        try:
            polygon = Polygon(to_uv(outer_pts), [to_uv(h) for h in hole_pts])
        except (ValueError, TypeError) as e:
            raise PreconditionError(f"Slab boundary does not form a face: {e}") from e
        return cls(polygon, origin=origin, x_axis=x_axis, y_axis=y_axis)

    @classmethod
    def from_corners(cls, a, b, c, d, tol: float = 1e-4) -> "PlanarRegion":
        """A single four-cornered planar patch (corners in loop order)."""
        return cls.from_boundary([a, b, c, d], tol=tol)

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    @property
    def domain(self) -> Tuple[Interval, Interval]:
        minx, miny, maxx, maxy = self.polygon.bounds
        return Interval(minx, maxx), Interval(miny, maxy)

    @property
    def boundary_curves(self) -> list:
        """Boundary rings in local coordinates, outer ring first."""
        return [self.polygon.exterior, *self.polygon.interiors]

    @property
    def hole_count(self) -> int:
        return len(self.polygon.interiors)

    def point_at(self, u: float, v: float) -> np.ndarray:
        return self.origin + u * self.x_axis + v * self.y_axis

    def to_local(self, point) -> Tuple[float, float, float]:
        """World point -> (u, v, signed height above the plane)."""
        d = as_point(point) - self.origin
        return float(d @ self.x_axis), float(d @ self.y_axis), float(d @ self.normal)

    def closest_parameter(self, point) -> Tuple[float, float]:
        u, v, _ = self.to_local(point)
        u_dom, v_dom = self.domain
        return u_dom.clamp(u), v_dom.clamp(v)

    def project(self, point) -> np.ndarray:
        p = as_point(point)
        return p - float((p - self.origin) @ self.normal) * self.normal

    # ------------------------------------------------------------------
    # Containment and intersection
    # ------------------------------------------------------------------

    def is_point_inside(self, point, tol: float, strict: bool = True) -> bool:
        """
        Containment test.

        strict=True: inside the face and farther than `tol` from every
        boundary ring. strict=False: within `tol` of the face.
        Points farther than `tol` from the plane are never inside.
        """
        u, v, h = self.to_local(point)
        if abs(h) > tol:
            return False
        p = Point(u, v)
        if strict:
            return self.polygon.contains(p) and self._boundary.distance(p) > tol
        return self.polygon.distance(p) <= tol

    def closest_boundary_point(
        self, point, max_distance: float
    ) -> Tuple[Optional[np.ndarray], float, bool]:
        """
        Nearest point on any boundary ring, searched out to `max_distance`.

        Returns (world_point, distance, found). When nothing lies within
        the search radius, world_point is None and found is False.
        """
        u, v, h = self.to_local(point)
        p = Point(u, v)
        nearest = nearest_points(p, self._boundary)[1]
        distance = math.hypot(p.distance(nearest), h)
        if distance > max_distance:
            return None, distance, False
        return self.point_at(nearest.x, nearest.y), distance, True

    def intersect_line(self, start, end, tol: float) -> List[float]:
        """
        Hit parameters (0..1 along start->end) of a segment with every boundary ring.

        Collinear overlaps contribute their end vertices. A segment that
        does not lie in the plane has no in-plane crossings and returns [].
        """
        u0, v0, h0 = self.to_local(start)
        u1, v1, h1 = self.to_local(end)
        if abs(h0) > tol or abs(h1) > tol:
            return []
        seg = LineString([(u0, v0), (u1, v1)])
        if seg.length <= tol:
            return []
        hits = seg.intersection(self._boundary)
        params = {seg.project(Point(c)) / seg.length for c in _hit_coords(hits)}
        return sorted(min(max(t, 0.0), 1.0) for t in params)

    def __repr__(self) -> str:
        u_dom, v_dom = self.domain
        return (
            f"PlanarRegion(u=[{u_dom.t0:g}, {u_dom.t1:g}], v=[{v_dom.t0:g}, {v_dom.t1:g}], "
            f"holes={self.hole_count})"
        )
