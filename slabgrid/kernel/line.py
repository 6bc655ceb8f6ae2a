# slabgrid/kernel/line.py
"""Line3D: a straight segment between two world points."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

Point3 = Tuple[float, float, float]


def _tuple3(p) -> Point3:
    x, y, z = (float(c) for c in p)
    return (x, y, z)


@dataclass(frozen=True)
class Line3D:
    """
    A straight segment between two world points.

    Coordinates are stored as tuples so lines are hashable and can be
    compared directly in tests.
    """
    start: Point3
    end: Point3

    @classmethod
    def between(cls, a, b) -> "Line3D":
        return cls(_tuple3(a), _tuple3(b))

    @property
    def length(self) -> float:
        return float(np.linalg.norm(np.subtract(self.end, self.start)))

    @property
    def midpoint(self) -> np.ndarray:
        return self.point_at(0.5)

    def point_at(self, t: float) -> np.ndarray:
        """Point at normalized parameter t (0 = start, 1 = end)."""
        a = np.asarray(self.start, dtype=float)
        b = np.asarray(self.end, dtype=float)
        return a + t * (b - a)
