# slabgrid/config.py
"""
Grid generation configuration and defaults.

The unit system is the only unit-aware input: it supplies the default grid
spacing when the caller gives none. Every other constant is a fraction or
multiple of spacing or tolerance, so it holds in any unit.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from .kernel.errors import InvalidArgumentError


class UnitSystem(str, Enum):
    """Measurement system of the model; selects the default spacing."""
    METRIC = "metric"       # millimetres
    IMPERIAL = "imperial"   # inches

    @property
    def default_spacing(self) -> float:
        return 1000.0 if self is UnitSystem.METRIC else 48.0

    @classmethod
    def parse(cls, text) -> "UnitSystem":
        """
        Read a unit selector such as "Metric", "Imperial" or "US".

        Text starting with "u" or "i" (any case) is imperial; everything
        else, including None, is metric.
        """
        if isinstance(text, UnitSystem):
            return text
        key = str(text or "").strip().lower()
        if key.startswith(("u", "i")):
            return cls.IMPERIAL
        return cls.METRIC


@dataclass(frozen=True)
class GridConfig:
    """
    Algorithm constants for slab grid generation.

    Stations:
    ---------
    max_spans : int
        Upper bound on regular spans per axis (bounds cost for tiny spacing)
    snap_fraction : float
        A control point pivot closer than snap_fraction * span to an
        existing station is considered already represented

    Control points:
    ---------------
    projection_fraction : float
        Use the plane projection when it is closer than
        projection_fraction * spacing to the input point
    control_tol_factor : float
        Control points are accepted at control_tol_factor * tol
    connection_fraction : float
        Connector search radius as a fraction of spacing
    max_connections : int
        Connectors per control point
    min_connection_factor : float
        Grid nodes within min_connection_factor * tol are not connected
    connector_coverage : float
        A connector is kept only if one clipped piece covers this fraction
        of its length

    Mesh:
    -----
    vertex_merge_factor : float
        Grid nodes within vertex_merge_factor * tol of a control point
        vertex reuse that vertex

    Clipping:
    ---------
    clip_strategy : 'exact' or 'sampled'
    sample_pitch_factor, min_samples, max_samples : sampled clipping density

    Variants:
    ---------
    snap_to_control_points : bool
        Insert control point pivots into the station sets
    connect_control_points : bool
        Generate connector lines from control points to nearby nodes
    """
    max_spans: int = 200
    snap_fraction: float = 0.4

    projection_fraction: float = 0.2
    control_tol_factor: float = 5.0
    connection_fraction: float = 0.8
    max_connections: int = 4
    min_connection_factor: float = 10.0
    connector_coverage: float = 0.8

    vertex_merge_factor: float = 20.0

    clip_strategy: Literal['exact', 'sampled'] = 'exact'
    sample_pitch_factor: float = 50.0
    min_samples: int = 20
    max_samples: int = 5000

    snap_to_control_points: bool = True
    connect_control_points: bool = True

    def clip_options(self) -> dict:
        """Keyword arguments for clip_line()."""
        return {
            'strategy': self.clip_strategy,
            'pitch_factor': self.sample_pitch_factor,
            'min_samples': self.min_samples,
            'max_samples': self.max_samples,
        }

    def validate(self) -> "GridConfig":
        if self.max_spans < 1:
            raise InvalidArgumentError(f"max_spans must be >= 1, got {self.max_spans}")
        if self.max_connections < 0:
            raise InvalidArgumentError(f"max_connections must be >= 0, got {self.max_connections}")
        if self.min_samples < 1 or self.max_samples < self.min_samples:
            raise InvalidArgumentError(
                f"Need 1 <= min_samples <= max_samples, got {self.min_samples}, {self.max_samples}"
            )
        for name in ('snap_fraction', 'projection_fraction', 'connection_fraction', 'connector_coverage'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidArgumentError(f"{name} must be within [0, 1], got {value}")
        for name in ('control_tol_factor', 'min_connection_factor', 'vertex_merge_factor', 'sample_pitch_factor'):
            value = getattr(self, name)
            if not value > 0.0:
                raise InvalidArgumentError(f"{name} must be positive, got {value}")
        if self.clip_strategy not in ('exact', 'sampled'):
            raise InvalidArgumentError(f"Unknown clip_strategy: {self.clip_strategy}")
        return self


def resolve_spacing(unit: UnitSystem, spacing: Optional[float] = None) -> float:
    """Explicit spacing if given, else the unit system default."""
    step = UnitSystem.parse(unit).default_spacing if spacing is None else spacing
    try:
        step = float(step)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Invalid spacing: {spacing!r}") from e
    if not math.isfinite(step) or step <= 0:
        raise InvalidArgumentError(f"Invalid spacing: {spacing!r}. Spacing must be positive.")
    return step


# Default configuration instance (never mutated)
DEFAULT_CONFIG = GridConfig()
