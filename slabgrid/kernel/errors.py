# slabgrid/kernel/errors.py
"""Exception taxonomy for slab grid generation.

All three are raised once, at the orchestrator boundary. Per-element problems
(a control point off the slab, a line fully outside) are not errors and never
reach this module.
"""


class SlabGridError(Exception):
    """Base class for every error raised by slabgrid."""
    pass


class InvalidArgumentError(SlabGridError, ValueError):
    """Raised when a required input is missing, empty or out of range."""
    pass


class PreconditionError(SlabGridError, RuntimeError):
    """Raised when the region is not a single bounded planar face within tolerance."""
    pass


class GeometryConstructionError(SlabGridError, RuntimeError):
    """Raised when mesh assembly produces no usable result."""
    pass
