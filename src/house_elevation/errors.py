# src/house_elevation/errors.py
"""
Module: errors.py
Responsibilities:
- Define the caller-contract errors raised by the flood-risk core
"""


class HouseElevationError(ValueError):
    """Base class for invalid inputs to the house elevation model."""


class InvalidElevationError(HouseElevationError):
    """Requested elevation lies outside the costable range."""


class OutOfRangeError(HouseElevationError):
    """Height outside the domain of the elevation cost curve."""


class LengthMismatchError(HouseElevationError):
    """SLR trajectory and evaluation years have different lengths."""


class DuplicateDepthError(HouseElevationError):
    """Depth-damage control points share a depth."""
