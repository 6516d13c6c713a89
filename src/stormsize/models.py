"""Data models for storm pipe sizing.

This module contains the dataclasses that represent the entities passed
between the host model and the sizing core: pipe segments, their sized
results and the report of one sizing run.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

log = logging.getLogger(__name__)

INCHES_PER_FOOT = 12.0


class Orientation(Enum):
    HORIZONTAL = "HORIZONTAL"  # Drain sized by flow and slope
    VERTICAL = "VERTICAL"  # Leader sized by flow only


@dataclass(frozen=True)
class Point3D:
    """Represents a 3D point with x, y, z coordinates.

    Parameters
    ----------
    east : float
        X coordinate of the host model
    north : float
        Y coordinate of the host model
    altitude : float
        Z coordinate (elevation) of the host model
    """

    east: float
    north: float
    altitude: float

    def distance_2d(self, other: "Point3D") -> float:
        """Calculate the horizontal distance between two points.

        Parameters
        ----------
        other : Point3D
            Second point

        Returns
        -------
        float
            2D Euclidean distance (plan view)
        """
        dx = self.east - other.east
        dy = self.north - other.north
        return float(np.sqrt(dx**2 + dy**2))


@dataclass(frozen=True)
class SegmentInput:
    """A storm pipe segment as delivered by the host model.

    The sizing core only reads these records. ``identity`` is an opaque
    handle which is echoed into the result and never inspected.
    """

    identity: Any
    flow: float  # GPM
    elevation: float | None = None
    slope: float | None = None
    endpoints: tuple[Point3D, Point3D] | None = None

    @property
    def order_elevation(self) -> float:
        """Elevation used to approximate the flow direction.

        Falls back to the higher endpoint and finally to 0.0 when the
        host provides neither an elevation nor endpoints.
        """
        if self.elevation is not None:
            return self.elevation
        if self.endpoints is None:
            return 0.0
        start, end = self.endpoints
        return max(start.altitude, end.altitude)

    @property
    def high_point(self) -> Point3D | None:
        if self.endpoints is None:
            return None
        start, end = self.endpoints
        return start if start.altitude >= end.altitude else end

    @property
    def low_point(self) -> Point3D | None:
        if self.endpoints is None:
            return None
        start, end = self.endpoints
        return end if start.altitude >= end.altitude else start


@dataclass(frozen=True)
class ClassifiedSegment:
    """Segment with its orientation, slope and code-required diameter."""

    segment: SegmentInput
    orientation: Orientation
    slope: float
    required_diameter: float  # inch

    @property
    def identity(self) -> Any:
        return self.segment.identity

    @property
    def order_elevation(self) -> float:
        return self.segment.order_elevation


@dataclass(frozen=True)
class SegmentResult:
    """Sized segment as handed back to the host model."""

    identity: Any
    required_diameter: float  # inch, code minimum
    final_diameter: float  # inch, after the no-reduction rule
    orientation: Orientation
    slope: float = 0.0
    flow: float = 0.0

    @property
    def was_raised(self) -> bool:
        return self.final_diameter > self.required_diameter

    @property
    def final_diameter_ft(self) -> float:
        return self.final_diameter / INCHES_PER_FOOT

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary format."""
        return {
            "Id": self.identity,
            "RequiredDiameter": self.required_diameter,
            "FinalDiameter": self.final_diameter,
            "FinalDiameterFt": self.final_diameter_ft,
            "Orientation": self.orientation.value,
            "Slope": self.slope,
            "Flow": self.flow,
            "Raised": self.was_raised,
        }


@dataclass
class SizingReport:
    """Outcome of one sizing run.

    ``results`` are in flow order, ``skipped`` holds the segments whose
    flow is below the minimum or not finite and which were passed through
    unsized.
    """

    results: list[SegmentResult] = field(default_factory=list)
    skipped: list[SegmentInput] = field(default_factory=list)

    def result_by(self, identity: Any) -> SegmentResult | None:
        for result in self.results:
            if result.identity == identity:
                return result
        return None

    @property
    def raised_count(self) -> int:
        return sum(1 for result in self.results if result.was_raised)

    def get_statistics(self) -> dict[str, int]:
        horizontal = sum(1 for res in self.results if res.orientation == Orientation.HORIZONTAL)
        return {
            "total": len(self.results) + len(self.skipped),
            "sized": len(self.results),
            "skipped": len(self.skipped),
            "horizontal": horizontal,
            "vertical": len(self.results) - horizontal,
            "raised": self.raised_count,
        }
