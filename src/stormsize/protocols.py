"""Protocol definitions for the collaborators of the sizing pipeline.

The host model, the code tables and the flow ordering are interchangeable
behind these interfaces, so the pipeline itself does not depend on where
segments come from or where results go.
"""

from collections.abc import Sequence
from typing import Protocol

from .models import ClassifiedSegment, SegmentInput, SizingReport


class ISegmentSource(Protocol):
    """Protocol for the host side delivering segments."""

    def read_segments(self) -> list[SegmentInput]:
        """Read all storm pipe segments of the host model.

        Returns
        -------
        list[SegmentInput]
            Segments with flow already converted to GPM
        """
        ...


class IResultWriter(Protocol):
    """Protocol for the host side applying sized diameters."""

    def write_results(self, report: SizingReport) -> None:
        """Apply or persist the results of a sizing run.

        Parameters
        ----------
        report : SizingReport
            Sized segments in flow order and the skipped segments
        """
        ...


class IDiameterTables(Protocol):
    def horizontal_diameter(self, flow: float, slope: float) -> float: ...

    def vertical_diameter(self, flow: float) -> float: ...


class IFlowOrder(Protocol):
    """Protocol for ordering segments from upstream to downstream."""

    def order(self, segments: Sequence[ClassifiedSegment]) -> list[ClassifiedSegment]:
        """Order segments in the direction of flow.

        Parameters
        ----------
        segments : Sequence[ClassifiedSegment]
            Classified segments in input order

        Returns
        -------
        list[ClassifiedSegment]
            Segments with upstream segments first
        """
        ...
