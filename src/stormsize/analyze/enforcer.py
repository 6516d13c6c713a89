"""No-reduction rule for pipe diameters in the direction of flow."""

import logging
from collections.abc import Iterable, Sequence

from ..models import ClassifiedSegment, SegmentResult

log = logging.getLogger(__name__)


def running_maximum(values: Iterable[float]) -> list[float]:
    """Raise every value to the maximum of all values before it.

    Parameters
    ----------
    values : Iterable[float]
        Diameters in flow order

    Returns
    -------
    list[float]
        Non-decreasing diameters, each at least its input value
    """
    max_so_far = 0.0
    floored = []
    for value in values:
        value = max(value, max_so_far)
        floored.append(value)
        max_so_far = max(max_so_far, value)
    return floored


class MonotonicConstraintEnforcer:
    """Applies the no-reduction rule in a single forward pass.

    Once a large diameter is emitted it floors every following segment.
    """

    def enforce(self, segments: Sequence[ClassifiedSegment]) -> list[SegmentResult]:
        """Create results with final diameters for segments in flow order.

        Parameters
        ----------
        segments : Sequence[ClassifiedSegment]
            Classified segments, upstream first

        Returns
        -------
        list[SegmentResult]
            Results in the same order
        """
        finals = running_maximum(segment.required_diameter for segment in segments)
        results = []
        for segment, final_diameter in zip(segments, finals):
            if final_diameter > segment.required_diameter:
                log.debug(
                    f"Segment {segment.identity!r} raised from {segment.required_diameter} "
                    f"to {final_diameter} (no reduction)"
                )
            results.append(
                SegmentResult(
                    identity=segment.identity,
                    required_diameter=segment.required_diameter,
                    final_diameter=final_diameter,
                    orientation=segment.orientation,
                    slope=segment.slope,
                    flow=segment.segment.flow,
                )
            )
        return results
