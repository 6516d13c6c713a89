"""Classification of storm pipe segments into horizontal drains and vertical leaders."""

import logging
from dataclasses import dataclass

from ..config import FALLBACK_SLOPE, MIN_EXPLICIT_SLOPE, VERTICAL_SLOPE_THRESHOLD
from ..models import Orientation, SegmentInput

log = logging.getLogger(__name__)


@dataclass
class ClassifierParams:
    """Parameters for segment classification."""

    vertical_threshold: float = VERTICAL_SLOPE_THRESHOLD  # rise/run, 1.0 = 45°
    min_explicit_slope: float = MIN_EXPLICIT_SLOPE  # smaller host slopes count as missing
    fallback_slope: float = FALLBACK_SLOPE  # used when no slope can be derived
    strict: bool = False  # raise instead of falling back when slope data is missing


class SegmentClassifier:
    """Determines slope and orientation of a segment.

    The vertical threshold approximates "steep enough to be a leader";
    it is not a check of the true angle of the pipe.
    """

    def __init__(self, params: ClassifierParams | None = None) -> None:
        self.params = params or ClassifierParams()

    def classify(self, segment: SegmentInput) -> tuple[Orientation, float]:
        """Classify a segment.

        Parameters
        ----------
        segment : SegmentInput
            Segment to classify

        Returns
        -------
        tuple[Orientation, float]
            Orientation and the slope (rise/run) used for sizing

        Raises
        ------
        ValueError
            In strict mode, if the segment has neither a slope nor endpoints
        """
        slope = self.get_slope(segment)
        return self.orientation_of(slope), slope

    def orientation_of(self, slope: float) -> Orientation:
        if slope >= self.params.vertical_threshold:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL

    def get_slope(self, segment: SegmentInput) -> float:
        if segment.slope is not None and segment.slope > self.params.min_explicit_slope:
            return segment.slope

        if segment.endpoints is None:
            if self.params.strict:
                raise ValueError(f"Segment {segment.identity!r} has neither a slope nor endpoints")
            log.warning(
                f"Segment {segment.identity!r} has no slope and no endpoints, "
                f"defaulting to slope {self.params.fallback_slope}"
            )
            return self.params.fallback_slope

        return self._slope_from_endpoints(segment)

    def _slope_from_endpoints(self, segment: SegmentInput) -> float:
        start, end = segment.endpoints  # type: ignore[misc]
        rise = abs(end.altitude - start.altitude)
        run = start.distance_2d(end)
        if run == 0:
            log.debug(f"Segment {segment.identity!r} has no horizontal run, using slope {self.params.fallback_slope}")
            return self.params.fallback_slope
        return rise / run
