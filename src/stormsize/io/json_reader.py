"""JSON reader for storm pipe segments exported from the host model.

The reader stands in for the host model access: it delivers segments with
the flow converted to GPM, the unit all sizing tables use.
"""

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from ..config import FLOW_CFS_TO_GPM
from ..models import Point3D, SegmentInput

log = logging.getLogger(__name__)

FLOW_UNITS = {
    "GPM": 1.0,
    "CFS": FLOW_CFS_TO_GPM,
}


def _read_point(point: dict[str, Any] | None) -> Point3D | None:
    if point is None:
        return None
    return Point3D(
        east=float(point["east"]),
        north=float(point["north"]),
        altitude=float(point["altitude"]),
    )


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


class SegmentJsonReader:
    """Reads storm pipe segments from a JSON file.

    Expected JSON format:
    {
        "FlowUnit": "CFS",
        "Segments": [
            {
                "Id": "P-1",
                "Flow": 0.5,
                "Elevation": 100.0,
                "Slope": 0.0104,
                "Start": {"east": 0.0, "north": 0.0, "altitude": 100.0},
                "End": {"east": 10.0, "north": 0.0, "altitude": 99.9}
            }
        ]
    }
    """

    def __init__(self, segments_path: Path, flow_unit: str | None = None) -> None:
        """Initialize the reader.

        Parameters
        ----------
        segments_path : Path
            Path to the JSON segment file
        flow_unit : str | None
            Flow unit overriding the "FlowUnit" of the file (GPM or CFS)
        """
        self.segments_path = segments_path
        self.flow_unit = flow_unit

    def _flow_factor(self, unit: str) -> float:
        factor = FLOW_UNITS.get(unit.upper())
        if factor is None:
            raise ValueError(f"Unknown flow unit '{unit}', expected one of {sorted(FLOW_UNITS)}")
        return factor

    def _create_segment(self, index: int, data: dict[str, Any], factor: float) -> SegmentInput:
        if "Flow" not in data:
            raise ValueError(f"Segment {data.get('Id', index)!r} has no 'Flow'")
        flow = float(data["Flow"]) * factor
        if not np.isfinite(flow):
            raise ValueError(f"Segment {data.get('Id', index)!r} has non-finite flow {flow}")
        if flow < 0:
            raise ValueError(f"Segment {data.get('Id', index)!r} has negative flow {flow}")

        start = _read_point(data.get("Start"))
        end = _read_point(data.get("End"))
        endpoints = None
        if start is not None and end is not None:
            endpoints = (start, end)
        elif start is not None or end is not None:
            log.warning(f"Segment {data.get('Id', index)!r} has only one endpoint, ignoring geometry")

        return SegmentInput(
            identity=data.get("Id", index),
            flow=flow,
            elevation=_optional_float(data.get("Elevation")),
            slope=_optional_float(data.get("Slope")),
            endpoints=endpoints,
        )

    def read_segments(self) -> list[SegmentInput]:
        """Read all segments of the file.

        Raises
        ------
        FileNotFoundError
            If the segment file does not exist
        json.JSONDecodeError
            If the segment file is not valid JSON
        ValueError
            If the flow unit is unknown or a segment is invalid
        """
        if not self.segments_path.exists():
            raise FileNotFoundError(f"Segment file not found: {self.segments_path}")

        with open(self.segments_path, encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, list):
            data = {"Segments": data}
        factor = self._flow_factor(self.flow_unit or data.get("FlowUnit", "GPM"))
        segments = [
            self._create_segment(index, segment, factor) for index, segment in enumerate(data.get("Segments", []))
        ]
        log.info(f"Read {len(segments)} segments from {self.segments_path.name}")
        return segments
