"""JSON export of sized storm pipe segments.

The exported file is read back by the host model to apply the final
diameters.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ..models import SegmentInput, SizingReport

log = logging.getLogger(__name__)


def _export_skipped(segment: SegmentInput) -> dict[str, Any]:
    return {
        "Id": segment.identity,
        "Flow": segment.flow,
    }


class JsonExporter:
    """Exports the results of a sizing run to JSON.

    Results keep the flow order of the run, skipped segments are listed
    separately so the host can leave their diameters untouched.
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize JSON exporter with output file path.

        Parameters
        ----------
        output_path : Path
            Path where the JSON file will be saved
        """
        self.output_path = output_path
        self.exported_count = 0

    def export_report(self, report: SizingReport) -> dict[str, Any]:
        return {
            "Results": [result.to_dict() for result in report.results],
            "Skipped": [_export_skipped(segment) for segment in report.skipped],
        }

    def write_results(self, report: SizingReport) -> None:
        export_data = self.export_report(report)
        try:
            with open(self.output_path, "w", encoding="utf-8") as json_file:
                json.dump(export_data, json_file, indent=2, ensure_ascii=False)
        except OSError as e:
            raise OSError(f"Cannot write JSON file {self.output_path}: {e}") from e
        self.exported_count = len(report.results)
        log.info(f"Exported {self.exported_count} results to {self.output_path}")
