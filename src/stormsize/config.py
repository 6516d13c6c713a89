import json
import logging
from pathlib import Path
from typing import Any

from .models import INCHES_PER_FOOT
from .tables import (
    HORIZONTAL_FALLBACK_DIAMETER,
    IPC_HORIZONTAL_ROWS,
    IPC_VERTICAL_ROWS,
    SLOPE_TOLERANCE,
    VERTICAL_FALLBACK_DIAMETER,
    CodeTables,
    HorizontalTable,
    SizingTable,
)

log = logging.getLogger(__name__)

FLOW_CFS_TO_GPM = 448.831  # ft³/s -> US gal/min, applied by the host
VERTICAL_SLOPE_THRESHOLD = 1.0  # 45° or steeper counts as leader
MIN_EXPLICIT_SLOPE = 0.0001
FALLBACK_SLOPE = 0.01
MIN_FLOW_GPM = 0.01

__all__ = [
    "FLOW_CFS_TO_GPM",
    "VERTICAL_SLOPE_THRESHOLD",
    "MIN_EXPLICIT_SLOPE",
    "FALLBACK_SLOPE",
    "MIN_FLOW_GPM",
    "SLOPE_TOLERANCE",
    "HORIZONTAL_FALLBACK_DIAMETER",
    "VERTICAL_FALLBACK_DIAMETER",
    "INCHES_PER_FOOT",
    "ConfigurationHandler",
    "create_sample_config",
]


def create_sample_config() -> dict[str, Any]:
    """Return the IPC reference tables in configuration file format."""
    return {
        "Name": "IPC",
        "SlopeTolerance": SLOPE_TOLERANCE,
        "HorizontalFallback": HORIZONTAL_FALLBACK_DIAMETER,
        "VerticalFallback": VERTICAL_FALLBACK_DIAMETER,
        "Horizontal": [
            {"Slope": slope, "Rows": [list(row) for row in rows]} for slope, rows in IPC_HORIZONTAL_ROWS.items()
        ],
        "Vertical": [list(row) for row in IPC_VERTICAL_ROWS],
    }


class ConfigurationHandler:
    """Loads the code sizing tables of a jurisdiction from a JSON file.

    This lets the sizing run with another jurisdiction's tables
    without changes to the lookup logic.
    """

    def __init__(self, config_path: Path) -> None:
        """Initialize configuration handler with configuration file.

        Parameters
        ----------
        config_path : Path
            Path to JSON configuration file
        """
        self.config_path = config_path
        self.tables: CodeTables | None = None

    def _create_rows(self, rows: Any, label: str) -> SizingTable:
        if not isinstance(rows, list) or len(rows) == 0:
            raise ValueError(f"{label}: expected a non-empty list of [flow, diameter] rows")
        table_rows = []
        for row in rows:
            if not isinstance(row, (list, tuple)) or len(row) != 2:
                raise ValueError(f"{label}: invalid row {row!r}, expected [flow, diameter]")
            table_rows.append((float(row[0]), float(row[1])))
        return SizingTable(table_rows)

    def _create_horizontal(self, horizontal: list[dict], tolerance: float) -> HorizontalTable:
        tables = {}
        for entry in horizontal:
            slope = entry.get("Slope")
            if slope is None:
                raise ValueError(f"Horizontal table entry without 'Slope': {entry}")
            tables[float(slope)] = self._create_rows(entry.get("Rows"), f"Horizontal slope {slope}")
        return HorizontalTable(tables, tolerance=tolerance)

    def _get_number(self, config: dict, key: str, default: float) -> float:
        value = config.get(key)
        if value is None:
            log.warning(f"'{key}' missing in {self.config_path.name}, defaulting to {default}")
            return default
        return float(value)

    def _create_tables(self, config: dict) -> CodeTables:
        if "Horizontal" not in config or "Vertical" not in config:
            raise ValueError(f"Configuration needs 'Horizontal' and 'Vertical' tables: {self.config_path}")
        tolerance = self._get_number(config, "SlopeTolerance", SLOPE_TOLERANCE)
        return CodeTables(
            horizontal=self._create_horizontal(config["Horizontal"], tolerance),
            vertical=self._create_rows(config["Vertical"], "Vertical"),
            horizontal_fallback=self._get_number(config, "HorizontalFallback", HORIZONTAL_FALLBACK_DIAMETER),
            vertical_fallback=self._get_number(config, "VerticalFallback", VERTICAL_FALLBACK_DIAMETER),
            name=config.get("Name", self.config_path.stem),
        )

    def load_config(self) -> CodeTables:
        """Load the sizing tables from the JSON file.

        Expected JSON format:
        {
            "Name": "IPC",
            "SlopeTolerance": 0.001,
            "HorizontalFallback": 4,
            "VerticalFallback": 12,
            "Horizontal": [{"Slope": 0.0104, "Rows": [[79, 3], [111, 4]]}],
            "Vertical": [[96, 2], [163, 3]]
        }

        Raises
        ------
        FileNotFoundError
            If configuration file does not exist
        json.JSONDecodeError
            If configuration file is not valid JSON
        ValueError
            If the tables are missing or malformed
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, encoding="utf-8") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(f"Invalid JSON in configuration file: {e}", e.doc, e.pos) from e

        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration must be a JSON object: {self.config_path}")
        self.tables = self._create_tables(config_data)
        log.info(f"Loaded code tables {self.tables.name} from {self.config_path}")
        return self.tables
