"""Plumbing code sizing tables for storm drains.

The tables are plain data: ordered (flow limit, diameter) step functions,
keyed by slope for horizontal drains. Another jurisdiction's tables can be
swapped in without touching the lookup logic, see ``config.ConfigurationHandler``.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

log = logging.getLogger(__name__)

SLOPE_TOLERANCE = 0.001
HORIZONTAL_FALLBACK_DIAMETER = 4.0
VERTICAL_FALLBACK_DIAMETER = 12.0


@dataclass(frozen=True)
class SizingRow:
    """One step of a sizing table.

    Parameters
    ----------
    flow_limit : float
        Highest flow in GPM the diameter is allowed to carry
    diameter : float
        Nominal pipe diameter in inch
    """

    flow_limit: float
    diameter: float


class SizingTable:
    """Ascending step function from flow (GPM) to diameter (inch)."""

    def __init__(self, rows: Iterable[SizingRow | tuple[float, float]]) -> None:
        """Initialize the table from rows ordered by flow limit.

        Raises
        ------
        ValueError
            If the table is empty or not ascending in flow limit and diameter
        """
        self.rows: tuple[SizingRow, ...] = tuple(
            row if isinstance(row, SizingRow) else SizingRow(float(row[0]), float(row[1])) for row in rows
        )
        if len(self.rows) == 0:
            raise ValueError("Sizing table needs at least one row")
        for previous, current in zip(self.rows, self.rows[1:]):
            if current.flow_limit <= previous.flow_limit:
                raise ValueError(f"Flow limits must be ascending: {previous.flow_limit} -> {current.flow_limit}")
            if current.diameter < previous.diameter:
                raise ValueError(f"Diameters must not decrease: {previous.diameter} -> {current.diameter}")

    @property
    def max_diameter(self) -> float:
        return self.rows[-1].diameter

    @property
    def max_flow(self) -> float:
        return self.rows[-1].flow_limit

    def diameters(self) -> set[float]:
        return {row.diameter for row in self.rows}

    def lookup(self, flow: float, saturated: float | None = None) -> float:
        """Return the smallest diameter whose flow limit covers the flow.

        Parameters
        ----------
        flow : float
            Flow in GPM
        saturated : float | None
            Diameter returned when the flow exceeds every flow limit,
            defaults to the diameter of the last row

        Returns
        -------
        float
            Diameter in inch
        """
        for row in self.rows:
            if flow <= row.flow_limit:
                return row.diameter
        log.debug(f"Flow {flow:.2f} GPM exceeds table maximum {self.max_flow} GPM")
        return self.max_diameter if saturated is None else saturated

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"SizingTable({[(row.flow_limit, row.diameter) for row in self.rows]})"


class HorizontalTable:
    """Sizing tables for horizontal drains, keyed by the tabulated slopes."""

    def __init__(self, tables: Mapping[float, SizingTable], tolerance: float = SLOPE_TOLERANCE) -> None:
        if len(tables) == 0:
            raise ValueError("Horizontal table needs at least one slope")
        self.tables = MappingProxyType(dict(sorted(tables.items())))
        self.tolerance = tolerance

    @property
    def slopes(self) -> list[float]:
        return list(self.tables.keys())

    def table_for(self, slope: float) -> SizingTable | None:
        for table_slope, table in self.tables.items():
            if abs(slope - table_slope) < self.tolerance:
                return table
        return None

    def diameters(self) -> set[float]:
        diameters = set()
        for table in self.tables.values():
            diameters.update(table.diameters())
        return diameters


class CodeTables:
    """Code table repository for horizontal drains and vertical leaders.

    Lookups never fail: a slope without a tabulated row-set gets the
    horizontal fallback diameter, and flows above the tables saturate.
    Saturation may under-size very large flows, which is a known
    limitation of table based sizing.
    """

    def __init__(
        self,
        horizontal: HorizontalTable,
        vertical: SizingTable,
        horizontal_fallback: float = HORIZONTAL_FALLBACK_DIAMETER,
        vertical_fallback: float = VERTICAL_FALLBACK_DIAMETER,
        name: str = "UNKNOWN",
    ) -> None:
        self.horizontal = horizontal
        self.vertical = vertical
        self.horizontal_fallback = horizontal_fallback
        self.vertical_fallback = vertical_fallback
        self.name = name

    def horizontal_diameter(self, flow: float, slope: float) -> float:
        """Diameter of a horizontal drain by flow (GPM) and slope (rise/run)."""
        table = self.horizontal.table_for(slope)
        if table is None:
            log.debug(f"No tabulated slope matches {slope:.4f}, using fallback {self.horizontal_fallback}")
            return self.horizontal_fallback
        return table.lookup(flow)

    def vertical_diameter(self, flow: float) -> float:
        """Diameter of a vertical leader by flow (GPM)."""
        return self.vertical.lookup(flow, saturated=self.vertical_fallback)

    def diameters(self) -> set[float]:
        """All diameters these tables can return, fallbacks included."""
        diameters = self.horizontal.diameters() | self.vertical.diameters()
        diameters.update((self.horizontal_fallback, self.vertical_fallback))
        return diameters

    def __repr__(self) -> str:
        return f"CodeTables(name={self.name}, slopes={self.horizontal.slopes}, vertical_rows={len(self.vertical)})"


# IPC Table 1106.2, horizontal storm drains by slope (ft/ft)
IPC_HORIZONTAL_ROWS: dict[float, tuple[tuple[float, float], ...]] = {
    0.0104: ((79, 3), (111, 4), (237, 5), (387, 6), (1111, 8), (2400, 10), (3879, 12)),
    0.0208: ((111, 3), (156, 4), (331, 5), (541, 6), (1447, 8), (3150, 10), (5095, 12)),
}

# IPC Table 1106.3, vertical leaders
IPC_VERTICAL_ROWS: tuple[tuple[float, float], ...] = (
    (96, 2),
    (163, 3),
    (344, 4),
    (736, 5),
    (1208, 6),
    (2568, 8),
    (5312, 10),
    (8650, 12),
)


def create_ipc_tables() -> CodeTables:
    return CodeTables(
        horizontal=HorizontalTable({slope: SizingTable(rows) for slope, rows in IPC_HORIZONTAL_ROWS.items()}),
        vertical=SizingTable(IPC_VERTICAL_ROWS),
        name="IPC",
    )


IPC_CODE_TABLES = create_ipc_tables()
