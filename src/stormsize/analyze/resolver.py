import logging

from ..models import Orientation
from ..protocols import IDiameterTables

log = logging.getLogger(__name__)


class DiameterResolver:
    """Looks up the code minimum diameter of a classified segment."""

    def __init__(self, tables: IDiameterTables) -> None:
        self.tables = tables

    def resolve(self, flow: float, orientation: Orientation, slope: float) -> float:
        """Return the required diameter in inch.

        Horizontal drains are sized by flow and slope, vertical leaders
        by flow only. Always returns a diameter, possibly a fallback.
        """
        if orientation == Orientation.VERTICAL:
            diameter = self.tables.vertical_diameter(flow)
        else:
            diameter = self.tables.horizontal_diameter(flow, slope)
        log.debug(f"{orientation.value}: {flow:.2f} GPM at slope {slope:.4f} -> {diameter} in")
        return diameter
