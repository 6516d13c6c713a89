"""Storm pipe sizing per plumbing code tables with the no-reduction rule."""

from .models import Orientation, Point3D, SegmentInput, SegmentResult, SizingReport
from .processor import StormPipeSizer
from .tables import IPC_CODE_TABLES, CodeTables

__all__ = [
    "Orientation",
    "Point3D",
    "SegmentInput",
    "SegmentResult",
    "SizingReport",
    "StormPipeSizer",
    "CodeTables",
    "IPC_CODE_TABLES",
]
