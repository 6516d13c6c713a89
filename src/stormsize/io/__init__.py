"""File based exchange with the host model.

This package provides:
- SegmentJsonReader: Segments with flow converted to GPM
- JsonExporter: Sized results for the host to apply
"""

from .json_exporter import JsonExporter
from .json_reader import SegmentJsonReader

__all__ = [
    "SegmentJsonReader",
    "JsonExporter",
]
