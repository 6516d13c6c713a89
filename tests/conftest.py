"""Pytest configuration and fixtures for stormsize tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_segment():
    """Return a factory for SegmentInput objects."""
    from stormsize.models import SegmentInput

    def _make(identity, flow, elevation=None, slope=0.0104, endpoints=None):
        return SegmentInput(identity=identity, flow=flow, elevation=elevation, slope=slope, endpoints=endpoints)

    return _make


@pytest.fixture
def make_classified():
    """Return a factory for ClassifiedSegment objects with a given required diameter."""
    from stormsize.models import ClassifiedSegment, Orientation, SegmentInput

    def _make(identity, required, elevation=0.0, endpoints=None, flow=100.0):
        segment = SegmentInput(identity=identity, flow=flow, elevation=elevation, slope=0.0104, endpoints=endpoints)
        return ClassifiedSegment(
            segment=segment,
            orientation=Orientation.HORIZONTAL,
            slope=0.0104,
            required_diameter=required,
        )

    return _make


@pytest.fixture
def chain_points():
    """Return points of a descending pipe run with three junctions."""
    from stormsize.models import Point3D

    return [
        Point3D(east=0.0, north=0.0, altitude=10.0),
        Point3D(east=10.0, north=0.0, altitude=9.9),
        Point3D(east=20.0, north=0.0, altitude=9.8),
        Point3D(east=30.0, north=0.0, altitude=9.7),
    ]


@pytest.fixture
def sample_segments_data():
    """Return a segment file payload in CFS."""
    return {
        "FlowUnit": "CFS",
        "Segments": [
            {
                "Id": "P-1",
                "Flow": 0.1,
                "Elevation": 100.0,
                "Slope": 0.0104,
            },
            {
                "Id": "P-2",
                "Flow": 0.05,
                "Start": {"east": 0.0, "north": 0.0, "altitude": 95.0},
                "End": {"east": 10.0, "north": 0.0, "altitude": 94.896},
            },
            {
                "Id": "L-1",
                "Flow": 0.15,
                "Elevation": 90.0,
                "Slope": 1.5,
            },
            {
                "Id": "P-dry",
                "Flow": 0.0,
                "Elevation": 80.0,
            },
        ],
    }
