"""Tests for the flow order strategies."""

from stormsize.analyze.flow_order import ConnectivityFlowOrder, ElevationFlowOrder
from stormsize.models import Point3D


def _ids(segments):
    return [segment.identity for segment in segments]


class TestElevationFlowOrder:
    """Test the elevation heuristic."""

    def test_orders_descending_by_elevation(self, make_classified):
        segments = [
            make_classified("low", 3, elevation=90.0),
            make_classified("high", 3, elevation=100.0),
            make_classified("mid", 3, elevation=95.0),
        ]

        assert _ids(ElevationFlowOrder().order(segments)) == ["high", "mid", "low"]

    def test_ties_keep_input_order(self, make_classified):
        segments = [
            make_classified("a", 3, elevation=50.0),
            make_classified("b", 3, elevation=60.0),
            make_classified("c", 3, elevation=50.0),
            make_classified("d", 3, elevation=50.0),
        ]

        assert _ids(ElevationFlowOrder().order(segments)) == ["b", "a", "c", "d"]

    def test_does_not_modify_input(self, make_classified):
        segments = [make_classified("a", 3, elevation=1.0), make_classified("b", 3, elevation=2.0)]

        ElevationFlowOrder().order(segments)

        assert _ids(segments) == ["a", "b"]


class TestConnectivityFlowOrder:
    """Test ordering along connected endpoints."""

    def test_without_geometry_equals_elevation_order(self, make_classified):
        segments = [
            make_classified("a", 3, elevation=90.0),
            make_classified("b", 3, elevation=100.0),
            make_classified("c", 3, elevation=90.0),
        ]

        expected = _ids(ElevationFlowOrder().order(segments))

        assert _ids(ConnectivityFlowOrder().order(segments)) == expected

    def test_chain_follows_connections(self, make_classified, chain_points):
        p0, p1, p2, p3 = chain_points
        segments = [
            make_classified("last", 3, endpoints=(p2, p3), elevation=None),
            make_classified("first", 3, endpoints=(p1, p0), elevation=None),
            make_classified("middle", 3, endpoints=(p1, p2), elevation=None),
        ]

        assert _ids(ConnectivityFlowOrder().order(segments)) == ["first", "middle", "last"]

    def test_connection_beats_elevation(self, make_classified, chain_points):
        """Test that a connected downstream pipe follows its upstream pipe.

        The branch joining the main run at p2 has its own high point above
        the main run start, but the pipe below the junction must still come
        after both pipes feeding it.
        """
        p0, p1, p2, p3 = chain_points
        branch_top = Point3D(east=20.0, north=10.0, altitude=12.0)
        segments = [
            make_classified("main-1", 3, endpoints=(p0, p1), elevation=None),
            make_classified("main-2", 3, endpoints=(p1, p2), elevation=None),
            make_classified("outlet", 3, endpoints=(p2, p3), elevation=None),
            make_classified("branch", 3, endpoints=(branch_top, p2), elevation=None),
        ]

        ordered = _ids(ConnectivityFlowOrder().order(segments))

        assert ordered.index("outlet") > ordered.index("main-2")
        assert ordered.index("outlet") > ordered.index("branch")
        assert ordered.index("main-2") > ordered.index("main-1")
        assert ordered[0] == "branch"

    def test_elevation_would_misplace_low_upstream_pipe(self, make_classified):
        """Test that a pipe reported lower but feeding another still comes first."""
        a = Point3D(east=0.0, north=0.0, altitude=5.0)
        b = Point3D(east=10.0, north=0.0, altitude=4.9)
        c = Point3D(east=20.0, north=0.0, altitude=4.8)
        segments = [
            make_classified("downstream", 3, endpoints=(b, c), elevation=50.0),
            make_classified("upstream", 3, endpoints=(a, b), elevation=10.0),
        ]

        assert _ids(ElevationFlowOrder().order(segments)) == ["downstream", "upstream"]
        assert _ids(ConnectivityFlowOrder().order(segments)) == ["upstream", "downstream"]

    def test_endpoints_within_tolerance_connect(self, make_classified):
        a = Point3D(east=0.0, north=0.0, altitude=5.0)
        b = Point3D(east=10.0, north=0.0, altitude=4.9)
        b_near = Point3D(east=10.004, north=0.0, altitude=4.9)
        c = Point3D(east=20.0, north=0.0, altitude=4.8)
        segments = [
            make_classified("down", 3, endpoints=(b_near, c), elevation=50.0),
            make_classified("up", 3, endpoints=(a, b), elevation=10.0),
        ]

        assert _ids(ConnectivityFlowOrder(tolerance=0.01).order(segments)) == ["up", "down"]
        assert _ids(ConnectivityFlowOrder(tolerance=0.001).order(segments)) == ["down", "up"]

    def test_flat_loop_emits_every_segment_once(self, make_classified):
        a = Point3D(east=0.0, north=0.0, altitude=5.0)
        b = Point3D(east=10.0, north=0.0, altitude=5.0)
        segments = [
            make_classified("x", 3, endpoints=(a, b), elevation=None),
            make_classified("y", 3, endpoints=(b, a), elevation=None),
        ]

        ordered = _ids(ConnectivityFlowOrder().order(segments))

        assert sorted(ordered) == ["x", "y"]

    def test_segments_without_geometry_are_kept(self, make_classified, chain_points):
        p0, p1, _, _ = chain_points
        segments = [
            make_classified("geo", 3, endpoints=(p0, p1), elevation=None),
            make_classified("plain", 3, elevation=20.0),
        ]

        assert _ids(ConnectivityFlowOrder().order(segments)) == ["plain", "geo"]
