"""Tests for segment classification."""

import pytest

from stormsize.analyze.classifier import ClassifierParams, SegmentClassifier
from stormsize.models import Orientation, Point3D, SegmentInput


class TestSegmentClassifier:
    """Test slope source priority and orientation."""

    def test_explicit_slope_is_used(self):
        classifier = SegmentClassifier()
        segment = SegmentInput(identity="P-1", flow=10.0, slope=0.0208)

        assert classifier.classify(segment) == (Orientation.HORIZONTAL, 0.0208)

    def test_explicit_slope_wins_over_geometry(self):
        classifier = SegmentClassifier()
        segment = SegmentInput(
            identity="P-1",
            flow=10.0,
            slope=0.0104,
            endpoints=(Point3D(0.0, 0.0, 10.0), Point3D(1.0, 0.0, 5.0)),
        )

        assert classifier.classify(segment) == (Orientation.HORIZONTAL, 0.0104)

    def test_tiny_slope_is_derived_from_geometry(self):
        """Test that a slope below the minimum counts as missing."""
        classifier = SegmentClassifier()
        segment = SegmentInput(
            identity="P-1",
            flow=10.0,
            slope=0.00005,
            endpoints=(Point3D(0.0, 0.0, 10.0), Point3D(3.0, 4.0, 9.9)),
        )

        orientation, slope = classifier.classify(segment)

        assert orientation == Orientation.HORIZONTAL
        assert slope == pytest.approx(0.1 / 5.0)

    def test_rise_is_absolute(self):
        classifier = SegmentClassifier()
        segment = SegmentInput(
            identity="P-1",
            flow=10.0,
            endpoints=(Point3D(0.0, 0.0, 9.0), Point3D(10.0, 0.0, 10.0)),
        )

        assert classifier.get_slope(segment) == pytest.approx(0.1)

    def test_purely_vertical_run_uses_fallback_slope(self):
        """Test that a zero horizontal run falls back to the nominal slope."""
        classifier = SegmentClassifier()
        segment = SegmentInput(
            identity="L-1",
            flow=10.0,
            endpoints=(Point3D(5.0, 5.0, 20.0), Point3D(5.0, 5.0, 10.0)),
        )

        assert classifier.classify(segment) == (Orientation.HORIZONTAL, 0.01)

    def test_missing_slope_and_endpoints_falls_back(self, caplog):
        classifier = SegmentClassifier()
        segment = SegmentInput(identity="P-9", flow=10.0)

        with caplog.at_level("WARNING"):
            result = classifier.classify(segment)

        assert result == (Orientation.HORIZONTAL, 0.01)
        assert "P-9" in caplog.text

    def test_strict_mode_raises_without_slope_data(self):
        classifier = SegmentClassifier(ClassifierParams(strict=True))
        segment = SegmentInput(identity="P-9", flow=10.0)

        with pytest.raises(ValueError, match="P-9"):
            classifier.classify(segment)

    def test_strict_mode_accepts_geometry(self):
        classifier = SegmentClassifier(ClassifierParams(strict=True))
        segment = SegmentInput(
            identity="P-1",
            flow=10.0,
            endpoints=(Point3D(0.0, 0.0, 10.0), Point3D(10.0, 0.0, 9.9)),
        )

        assert classifier.get_slope(segment) == pytest.approx(0.01)

    @pytest.mark.parametrize(
        "slope,expected",
        [
            (0.0104, Orientation.HORIZONTAL),
            (0.999, Orientation.HORIZONTAL),
            (1.0, Orientation.VERTICAL),
            (1.5, Orientation.VERTICAL),
        ],
    )
    def test_orientation_threshold(self, slope, expected):
        classifier = SegmentClassifier()
        segment = SegmentInput(identity="P-1", flow=10.0, slope=slope)

        assert classifier.classify(segment)[0] == expected

    def test_steep_geometry_is_vertical(self):
        classifier = SegmentClassifier()
        segment = SegmentInput(
            identity="L-1",
            flow=10.0,
            endpoints=(Point3D(0.0, 0.0, 20.0), Point3D(1.0, 0.0, 10.0)),
        )

        orientation, slope = classifier.classify(segment)

        assert orientation == Orientation.VERTICAL
        assert slope == pytest.approx(10.0)

    def test_custom_threshold(self):
        classifier = SegmentClassifier(ClassifierParams(vertical_threshold=0.5))
        assert classifier.orientation_of(0.6) == Orientation.VERTICAL
        assert classifier.orientation_of(0.4) == Orientation.HORIZONTAL
