"""Tests for core types, features, indexing and progress monitors."""

import pytest
from shapely.geometry import LineString, Point, box

from polyconflate.core import (
    ConfigurationError,
    Feature,
    NullTaskMonitor,
    OrientationMode,
    PolyconflateError,
    RecordingTaskMonitor,
    TaskMonitor,
    coerce_enum,
    features_from_geometries,
)
from polyconflate.core.feature import envelope_geometry, indicator_features, sort_by_id
from polyconflate.core.spatial_utils import FeatureIndex, SegmentIndex, filter_by_fence
from polyconflate.core.segment import Segment


class TestCoerceEnum:
    """Tests for coerce_enum."""

    def test_member_passthrough(self):
        assert coerce_enum(OrientationMode.SAME, OrientationMode) is OrientationMode.SAME

    def test_string_case_insensitive(self):
        assert coerce_enum("Opposite", OrientationMode) is OrientationMode.OPPOSITE

    def test_unknown(self):
        with pytest.raises(ConfigurationError, match="OrientationMode"):
            coerce_enum("up", OrientationMode)

    def test_error_hierarchy(self):
        assert issubclass(ConfigurationError, PolyconflateError)
        assert issubclass(ConfigurationError, ValueError)


class TestFeature:
    """Tests for Feature helpers."""

    def test_identity_equality(self):
        geom = box(0, 0, 1, 1)
        assert Feature(1, geom) != Feature(1, geom)

    def test_envelope(self):
        assert Feature(1, box(1, 2, 3, 4)).envelope == (1.0, 2.0, 3.0, 4.0)

    def test_features_from_geometries(self):
        features = features_from_geometries([box(0, 0, 1, 1), box(2, 2, 3, 3)], start_id=10)
        assert [f.id for f in features] == [10, 11]

    def test_indicator_features(self):
        lines = [LineString([(0, 0), (3, 4)]), LineString([(0, 0), (1, 0)])]
        features = indicator_features(lines, "LENGTH")

        assert [f.id for f in features] == [1, 2]
        assert [f.attributes["LENGTH"] for f in features] == [5.0, 1.0]
        assert indicator_features(lines)[0].attributes == {}

    def test_sort_by_id(self):
        features = [Feature(3, Point(0, 0)), Feature(1, Point(0, 0))]
        assert [f.id for f in sort_by_id(features)] == [1, 3]

    def test_degenerate_envelope_geometry(self):
        geom = envelope_geometry((1, 1, 1, 5))
        assert not geom.is_empty
        assert geom.bounds == (1.0, 1.0, 1.0, 5.0)


class TestFeatureIndex:
    """Tests for FeatureIndex."""

    def test_query_sorted_by_id(self):
        features = [
            Feature(5, box(0, 0, 2, 2)),
            Feature(2, box(1, 1, 3, 3)),
            Feature(9, box(50, 50, 51, 51)),
        ]
        index = FeatureIndex(features)

        assert [f.id for f in index.query((0, 0, 10, 10))] == [2, 5]
        assert len(index) == 3

    def test_query_feature_includes_itself(self):
        feature = Feature(1, box(0, 0, 1, 1))
        assert FeatureIndex([feature]).query_feature(feature) == [feature]

    def test_point_envelope_query(self):
        index = FeatureIndex([Feature(1, box(0, 0, 2, 2))])
        assert len(index.query((1, 1, 1, 1))) == 1

    def test_empty_index(self):
        assert FeatureIndex([]).query((0, 0, 1, 1)) == []

    def test_filter_by_fence(self):
        features = [Feature(1, box(0, 0, 1, 1)), Feature(2, box(10, 10, 11, 11))]
        assert filter_by_fence(features, None) == features
        assert [f.id for f in filter_by_fence(features, (0, 0, 5, 5))] == [1]


class TestSegmentIndex:
    """Tests for SegmentIndex."""

    def test_query_with_distance(self):
        segments = [Segment((0, 0), (10, 0)), Segment((0, 5), (10, 5))]
        index = SegmentIndex(segments)

        assert index.query(Segment((0, 1), (10, 1))) == []
        assert index.query(Segment((0, 1), (10, 1)), distance=1.5) == [0]
        assert index.query(Segment((0, 1), (10, 1)), distance=4.5) == [0, 1]


class TestTaskMonitors:
    """Tests for the bundled monitors."""

    def test_protocol(self):
        assert isinstance(NullTaskMonitor(), TaskMonitor)
        assert isinstance(RecordingTaskMonitor(), TaskMonitor)

    def test_null_monitor_never_cancels(self):
        monitor = NullTaskMonitor()
        monitor.report(1, 1, "features")
        assert not monitor.is_cancel_requested()

    def test_recording_monitor_cancel_after(self):
        monitor = RecordingTaskMonitor(cancel_after=2)
        monitor.report(1, 3, "features")
        assert not monitor.is_cancel_requested()
        monitor.report(2, 3, "features")
        assert monitor.is_cancel_requested()

    def test_recording_monitor_cancel(self):
        monitor = RecordingTaskMonitor()
        monitor.cancel()
        assert monitor.is_cancel_requested()
