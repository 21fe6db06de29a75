"""Tests for single and two collection overlap detection."""

from unittest.mock import patch

import pytest
from shapely.geometry import box

from polyconflate.core import (
    Feature,
    IndicatorStrategy,
    RecordingTaskMonitor,
    UnresolvedOverlapWarning,
    features_from_geometries,
)
from polyconflate.core.spatial_utils import FeatureIndex
from polyconflate.overlap import (
    IndicatorStep,
    OverlapDetector,
    TwoCollectionOverlapDetector,
    interiors_intersect,
)


R1 = box(0, 0, 10, 10)
R2 = box(5, 5, 15, 15)
FAR_A = box(100, 100, 110, 110)
FAR_B = box(105, 100, 115, 110)


def _ids(features):
    return [f.id for f in features]


class TestInteriorsIntersect:
    """Tests for the relate-based overlap predicate."""

    def test_containment_counts(self):
        outer = box(0, 0, 10, 10)
        inner = box(2, 2, 4, 4)
        assert not outer.overlaps(inner)
        assert interiors_intersect(outer, inner)

    def test_shared_edge_does_not_count(self):
        assert not interiors_intersect(box(0, 0, 10, 10), box(10, 0, 20, 10))

    def test_partial_overlap(self):
        assert interiors_intersect(R1, R2)


class TestOverlapDetector:
    """Tests for OverlapDetector on one collection."""

    def test_overlapping_rectangles(self):
        detector = OverlapDetector(features_from_geometries([R1, R2]))

        assert _ids(detector.overlapping_features) == [1, 2]
        sizes = detector.size_indicators
        assert len(sizes) >= 1
        for indicator in sizes:
            assert indicator.attributes["LENGTH"] == pytest.approx(5.0)
            assert indicator.geometry.length == pytest.approx(5.0)
        assert len(detector.overlap_indicators) >= 1

    def test_indicator_ids_are_sequential(self):
        detector = OverlapDetector(features_from_geometries([R1, R2]))
        assert _ids(detector.size_indicators) == list(
            range(1, len(detector.size_indicators) + 1)
        )
        assert _ids(detector.overlap_indicators) == list(
            range(1, len(detector.overlap_indicators) + 1)
        )

    def test_contained_polygon(self):
        detector = OverlapDetector(features_from_geometries([box(0, 0, 10, 10), box(2, 2, 4, 4)]))

        assert _ids(detector.overlapping_features) == [1, 2]
        sizes = [f.attributes["LENGTH"] for f in detector.size_indicators]
        assert max(sizes) == pytest.approx(4.0)

    def test_adjacent_polygons_do_not_overlap(self):
        detector = OverlapDetector(features_from_geometries([box(0, 0, 10, 10), box(10, 0, 20, 10)]))

        assert detector.overlapping_features == []
        assert detector.size_indicators == []
        assert detector.overlap_indicators == []

    def test_results_ordered_by_id_regardless_of_input_order(self):
        features = [Feature(7, R2), Feature(3, FAR_A), Feature(2, R1)]
        detector = OverlapDetector(features)
        assert _ids(detector.overlapping_features) == [2, 7]

    def test_feature_in_several_overlaps_reported_once(self):
        middle = box(4, 0, 6, 10)
        detector = OverlapDetector(features_from_geometries([box(0, 0, 5, 10), middle, box(5, 0, 10, 10)]))
        assert _ids(detector.overlapping_features) == [1, 2, 3]

    def test_empty_input(self):
        detector = OverlapDetector([])
        assert detector.overlapping_features == []

    def test_compute_is_idempotent(self):
        detector = OverlapDetector(features_from_geometries([R1, R2, FAR_A, FAR_B]))
        detector.compute_overlaps()
        first = detector.overlapping_features
        first_sizes = detector.size_indicators

        with patch.object(FeatureIndex, "query") as query:
            detector.compute_overlaps()
            second = detector.overlapping_features
            second_sizes = detector.size_indicators
        query.assert_not_called()

        assert _ids(first) == _ids(second) == [1, 2, 3, 4]
        assert [f.geometry for f in first_sizes] == [f.geometry for f in second_sizes]

    def test_progress_reported_per_feature(self):
        monitor = RecordingTaskMonitor()
        detector = OverlapDetector(features_from_geometries([R1, R2, FAR_A]))
        detector.compute_overlaps(monitor)

        assert monitor.reports == [(1, 3, "features"), (2, 3, "features"), (3, 3, "features")]

    def test_monitor_from_constructor(self):
        monitor = RecordingTaskMonitor()
        detector = OverlapDetector(features_from_geometries([R1, R2]), monitor=monitor)
        detector.overlapping_features
        assert len(monitor.reports) == 2

    def test_cancellation_keeps_partial_results(self):
        monitor = RecordingTaskMonitor(cancel_after=1)
        detector = OverlapDetector(features_from_geometries([R1, R2, FAR_A, FAR_B]))
        detector.compute_overlaps(monitor)

        assert detector.cancelled
        assert monitor.reports == [(1, 4, "features")]
        assert _ids(detector.overlapping_features) == [1, 2]
        assert len(detector.size_indicators) >= 1

    def test_cancel_before_start(self):
        monitor = RecordingTaskMonitor()
        monitor.cancel()
        detector = OverlapDetector(features_from_geometries([R1, R2]))
        detector.compute_overlaps(monitor)

        assert detector.cancelled
        assert detector.is_computed
        assert detector.overlapping_features == []

    def test_fence_limits_candidates(self):
        features = features_from_geometries([R1, R2, FAR_A, FAR_B])
        detector = OverlapDetector(features, fence=(0, 0, 20, 20))
        assert _ids(detector.overlapping_features) == [1, 2]

    def test_set_fence(self):
        detector = OverlapDetector(features_from_geometries([R1, R2, FAR_A, FAR_B]))
        detector.set_fence((90, 90, 120, 120))
        assert _ids(detector.overlapping_features) == [3, 4]

    def test_unresolved_pair_still_recorded(self):
        failing = (IndicatorStep(IndicatorStrategy.BOUNDARY, lambda a, b, c: ([], [])),)
        detector = OverlapDetector(features_from_geometries([R1, R2]), strategies=failing)

        with pytest.warns(UnresolvedOverlapWarning):
            detector.compute_overlaps()

        assert _ids(detector.overlapping_features) == [1, 2]
        assert detector.unresolved == 1
        assert detector.size_indicators == []
        assert detector.overlap_indicators == []

    def test_verbose_summary(self, capsys):
        detector = OverlapDetector(features_from_geometries([R1, R2]), verbose=True)
        detector.compute_overlaps()
        assert "Found 2 overlapping features" in capsys.readouterr().out


class TestTwoCollectionOverlapDetector:
    """Tests for TwoCollectionOverlapDetector."""

    def test_partitioned_results(self):
        features0 = [Feature(1, R1), Feature(2, FAR_A)]
        features1 = [Feature(1, R2), Feature(2, box(200, 200, 210, 210))]
        detector = TwoCollectionOverlapDetector(features0, features1)

        assert _ids(detector.overlapping_features(0)) == [1]
        assert _ids(detector.overlapping_features(1)) == [1]
        assert detector.overlapping_features(0)[0].geometry.equals(R1)
        assert detector.overlapping_features(1)[0].geometry.equals(R2)
        for indicator in detector.size_indicators:
            assert indicator.attributes["LENGTH"] == pytest.approx(5.0)

    def test_pairs_within_a_collection_are_ignored(self):
        features0 = features_from_geometries([R1, R2])
        features1 = features_from_geometries([FAR_A])
        detector = TwoCollectionOverlapDetector(features0, features1)

        assert detector.overlapping_features(0) == []
        assert detector.overlapping_features(1) == []

    def test_one_feature_overlapping_several(self):
        features0 = features_from_geometries([box(0, 0, 20, 10)])
        features1 = features_from_geometries([box(-5, 0, 5, 10), box(15, 0, 25, 10)])
        detector = TwoCollectionOverlapDetector(features0, features1)

        assert _ids(detector.overlapping_features(0)) == [1]
        assert _ids(detector.overlapping_features(1)) == [1, 2]

    def test_progress_counts_first_collection(self):
        monitor = RecordingTaskMonitor()
        detector = TwoCollectionOverlapDetector(
            features_from_geometries([R1]),
            features_from_geometries([R2, FAR_A]),
            monitor=monitor,
        )
        detector.compute_overlaps()
        assert monitor.reports == [(1, 1, "features")]

    def test_cancellation(self):
        detector = TwoCollectionOverlapDetector(
            features_from_geometries([R1]), features_from_geometries([R2])
        )
        detector.compute_overlaps(RecordingTaskMonitor(cancel_after=0))

        assert detector.cancelled
        assert detector.overlapping_features(0) == []

    def test_invalid_collection_index(self):
        detector = TwoCollectionOverlapDetector([], [])
        with pytest.raises(IndexError):
            detector.overlapping_features(2)
