"""Tests for the one-call quality check reports."""

import math

import pytest
from shapely.geometry import Polygon, box

from polyconflate import (
    features_from_geometries,
    find_close_vertices,
    find_internal_overlaps,
    find_overlaps,
)
from polyconflate.core import OverlapConfig, RecordingTaskMonitor


R1 = box(0, 0, 10, 10)
R2 = box(5, 5, 15, 15)


class TestFindInternalOverlaps:
    """Tests for find_internal_overlaps."""

    def test_overlapping_rectangles(self):
        report = find_internal_overlaps(features_from_geometries([R1, R2]))

        assert report.count == 2
        assert report.has_overlaps
        assert [f.id for f in report.overlapping[0]] == [1, 2]
        assert report.min_size == pytest.approx(5.0)
        assert report.max_size == pytest.approx(5.0)
        assert report.unresolved == 0
        assert not report.cancelled

    def test_no_overlaps(self):
        report = find_internal_overlaps(features_from_geometries([R1, box(20, 20, 30, 30)]))

        assert report.count == 0
        assert not report.has_overlaps
        assert math.isnan(report.min_size) and math.isnan(report.max_size)

    def test_custom_size_attribute(self):
        report = find_internal_overlaps(
            features_from_geometries([R1, R2]), config=OverlapConfig(size_attribute="DEPTH")
        )
        assert report.max_size == pytest.approx(5.0)
        assert all("DEPTH" in f.attributes for f in report.size_indicators)

    def test_cancelled_run_is_flagged(self):
        report = find_internal_overlaps(
            features_from_geometries([R1, R2]), monitor=RecordingTaskMonitor(cancel_after=0)
        )
        assert report.cancelled
        assert report.count == 0

    def test_fence(self):
        report = find_internal_overlaps(
            features_from_geometries([R1, R2]), fence=(50, 50, 60, 60)
        )
        assert report.count == 0


class TestFindOverlaps:
    """Tests for find_overlaps."""

    def test_two_collections(self):
        report = find_overlaps(
            features_from_geometries([R1]), features_from_geometries([R2, box(40, 40, 50, 50)])
        )

        assert len(report.overlapping) == 2
        assert report.count == 2
        assert report.max_size == pytest.approx(5.0)


class TestFindCloseVertices:
    """Tests for find_close_vertices."""

    def test_close_pairs(self):
        left = box(0, 0, 10, 10)
        right = Polygon([(10.25, 0), (20, 0), (20, 10), (10.25, 10)])
        report = find_close_vertices(
            features_from_geometries([left]), features_from_geometries([right]), 0.5
        )

        assert report.count == 2
        assert report.min_distance == pytest.approx(0.25)
        assert report.max_distance == pytest.approx(0.25)
        assert not report.cancelled

    def test_nothing_close(self):
        report = find_close_vertices(
            features_from_geometries([R1]), features_from_geometries([box(30, 0, 40, 10)]), 0.5
        )
        assert report.count == 0
        assert math.isnan(report.min_distance)
