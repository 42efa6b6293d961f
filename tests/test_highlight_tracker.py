"""Tests for transient highlight marking on the presentation layers."""

from __future__ import annotations

import numpy as np
import pytest

from config.constants import FallbackColor
from models.highlight_tracker import HighlightTracker
from models.overlay_layers import BoundaryLayer, VisualizationLayer


@pytest.fixture
def layers():
    # 3x1 raster: segments [0, 0, 1] -> pixels 1 and 2 sit on the boundary.
    visualization = VisualizationLayer(3, 1, [[255, 255, 255], [255, 0, 0]], alpha=100)
    boundary = BoundaryLayer(3, 1, alpha=50)
    boundary.update(np.array([[0, 0, 1]]))
    return visualization, boundary


def _alphas(layer):
    return layer.data[:, 3].tolist()


class TestHighlightTracker:
    def test_marks_visualization_and_boundary(self, layers):
        visualization, boundary = layers
        tracker = HighlightTracker(visualization, boundary, highlight_alpha=200)
        tracker.set_highlight([0, 1])
        assert _alphas(visualization) == [200, 200, 100]
        assert _alphas(boundary) == [0, 200, 50]

    def test_previous_set_is_restored(self, layers):
        visualization, boundary = layers
        tracker = HighlightTracker(visualization, boundary, highlight_alpha=200)
        tracker.set_highlight([0, 1])
        tracker.set_highlight([2])
        assert _alphas(visualization) == [100, 100, 200]
        assert _alphas(boundary) == [0, 50, 200]

    def test_none_clears(self, layers):
        visualization, boundary = layers
        tracker = HighlightTracker(visualization, boundary, highlight_alpha=200)
        tracker.set_highlight([0, 1, 2])
        tracker.set_highlight(None)
        assert tracker.current is None
        assert _alphas(visualization) == [100, 100, 100]
        assert _alphas(boundary) == [0, 50, 50]

    def test_colors_untouched(self, layers):
        visualization, boundary = layers
        visualization.paint([0, 1, 2], [0, 1, 0])
        before = visualization.data[:, :3].copy()
        tracker = HighlightTracker(visualization, boundary, highlight_alpha=200)
        tracker.set_highlight([1])
        tracker.clear()
        np.testing.assert_array_equal(visualization.data[:, :3], before)

    def test_refresh_after_alpha_change(self, layers):
        visualization, boundary = layers
        tracker = HighlightTracker(visualization, boundary, highlight_alpha=200)
        tracker.set_highlight([2])
        visualization.set_alpha(30)
        tracker.refresh()
        assert _alphas(visualization) == [30, 30, 200]
        tracker.clear()
        assert _alphas(visualization) == [30, 30, 30]


class TestLayers:
    def test_colormap_with_fallback(self):
        layer = VisualizationLayer(2, 1, [[1, 2, 3]], alpha=10)
        layer.paint([0, 1], [0, 5])
        assert layer.data[0].tolist() == [1, 2, 3, 10]
        assert layer.data[1, :3].tolist() == list(FallbackColor)

    def test_set_alpha_clamps(self):
        layer = VisualizationLayer(1, 1, [[0, 0, 0]], alpha=10)
        assert layer.set_alpha(400) == 255
        assert layer.set_alpha(-4) == 0

    def test_boundary_edges(self):
        boundary = BoundaryLayer(3, 3, alpha=70)
        count = boundary.update(np.array([[0, 0, 0], [0, 1, 0], [0, 0, 0]]))
        # the center and its four neighbours
        assert count == 5
        assert boundary.rgba()[1, 1].tolist() == [255, 255, 255, 70]
        assert boundary.rgba()[0, 0, 3] == 0

    def test_boundary_edges_mask_is_read_only(self):
        boundary = BoundaryLayer(3, 1, alpha=50)
        boundary.update(np.array([[0, 0, 1]]))
        assert boundary.edges.tolist() == [False, True, True]
        with pytest.raises(ValueError):
            boundary.edges[0] = True


class TestTransparentHighlight:
    def test_zero_highlight_alpha_keeps_boundary_restorable(self, layers):
        visualization, boundary = layers
        tracker = HighlightTracker(visualization, boundary, highlight_alpha=0)
        tracker.set_highlight([1, 2])
        assert _alphas(boundary) == [0, 0, 0]
        tracker.clear()
        assert _alphas(boundary) == [0, 50, 50]
        assert _alphas(visualization) == [100, 100, 100]

    def test_zero_highlight_alpha_across_moves(self, layers):
        visualization, boundary = layers
        tracker = HighlightTracker(visualization, boundary, highlight_alpha=0)
        tracker.set_highlight([2])
        tracker.set_highlight([1])
        assert _alphas(boundary) == [0, 0, 50]
        tracker.set_highlight([0])
        assert _alphas(boundary) == [0, 50, 50]
