"""Tests for annotator options."""

from __future__ import annotations

import pytest

from config.annotator_config import AnnotatorConfig, SuperpixelOptions
from config.constants import LABEL_MAX
from models.errors import OutOfRange


class TestAnnotatorConfig:
    def test_defaults(self):
        config = AnnotatorConfig()
        assert config.boundary_alpha == 127
        assert config.visualization_alpha == 144
        assert config.highlight_alpha == 255
        assert config.default_label == 0
        assert config.max_history_record == 10
        assert config.colormap == [(255, 255, 255), (255, 0, 0)]

    def test_highlight_alpha_derived_from_visualization(self):
        assert AnnotatorConfig(visualization_alpha=100).highlight_alpha == 228

    def test_explicit_highlight_alpha(self):
        assert AnnotatorConfig(highlight_alpha=90).highlight_alpha == 90

    @pytest.mark.parametrize("field", ["boundary_alpha", "visualization_alpha", "highlight_alpha"])
    def test_alpha_bounds(self, field):
        with pytest.raises(ValueError):
            AnnotatorConfig(**{field: 256})

    def test_default_label_range(self):
        with pytest.raises(OutOfRange):
            AnnotatorConfig(default_label=LABEL_MAX + 1)

    def test_history_capacity(self):
        with pytest.raises(ValueError):
            AnnotatorConfig(max_history_record=0)

    def test_colormap_entries(self):
        with pytest.raises(ValueError):
            AnnotatorConfig(colormap=[[1, 2]])
        with pytest.raises(ValueError):
            AnnotatorConfig(colormap=[])


class TestSuperpixelOptions:
    def test_n_segments_within_bounds(self):
        with pytest.raises(ValueError):
            SuperpixelOptions(n_segments=1, min_segments=2)

    def test_resolution_step(self):
        with pytest.raises(ValueError):
            SuperpixelOptions(resolution_step=1.0)
