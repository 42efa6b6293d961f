"""Tests for differential updates."""

from __future__ import annotations

import numpy as np
import pytest

from config.constants import LABEL_MAX
from models.diff_engine import compute_diff
from models.errors import InvalidArgument, OutOfRange


def _raster(*labels):
    return np.array(labels, dtype=np.uint32)


class TestComputeDiff:
    def test_keeps_only_changed_offsets(self):
        record = compute_diff(_raster(0, 0, 0, 0), [0, 3], [5, 5])
        assert record.pixels.tolist() == [0, 3]
        assert record.prev.tolist() == [0, 0]
        assert record.next.tolist() == [5, 5]

    def test_empty_when_targets_match(self):
        record = compute_diff(_raster(1, 2, 3), [0, 1, 2], [1, 2, 3])
        assert record.is_empty
        assert len(record) == 0

    def test_preserves_input_order(self):
        record = compute_diff(_raster(0, 0, 0, 0), [3, 1, 0], [7, 0, 7])
        assert record.pixels.tolist() == [3, 0]
        assert record.next.tolist() == [7, 7]

    def test_broadcasts_single_label(self):
        record = compute_diff(_raster(4, 0, 4), [0, 1, 2], 4)
        assert record.pixels.tolist() == [1]
        assert record.prev.tolist() == [0]
        assert record.next.tolist() == [4]

    def test_does_not_mutate_raster(self):
        raster = _raster(0, 0)
        compute_diff(raster, [0, 1], 9)
        assert raster.tolist() == [0, 0]

    def test_empty_offsets(self):
        assert compute_diff(_raster(0, 0), [], 3).is_empty

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgument):
            compute_diff(_raster(0, 0, 0), [0, 1], [1, 2, 3])

    @pytest.mark.parametrize("offsets", [[-1], [3], [0, 10]])
    def test_offsets_out_of_raster(self, offsets):
        with pytest.raises(InvalidArgument):
            compute_diff(_raster(0, 0, 0), offsets, 1)

    def test_duplicate_offsets(self):
        with pytest.raises(InvalidArgument):
            compute_diff(_raster(0, 0, 0), [1, 1], [2, 3])

    def test_label_out_of_range(self):
        with pytest.raises(OutOfRange):
            compute_diff(_raster(0, 0), [0], [LABEL_MAX + 1])
