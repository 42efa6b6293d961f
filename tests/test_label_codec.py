"""Tests for the 24-bit label packing."""

from __future__ import annotations

import numpy as np
import pytest

from config.constants import LABEL_MAX
from models import label_codec
from models.errors import OutOfRange


class TestScalarCodec:
    def test_byte_order_is_little_first(self):
        assert label_codec.encode(0x123456) == (0x56, 0x34, 0x12)
        assert label_codec.decode(0x56, 0x34, 0x12) == 0x123456

    def test_bounds(self):
        assert label_codec.encode(0) == (0, 0, 0)
        assert label_codec.encode(LABEL_MAX) == (255, 255, 255)
        assert label_codec.decode(255, 255, 255) == LABEL_MAX

    @pytest.mark.parametrize("label", [0, 1, 255, 256, 65535, 65536, 0xABCDEF, LABEL_MAX])
    def test_decode_inverts_encode(self, label):
        assert label_codec.decode(*label_codec.encode(label)) == label

    @pytest.mark.parametrize("label", [-1, LABEL_MAX + 1, 2**32])
    def test_encode_out_of_range(self, label):
        with pytest.raises(OutOfRange):
            label_codec.encode(label)

    def test_decode_rejects_non_bytes(self):
        with pytest.raises(OutOfRange):
            label_codec.decode(256, 0, 0)
        with pytest.raises(OutOfRange):
            label_codec.decode(0, -1, 0)


class TestCellCodec:
    def test_cells_round_trip_across_domain(self):
        labels = np.append(np.arange(0, LABEL_MAX, 9973, dtype=np.uint32), LABEL_MAX)
        cells = label_codec.encode_cells(labels)
        assert cells.shape == labels.shape + (4,)
        np.testing.assert_array_equal(label_codec.decode_cells(cells), labels)

    def test_cells_are_opaque(self):
        cells = label_codec.encode_cells(np.array([[0, 7], [0x010203, 9]]))
        assert np.all(cells[..., 3] == 255)
        assert cells[1, 0].tolist() == [3, 2, 1, 255]

    def test_decode_accepts_rgb(self):
        rgb = np.array([[[1, 1, 0]]], dtype=np.uint8)
        assert label_codec.decode_cells(rgb)[0, 0] == 257

    def test_decode_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            label_codec.decode_cells(np.zeros((2, 2, 2), dtype=np.uint8))

    def test_check_labels_rejects_out_of_range(self):
        with pytest.raises(OutOfRange):
            label_codec.check_labels([0, LABEL_MAX + 1])
        with pytest.raises(OutOfRange):
            label_codec.check_labels([-3])

    def test_check_labels_rejects_fractions(self):
        with pytest.raises(OutOfRange):
            label_codec.check_labels([1.5])
        assert label_codec.check_labels([2.0]).tolist() == [2]
