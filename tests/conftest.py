"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from services.segmentation_service import SegmentationResult


# ---------------------------------------------------------------------------
# Deterministic segmentation stand-in
# ---------------------------------------------------------------------------

def halves(height: int, width: int) -> np.ndarray:
    """Left half -> segment 0, right half -> segment 1."""
    seg = np.zeros((height, width), dtype=np.int32)
    seg[:, width // 2:] = 1
    return seg


def quadrants(height: int, width: int) -> np.ndarray:
    seg = halves(height, width)
    seg[height // 2:, :] += 2
    return seg


class FakeSegmentation:
    """Cycles through three fixed resolutions: one segment, halves, quadrants."""

    def __init__(self, image, options=None):
        h, w = np.asarray(image).shape[:2]
        self.levels = [
            SegmentationResult(data=np.zeros((h, w), dtype=np.int32), num_segments=1),
            SegmentationResult(data=halves(h, w), num_segments=2),
            SegmentationResult(data=quadrants(h, w), num_segments=4),
        ]
        self.level = 1
        self.options = options

    @property
    def result(self):
        return self.levels[self.level]

    def finer(self):
        self.level = min(self.level + 1, len(self.levels) - 1)
        return self

    def coarser(self):
        self.level = max(self.level - 1, 0)
        return self


@pytest.fixture
def image():
    """4x4 black RGB image."""
    return np.zeros((4, 4, 3), dtype=np.uint8)


@pytest.fixture
def events():
    """Records callback invocations as (name, args) tuples."""
    return []
