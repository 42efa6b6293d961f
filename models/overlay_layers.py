"""Presentation rasters: label colors and superpixel boundaries (no label data)."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from config.constants import CELL_BYTES, FallbackColor


def _clamp_alpha(alpha: int) -> int:
    return max(0, min(255, int(alpha)))


class VisualizationLayer:
    """RGBA raster showing each label with its colormap color."""

    def __init__(
        self,
        width: int,
        height: int,
        colormap: Sequence[Sequence[int]],
        alpha: int,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.palette = np.asarray(colormap, dtype=np.uint8).reshape(-1, 3)
        self.alpha = _clamp_alpha(alpha)
        self.data = np.zeros((self.width * self.height, CELL_BYTES), dtype=np.uint8)
        self.data[:, 3] = self.alpha

    def colors_for(self, labels: Any) -> np.ndarray:
        """RGB colors for labels; labels past the colormap get the fallback color."""
        values = np.asarray(labels, dtype=np.int64).reshape(-1)
        colors = np.empty((values.size, 3), dtype=np.uint8)
        known = values < len(self.palette)
        colors[known] = self.palette[values[known]]
        colors[~known] = FallbackColor
        return colors

    def paint(self, pixels: Any, labels: Any) -> None:
        """Recolor the given offsets; alpha is left as is."""
        pixels = np.asarray(pixels, dtype=np.int64)
        self.data[pixels, :3] = self.colors_for(labels)

    def set_alpha(self, alpha: int) -> int:
        self.alpha = _clamp_alpha(alpha)
        self.data[:, 3] = self.alpha
        return self.alpha

    def rgba(self) -> np.ndarray:
        return self.data.reshape(self.height, self.width, CELL_BYTES).copy()


class BoundaryLayer:
    """White edge map of the superpixel segmentation."""

    def __init__(self, width: int, height: int, alpha: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.alpha = _clamp_alpha(alpha)
        self.data = np.zeros((self.width * self.height, CELL_BYTES), dtype=np.uint8)
        self.edges = np.zeros(self.width * self.height, dtype=bool)
        self.edges.setflags(write=False)

    def update(self, segment_map: np.ndarray) -> int:
        """Mark pixels with a 4-neighbour in another segment. Returns the boundary pixel count."""
        seg = np.asarray(segment_map)
        edges = np.zeros(seg.shape, dtype=bool)
        horizontal = seg[:, 1:] != seg[:, :-1]
        vertical = seg[1:, :] != seg[:-1, :]
        edges[:, 1:] |= horizontal
        edges[:, :-1] |= horizontal
        edges[1:, :] |= vertical
        edges[:-1, :] |= vertical

        flat = edges.reshape(-1)
        flat.setflags(write=False)
        self.edges = flat
        self.data[:] = 0
        self.data[:, :3] = 255
        self.data[flat, 3] = self.alpha
        return int(np.count_nonzero(flat))

    def rgba(self) -> np.ndarray:
        return self.data.reshape(self.height, self.width, CELL_BYTES).copy()
