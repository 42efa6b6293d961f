from __future__ import annotations

from typing import Any, Optional

import numpy as np

from models.overlay_layers import BoundaryLayer, VisualizationLayer


class HighlightTracker:
    """
    Transient marking of a pixel set (usually the superpixel under the pointer).

    Only the alpha channel of the visualization and boundary layers is
    touched; the label raster is never read or written here.
    """

    def __init__(
        self,
        visualization: VisualizationLayer,
        boundary: BoundaryLayer,
        highlight_alpha: int,
    ) -> None:
        self.visualization = visualization
        self.boundary = boundary
        self.highlight_alpha = max(0, min(255, int(highlight_alpha)))
        self._current: Optional[np.ndarray] = None

    @property
    def current(self) -> Optional[np.ndarray]:
        return self._current

    def set_highlight(self, pixels: Any = None) -> None:
        """Restore the previous set to baseline alpha, then mark `pixels` (None clears)."""
        if self._current is not None:
            self._paint(self._current, self.visualization.alpha, self.boundary.alpha)
        if pixels is None:
            self._current = None
            return
        self._current = np.array(pixels, dtype=np.int64).reshape(-1)
        self._paint(self._current, self.highlight_alpha, self.highlight_alpha)

    def clear(self) -> None:
        self.set_highlight(None)

    def refresh(self) -> None:
        """Re-apply the marking after a layer reset its alpha."""
        if self._current is not None:
            self._paint(self._current, self.highlight_alpha, self.highlight_alpha)

    def _paint(self, pixels: np.ndarray, visualization_alpha: int, boundary_alpha: int) -> None:
        self.visualization.data[pixels, 3] = visualization_alpha
        on_edge = pixels[self.boundary.edges[pixels]]
        self.boundary.data[on_edge, 3] = boundary_alpha
