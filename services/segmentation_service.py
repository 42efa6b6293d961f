"""Service de segmentation en superpixels (SLIC) avec réglage de la résolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np
from skimage.segmentation import slic

from config.annotator_config import SuperpixelOptions


@dataclass(frozen=True)
class SegmentationResult:
    """Carte de segments (H,W) int32 aux ids contigus dans [0, num_segments)."""

    data: np.ndarray
    num_segments: int


class SuperpixelSegmentation:
    """Calcule les superpixels d'une image et permet de les affiner ou de les grossir."""

    def __init__(self, image: np.ndarray, options: Optional[SuperpixelOptions] = None) -> None:
        self.logger = logging.getLogger(__name__)
        arr = np.asarray(image)
        if arr.ndim not in (2, 3) or arr.size == 0:
            raise ValueError(f"Image 2D ou 3D attendue, reçu shape {arr.shape}.")
        if arr.ndim == 3 and arr.shape[2] == 4:
            arr = arr[..., :3]
        self.image = arr
        self.options = options or SuperpixelOptions()
        self.result = self._run(self.options)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    def finer(self) -> "SuperpixelSegmentation":
        """Augmente le nombre de superpixels d'un pas."""
        target = int(round(self.options.n_segments * self.options.resolution_step))
        return self._resize(min(self.options.max_segments, target))

    def coarser(self) -> "SuperpixelSegmentation":
        """Diminue le nombre de superpixels d'un pas."""
        target = int(round(self.options.n_segments / self.options.resolution_step))
        return self._resize(max(self.options.min_segments, target))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _resize(self, n_segments: int) -> "SuperpixelSegmentation":
        if n_segments == self.options.n_segments:
            self.logger.info("Résolution superpixel déjà à la limite (%d)", n_segments)
            return self
        options = replace(self.options, n_segments=n_segments)
        # Le résultat précédent reste en place si SLIC échoue.
        self.result = self._run(options)
        self.options = options
        return self

    def _run(self, options: SuperpixelOptions) -> SegmentationResult:
        channel_axis = -1 if self.image.ndim == 3 else None
        segments = slic(
            self.image,
            n_segments=options.n_segments,
            compactness=options.compactness,
            sigma=options.sigma,
            start_label=0,
            channel_axis=channel_axis,
        )
        # Renumérotation contiguë : SLIC peut sauter des ids.
        ids, inverse = np.unique(segments, return_inverse=True)
        data = inverse.reshape(segments.shape).astype(np.int32)
        self.logger.info(
            "Superpixels calculés | demandé=%d | obtenu=%d", options.n_segments, len(ids)
        )
        return SegmentationResult(data=data, num_segments=int(len(ids)))
