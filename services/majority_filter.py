"""Filtre majoritaire sur une image de labels (lissage des annotations)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from scipy import ndimage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MajorityFilterResult:
    data: np.ndarray  # labels (H,W), même shape que l'entrée


def majority_filter(labels: np.ndarray, size: int = 3) -> MajorityFilterResult:
    """
    Remplace chaque label par le label le plus fréquent de son voisinage size x size.

    En cas d'égalité le label courant est conservé, sinon le plus petit label
    gagne. Les bords sont traités en répétant les pixels extrêmes.

    Args:
        labels: Image de labels 2D (H,W)
        size: Taille (impaire) du voisinage

    Returns:
        MajorityFilterResult: labels filtrés
    """
    arr = np.asarray(labels)
    if arr.ndim != 2:
        raise ValueError(f"Image de labels 2D attendue, reçu {arr.ndim}D.")
    size = int(size)
    if size < 1 or size % 2 == 0:
        raise ValueError(f"Taille de voisinage impaire attendue, reçu {size}.")

    kernel = np.ones((size, size), dtype=np.int32)
    best = arr.copy()
    best_count = np.zeros(arr.shape, dtype=np.int32)
    values = np.unique(arr)
    for value in values:
        counts = ndimage.convolve((arr == value).astype(np.int32), kernel, mode="nearest")
        # Le label courant gagne les égalités, les autres doivent faire strictement mieux.
        better = np.where(arr == value, counts >= best_count, counts > best_count)
        best[better] = value
        best_count[better] = counts[better]

    logger.debug("Filtre majoritaire | labels=%d | modifiés=%d", len(values), int(np.count_nonzero(best != arr)))
    return MajorityFilterResult(data=best)
