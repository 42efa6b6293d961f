"""Differential update between the current label raster and requested labels."""

from __future__ import annotations

from typing import Any

import numpy as np

from models.diff_record import DiffRecord
from models.errors import InvalidArgument
from models.label_codec import check_labels


def as_offsets(offsets: Any, size: int) -> np.ndarray:
    """Validate pixel offsets against a raster of `size` cells."""
    arr = np.asarray(offsets)
    if arr.ndim != 1:
        arr = arr.reshape(-1)
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        raise InvalidArgument(f"Offsets must be integers, got {arr.dtype}.")
    arr = arr.astype(np.int64)
    if arr.size:
        lo = int(arr.min())
        hi = int(arr.max())
        if lo < 0 or hi >= size:
            raise InvalidArgument(f"Offsets span [{lo}, {hi}], outside [0, {size}).")
        if np.unique(arr).size != arr.size:
            raise InvalidArgument("Offsets must be unique within one bulk update.")
    return arr


def broadcast_targets(offsets: np.ndarray, labels: Any) -> np.ndarray:
    """Expand a single label to every offset, or check a per-offset sequence."""
    if np.ndim(labels) == 0:
        return np.full(offsets.shape, check_labels(labels), dtype=np.uint32)
    targets = check_labels(labels).reshape(-1)
    if targets.size != offsets.size:
        raise InvalidArgument(f"Invalid labels: {offsets.size} offsets but {targets.size} labels.")
    return targets


def compute_diff(labels: np.ndarray, offsets: Any, targets: Any) -> DiffRecord:
    """
    Keep only the (offset, target) pairs whose target differs from the
    current label, in input order.

    Args:
        labels: flat uint32 view of the current label raster
        offsets: pixel offsets (cell units)
        targets: a single label or one label per offset
    """
    pixels = as_offsets(offsets, labels.size)
    next_labels = broadcast_targets(pixels, targets)
    current = labels[pixels]
    changed = current != next_labels
    return DiffRecord(
        pixels=pixels[changed],
        prev=current[changed].astype(np.uint32),
        next=next_labels[changed],
    )
