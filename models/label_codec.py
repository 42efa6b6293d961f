"""Packing of 24-bit labels into the RGB bytes of a 4-byte pixel cell.

Byte order is little-byte-first: ``b0 = label & 0xFF`` goes to the red
channel, ``b1`` to green, ``b2`` to blue. The fourth byte belongs to the
renderer; writers force it opaque when committing a label.
"""

from __future__ import annotations

from typing import Any, Tuple

import numpy as np

from config.constants import CELL_BYTES, LABEL_MAX, OPAQUE_ALPHA
from models.errors import OutOfRange


def _check_label(label: int) -> int:
    value = int(label)
    if not 0 <= value <= LABEL_MAX:
        raise OutOfRange(f"Label {value} outside [0, {LABEL_MAX}].")
    return value


def _check_byte(value: int) -> int:
    value = int(value)
    if not 0 <= value <= 0xFF:
        raise OutOfRange(f"Byte {value} outside [0, 255].")
    return value


def encode(label: int) -> Tuple[int, int, int]:
    """Return the (b0, b1, b2) encoding of a label."""
    value = _check_label(label)
    return value & 0xFF, (value >> 8) & 0xFF, (value >> 16) & 0xFF


def decode(b0: int, b1: int, b2: int) -> int:
    """Return the label stored in three bytes."""
    return _check_byte(b0) | (_check_byte(b1) << 8) | (_check_byte(b2) << 16)


def check_labels(labels: Any) -> np.ndarray:
    """Validate an array of labels and return it as uint32."""
    arr = np.asarray(labels)
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        if not np.all(np.mod(arr, 1) == 0):
            raise OutOfRange("Labels must be integers.")
    if arr.size:
        lo = int(arr.min())
        hi = int(arr.max())
        if lo < 0 or hi > LABEL_MAX:
            raise OutOfRange(f"Labels span [{lo}, {hi}], outside [0, {LABEL_MAX}].")
    return arr.astype(np.uint32)


def encode_cells(labels: Any) -> np.ndarray:
    """Encode labels (any shape) into opaque RGBA cells, shape (..., 4) uint8."""
    values = check_labels(labels)
    cells = np.empty(values.shape + (CELL_BYTES,), dtype=np.uint8)
    cells[..., 0] = values & 0xFF
    cells[..., 1] = (values >> 8) & 0xFF
    cells[..., 2] = (values >> 16) & 0xFF
    cells[..., 3] = OPAQUE_ALPHA
    return cells


def decode_cells(cells: Any) -> np.ndarray:
    """Decode RGB(A) cells, shape (..., 3|4), into uint32 labels."""
    arr = np.asarray(cells)
    if arr.ndim < 1 or arr.shape[-1] not in (3, 4):
        raise ValueError(f"Expected cells with 3 or 4 channels, got shape {arr.shape}.")
    if arr.dtype != np.uint8:
        raise ValueError(f"Expected uint8 cells, got {arr.dtype}.")
    rgb = arr[..., :3].astype(np.uint32)
    return rgb[..., 0] | (rgb[..., 1] << 8) | (rgb[..., 2] << 16)
