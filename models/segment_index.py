from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

import numpy as np

from models.errors import InvalidArgument, InvalidSegmentId

logger = logging.getLogger(__name__)


class SegmentIndex:
    """
    Pixel offsets grouped by superpixel id.

    Slot ``k`` holds, in ascending order, every offset whose segment map
    value is ``k``. The slots partition ``[0, width*height)``.
    """

    def __init__(self, slots: Sequence[np.ndarray], segment_map: np.ndarray) -> None:
        self._slots: List[np.ndarray] = list(slots)
        self._segment_map = segment_map

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    @classmethod
    def build(
        cls,
        segment_map: Any,
        num_segments: int,
        shape: Optional[tuple[int, int]] = None,
    ) -> "SegmentIndex":
        """Index a (H, W) segment map whose ids lie in [0, num_segments)."""
        seg = np.asarray(segment_map)
        if seg.ndim != 2:
            raise InvalidArgument(f"Segment map must be 2D (H,W), got {seg.ndim}D.")
        if shape is not None and tuple(seg.shape) != tuple(shape):
            raise InvalidArgument(f"Segment map shape {seg.shape} differs from raster {tuple(shape)}.")
        if seg.size and not np.issubdtype(seg.dtype, np.integer):
            raise InvalidSegmentId(f"Segment ids must be integers, got {seg.dtype}.")
        num_segments = int(num_segments)
        if num_segments < 0:
            raise InvalidArgument("num_segments must be >= 0.")

        flat = seg.reshape(-1).astype(np.int64)
        if flat.size:
            bad = (flat < 0) | (flat >= num_segments)
            if np.any(bad):
                first = int(np.flatnonzero(bad)[0])
                raise InvalidSegmentId(
                    f"Segment id {int(flat[first])} at offset {first} outside [0, {num_segments})."
                )

        # Stable sort keeps row-major (ascending) order inside each slot.
        order = np.argsort(flat, kind="stable")
        counts = np.bincount(flat, minlength=num_segments)
        bounds = np.cumsum(counts)[:-1]
        slots = np.split(order, bounds) if num_segments else []

        frozen = flat.reshape(seg.shape)
        frozen.setflags(write=False)
        for slot in slots:
            slot.setflags(write=False)
        logger.debug("SegmentIndex built | segments=%d | pixels=%d", num_segments, flat.size)
        return cls(slots, frozen)

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #
    @property
    def num_segments(self) -> int:
        return len(self._slots)

    @property
    def shape(self) -> tuple[int, int]:
        return tuple(self._segment_map.shape)

    @property
    def segment_map(self) -> np.ndarray:
        """Read-only (H, W) segment ids."""
        return self._segment_map

    def __len__(self) -> int:
        return len(self._slots)

    def pixels(self, segment_id: int) -> np.ndarray:
        """Offsets belonging to a segment (read-only)."""
        segment_id = int(segment_id)
        if not 0 <= segment_id < len(self._slots):
            raise InvalidSegmentId(f"Segment id {segment_id} outside [0, {len(self._slots)}).")
        return self._slots[segment_id]

    def segment_at(self, offset: int) -> int:
        """Segment id of the pixel at a linear offset."""
        offset = int(offset)
        flat = self._segment_map.reshape(-1)
        if not 0 <= offset < flat.size:
            raise InvalidArgument(f"Offset {offset} outside [0, {flat.size}).")
        return int(flat[offset])

    def pixels_at(self, offset: int) -> np.ndarray:
        """Every offset of the superpixel containing `offset`."""
        return self._slots[self.segment_at(offset)]
