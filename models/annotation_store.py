from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

import numpy as np

from config.constants import CELL_BYTES, DEFAULT_LABEL, DEFAULT_MAX_HISTORY_RECORD
from models import label_codec
from models.diff_engine import compute_diff
from models.diff_record import DiffRecord
from models.errors import InvalidArgument
from models.history_log import HistoryLog

logger = logging.getLogger(__name__)

# Receives the changed offsets and the labels they now carry.
ChangeListener = Callable[[np.ndarray, np.ndarray], None]


class AnnotationStore:
    """
    Owns the label raster: labels packed in the RGB bytes of (H*W, 4) cells.

    Every mutation goes through apply_bulk_label, undo, redo or
    replace_raster_wholesale; readers get decoded copies.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        default_label: int = DEFAULT_LABEL,
        max_history_record: int = DEFAULT_MAX_HISTORY_RECORD,
    ) -> None:
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise InvalidArgument(f"Raster dimensions must be positive, got {width}x{height}.")
        self.width = width
        self.height = height
        self.history = HistoryLog(max_history_record)
        self._listeners: List[ChangeListener] = []

        default = np.uint32(label_codec.check_labels(default_label))
        self._labels = np.full(width * height, default, dtype=np.uint32)
        self._cells = label_codec.encode_cells(self._labels)
        self._current_label = int(default)

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #
    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    @property
    def current_label(self) -> int:
        return self._current_label

    @current_label.setter
    def current_label(self, label: int) -> None:
        self._current_label = int(label_codec.check_labels(label))

    def get_label(self, offset: int) -> int:
        offset = int(offset)
        if not 0 <= offset < self.size:
            raise InvalidArgument(f"Offset {offset} outside [0, {self.size}).")
        return int(self._labels[offset])

    def get_labels(self) -> np.ndarray:
        """Decoded copy of the raster, shape (H, W) uint32."""
        return self._labels.reshape(self.shape).copy()

    def get_cells(self) -> np.ndarray:
        """Copy of the packed cells, shape (H, W, 4) uint8, alpha opaque."""
        return self._cells.reshape(self.height, self.width, CELL_BYTES).copy()

    def find_pixels(self, label: int) -> np.ndarray:
        """Offsets currently carrying `label`, ascending."""
        return np.flatnonzero(self._labels == int(label))

    def get_unique_labels(self) -> List[int]:
        return [int(v) for v in np.unique(self._labels)]

    # ------------------------------------------------------------------ #
    # Change notification
    # ------------------------------------------------------------------ #
    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def _notify(self, pixels: np.ndarray, labels: np.ndarray) -> None:
        for listener in list(self._listeners):
            listener(pixels, labels)

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    def apply_bulk_label(self, offsets: Any, labels: Any) -> DiffRecord:
        """
        Set `labels` (one label or one per offset) at `offsets`.

        Only the cells that actually change are written and recorded; an
        empty diff leaves raster, history and listeners untouched.
        """
        record = compute_diff(self._labels, offsets, labels)
        if record.is_empty:
            logger.debug("Bulk update is a no-op (%d offsets)", np.size(offsets))
            return record
        self._fill_pixels(record.pixels, record.next)
        self.history.push(record)
        logger.debug(
            "Bulk update applied | changed=%d | history=%d | cursor=%d",
            len(record),
            len(self.history),
            self.history.cursor,
        )
        self._notify(record.pixels, record.next)
        return record

    def undo(self) -> bool:
        """Revert the head record. Returns True once everything is undone."""
        if not self.history.can_undo():
            return False
        record = self.history.records[self.history.cursor]
        done = self.history.undo(self._fill_pixels)
        logger.debug("Undo | cursor=%d", self.history.cursor)
        self._notify(record.pixels, record.prev)
        return done

    def redo(self) -> bool:
        """Re-apply the next record. Returns True once nothing is left to redo."""
        if not self.history.can_redo():
            return False
        done = self.history.redo(self._fill_pixels)
        record = self.history.records[self.history.cursor]
        logger.debug("Redo | cursor=%d", self.history.cursor)
        self._notify(record.pixels, record.next)
        return done

    def fill(self, target_label: Optional[int] = None) -> DiffRecord:
        """Paint `current_label` over every pixel labeled `target_label` (all if None)."""
        if target_label is None:
            pixels = np.arange(self.size, dtype=np.int64)
        else:
            pixels = self.find_pixels(target_label)
        return self.apply_bulk_label(pixels, self._current_label)

    def apply_label_raster(self, labels: Any) -> DiffRecord:
        """Diff a full (H, W) replacement raster against the current one and apply it."""
        arr = np.asarray(labels)
        if tuple(arr.shape) != self.shape:
            raise InvalidArgument(f"Label raster shape {arr.shape} differs from {self.shape}.")
        return self.apply_bulk_label(np.arange(self.size, dtype=np.int64), arr.reshape(-1))

    def replace_raster_wholesale(self, labels: Any) -> None:
        """Replace every label without diffing; clears the history."""
        arr = np.asarray(labels)
        if tuple(arr.shape) != self.shape:
            raise InvalidArgument(f"Label raster shape {arr.shape} differs from {self.shape}.")
        values = label_codec.check_labels(arr).reshape(-1)
        self._cells = label_codec.encode_cells(values)
        self._labels = values.copy()
        self.history.clear()
        logger.info("Label raster replaced | unique_labels=%d", np.unique(values).size)
        self._notify(np.arange(self.size, dtype=np.int64), self._labels.copy())

    def _fill_pixels(self, pixels: Sequence[int], labels: Sequence[int]) -> None:
        if len(pixels) != len(labels):
            raise InvalidArgument(f"Invalid fill: {len(pixels)} != {len(labels)}")
        values = label_codec.check_labels(labels)
        self._cells[pixels] = label_codec.encode_cells(values)
        self._labels[pixels] = values

    def denoise(self, majority_filter: Callable[[np.ndarray], Any]) -> DiffRecord:
        """
        Smooth labels with a majority filter and record the result like a manual edit.

        `majority_filter` receives the decoded (H, W) raster and returns an
        object whose `data` is the replacement raster. Nothing is written if
        the filter raises.
        """
        result = majority_filter(self.get_labels())
        data = np.asarray(result if isinstance(result, np.ndarray) else result.data)
        if data.size != self.size:
            raise InvalidArgument(f"Filter returned {data.size} labels for {self.size} pixels.")
        return self.apply_label_raster(data.reshape(self.shape))
