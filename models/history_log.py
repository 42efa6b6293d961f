from __future__ import annotations

import logging
from typing import Callable, List, Tuple

import numpy as np

from config.constants import DEFAULT_MAX_HISTORY_RECORD
from models.diff_record import DiffRecord

logger = logging.getLogger(__name__)

# Writes labels at offsets into the raster owned by the caller.
Replay = Callable[[np.ndarray, np.ndarray], None]


class HistoryLog:
    """
    Bounded linear undo/redo log of DiffRecords.

    ``cursor`` points at the record currently applied at head; -1 means
    everything has been undone. Once the log is full, ``push`` evicts the
    oldest record and the cursor stays pinned at ``capacity - 1``.
    """

    def __init__(self, capacity: int = DEFAULT_MAX_HISTORY_RECORD) -> None:
        capacity = int(capacity)
        if capacity < 1:
            raise ValueError("History capacity must be >= 1.")
        self.capacity = capacity
        self._records: List[DiffRecord] = []
        self.cursor: int = -1

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> Tuple[DiffRecord, ...]:
        return tuple(self._records)

    def can_undo(self) -> bool:
        return self.cursor >= 0

    def can_redo(self) -> bool:
        return self.cursor < len(self._records) - 1

    def clear(self) -> None:
        self._records = []
        self.cursor = -1

    def push(self, record: DiffRecord) -> None:
        """Drop the redo tail, append, evict the oldest record past capacity."""
        del self._records[self.cursor + 1:]
        self._records.append(record)
        if len(self._records) > self.capacity:
            self._records.pop(0)
            logger.debug("History full (%d), oldest record evicted", self.capacity)
        else:
            self.cursor += 1

    def undo(self, replay: Replay) -> bool:
        """
        Replay the head record backwards.

        Returns True when the log is now fully undone, False otherwise
        (including when there was nothing to undo).
        """
        if self.cursor < 0:
            return False
        record = self._records[self.cursor]
        replay(record.pixels, record.prev)
        self.cursor -= 1
        return self.cursor < 0

    def redo(self, replay: Replay) -> bool:
        """
        Replay the next record forwards.

        Returns True when no further redo is possible, False otherwise
        (including when there was nothing to redo).
        """
        if self.cursor >= len(self._records) - 1:
            return False
        self.cursor += 1
        record = self._records[self.cursor]
        replay(record.pixels, record.next)
        return self.cursor >= len(self._records) - 1
