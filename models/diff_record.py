from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _empty() -> np.ndarray:
    return np.zeros(0, dtype=np.int64)


@dataclass(frozen=True)
class DiffRecord:
    """One accepted edit: parallel offsets, previous labels and new labels."""

    pixels: np.ndarray = field(default_factory=_empty)  # int64 cell offsets
    prev: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.uint32))
    next: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.uint32))

    def __post_init__(self) -> None:
        if not len(self.pixels) == len(self.prev) == len(self.next):
            raise ValueError(
                f"DiffRecord sequences differ in length: {len(self.pixels)}, {len(self.prev)}, {len(self.next)}."
            )

    def __len__(self) -> int:
        return int(len(self.pixels))

    @property
    def is_empty(self) -> bool:
        return len(self.pixels) == 0
