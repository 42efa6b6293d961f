"""Options recognized by the segment annotator, validated once at construction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from config.constants import (
    DEFAULT_BOUNDARY_ALPHA,
    DEFAULT_COLORMAP,
    DEFAULT_COMPACTNESS,
    DEFAULT_LABEL,
    DEFAULT_MAX_HISTORY_RECORD,
    DEFAULT_N_SEGMENTS,
    DEFAULT_RESOLUTION_STEP,
    DEFAULT_VISUALIZATION_ALPHA,
    HIGHLIGHT_ALPHA_BOOST,
    LABEL_MAX,
    MAX_N_SEGMENTS,
    MIN_N_SEGMENTS,
)
from models.errors import OutOfRange


def _check_alpha(name: str, value: int) -> int:
    value = int(value)
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be in [0, 255], got {value}.")
    return value


@dataclass
class SuperpixelOptions:
    """SLIC parameters; finer/coarser scale n_segments by resolution_step."""

    n_segments: int = DEFAULT_N_SEGMENTS
    compactness: float = DEFAULT_COMPACTNESS
    sigma: float = 0.0
    resolution_step: float = DEFAULT_RESOLUTION_STEP
    min_segments: int = MIN_N_SEGMENTS
    max_segments: int = MAX_N_SEGMENTS

    def __post_init__(self) -> None:
        if self.min_segments < 1 or self.max_segments < self.min_segments:
            raise ValueError(
                f"Invalid segment bounds [{self.min_segments}, {self.max_segments}]."
            )
        if not self.min_segments <= self.n_segments <= self.max_segments:
            raise ValueError(
                f"n_segments={self.n_segments} outside [{self.min_segments}, {self.max_segments}]."
            )
        if self.compactness <= 0:
            raise ValueError("compactness must be positive.")
        if self.sigma < 0:
            raise ValueError("sigma must be >= 0.")
        if self.resolution_step <= 1.0:
            raise ValueError("resolution_step must be > 1.")


@dataclass
class AnnotatorConfig:
    """Every option of the annotator with its default."""

    colormap: Sequence[Sequence[int]] = field(default_factory=lambda: [list(c) for c in DEFAULT_COLORMAP])
    boundary_alpha: int = DEFAULT_BOUNDARY_ALPHA
    visualization_alpha: int = DEFAULT_VISUALIZATION_ALPHA
    highlight_alpha: Optional[int] = None
    default_label: int = DEFAULT_LABEL
    max_history_record: int = DEFAULT_MAX_HISTORY_RECORD
    superpixel: SuperpixelOptions = field(default_factory=SuperpixelOptions)

    def __post_init__(self) -> None:
        self.boundary_alpha = _check_alpha("boundary_alpha", self.boundary_alpha)
        self.visualization_alpha = _check_alpha("visualization_alpha", self.visualization_alpha)
        if self.highlight_alpha is None:
            self.highlight_alpha = min(255, self.visualization_alpha + HIGHLIGHT_ALPHA_BOOST)
        self.highlight_alpha = _check_alpha("highlight_alpha", self.highlight_alpha)

        self.default_label = int(self.default_label)
        if not 0 <= self.default_label <= LABEL_MAX:
            raise OutOfRange(f"default_label {self.default_label} outside [0, {LABEL_MAX}].")

        self.max_history_record = int(self.max_history_record)
        if self.max_history_record < 1:
            raise ValueError("max_history_record must be >= 1.")

        colors: List[Tuple[int, int, int]] = []
        for color in self.colormap:
            if len(color) != 3:
                raise ValueError(f"Colormap entries must be RGB triplets, got {color!r}.")
            colors.append(tuple(_check_alpha("colormap channel", c) for c in color))
        if not colors:
            raise ValueError("colormap must not be empty.")
        self.colormap = colors
