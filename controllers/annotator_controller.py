"""Controller qui relie labels, historique, superpixels et couches de visualisation."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

import numpy as np

from config.annotator_config import AnnotatorConfig, SuperpixelOptions
from config.constants import ALPHA_STEP, LEFT_BUTTON, RIGHT_BUTTON
from models.annotation_store import AnnotationStore
from models.diff_record import DiffRecord
from models.highlight_tracker import HighlightTracker
from models.overlay_layers import BoundaryLayer, VisualizationLayer
from models.segment_index import SegmentIndex
from services.annotation_io import AnnotationIO
from services.majority_filter import majority_filter
from services.segmentation_service import SuperpixelSegmentation
from utils.helpers import point_to_offset

# renderer(annotation_rgba, visualization_rgba)
Renderer = Callable[[np.ndarray, np.ndarray], None]


class AnnotatorController:
    """Annote une image par superpixels : peinture, undo/redo, surlignage, import/export."""

    def __init__(
        self,
        image: Any,
        *,
        config: Optional[AnnotatorConfig] = None,
        segmentation_factory: Callable[..., Any] = SuperpixelSegmentation,
        label_filter: Callable[[np.ndarray], Any] = majority_filter,
        annotation_io: Optional[AnnotationIO] = None,
        renderer: Optional[Renderer] = None,
        on_load: Optional[Callable[[], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
        on_left_click: Optional[Callable[[int], None]] = None,
        on_right_click: Optional[Callable[[int], None]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.image = np.asarray(image)
        if self.image.ndim not in (2, 3) or self.image.size == 0:
            raise ValueError(f"Image 2D ou 3D attendue, reçu shape {self.image.shape}.")
        self.config = config or AnnotatorConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.height, self.width = int(self.image.shape[0]), int(self.image.shape[1])

        self.segmentation_factory = segmentation_factory
        self.label_filter = label_filter
        self.annotation_io = annotation_io or AnnotationIO()
        self.renderer = renderer
        self.on_change = on_change
        self.on_left_click = on_left_click
        self.on_right_click = on_right_click

        self.store = AnnotationStore(
            self.width,
            self.height,
            default_label=self.config.default_label,
            max_history_record=self.config.max_history_record,
        )
        self.visualization = VisualizationLayer(
            self.width, self.height, self.config.colormap, self.config.visualization_alpha
        )
        self.visualization.paint(np.arange(self.store.size), self.store.get_labels())
        self.boundary = BoundaryLayer(self.width, self.height, self.config.boundary_alpha)
        self.highlight = HighlightTracker(self.visualization, self.boundary, self.config.highlight_alpha)

        self.segmentation: Any = None
        self.segment_index: Optional[SegmentIndex] = None
        self._pointer = {"down": False, "button": LEFT_BUTTON}

        self.store.add_listener(self._on_labels_changed)
        self.reset_superpixels(self.config.superpixel)

        self.logger.info(
            "Annotator prêt | %dx%d | history=%d", self.width, self.height, self.config.max_history_record
        )
        if on_load is not None:
            on_load()
        self._emit_change()

    # ------------------------------------------------------------------ #
    # Superpixels
    # ------------------------------------------------------------------ #
    def reset_superpixels(self, options: Optional[SuperpixelOptions] = None) -> "AnnotatorController":
        """Recalcule la segmentation depuis l'image source."""
        self.segmentation = self.segmentation_factory(self.image, options or self.config.superpixel)
        self._update_superpixels()
        return self

    def finer(self) -> "AnnotatorController":
        self.segmentation.finer()
        self._update_superpixels()
        return self

    def coarser(self) -> "AnnotatorController":
        self.segmentation.coarser()
        self._update_superpixels()
        return self

    def _update_superpixels(self) -> None:
        result = self.segmentation.result
        index = SegmentIndex.build(result.data, result.num_segments, shape=self.store.shape)
        # Restaurer l'alpha avec l'ancienne carte de bords avant de la remplacer.
        self.highlight.clear()
        edge_count = self.boundary.update(index.segment_map)
        self.segment_index = index
        self.logger.info(
            "Index superpixels reconstruit | segments=%d | bords=%d", index.num_segments, edge_count
        )
        self.render()

    # ------------------------------------------------------------------ #
    # Labels
    # ------------------------------------------------------------------ #
    @property
    def current_label(self) -> int:
        return self.store.current_label

    @current_label.setter
    def current_label(self, label: int) -> None:
        self.store.current_label = label

    def label_segment(self, offset: int, label: Optional[int] = None) -> DiffRecord:
        """Peint tout le superpixel contenant `offset`."""
        pixels = self.segment_index.pixels_at(offset)
        target = self.store.current_label if label is None else label
        return self.store.apply_bulk_label(pixels, target)

    def undo(self) -> bool:
        return self.store.undo()

    def redo(self) -> bool:
        return self.store.redo()

    def fill(self, target_label: Optional[int] = None) -> "AnnotatorController":
        self.store.fill(target_label)
        return self

    def denoise(self) -> "AnnotatorController":
        record = self.store.denoise(self.label_filter)
        self.logger.info("Débruitage appliqué | pixels modifiés=%d", len(record))
        return self

    def get_unique_labels(self) -> List[int]:
        return self.store.get_unique_labels()

    def _on_labels_changed(self, pixels: np.ndarray, labels: np.ndarray) -> None:
        self.visualization.paint(pixels, labels)
        self.render()
        self._emit_change()

    def _emit_change(self) -> None:
        if self.on_change is not None:
            self.on_change()

    # ------------------------------------------------------------------ #
    # Visualization
    # ------------------------------------------------------------------ #
    def set_alpha(self, alpha: int) -> "AnnotatorController":
        self.visualization.set_alpha(alpha)
        self.highlight.refresh()
        self.render()
        return self

    def less_alpha(self, scale: float = 1) -> "AnnotatorController":
        return self.set_alpha(self.visualization.alpha - scale * ALPHA_STEP)

    def more_alpha(self, scale: float = 1) -> "AnnotatorController":
        return self.set_alpha(self.visualization.alpha + scale * ALPHA_STEP)

    def highlight_label(self, label: int) -> "AnnotatorController":
        """Surligne tous les pixels portant `label`."""
        self.highlight.set_highlight(self.store.find_pixels(label))
        self.render()
        return self

    def unhighlight_label(self) -> "AnnotatorController":
        self.highlight.clear()
        self.render()
        return self

    def render(self) -> None:
        if self.renderer is not None:
            self.renderer(self.store.get_cells(), self.visualization.rgba())

    # ------------------------------------------------------------------ #
    # Pointer
    # ------------------------------------------------------------------ #
    def pointer_down(self, button: int = LEFT_BUTTON) -> None:
        self._pointer["down"] = True
        self._pointer["button"] = int(button)

    def pointer_move(self, x: float, y: float) -> None:
        """Surligne le superpixel sous le pointeur ; peint ou pioche le label si un bouton est enfoncé."""
        offset = point_to_offset(x, y, self.width, self.height)
        pixels = self.segment_index.pixels_at(offset)
        self.highlight.set_highlight(pixels)
        if self._pointer["down"]:
            if self._pointer["button"] == RIGHT_BUTTON:
                if self.on_right_click is not None:
                    self.on_right_click(self.store.get_label(offset))
            else:
                self.store.apply_bulk_label(pixels, self.store.current_label)
                if self.on_left_click is not None:
                    self.on_left_click(self.store.current_label)
        self.render()

    def pointer_up(self, x: float, y: float) -> None:
        self.pointer_move(x, y)
        self._pointer["down"] = False

    def pointer_leave(self) -> None:
        self.highlight.clear()
        self.render()

    # ------------------------------------------------------------------ #
    # Import / Export
    # ------------------------------------------------------------------ #
    def import_annotation(self, path: str, *, grayscale: bool = False) -> "AnnotatorController":
        """Remplace l'annotation par un fichier ; l'historique est vidé."""
        labels = self.annotation_io.load(path, expected_shape=self.store.shape, grayscale=grayscale)
        self.store.replace_raster_wholesale(labels)
        return self

    def export_annotation(self, destination: str) -> str:
        return self.annotation_io.save_png(self.store.get_labels(), destination)

    def export_data_url(self) -> str:
        return self.annotation_io.to_data_url(self.store.get_labels())
