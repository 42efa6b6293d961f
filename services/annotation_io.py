"""Service d'export/import des annotations encodées dans une image PNG."""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from models import label_codec

# Modes PIL à un seul canal : la valeur du canal est directement le label.
SINGLE_CHANNEL_MODES = ("L", "LA", "I", "I;16", "I;16L", "I;16B", "I;16N")


class AnnotationIO:
    """Écrit et relit le raster de labels (RGB = encodage du label, alpha opaque)."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------ #
    # Export
    # ------------------------------------------------------------------ #
    def encode_png(self, labels: np.ndarray) -> bytes:
        """Encode un raster de labels (H,W) en PNG RGBA."""
        arr = np.asarray(labels)
        if arr.ndim != 2 or arr.size == 0:
            raise ValueError(f"Raster de labels 2D attendu, reçu shape {arr.shape}.")
        cells = label_codec.encode_cells(arr)
        buffer = io.BytesIO()
        Image.fromarray(cells).save(buffer, format="PNG")
        return buffer.getvalue()

    def save_png(self, labels: np.ndarray, destination: str) -> str:
        """
        Sauvegarde l'annotation en PNG et retourne le chemin final.

        Args:
            labels: raster 2D (H,W) des labels.
            destination: chemin cible (l'extension .png est ajoutée si absente).
        """
        path = Path(destination)
        if path.suffix.lower() != ".png":
            path = path.with_suffix(".png")
        path.write_bytes(self.encode_png(labels))
        self.logger.info("Annotation sauvegardée: %s", path)
        return str(path)

    def to_data_url(self, labels: np.ndarray) -> str:
        """Retourne l'annotation sous forme de data URL PNG."""
        payload = base64.b64encode(self.encode_png(labels)).decode("ascii")
        return f"data:image/png;base64,{payload}"

    # ------------------------------------------------------------------ #
    # Import
    # ------------------------------------------------------------------ #
    def load(
        self,
        path: str,
        expected_shape: Optional[Tuple[int, int]] = None,
        *,
        grayscale: bool = False,
    ) -> np.ndarray:
        """
        Charge une annotation et retourne le raster de labels (H,W) uint32.

        Les images RGB/RGBA sont décodées (R | G<<8 | B<<16). Les images à un
        canal, ou toute image si grayscale=True, donnent le label directement
        par la valeur du premier canal.
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Fichier introuvable: {file_path}")

        with Image.open(file_path) as img:
            img.load()
            labels = self._decode_image(img, grayscale=grayscale)

        if expected_shape is not None and tuple(labels.shape) != tuple(expected_shape):
            raise ValueError(
                f"Shape annotation {labels.shape} différent du raster {tuple(expected_shape)}."
            )
        self.logger.info(
            "Annotation chargée: %s | shape=%s | labels=%d",
            file_path,
            labels.shape,
            np.unique(labels).size,
        )
        return labels

    def decode_png(self, data: bytes, *, grayscale: bool = False) -> np.ndarray:
        """Décode une annotation PNG depuis des octets."""
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return self._decode_image(img, grayscale=grayscale)

    def _decode_image(self, img: Image.Image, *, grayscale: bool) -> np.ndarray:
        if img.mode in SINGLE_CHANNEL_MODES:
            arr = np.asarray(img)
            if arr.ndim == 3:
                arr = arr[..., 0]
            return label_codec.check_labels(arr)

        if img.mode not in ("RGB", "RGBA"):
            self.logger.debug("Conversion du mode %s en RGBA", img.mode)
            img = img.convert("RGBA")
        arr = np.asarray(img)
        if grayscale:
            return arr[..., 0].astype(np.uint32)
        return label_codec.decode_cells(arr)
