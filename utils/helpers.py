"""
Fonctions utilitaires pour la conversion des coordonnées pointeur.
"""
from typing import Tuple

import numpy as np


def clip_point(x, y, width, height) -> Tuple[int, int]:
    """
    Clippe un point aux limites de l'image.

    Args:
        x, y: Coordonnées (éventuellement hors image ou non entières)
        width: Largeur de l'image
        height: Hauteur de l'image

    Returns:
        Point arrondi et clippé à [0, width-1] x [0, height-1]
    """
    clipped_x = int(np.clip(round(x), 0, width - 1))
    clipped_y = int(np.clip(round(y), 0, height - 1))
    return clipped_x, clipped_y


def point_to_offset(x, y, width, height) -> int:
    """Offset linéaire (row-major) du pixel sous le point, après clipping."""
    cx, cy = clip_point(x, y, width, height)
    return cy * int(width) + cx

