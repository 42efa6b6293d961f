# === services/image_loader.py ===
import os
import logging

import cv2
import numpy as np


def load_image(image_path: str) -> np.ndarray:
    """
    Charge l'image à annoter en RGB.

    Args:
        image_path: Chemin de l'image (png, jpg, bmp, tiff...)

    Returns:
        np.ndarray: Image RGB (H, W, 3) uint8

    Raises:
        FileNotFoundError: Si le fichier n'existe pas
        ValueError: Si OpenCV ne peut pas décoder le fichier
    """
    logger = logging.getLogger(__name__)
    logger.info(f"Chargement de l'image: {image_path}")

    if not os.path.isfile(image_path):
        error_msg = f"Fichier introuvable: {image_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    image = cv2.imread(image_path, cv2.IMREAD_COLOR)
    if image is None:
        error_msg = f"Impossible de décoder l'image: {image_path}"
        logger.error(error_msg)
        raise ValueError(error_msg)

    image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    logger.info(f"Image chargée: {image.shape[1]}x{image.shape[0]}")
    return image
