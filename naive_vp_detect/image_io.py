"""
Thin wrappers over `cv2.imread` / `cv2.imwrite` that fail loudly
"""
import logging
import os

import cv2

from naive_vp_detect.errors import ImageLoadError, ImageWriteError

logger = logging.getLogger(__name__)


def read_image(path):
    """
    Reads an image from disk as a 3 channel BGR array

    Args:
        path: Path to the image

    Returns:
        The decoded image

    Raises:
        ImageLoadError: If OpenCV cannot decode the file
    """
    img = cv2.imread(path, cv2.IMREAD_COLOR)
    if img is None or img.size == 0:
        raise ImageLoadError(path)
    return img


def write_image(path, img):
    """
    Writes an image to disk

    Raises:
        ImageWriteError: If OpenCV cannot encode or save the image
    """
    try:
        ok = cv2.imwrite(path, img)
    except cv2.error as e:
        raise ImageWriteError(path, str(e).strip()) from e
    if not ok:
        raise ImageWriteError(path)


def ensure_dir(path):
    if not os.path.isdir(path):
        logger.debug('Creating output directory %s', path)
    os.makedirs(path, exist_ok=True)
