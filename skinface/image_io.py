"""
Image file I/O for the skinface pipeline.

Responsibility:
    Decode the photograph and template from disk and persist the
    composited result, translating OpenCV's silent failures (``imread``
    returning None, ``imwrite`` returning False) into pipeline errors.

Non-goals:
    - No detection, cropping, or compositing.
    - No directory scanning or video sources; one file in, one file out.
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from skinface.errors import OutputWriteError, ResourceLoadError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_image(path: PathLike, keep_alpha: bool = False) -> np.ndarray:
    """Decode an image file into a BGR (or BGRA) uint8 array.

    Args:
        path: Image file to read.
        keep_alpha: Preserve a fourth (alpha) channel when the file has one.
                    Grayscale files are always expanded to BGR.

    Returns:
        An (H, W, 3) or (H, W, 4) uint8 array.

    Raises:
        ResourceLoadError: If the file is missing or cannot be decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise ResourceLoadError(
            f"Image not found: '{path}'. Provide the file or update the "
            f"input paths in your config."
        )

    flags = cv2.IMREAD_UNCHANGED if keep_alpha else cv2.IMREAD_COLOR
    image = cv2.imread(str(path), flags)
    if image is None:
        raise ResourceLoadError(
            f"Failed to decode image '{path}'. Ensure it is a valid raster image."
        )

    if image.dtype != np.uint8:
        raise ResourceLoadError(
            f"Unsupported pixel depth {image.dtype} in '{path}'; expected 8-bit channels."
        )

    if image.ndim == 2:
        image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 4 and not keep_alpha:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)

    h, w = image.shape[:2]
    logger.info("Loaded image %s (%dx%d, %d channels)", path, w, h, image.shape[2])
    return image


def save_image(path: PathLike, image: np.ndarray) -> Path:
    """Write an image, creating parent directories as needed.

    Returns:
        The path written.

    Raises:
        OutputWriteError: If the image cannot be encoded or written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        written = cv2.imwrite(str(path), image)
    except (OSError, cv2.error) as e:
        raise OutputWriteError(f"Failed to write image '{path}': {e}") from e

    if not written:
        raise OutputWriteError(
            f"Failed to write image '{path}'. Check the file extension and "
            f"that the location is writable."
        )

    logger.info("Saved image: %s", path)
    return path
