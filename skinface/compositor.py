"""
Compositing for the skinface pipeline.

Responsibility:
    Crop the selected face out of the photograph, shrink it to an 8×8
    thumbnail, and paste it onto a clone of the skin template.

Non-goals:
    - No detection or candidate selection.
    - No file I/O.
    - No configurable layout: the thumbnail always lands on the 8×8 block
      whose top-left pixel is (x=16, y=8), the face of a Minecraft skin.

Hard-coded:
    - Resampling uses cv2.INTER_AREA (area averaging), so a uniform crop
      yields a uniform thumbnail of exactly the same colour.
    - Boxes are never clamped; a box outside the photograph is an error.
"""

import math
from typing import Tuple

import cv2
import numpy as np

from skinface.bbox import BoundingBox
from skinface.errors import CropOutOfBoundsError, TemplateTooSmallError

THUMBNAIL_SIZE = 8
THUMBNAIL_ORIGIN = (16, 8)  # (x, y) of the thumbnail's top-left pixel

# Smallest (width, height) that can receive the thumbnail.
MIN_TEMPLATE_SIZE = (
    THUMBNAIL_ORIGIN[0] + THUMBNAIL_SIZE,
    THUMBNAIL_ORIGIN[1] + THUMBNAIL_SIZE,
)


def crop_rect(bbox: BoundingBox) -> Tuple[int, int, int, int]:
    """Return the integer ``(left, top, width, height)`` crop of a box.

    Coordinates truncate toward zero; the size is the truncated float
    difference, not the difference of truncated corners.
    """
    return (
        int(bbox.x1),
        int(bbox.y1),
        int(bbox.x2 - bbox.x1),
        int(bbox.y2 - bbox.y1),
    )


def crop(image: np.ndarray, bbox: BoundingBox) -> np.ndarray:
    """Extract the box region of an image.

    Returns:
        A copy of the region, shape (height, width, C).

    Raises:
        CropOutOfBoundsError: If the box has no area or is not fully inside
                              the image.
    """
    img_h, img_w = image.shape[:2]

    if not all(math.isfinite(v) for v in (bbox.x1, bbox.y1, bbox.x2, bbox.y2)):
        raise CropOutOfBoundsError(
            f"Bounding box {bbox.to_dict()} has non-finite coordinates."
        )

    if bbox.x2 > img_w or bbox.y2 > img_h:
        raise CropOutOfBoundsError(
            f"Bounding box {bbox.to_dict()} extends past the "
            f"{img_w}x{img_h} photograph."
        )

    left, top, width, height = crop_rect(bbox)

    if bbox.x1 < 0 or bbox.y1 < 0 or width < 1 or height < 1:
        raise CropOutOfBoundsError(
            f"Bounding box {bbox.to_dict()} is degenerate or starts outside "
            f"the {img_w}x{img_h} photograph."
        )

    return image[top:top + height, left:left + width].copy()


def make_thumbnail(region: np.ndarray) -> np.ndarray:
    """Resample a region to the fixed 8×8 thumbnail size."""
    return cv2.resize(
        region,
        (THUMBNAIL_SIZE, THUMBNAIL_SIZE),
        interpolation=cv2.INTER_AREA,
    )


def template_position(row: int, col: int) -> Tuple[int, int]:
    """Map a thumbnail pixel (row, col) to its template pixel (x, y)."""
    if not (0 <= row < THUMBNAIL_SIZE and 0 <= col < THUMBNAIL_SIZE):
        raise IndexError(f"Thumbnail pixel ({row}, {col}) out of range.")
    return THUMBNAIL_ORIGIN[0] + col, THUMBNAIL_ORIGIN[1] + row


def paste_thumbnail(template: np.ndarray, thumbnail: np.ndarray) -> np.ndarray:
    """Paste the thumbnail onto a clone of the template.

    Args:
        template: BGR or BGRA template image (not modified).
        thumbnail: 8×8 BGR or BGRA thumbnail.

    Returns:
        A new image with the template's shape; only the 8×8 block at
        THUMBNAIL_ORIGIN differs. BGRA templates receive opaque pixels when
        the thumbnail has no alpha.

    Raises:
        TemplateTooSmallError: If the template cannot hold the block.
    """
    tpl_h, tpl_w = template.shape[:2]
    min_w, min_h = MIN_TEMPLATE_SIZE
    if tpl_w < min_w or tpl_h < min_h:
        raise TemplateTooSmallError(
            f"Template is {tpl_w}x{tpl_h}; at least {min_w}x{min_h} is "
            f"needed to receive the thumbnail at {THUMBNAIL_ORIGIN}."
        )

    if thumbnail.shape[:2] != (THUMBNAIL_SIZE, THUMBNAIL_SIZE):
        raise ValueError(
            f"Expected a {THUMBNAIL_SIZE}x{THUMBNAIL_SIZE} thumbnail, "
            f"got shape {thumbnail.shape}."
        )

    pixels = _match_channels(thumbnail, template.shape[2])

    x0, y0 = template_position(0, 0)
    x1, y1 = template_position(THUMBNAIL_SIZE - 1, THUMBNAIL_SIZE - 1)

    output = template.copy()
    output[y0:y1 + 1, x0:x1 + 1] = pixels
    return output


def compose(
    source_image: np.ndarray,
    bbox: BoundingBox,
    template_image: np.ndarray,
) -> np.ndarray:
    """Crop, thumbnail, and paste the selected face onto the template."""
    face = crop(source_image, bbox)
    thumbnail = make_thumbnail(face)
    return paste_thumbnail(template_image, thumbnail)


def _match_channels(pixels: np.ndarray, channels: int) -> np.ndarray:
    """Convert BGR/BGRA pixels to the template's channel count."""
    have = pixels.shape[2]
    if have == channels:
        return pixels
    if have == 3 and channels == 4:
        return cv2.cvtColor(pixels, cv2.COLOR_BGR2BGRA)
    if have == 4 and channels == 3:
        return cv2.cvtColor(pixels, cv2.COLOR_BGRA2BGR)
    raise ValueError(
        f"Cannot paste {have}-channel pixels onto a {channels}-channel template."
    )
