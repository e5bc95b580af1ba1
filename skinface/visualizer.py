"""
Visualization for the skinface pipeline.

Responsibility:
    Draw every face candidate onto a copy of the photograph, highlighting
    the selected one with its confidence. Used for the optional annotated
    debug image; this is a pure rendering module and performs no I/O.

Non-goals:
    - No file writing, window management, or display logic.
"""

from typing import Sequence

import cv2
import numpy as np

from skinface.bbox import BoundingBox

# Hard-coded rendering constants (cosmetic internals, not user-facing)
_SELECTED_COLOR = (0, 255, 0)
_CANDIDATE_COLOR = (0, 165, 255)
_THICKNESS = 2
_FONT = cv2.FONT_HERSHEY_SIMPLEX
_FONT_SCALE = 0.5
_FONT_THICKNESS = 1
_LABEL_PADDING = 4


def draw_candidates(
    image: np.ndarray,
    candidates: Sequence[BoundingBox],
    selected: BoundingBox,
) -> np.ndarray:
    """Outline candidates on a copy of the image.

    Args:
        image: Input BGR image (not modified; a copy is returned).
        candidates: All candidates in graph output order.
        selected: The candidate that was composited.

    Returns:
        A new BGR array with the boxes drawn.
    """
    annotated = image[:, :, :3].copy()

    for box in candidates:
        if box != selected:
            _draw_box(annotated, box, _CANDIDATE_COLOR)

    # Selected box last so it is never hidden under another candidate
    _draw_box(annotated, selected, _SELECTED_COLOR)
    _draw_label(annotated, selected, f"{selected.prob:.2f}", _SELECTED_COLOR)

    return annotated


def _draw_box(image: np.ndarray, box: BoundingBox, color) -> None:
    cv2.rectangle(
        image,
        (int(box.x1), int(box.y1)),
        (int(box.x2), int(box.y2)),
        color=color,
        thickness=_THICKNESS,
    )


def _draw_label(image: np.ndarray, box: BoundingBox, label: str, color) -> None:
    x1, y1, y2 = int(box.x1), int(box.y1), int(box.y2)
    (text_w, text_h), _ = cv2.getTextSize(label, _FONT, _FONT_SCALE, _FONT_THICKNESS)

    # Above the box, or below if too close to top
    label_y = y1 - _LABEL_PADDING
    if label_y - text_h - _LABEL_PADDING < 0:
        label_y = y2 + text_h + _LABEL_PADDING

    cv2.rectangle(
        image,
        (x1, label_y - text_h - _LABEL_PADDING),
        (x1 + text_w + _LABEL_PADDING, label_y + _LABEL_PADDING),
        color=color,
        thickness=cv2.FILLED,
    )
    cv2.putText(
        image,
        label,
        (x1 + _LABEL_PADDING // 2, label_y),
        _FONT,
        _FONT_SCALE,
        (0, 0, 0),
        _FONT_THICKNESS,
        cv2.LINE_AA,
    )
