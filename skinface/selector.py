"""
Candidate selection for the skinface pipeline.

Responsibility:
    Reshape the detection graph's flat ``box``/``prob`` outputs into an
    ordered list of BoundingBox candidates and pick the one to composite.

Selection policy:
    The FIRST candidate in graph output order wins, not the most
    confident one. Switching to confidence-based selection is a behavior
    change, not a fix.

Non-goals:
    - No thresholding, sorting, or non-maximum suppression; the graph's
      cascade already did that.
"""

from typing import List, Sequence

import numpy as np

from skinface.bbox import BoundingBox
from skinface.errors import InferenceError, NoFaceDetectedError


def candidates_from_raw(
    raw_boxes: Sequence[float],
    raw_probs: Sequence[float],
) -> List[BoundingBox]:
    """Pair every 4 raw box values with the matching confidence.

    Args:
        raw_boxes: Flattened box output, 4 values per candidate. Any shape
                   is accepted (e.g. the graph's ``(N, 4)``); it is flattened
                   in row-major order.
        raw_probs: Confidence per candidate, same order as raw_boxes.

    Returns:
        Candidates in graph output order. Empty if the graph found nothing.

    Raises:
        InferenceError: If the two outputs disagree in length.
    """
    boxes = np.asarray(raw_boxes, dtype=np.float32).reshape(-1)
    probs = np.asarray(raw_probs, dtype=np.float32).reshape(-1)

    if boxes.size != 4 * probs.size:
        raise InferenceError(
            f"Graph outputs are inconsistent: {boxes.size} box values "
            f"for {probs.size} confidences (expected {4 * probs.size})."
        )

    return [
        BoundingBox.from_raw(group, prob)
        for group, prob in zip(boxes.reshape(-1, 4), probs)
    ]


def select(
    raw_boxes: Sequence[float],
    raw_probs: Sequence[float],
) -> BoundingBox:
    """Return the first face candidate in graph output order.

    Raises:
        NoFaceDetectedError: If the graph returned no candidates.
        InferenceError: If the outputs disagree in length.
    """
    candidates = candidates_from_raw(raw_boxes, raw_probs)
    if not candidates:
        raise NoFaceDetectedError(
            "No face detected in the photograph. "
            "Use a photo with a clearly visible, front-facing face."
        )
    return candidates[0]
