"""
Tests for the visualization module.
"""

import numpy as np

from skinface.bbox import BoundingBox
from skinface.visualizer import draw_candidates


def test_draw_candidates_returns_annotated_copy():
    image = np.zeros((100, 100, 4), dtype=np.uint8)
    selected = BoundingBox(x1=30, y1=30, x2=70, y2=70, prob=0.99)
    other = BoundingBox(x1=5, y1=5, x2=20, y2=20, prob=0.5)

    annotated = draw_candidates(image, [selected, other], selected)

    assert annotated.shape == (100, 100, 3)
    assert np.all(image == 0)
    # Selected box outline is green, other candidate outline is orange
    assert tuple(annotated[50, 30]) == (0, 255, 0)
    assert tuple(annotated[12, 5]) == (0, 165, 255)
