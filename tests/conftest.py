"""
Shared fixtures for the skinface tests.
"""

import numpy as np
import pytest


class FixtureBackend:
    """Deterministic graph backend returning canned raw outputs.

    ``boxes`` holds raw graph groups: (row_top, col_left, row_bottom, col_right).
    """

    def __init__(self, boxes, probs):
        self.boxes = np.asarray(boxes, dtype=np.float32).reshape(-1, 4)
        self.probs = np.asarray(probs, dtype=np.float32).reshape(-1)
        self.calls = []
        self.closed = False

    def run(self, pixel_tensor, params):
        self.calls.append((pixel_tensor, params))
        return self.boxes, self.probs

    def close(self):
        self.closed = True


@pytest.fixture
def single_face_backend():
    """One face covering rows/cols 30..70, confidence 0.99."""
    return FixtureBackend([[30, 30, 70, 70]], [0.99])


@pytest.fixture
def empty_backend():
    return FixtureBackend(np.zeros((0, 4)), [])


@pytest.fixture
def photo():
    """100x100 grey photo with a distinguishable 40x40 block at (30,30)-(70,70)."""
    image = np.full((100, 100, 3), (90, 90, 90), dtype=np.uint8)
    image[30:70, 30:70] = (20, 140, 230)
    return image


@pytest.fixture
def template():
    """64x32 BGRA template filled with a sentinel colour."""
    return np.full((32, 64, 4), (255, 0, 255, 255), dtype=np.uint8)
