"""
Tests for the detector module.
"""

import numpy as np
import pytest

from skinface.config import AppConfig, DetectionConfig, get_project_root
from skinface.detector import Detector
from skinface.errors import InferenceError

from conftest import FixtureBackend

_MODEL_EXISTS = (get_project_root() / AppConfig().model.graph_path).is_file()


def test_detect_returns_flat_outputs(single_face_backend):
    detector = Detector(AppConfig(), backend=single_face_backend)

    raw_boxes, raw_probs = detector.detect(np.zeros((100, 100, 3), dtype=np.uint8))

    assert raw_boxes.shape == (4,)
    assert raw_probs.shape == (1,)
    assert raw_boxes.size == 4 * raw_probs.size


def test_detect_runs_backend_once_with_bgr_tensor(single_face_backend):
    detector = Detector(AppConfig(), backend=single_face_backend)
    frame = np.zeros((20, 30, 3), dtype=np.uint8)
    frame[:, :] = (1, 2, 3)

    detector.detect(frame)

    assert len(single_face_backend.calls) == 1
    tensor, params = single_face_backend.calls[0]
    assert tensor.shape == (20, 30, 3)
    assert tensor.dtype == np.float32
    assert list(tensor[0, 0]) == [1.0, 2.0, 3.0]
    assert float(params.min_size) == 20.0


def test_detect_passes_configured_hyperparameters():
    backend = FixtureBackend(np.zeros((0, 4)), [])
    config = AppConfig(detection=DetectionConfig(min_size=48.0, factor=0.5))
    detector = Detector(config, backend=backend)

    detector.detect(np.zeros((10, 10, 3), dtype=np.uint8))

    _, params = backend.calls[0]
    assert float(params.min_size) == 48.0
    assert float(params.factor) == 0.5


def test_detect_no_candidates(empty_backend):
    detector = Detector(AppConfig(), backend=empty_backend)

    raw_boxes, raw_probs = detector.detect(np.zeros((10, 10, 3), dtype=np.uint8))

    assert raw_boxes.size == 0
    assert raw_probs.size == 0


def test_detect_inconsistent_outputs():
    class BrokenBackend:
        def run(self, pixel_tensor, params):
            return np.zeros(6, dtype=np.float32), np.zeros(1, dtype=np.float32)

    detector = Detector(AppConfig(), backend=BrokenBackend())
    with pytest.raises(InferenceError):
        detector.detect(np.zeros((10, 10, 3), dtype=np.uint8))


def test_detector_input_validation(single_face_backend):
    """Test strict input validation."""
    detector = Detector(AppConfig(), backend=single_face_backend)

    # 1. Wrong type
    with pytest.raises(TypeError):
        detector.detect("not an image")

    # 2. Empty image
    with pytest.raises(ValueError):
        detector.detect(np.array([]))

    # 3. Wrong shape (grayscale)
    with pytest.raises(ValueError, match="3-dimensional"):
        detector.detect(np.zeros((100, 100), dtype=np.uint8))

    # 4. Wrong channels
    with pytest.raises(ValueError, match="channels"):
        detector.detect(np.zeros((100, 100, 2), dtype=np.uint8))

    assert single_face_backend.calls == []


def test_close_leaves_injected_backend_open(single_face_backend):
    detector = Detector(AppConfig(), backend=single_face_backend)
    detector.close()
    assert single_face_backend.closed is False


@pytest.mark.skipif(not _MODEL_EXISTS, reason="Detection graph not found")
def test_detector_integration_smoke():
    """Smoke test: the real graph loads and runs on a blank frame."""
    detector = Detector()
    try:
        raw_boxes, raw_probs = detector.detect(np.zeros((120, 160, 3), dtype=np.uint8))
    finally:
        detector.close()

    assert raw_boxes.size == 4 * raw_probs.size
