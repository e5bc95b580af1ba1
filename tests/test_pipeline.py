"""
End-to-end tests for the pipeline with a deterministic graph backend.
"""

import cv2
import numpy as np
import pytest

from skinface.config import AppConfig, InputConfig, OutputConfig
from skinface.errors import (
    CropOutOfBoundsError,
    NoFaceDetectedError,
    ResourceLoadError,
    TemplateTooSmallError,
)
from skinface.pipeline import run

from conftest import FixtureBackend


def _config(tmp_path, annotate=False):
    return AppConfig(
        input=InputConfig(
            photo_path=str(tmp_path / "photo.png"),
            template_path=str(tmp_path / "minecraft-skin-template.png"),
        ),
        output=OutputConfig(
            save_path=str(tmp_path / "out.png"),
            annotate_path=str(tmp_path / "boxes.png") if annotate else None,
        ),
    )


@pytest.fixture
def workspace(tmp_path, photo, template):
    cv2.imwrite(str(tmp_path / "photo.png"), photo)
    cv2.imwrite(str(tmp_path / "minecraft-skin-template.png"), template)
    return tmp_path


def test_end_to_end(workspace, template, single_face_backend):
    output_path = run(_config(workspace), backend=single_face_backend)

    assert output_path == workspace / "out.png"
    output = cv2.imread(str(output_path), cv2.IMREAD_UNCHANGED)

    assert output.shape == template.shape
    assert np.all(output[8:16, 16:24] == np.array((20, 140, 230, 255), dtype=np.uint8))

    mask = np.ones(template.shape[:2], dtype=bool)
    mask[8:16, 16:24] = False
    np.testing.assert_array_equal(output[mask], template[mask])

    assert not (workspace / "boxes.png").exists()


def test_end_to_end_axis_order(workspace):
    """Raw rows select rows and raw columns select columns."""
    photo = np.zeros((100, 100, 3), dtype=np.uint8)
    photo[10:50, 60:90] = (0, 255, 0)
    cv2.imwrite(str(workspace / "photo.png"), photo)
    backend = FixtureBackend([[10, 60, 50, 90]], [0.8])

    output = cv2.imread(str(run(_config(workspace), backend=backend)), cv2.IMREAD_UNCHANGED)

    assert np.all(output[8:16, 16:24] == np.array((0, 255, 0, 255), dtype=np.uint8))


def test_first_candidate_is_composited(workspace):
    """The less confident first candidate is used over the second."""
    backend = FixtureBackend([[30, 30, 70, 70], [0, 0, 20, 20]], [0.6, 0.99])

    output = cv2.imread(str(run(_config(workspace), backend=backend)), cv2.IMREAD_UNCHANGED)

    assert np.all(output[8:16, 16:24] == np.array((20, 140, 230, 255), dtype=np.uint8))


def test_annotated_image_written(workspace, single_face_backend):
    run(_config(workspace, annotate=True), backend=single_face_backend)

    annotated = cv2.imread(str(workspace / "boxes.png"))
    assert annotated.shape == (100, 100, 3)


def test_no_face_writes_nothing(workspace, empty_backend):
    with pytest.raises(NoFaceDetectedError):
        run(_config(workspace), backend=empty_backend)
    assert not (workspace / "out.png").exists()


def test_box_outside_photo(workspace):
    backend = FixtureBackend([[30, 30, 70, 101]], [0.9])
    with pytest.raises(CropOutOfBoundsError):
        run(_config(workspace), backend=backend)
    assert not (workspace / "out.png").exists()


def test_template_too_small(workspace, single_face_backend):
    cv2.imwrite(
        str(workspace / "minecraft-skin-template.png"),
        np.zeros((16, 20, 3), dtype=np.uint8),
    )
    with pytest.raises(TemplateTooSmallError):
        run(_config(workspace), backend=single_face_backend)


def test_missing_photo(tmp_path, single_face_backend):
    with pytest.raises(ResourceLoadError):
        run(_config(tmp_path), backend=single_face_backend)
    assert single_face_backend.calls == []


def test_failed_compose_writes_no_annotation(workspace):
    backend = FixtureBackend([[30, 30, 70, 101]], [0.9])
    with pytest.raises(CropOutOfBoundsError):
        run(_config(workspace, annotate=True), backend=backend)
    assert not (workspace / "boxes.png").exists()
    assert not (workspace / "out.png").exists()
