"""
skinface: paste the face from a photograph onto a Minecraft skin template.

Public API:
    - run: Full pipeline, files on disk to the output image.
    - Detector: Inference engine wrapping the pretrained MTCNN graph.
    - select: Pick the face candidate to composite.
    - compose: Crop, thumbnail, and paste onto the template.
    - BoundingBox: A single face candidate.
    - SkinfaceError and its subclasses: the error taxonomy.

Usage:
    from skinface import run, load_config

    run(load_config())          # photo.png + template → out.png
"""

from skinface.bbox import BoundingBox
from skinface.compositor import compose
from skinface.config import AppConfig, load_config
from skinface.detector import Detector
from skinface.errors import (
    CropOutOfBoundsError,
    GraphContractError,
    InferenceError,
    NoFaceDetectedError,
    OutputWriteError,
    ResourceLoadError,
    SkinfaceError,
    TemplateTooSmallError,
)
from skinface.pipeline import run
from skinface.selector import select

__all__ = [
    "AppConfig",
    "BoundingBox",
    "CropOutOfBoundsError",
    "Detector",
    "GraphContractError",
    "InferenceError",
    "NoFaceDetectedError",
    "OutputWriteError",
    "ResourceLoadError",
    "SkinfaceError",
    "TemplateTooSmallError",
    "compose",
    "load_config",
    "run",
    "select",
]
