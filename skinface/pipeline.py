"""
End-to-end skinface pipeline.

Responsibility:
    Wire the stages together in a single linear pass:

        load photo → Detector.detect → select → compose → save

Every error propagates to the caller unchanged; there is exactly one
photograph per run and no meaningful partial output.
"""

import logging
from pathlib import Path
from typing import Optional

from skinface.compositor import compose
from skinface.config import AppConfig, load_config
from skinface.detector import Detector, GraphBackend
from skinface.image_io import load_image, save_image
from skinface.selector import candidates_from_raw, select
from skinface.visualizer import draw_candidates

logger = logging.getLogger(__name__)


def run(
    config: Optional[AppConfig] = None,
    backend: Optional[GraphBackend] = None,
) -> Path:
    """Run the whole pipeline from files on disk to the output file.

    Args:
        config: Application configuration. If None, defaults are used.
        backend: Graph backend override; the TensorFlow graph otherwise.

    Returns:
        The path of the written output image.
    """
    if config is None:
        config = load_config()

    photo = load_image(config.input.photo_path)
    template = load_image(config.input.template_path, keep_alpha=True)

    detector = Detector(config, backend=backend)
    try:
        raw_boxes, raw_probs = detector.detect(photo)
    finally:
        detector.close()

    bbox = select(raw_boxes, raw_probs)
    logger.info("Selected face candidate: %s", bbox.to_dict())

    output = compose(photo, bbox, template)
    output_path = save_image(config.output.save_path, output)

    if config.output.annotate_path:
        candidates = candidates_from_raw(raw_boxes, raw_probs)
        save_image(config.output.annotate_path, draw_candidates(photo, candidates, bbox))

    return output_path
