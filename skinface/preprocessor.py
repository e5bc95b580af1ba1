"""
Preprocessing for the skinface pipeline.

Responsibility:
    Convert a decoded photograph (numpy array) into the float pixel tensor
    the detection graph consumes, plus the scalar/vector hyperparameter
    tensors that accompany it on every run.

Non-goals:
    - No frame acquisition or I/O.
    - No resizing or normalization; the graph builds its own pyramid.

Hard-coded:
    - Channel order is BGR (mandated by the MTCNN graph). Images decoded
      by OpenCV are already BGR, so no channel swap happens here.
    - A trailing alpha channel is dropped.
"""

from dataclasses import dataclass

import numpy as np

from skinface.config import DetectionConfig


@dataclass(frozen=True)
class GraphParams:
    """Hyperparameter tensors bound to the graph's scalar inputs."""

    min_size: np.ndarray
    thresholds: np.ndarray
    factor: np.ndarray


def to_pixel_tensor(image: np.ndarray) -> np.ndarray:
    """Build the ``(H, W, 3)`` float32 BGR tensor for an image.

    Args:
        image: Decoded image as a BGR or BGRA uint8 array (H, W, C).

    Returns:
        A new contiguous float32 array; ``tensor.size == H * W * 3``.

    Raises:
        ValueError: If the image is empty or has fewer than 3 channels.
    """
    if image is None or image.size == 0:
        raise ValueError(
            "Cannot build a pixel tensor from an empty image. "
            "Ensure the photograph decoded correctly."
        )

    if image.ndim != 3 or image.shape[2] < 3:
        raise ValueError(
            f"Expected a colour image (H, W, 3+), got shape {image.shape}."
        )

    return np.ascontiguousarray(image[:, :, :3], dtype=np.float32)


def to_graph_params(config: DetectionConfig) -> GraphParams:
    """Shape the detection hyperparameters as the graph expects them."""
    return GraphParams(
        min_size=np.array(config.min_size, dtype=np.float32),
        thresholds=np.array(config.thresholds, dtype=np.float32).reshape(3),
        factor=np.array(config.factor, dtype=np.float32),
    )
