"""
Detector: the inference engine of the skinface pipeline.

Public contract:
    Detector.detect(image: np.ndarray) -> (raw_boxes, raw_probs)

Constraints:
    - Input must be a BGR(A) numpy array (as returned by OpenCV).
    - The graph runs exactly once per call; nothing is cached between
      images.
    - Single-threaded design.

The heavyweight numerical backend sits behind the GraphBackend protocol.
The TensorFlow implementation is the default; tests pass a deterministic
fixture backend instead.

Non-goals:
    - No file reading or output writing.
    - No candidate selection (see selector).
"""

import logging
from typing import Optional, Protocol, Tuple

import numpy as np

from skinface.config import AppConfig, load_config
from skinface.errors import InferenceError
from skinface.preprocessor import GraphParams, to_graph_params, to_pixel_tensor

logger = logging.getLogger(__name__)


class GraphBackend(Protocol):
    """Anything that maps (pixel tensor, hyperparameters) to raw outputs."""

    def run(
        self,
        pixel_tensor: np.ndarray,
        params: GraphParams,
    ) -> Tuple[np.ndarray, np.ndarray]:
        ...


class Detector:
    """Face detector wrapping a pretrained detection graph.

    Usage:
        detector = Detector()                          # TensorFlow MTCNN graph
        detector = Detector(backend=fixture_backend)   # any GraphBackend
        raw_boxes, raw_probs = detector.detect(image)

    The constructor loads the graph once. ``close()`` releases the backend
    when it was created here.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        backend: Optional[GraphBackend] = None,
    ) -> None:
        """Initialize the detector and load the graph.

        Args:
            config: Application configuration. If None, defaults are used.
            backend: Graph backend to run. If None, the frozen TensorFlow
                     graph named by ``config.model`` is loaded.

        Raises:
            ResourceLoadError: If the graph file is missing or unreadable.
            GraphContractError: If the graph lacks an expected tensor.
        """
        if config is None:
            config = load_config()

        self._config = config
        self._params = to_graph_params(config.detection)
        self._owns_backend = backend is None

        if backend is None:
            # tensorflow is only imported when the real graph is needed
            from skinface.model_loader import TensorflowGraphBackend

            backend = TensorflowGraphBackend(config.model)

        self._backend = backend

        logger.info(
            "Detector initialized (min_size=%.1f, thresholds=%s, factor=%.3f)",
            config.detection.min_size,
            config.detection.thresholds,
            config.detection.factor,
        )

    def detect(self, image: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Run the detection graph once on a single image.

        Args:
            image: A BGR(A) image as a numpy array with shape (H, W, C).

        Returns:
            ``(raw_boxes, raw_probs)`` as flat float32 arrays with
            ``raw_boxes.size == 4 * raw_probs.size``.

        Raises:
            TypeError: If image is not a numpy ndarray.
            ValueError: If image has incorrect shape or is empty.
            InferenceError: If the graph run fails or its outputs disagree.
        """
        self._validate_image(image)

        pixel_tensor = to_pixel_tensor(image)
        raw_boxes, raw_probs = self._backend.run(pixel_tensor, self._params)

        raw_boxes = np.asarray(raw_boxes, dtype=np.float32).reshape(-1)
        raw_probs = np.asarray(raw_probs, dtype=np.float32).reshape(-1)

        if raw_boxes.size != 4 * raw_probs.size:
            raise InferenceError(
                f"Detection graph returned {raw_boxes.size} box values for "
                f"{raw_probs.size} confidences."
            )

        logger.info("Detection graph returned %d candidate(s).", raw_probs.size)
        return raw_boxes, raw_probs

    def close(self) -> None:
        """Release the backend if this detector created it."""
        if self._owns_backend and hasattr(self._backend, "close"):
            self._backend.close()

    @property
    def config(self) -> AppConfig:
        """Return the active configuration (read-only)."""
        return self._config

    @staticmethod
    def _validate_image(image: np.ndarray) -> None:
        """Validate that the input image meets the engine contract.

        Raises:
            TypeError: If image is not a numpy ndarray.
            ValueError: If image is empty or has wrong dimensions.
        """
        if not isinstance(image, np.ndarray):
            raise TypeError(
                f"Expected image to be a numpy ndarray, "
                f"got {type(image).__name__}. "
                f"Use skinface.image_io.load_image() to obtain images."
            )

        if image.size == 0:
            raise ValueError(
                "Image is empty (zero size). "
                "Ensure the photograph decoded correctly."
            )

        if image.ndim != 3:
            raise ValueError(
                f"Expected a 3-dimensional image (H, W, C), "
                f"got {image.ndim} dimensions with shape {image.shape}. "
                f"Grayscale images must be converted to BGR first."
            )

        if image.shape[2] not in (3, 4):
            raise ValueError(
                f"Expected 3 or 4 channels (BGR/BGRA), got {image.shape[2]} channels."
            )
