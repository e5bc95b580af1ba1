"""
Model loading and execution for the skinface detection graph.

Responsibility:
    Load the frozen MTCNN TensorFlow GraphDef from disk, verify that it
    exposes the named tensors the pipeline binds to, and run it once per
    photograph through a TensorFlow session.

Non-goals:
    - No preprocessing, candidate parsing, or compositing.
    - No automatic model downloading.
    - No model format conversion or fallback to alternative models.

Failure behavior:
    - A missing or undecodable graph file raises ResourceLoadError with
      the exact path.
    - A graph lacking any of the expected tensor names raises
      GraphContractError.
    - A failed session run raises InferenceError.
"""

import logging
from pathlib import Path
from typing import Dict, Tuple

import numpy as np
import tensorflow as tf
from google.protobuf.message import DecodeError

from skinface.config import ModelConfig, get_project_root
from skinface.errors import GraphContractError, InferenceError, ResourceLoadError
from skinface.preprocessor import GraphParams

logger = logging.getLogger(__name__)

# Graph contract: operation names the frozen MTCNN graph must expose.
INPUT_NAMES = ("input", "min_size", "thresholds", "factor")
OUTPUT_NAMES = ("box", "prob")


def resolve_graph_path(config: ModelConfig) -> Path:
    """Resolve the configured graph path against the project root."""
    path = Path(config.graph_path)
    if not path.is_absolute():
        path = get_project_root() / path
    return path


def load_graph(config: ModelConfig) -> tf.Graph:
    """Load the frozen detection graph and check its tensor contract.

    Args:
        config: ModelConfig holding the graph file path.

    Returns:
        A tf.Graph with the GraphDef imported under no name prefix.

    Raises:
        ResourceLoadError: If the file is missing or is not a GraphDef.
        GraphContractError: If an expected input/output is absent.
    """
    path = resolve_graph_path(config)

    if not path.is_file():
        raise ResourceLoadError(
            f"Detection graph not found.\n"
            f"  Expected: {path}\n"
            f"  Provide the file or update 'model.graph_path' in your config."
        )

    logger.info("Loading detection graph: %s", path)
    graph_def = tf.compat.v1.GraphDef()
    try:
        graph_def.ParseFromString(path.read_bytes())
    except (OSError, DecodeError) as e:
        raise ResourceLoadError(
            f"Failed to read detection graph {path}: {e}"
        ) from e

    graph = tf.Graph()
    with graph.as_default():
        try:
            tf.compat.v1.import_graph_def(graph_def, name="")
        except ValueError as e:
            raise ResourceLoadError(
                f"Detection graph {path} could not be imported: {e}"
            ) from e

    check_graph_contract(graph)
    logger.info("Detection graph loaded (%d operations).", len(graph.get_operations()))
    return graph


def check_graph_contract(graph: tf.Graph) -> Dict[str, tf.Tensor]:
    """Return the expected tensors by name, or raise GraphContractError.

    Each name must be an operation with a first output (``name:0``).
    """
    tensors = {}
    missing = []
    for name in INPUT_NAMES + OUTPUT_NAMES:
        try:
            tensors[name] = graph.get_tensor_by_name(f"{name}:0")
        except (KeyError, ValueError):
            missing.append(name)

    if missing:
        raise GraphContractError(
            f"Detection graph does not expose the expected tensors: "
            f"{', '.join(missing)}. Expected inputs {INPUT_NAMES} "
            f"and outputs {OUTPUT_NAMES}."
        )

    return tensors


class TensorflowGraphBackend:
    """Runs the frozen MTCNN graph through a TensorFlow session.

    The graph and its session are created once; ``run`` executes the
    graph exactly once per call and keeps no per-image state.
    """

    def __init__(self, config: ModelConfig) -> None:
        self._graph = load_graph(config)
        tensors = check_graph_contract(self._graph)
        self._feeds = {name: tensors[name] for name in INPUT_NAMES}
        self._fetches = [tensors[name] for name in OUTPUT_NAMES]
        self._session = tf.compat.v1.Session(graph=self._graph)

    def run(
        self,
        pixel_tensor: np.ndarray,
        params: GraphParams,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Execute the graph and return the raw ``box`` and ``prob`` outputs."""
        feed_dict = {
            self._feeds["input"]: pixel_tensor,
            self._feeds["min_size"]: params.min_size,
            self._feeds["thresholds"]: params.thresholds,
            self._feeds["factor"]: params.factor,
        }

        logger.debug("Running detection graph on tensor %s", pixel_tensor.shape)
        try:
            boxes, probs = self._session.run(self._fetches, feed_dict=feed_dict)
        except (tf.errors.OpError, ValueError) as e:
            raise InferenceError(f"Detection graph run failed: {e}") from e

        return np.asarray(boxes, dtype=np.float32), np.asarray(probs, dtype=np.float32)

    def close(self) -> None:
        """Release the TensorFlow session."""
        if self._session is not None:
            self._session.close()
            self._session = None
            logger.debug("TensorFlow session closed.")
