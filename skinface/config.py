"""
Configuration management for the skinface pipeline.

Provides a layered configuration system with the following precedence
(highest to lowest):

    CLI arguments > Environment variables > YAML config file > Defaults

Design constraints:
    - The pipeline MUST run with zero configuration. The defaults are the
      fixed filenames and detector hyperparameters of the original tool.
    - Missing or invalid values fail early and loudly.
    - No detection logic, I/O, or model loading belongs here.

Non-goals:
    - No configurable template layout (the paste offset is fixed).
    - No dynamic reloading.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Project root resolution
# ---------------------------------------------------------------------------
# Resolved relative to this file's location: skinface/config.py → repo root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def get_project_root() -> Path:
    """Return the resolved project root directory."""
    return _PROJECT_ROOT


# ---------------------------------------------------------------------------
# Configuration dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ModelConfig:
    """Detection graph location.

    Attributes:
        graph_path: Frozen TensorFlow GraphDef of the MTCNN detector
                    (relative paths resolve against the project root).
    """

    graph_path: str = "models/mtcnn.pb"


@dataclass(frozen=True)
class DetectionConfig:
    """Hyperparameters fed to the detection graph on every run.

    Attributes:
        min_size: Smallest face edge, in pixels, the cascade looks for.
        thresholds: Acceptance thresholds for the three cascade stages.
        factor: Image pyramid scale factor.
    """

    min_size: float = 20.0
    thresholds: Tuple[float, float, float] = (0.6, 0.7, 0.7)
    factor: float = 0.709


@dataclass(frozen=True)
class InputConfig:
    """Input image locations (relative to the working directory).

    Attributes:
        photo_path: Photograph containing the face.
        template_path: Skin template that receives the thumbnail.
    """

    photo_path: str = "photo.png"
    template_path: str = "minecraft-skin-template.png"


@dataclass(frozen=True)
class OutputConfig:
    """Output behavior configuration.

    Attributes:
        save_path: Where the composited template is written.
        annotate_path: Optional path for a copy of the photograph with the
                       detected candidates drawn on it. None disables it.
    """

    save_path: str = "out.png"
    annotate_path: Optional[str] = None


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration.

    Aggregates all sub-configurations into a single, frozen object.
    """

    model: ModelConfig = field(default_factory=ModelConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _validate(config: AppConfig) -> None:
    """Validate configuration values. Raises ValueError on invalid state."""

    if config.detection.min_size <= 0:
        raise ValueError(
            f"detection.min_size must be positive, "
            f"got {config.detection.min_size}."
        )

    if len(config.detection.thresholds) != 3:
        raise ValueError(
            f"detection.thresholds must hold one value per cascade stage (3), "
            f"got {config.detection.thresholds}."
        )

    if any(not (0.0 <= t <= 1.0) for t in config.detection.thresholds):
        raise ValueError(
            f"detection.thresholds must be in [0.0, 1.0], "
            f"got {config.detection.thresholds}."
        )

    if not (0.0 < config.detection.factor < 1.0):
        raise ValueError(
            f"detection.factor must be in (0.0, 1.0), "
            f"got {config.detection.factor}."
        )

    for name, value in (
        ("model.graph_path", config.model.graph_path),
        ("input.photo_path", config.input.photo_path),
        ("input.template_path", config.input.template_path),
        ("output.save_path", config.output.save_path),
    ):
        if not value:
            raise ValueError(f"{name} must not be empty.")


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------

def _parse_tuple(value, expected_len: int, cast_type=float):
    """Convert a list (YAML) or comma-separated string (env) into a tuple."""
    if isinstance(value, str):
        value = [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, (list, tuple)):
        if len(value) != expected_len:
            raise ValueError(
                f"Expected {expected_len} values, got {len(value)}: {value}"
            )
        return tuple(cast_type(v) for v in value)
    raise ValueError(
        f"Expected a list of {expected_len} values, got {type(value).__name__}: {value!r}"
    )


def _build_model_config(raw: dict) -> ModelConfig:
    """Build ModelConfig from a raw YAML dict."""
    kwargs = {}
    if "graph_path" in raw:
        kwargs["graph_path"] = str(raw["graph_path"])
    return ModelConfig(**kwargs)


def _build_detection_config(raw: dict) -> DetectionConfig:
    """Build DetectionConfig from a raw YAML dict."""
    kwargs = {}
    if "min_size" in raw:
        kwargs["min_size"] = float(raw["min_size"])
    if "thresholds" in raw:
        kwargs["thresholds"] = _parse_tuple(raw["thresholds"], 3, float)
    if "factor" in raw:
        kwargs["factor"] = float(raw["factor"])
    return DetectionConfig(**kwargs)


def _build_input_config(raw: dict) -> InputConfig:
    """Build InputConfig from a raw YAML dict."""
    kwargs = {}
    if "photo_path" in raw:
        kwargs["photo_path"] = str(raw["photo_path"])
    if "template_path" in raw:
        kwargs["template_path"] = str(raw["template_path"])
    return InputConfig(**kwargs)


def _build_output_config(raw: dict) -> OutputConfig:
    """Build OutputConfig from a raw YAML dict."""
    kwargs = {}
    if "save_path" in raw:
        kwargs["save_path"] = str(raw["save_path"])
    if "annotate_path" in raw:
        val = raw["annotate_path"]
        kwargs["annotate_path"] = str(val) if val else None
    return OutputConfig(**kwargs)


# ---------------------------------------------------------------------------
# Environment variable overrides
# ---------------------------------------------------------------------------

_ENV_PREFIX = "SKINFACE_"


def _apply_env_overrides(raw: dict) -> dict:
    """Apply environment variable overrides to the raw config dict.

    Environment variables follow the pattern:
        SKINFACE_DETECTION_MIN_SIZE=40
        SKINFACE_DETECTION_THRESHOLDS=0.6,0.7,0.8
        SKINFACE_INPUT_PHOTO_PATH=me.png
    """
    env_map = {
        f"{_ENV_PREFIX}MODEL_GRAPH_PATH": ("model", "graph_path"),
        f"{_ENV_PREFIX}DETECTION_MIN_SIZE": ("detection", "min_size"),
        f"{_ENV_PREFIX}DETECTION_THRESHOLDS": ("detection", "thresholds"),
        f"{_ENV_PREFIX}DETECTION_FACTOR": ("detection", "factor"),
        f"{_ENV_PREFIX}INPUT_PHOTO_PATH": ("input", "photo_path"),
        f"{_ENV_PREFIX}INPUT_TEMPLATE_PATH": ("input", "template_path"),
        f"{_ENV_PREFIX}OUTPUT_SAVE_PATH": ("output", "save_path"),
        f"{_ENV_PREFIX}OUTPUT_ANNOTATE_PATH": ("output", "annotate_path"),
    }

    for env_var, (section, key) in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            raw.setdefault(section, {})[key] = value
            logger.debug("Config override from env: %s=%s", env_var, value)

    return raw


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------

def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load and validate application configuration.

    Precedence (highest → lowest):
        Environment variables > YAML file > Hard-coded defaults

    Args:
        config_path: Path to a YAML configuration file. If None,
                     the pipeline runs entirely on defaults.

    Returns:
        A validated, frozen AppConfig instance.

    Raises:
        FileNotFoundError: If config_path is provided but does not exist.
        ValueError: If any configuration value is invalid.
        yaml.YAMLError: If the YAML file is malformed.
    """
    raw: dict = {}

    # --- Layer 1: YAML file ---
    if config_path is not None:
        resolved = Path(config_path)
        if not resolved.is_file():
            raise FileNotFoundError(
                f"Configuration file not found: {resolved}. "
                f"Provide a valid path or omit to use defaults."
            )

        logger.info("Loading config from: %s", resolved)
        with open(resolved, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    # --- Layer 2: Environment variable overrides ---
    raw = _apply_env_overrides(raw)

    # --- Build typed configs ---
    config = AppConfig(
        model=_build_model_config(raw.get("model", {})),
        detection=_build_detection_config(raw.get("detection", {})),
        input=_build_input_config(raw.get("input", {})),
        output=_build_output_config(raw.get("output", {})),
    )

    # --- Validate ---
    _validate(config)

    logger.debug("Configuration loaded: %s", config)
    return config
