"""
skinface CLI Entrypoint.

Responsibility:
    Load configuration, run the single-image pipeline, and translate any
    pipeline failure into a logged message and a non-zero exit code.

Usage:
    python main.py                      # photo.png + minecraft-skin-template.png → out.png
    python main.py --config skin.yaml
    python main.py --photo me.jpg --output me-skin.png --annotate boxes.png

Every argument is optional; with none, the fixed default filenames and
detector hyperparameters are used.
"""

import argparse
import logging
import sys
from dataclasses import replace

import yaml

# Configure logging before importing local modules
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("main")

from skinface.config import load_config
from skinface.errors import SkinfaceError
from skinface.pipeline import run


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Paste the face from a photograph onto a Minecraft skin template.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML configuration file.",
    )
    parser.add_argument(
        "--photo",
        type=str,
        help="Photograph containing the face. Overrides config.",
    )
    parser.add_argument(
        "--template",
        type=str,
        help="Skin template image. Overrides config.",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Where to write the composited skin. Overrides config.",
    )
    parser.add_argument(
        "--annotate",
        type=str,
        help="Also write the photograph with detected faces outlined.",
    )

    return parser.parse_args()


def main() -> int:
    """Run the pipeline once."""
    args = parse_args()

    # 1. Load Configuration (CLI args > ENV > YAML > Defaults)
    try:
        config = load_config(args.config)

        if args.photo is not None:
            config = replace(config, input=replace(config.input, photo_path=args.photo))

        if args.template is not None:
            config = replace(config, input=replace(config.input, template_path=args.template))

        if args.output is not None:
            config = replace(config, output=replace(config.output, save_path=args.output))

        if args.annotate is not None:
            config = replace(config, output=replace(config.output, annotate_path=args.annotate))

    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error("Configuration error: %s", e)
        return 1

    # 2. Run
    try:
        output_path = run(config)
    except SkinfaceError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    logger.info("Skin written to %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
