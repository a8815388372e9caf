"""Logging configuration for applications embedding the decision support core.

The library itself only creates module loggers; callers opt in to this setup.
"""

import json
import logging
import logging.config
from pathlib import Path

DEFAULT_CONFIG_PATH = Path(__file__).parent / "logging.json"


def configure_logging(config_path: Path | None = None) -> None:
    """Configure logging from a dictConfig JSON file.

    Uses the bundled logging.json unless ``config_path`` is given. Falls back
    to a JSON-style basicConfig when the file does not exist.
    """
    config_path = config_path or DEFAULT_CONFIG_PATH

    if config_path.exists():
        with open(config_path) as f:
            logging.config.dictConfig(json.load(f))
    else:
        logging.basicConfig(
            level=logging.INFO,
            format=(
                '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
                '"logger": "%(name)s", "message": "%(message)s"}'
            ),
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
