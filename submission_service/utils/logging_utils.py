import logging
import logging.config
from pathlib import Path
from typing import Union

import yaml


def setup_logging(config_path: Union[str, Path]) -> None:
    """
    Set up logging configuration from a YAML dictConfig file.

    Falls back to ``basicConfig`` at INFO when the file is missing or invalid.

    Args:
        config_path: Path to the logging configuration YAML file, usually
                     ``Settings.LOGGING_CONFIG_PATH`` of the running app.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        logging.basicConfig(level=logging.INFO)
        logging.warning(f"Logging configuration file not found at {config_path}. Using basicConfig.")
        return

    try:
        with open(config_path, "rt", encoding="utf-8") as f:
            log_config = yaml.safe_load(f)
        logging.config.dictConfig(log_config)
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        logging.basicConfig(level=logging.INFO)
        logging.error(f"Error loading logging configuration from {config_path}: {e}. Using basicConfig.")
        return

    logging.getLogger(__name__).info(f"Logging configured from {config_path}")
