"""
Configuration loader for the AyuSetu service layer
"""

import yaml
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
import logging

from ayusetu.config import AyuSetuConfig

logger = logging.getLogger(__name__)


def load_config(config_path: Optional[Path] = None) -> AyuSetuConfig:
    """
    Load and validate service configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to config/ayusetu.yaml

    Returns:
        Validated AyuSetuConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config" / "ayusetu.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    # Allow the settings to be nested under a top-level "ayusetu" key
    if isinstance(config_data, dict) and isinstance(config_data.get("ayusetu"), dict):
        config_data = config_data["ayusetu"]

    try:
        config = AyuSetuConfig(**config_data)
        logger.info(f"Successfully loaded config from {config_path}")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise
