"""CLI configuration file loading and override precedence.

Configuration comes from an optional YAML (or JSON) file; command-line flags
always win over file values, which in turn win over built-in defaults.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# Config key -> argparse dest
CONFIG_KEYS = {
    "registry": "REGISTRY",
    "output_dir": "OUTPUT_DIR",
    "include_framework_assets": "INCLUDE_FRAMEWORK_ASSETS",
    "error_on_warnings": "ERROR_ON_WARNINGS",
}

_BOOLEAN_KEYS = ("include_framework_assets", "error_on_warnings")


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from file.

    Args:
        config_path: Path to YAML/JSON config file.

    Returns:
        Configuration dict; empty when no path is given or the file is missing.

    Raises:
        ValueError: If the file cannot be parsed or is not a mapping.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            if config_path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to load config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    for key in data:
        if key not in CONFIG_KEYS:
            logger.warning("Ignoring unknown config key '%s' in %s", key, config_path)
    for key in _BOOLEAN_KEYS:
        if key in data and not isinstance(data[key], bool):
            raise ValueError(f"Config key '{key}' in {config_path} must be true or false")
    return {k: v for k, v in data.items() if k in CONFIG_KEYS}


def apply_config(args: Any, config: Dict[str, Any]) -> None:
    """Fill unset CLI options from ``config`` (CLI has highest precedence).

    Boolean flags still unset afterwards default to False.
    """
    for key, dest in CONFIG_KEYS.items():
        if getattr(args, dest, None) is None and key in config:
            setattr(args, dest, config[key])
            logger.debug("Config %s=%r applied", key, config[key])
    for key in _BOOLEAN_KEYS:
        dest = CONFIG_KEYS[key]
        if getattr(args, dest, None) is None:
            setattr(args, dest, False)
