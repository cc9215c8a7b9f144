"""Registry data loading (YAML or JSON) and the cached default registry."""

from __future__ import annotations

import functools
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from constants import Constants
from models.errors import RegistryError
from .framework_registry import FrameworkRegistry

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"


def _read_document(path: str) -> Any:
    """Read a registry document; YAML unless the file ends in .json."""
    with open(path, "r", encoding="utf-8") as f:
        if path.lower().endswith(".json"):
            return json.load(f)
        return yaml.safe_load(f)


def load_registry(path: str) -> FrameworkRegistry:
    """Load and validate a registry data file.

    Args:
        path: Path to a YAML (.yaml/.yml) or JSON (.json) registry document.

    Returns:
        FrameworkRegistry built from the file.

    Raises:
        RegistryError: If the file cannot be read or parsed.
        SchemaError: If the document does not match the registry schema.
    """
    if not os.path.isfile(path):
        raise RegistryError(f"Registry file not found: {path}")
    try:
        data = _read_document(path)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise RegistryError(f"Couldn't read registry file {path}: {e}") from e

    registry = FrameworkRegistry.from_dict(data)
    logger.debug("Loaded framework registry from %s (%d platforms)", path, len(registry.monikers()))
    return registry


def default_registry_path() -> str:
    """Registry path from FXRESOLVE_REGISTRY, falling back to the bundled data."""
    override = os.environ.get(Constants.ENV_REGISTRY)
    if override:
        return override
    return str(DATA_DIR / Constants.DEFAULT_REGISTRY_FILE)


@functools.lru_cache(maxsize=8)
def _cached_registry(path: str) -> FrameworkRegistry:
    return load_registry(path)


def get_default_registry(path: Optional[str] = None) -> FrameworkRegistry:
    """Return the registry for ``path`` (or the default), loading it once per process."""
    return _cached_registry(path or default_registry_path())


def reset_registry_cache() -> None:
    """Forget cached registries (tests, or after the data file changed)."""
    _cached_registry.cache_clear()
