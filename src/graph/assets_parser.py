"""Reader for the package resolver's assets file (project.assets.json layout).

Only the parts the manifest generator needs are read: targets, their
libraries with runtime/native assets and dependencies, and the library
metadata section. Supports assets file versions 2 and 3.
"""

from __future__ import annotations

import json
import logging

from constants import Constants
from models.errors import GraphLoadError
from .models import DependencyGraph

logger = logging.getLogger(__name__)


def parse_assets_file(assets_path: str) -> DependencyGraph:
    """Load the upstream dependency graph from an assets file.

    Args:
        assets_path: Path to project.assets.json (or a file with the same layout).

    Returns:
        DependencyGraph with one entry per target in the file.

    Raises:
        GraphLoadError: If the file is missing, is not JSON, or has an
            unsupported version.
    """
    try:
        with open(assets_path, "r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise GraphLoadError(f"Assets file not found: {assets_path}") from e
    except (IOError, json.JSONDecodeError) as e:
        raise GraphLoadError(f"Couldn't parse assets file {assets_path}: {e}") from e

    if not isinstance(data, dict):
        raise GraphLoadError(f"Assets file {assets_path} must contain a JSON object")

    version = data.get("version", Constants.SUPPORTED_ASSETS_VERSIONS[-1])
    if version not in Constants.SUPPORTED_ASSETS_VERSIONS:
        raise GraphLoadError(
            f"Unsupported assets file version {version!r} in {assets_path} "
            f"(supported: {', '.join(str(v) for v in Constants.SUPPORTED_ASSETS_VERSIONS)})"
        )

    graph = DependencyGraph.from_dict(data)
    logger.debug(
        "Loaded dependency graph from %s: %d target(s), %d libraries",
        assets_path,
        len(graph.targets),
        sum(len(t.libraries) for t in graph.targets),
    )
    return graph
