"""Upstream dependency graph (read-only input from the package resolver).

- models.py: graph, target and library records
- assets_parser.py: reader for the resolver's assets file
"""

from .models import DependencyGraph, GraphLibrary, GraphTarget  # noqa: F401
from .assets_parser import parse_assets_file  # noqa: F401

__all__ = [
    "DependencyGraph",
    "GraphLibrary",
    "GraphTarget",
    "parse_assets_file",
]
