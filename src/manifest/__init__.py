"""Runtime manifest generation.

- generator.py: primary framework selection and asset attribution
- models.py: dependency manifest data model
- documents.py: runtimeconfig/deps serialisation
"""

from .generator import GenerationResult, GeneratorOptions, ManifestGenerator  # noqa: F401
from .models import DependencyManifest, ManifestLibrary, logical_path  # noqa: F401
from .documents import (  # noqa: F401
    build_deps,
    build_runtimeconfig,
    render_json,
    write_documents,
)

__all__ = [
    "GenerationResult",
    "GeneratorOptions",
    "ManifestGenerator",
    "DependencyManifest",
    "ManifestLibrary",
    "logical_path",
    "build_deps",
    "build_runtimeconfig",
    "render_json",
    "write_documents",
]
