"""Data models shared by the registry, resolver and manifest generator.

- moniker.py: target platform moniker parsing and structural equality
- project.py: framework/package references and project declarations
- framework.py: registry entries, resolution results, runtime selection
- diagnostics.py: diagnostic codes, severities and the collecting bag
- errors.py: exception hierarchy
"""

from .errors import (  # noqa: F401
    FxResolveError,
    GraphLoadError,
    InvalidMonikerError,
    RegistryError,
    SchemaError,
)
from .moniker import TargetPlatformMoniker  # noqa: F401
from .project import FrameworkReference, PackageReference, ProjectDeclarations  # noqa: F401
from .framework import (  # noqa: F401
    AliasEntry,
    DirectEntry,
    PackageIdentity,
    RegistryEntry,
    Resolved,
    ResolutionResult,
    RollForward,
    RuntimeSelection,
    Unresolved,
)
from .diagnostics import Diagnostic, DiagnosticBag, DiagnosticCode, Severity  # noqa: F401

__all__ = [
    # Errors
    "FxResolveError",
    "GraphLoadError",
    "InvalidMonikerError",
    "RegistryError",
    "SchemaError",
    # Project
    "TargetPlatformMoniker",
    "FrameworkReference",
    "PackageReference",
    "ProjectDeclarations",
    # Registry / resolution
    "AliasEntry",
    "DirectEntry",
    "PackageIdentity",
    "RegistryEntry",
    "Resolved",
    "ResolutionResult",
    "RollForward",
    "RuntimeSelection",
    "Unresolved",
    # Diagnostics
    "Diagnostic",
    "DiagnosticBag",
    "DiagnosticCode",
    "Severity",
]
