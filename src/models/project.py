"""Project-side declarations handed to the resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from constants import Constants
from .moniker import TargetPlatformMoniker


@dataclass(frozen=True)
class FrameworkReference:
    """A project's symbolic request for a shared framework."""
    name: str


@dataclass(frozen=True)
class PackageReference:
    """An explicit package pin (name + version) declared by the project."""
    name: str
    version: str


@dataclass
class ProjectDeclarations:
    """Everything the core needs to know about one project build.

    Attributes:
        name: Project name; also the default assembly and document base name.
        moniker: Target platform the project builds against.
        framework_references: Declared framework references, in declaration order.
        package_references: Declared explicit package pins.
        project_file: Identity used in diagnostics (defaults to ``<name>.csproj``).
        version: Version recorded for the project's own manifest entry.
        assembly_name: File name of the project's output assembly.
    """
    name: str
    moniker: TargetPlatformMoniker
    framework_references: List[FrameworkReference] = field(default_factory=list)
    package_references: List[PackageReference] = field(default_factory=list)
    project_file: Optional[str] = None
    version: str = Constants.DEFAULT_PROJECT_VERSION
    assembly_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Project name must not be empty")
        seen = set()
        for ref in self.framework_references:
            if ref.name in seen:
                raise ValueError(
                    f"Framework reference '{ref.name}' is declared more than once in {self.identity}"
                )
            seen.add(ref.name)
        if self.project_file is None:
            self.project_file = f"{self.name}{Constants.PROJECT_FILE_SUFFIX}"
        if self.assembly_name is None:
            self.assembly_name = f"{self.name}.dll"

    @property
    def identity(self) -> str:
        """Project identity used when attributing diagnostics."""
        return self.project_file or self.name

    @property
    def reference_names(self) -> Tuple[str, ...]:
        return tuple(ref.name for ref in self.framework_references)
