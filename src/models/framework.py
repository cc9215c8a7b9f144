"""Data models for framework registry entries and resolution results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .project import FrameworkReference


class RollForward(Enum):
    """Roll-forward policies a runtime-selection descriptor may carry."""
    LATEST_PATCH = "LatestPatch"
    MINOR = "Minor"
    MAJOR = "Major"
    LATEST_MINOR = "LatestMinor"
    LATEST_MAJOR = "LatestMajor"
    DISABLE = "Disable"


@dataclass(frozen=True)
class PackageIdentity:
    """Canonical (name, version) of a resolved package."""
    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}/{self.version}"


@dataclass(frozen=True)
class DirectEntry:
    """Registry entry that names a package directly."""
    package: str
    version: str
    roll_forward: Optional[RollForward] = None

    @property
    def identity(self) -> PackageIdentity:
        return PackageIdentity(self.package, self.version)


@dataclass(frozen=True)
class AliasEntry:
    """Registry entry pointing at another reference name of the same platform."""
    canonical_key: str


RegistryEntry = Union[DirectEntry, AliasEntry]


@dataclass(frozen=True)
class Resolved:
    """A framework reference that resolved to a canonical package identity."""
    reference: FrameworkReference
    identity: PackageIdentity
    roll_forward: Optional[RollForward] = None
    via_alias: Optional[str] = None


@dataclass(frozen=True)
class Unresolved:
    """A framework reference the registry does not know."""
    reference: FrameworkReference
    reason: str


ResolutionResult = Union[Resolved, Unresolved]


@dataclass(frozen=True)
class RuntimeSelection:
    """The single primary framework written to the runtime-selection descriptor."""
    name: str
    version: str
    roll_forward: Optional[RollForward] = None

    @property
    def identity(self) -> PackageIdentity:
        return PackageIdentity(self.name, self.version)
