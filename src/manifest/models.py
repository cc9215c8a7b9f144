"""Dependency manifest data model."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from models.moniker import TargetPlatformMoniker


def logical_path(asset_path: str) -> str:
    """Location an asset occupies in the application directory.

    Runtime and native assets are deployed flat next to the app, so the file
    name identifies the asset. File systems the launcher runs on may be
    case-insensitive, so the comparison key is lower-cased.
    """
    return posixpath.basename(asset_path.replace("\\", "/")).lower()


@dataclass
class ManifestLibrary:
    """One library entry of the dependency manifest."""
    name: str
    version: str
    type: str = "package"
    dependencies: Dict[str, str] = field(default_factory=dict)
    runtime: List[str] = field(default_factory=list)
    native: List[str] = field(default_factory=list)
    serviceable: bool = False
    sha512: Optional[str] = None
    path: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.name}/{self.version}"


@dataclass
class DependencyManifest:
    """Runtime-loadable assets of an application, attributed to their libraries.

    The project's own library is always first. No logical asset path appears
    under more than one library.
    """
    target: TargetPlatformMoniker
    libraries: List[ManifestLibrary] = field(default_factory=list)

    @property
    def project(self) -> Optional[ManifestLibrary]:
        for library in self.libraries:
            if library.type == "project":
                return library
        return None

    def library(self, name: str) -> Optional[ManifestLibrary]:
        wanted = name.lower()
        for library in self.libraries:
            if library.name.lower() == wanted:
                return library
        return None

    def runtime_assets(self) -> List[Tuple[str, str]]:
        """(library key, asset path) for every runtime assembly."""
        return [(lib.key, path) for lib in self.libraries for path in lib.runtime]

    def native_assets(self) -> List[Tuple[str, str]]:
        """(library key, asset path) for every native asset."""
        return [(lib.key, path) for lib in self.libraries for path in lib.native]

    def owner_of(self, asset_path: str) -> Optional[str]:
        """Key of the library that owns ``asset_path``'s logical location."""
        wanted = logical_path(asset_path)
        for key, path in self.runtime_assets() + self.native_assets():
            if logical_path(path) == wanted:
                return key
        return None
