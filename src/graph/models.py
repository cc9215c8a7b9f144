"""Data models for the upstream dependency graph.

The graph is produced by the external package resolver; this side only reads
it. Each target (one per platform moniker, optionally per runtime identifier)
lists its libraries in the resolver's order, which is also the traversal order
used when attributing runtime assets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Set, Tuple

from constants import Constants
from models.errors import GraphLoadError, InvalidMonikerError
from models.moniker import TargetPlatformMoniker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphLibrary:
    """One resolved library in a graph target."""
    name: str
    version: str
    type: str = "package"
    dependencies: Tuple[Tuple[str, str], ...] = ()
    runtime: Tuple[str, ...] = ()
    native: Tuple[str, ...] = ()
    sha512: Optional[str] = None
    path: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.name}/{self.version}"

    @property
    def dependency_names(self) -> List[str]:
        return [name for name, _ in self.dependencies]


@dataclass(frozen=True)
class GraphTarget:
    """Libraries resolved for one platform (and optional runtime identifier)."""
    moniker: TargetPlatformMoniker
    libraries: Tuple[GraphLibrary, ...] = ()
    runtime_identifier: Optional[str] = None

    def find(self, name: str) -> Optional[GraphLibrary]:
        """Find a library by package id (case-insensitive)."""
        wanted = name.lower()
        for library in self.libraries:
            if library.name.lower() == wanted:
                return library
        return None


@dataclass
class DependencyGraph:
    """Read-only view over the resolver's targets."""
    targets: List[GraphTarget] = field(default_factory=list)

    def target_for(self, moniker: TargetPlatformMoniker) -> Optional[GraphTarget]:
        """The runtime-independent target for ``moniker``, if the graph has one."""
        for target in self.targets:
            if target.moniker == moniker and target.runtime_identifier is None:
                return target
        return None

    def find_library(self, moniker: TargetPlatformMoniker, name: str) -> Optional[GraphLibrary]:
        target = self.target_for(moniker)
        return target.find(name) if target is not None else None

    def has_library(self, moniker: TargetPlatformMoniker, name: str) -> bool:
        return self.find_library(moniker, name) is not None

    def closure(self, moniker: TargetPlatformMoniker, roots: Iterable[str]) -> Set[str]:
        """Lower-cased names of ``roots`` and everything they depend on transitively."""
        target = self.target_for(moniker)
        if target is None:
            return set()

        seen: Set[str] = set()
        pending = [r for r in roots]
        while pending:
            name = pending.pop()
            key = name.lower()
            if key in seen:
                continue
            library = target.find(name)
            if library is None:
                continue
            seen.add(key)
            pending.extend(library.dependency_names)
        return seen

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DependencyGraph":
        """Build a graph from the resolver's lock structure.

        Expects ``targets`` keyed by framework (``netcoreapp2.1`` or
        ``.NETCoreApp,Version=v2.1``, optionally suffixed ``/<rid>``) whose
        values map ``Name/Version`` to library records, plus optional
        ``libraries`` metadata (sha512, path, type) keyed the same way.

        Raises:
            GraphLoadError: If the structure is malformed.
        """
        if not isinstance(data, Mapping):
            raise GraphLoadError("Dependency graph must be a JSON object")
        raw_targets = data.get("targets")
        if not isinstance(raw_targets, Mapping):
            raise GraphLoadError("Dependency graph has no 'targets' section")
        metadata = data.get("libraries") or {}
        if not isinstance(metadata, Mapping):
            raise GraphLoadError("'libraries' section must be an object")

        targets: List[GraphTarget] = []
        for target_key, raw_libraries in raw_targets.items():
            framework, _, rid = str(target_key).partition("/")
            try:
                moniker = TargetPlatformMoniker.parse(framework)
            except InvalidMonikerError as e:
                logger.warning("Skipping graph target %s: %s", target_key, e)
                continue
            if not isinstance(raw_libraries, Mapping):
                raise GraphLoadError(f"Target '{target_key}' must map libraries to records")
            libraries = tuple(
                _parse_library(lib_key, record, metadata.get(lib_key) or {})
                for lib_key, record in raw_libraries.items()
            )
            targets.append(GraphTarget(moniker=moniker, libraries=libraries,
                                       runtime_identifier=rid or None))
        return cls(targets=targets)


def _asset_paths(raw: Any) -> Tuple[str, ...]:
    """Asset paths of a runtime/native section, minus empty-folder placeholders."""
    if not raw:
        return ()
    if not isinstance(raw, Mapping):
        raise GraphLoadError(f"Asset section must be an object, got {type(raw).__name__}")
    paths = []
    for path in raw:
        if path.rsplit("/", 1)[-1] == Constants.PLACEHOLDER_ASSET:
            continue
        paths.append(path)
    return tuple(paths)


def _parse_library(lib_key: str, record: Any, meta: Mapping[str, Any]) -> GraphLibrary:
    name, sep, version = str(lib_key).rpartition("/")
    if not sep or not name or not version:
        raise GraphLoadError(f"Library key '{lib_key}' is not in Name/Version form")
    if not isinstance(record, Mapping):
        raise GraphLoadError(f"Library '{lib_key}' must be an object")

    deps = record.get("dependencies") or {}
    if not isinstance(deps, Mapping):
        raise GraphLoadError(f"Dependencies of '{lib_key}' must be an object")

    return GraphLibrary(
        name=name,
        version=version,
        type=str(record.get("type") or meta.get("type") or "package"),
        dependencies=tuple((str(k), str(v)) for k, v in deps.items()),
        runtime=_asset_paths(record.get("runtime")),
        native=_asset_paths(record.get("native")),
        sha512=meta.get("sha512"),
        path=meta.get("path"),
    )
