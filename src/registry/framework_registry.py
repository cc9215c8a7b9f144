"""Framework registry: (platform moniker, reference name) -> registry entry.

The registry is static release data. Every platform release lists the
reference names it knows, which of them are aliases of another name, the
platform's core runtime package and the precedence used to pick a primary
framework when a project references several unrelated ones.

Lookups are case-sensitive: a casing variant resolves only when it is
registered itself (usually as an alias).

The registry is immutable once constructed, so concurrent builds can share a
single instance without locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import semantic_version

from constants import Constants
from models.errors import RegistryError
from models.framework import AliasEntry, DirectEntry, RegistryEntry, RollForward
from models.moniker import TargetPlatformMoniker
from schema_validate import validate_registry_data
from schemas import REGISTRY_SCHEMA


@dataclass(frozen=True)
class PlatformRelease:
    """Registry data for one target platform.

    Attributes:
        moniker: Platform this release describes.
        core_runtime_package: Root runtime package every app on this platform depends on.
        primary_precedence: Canonical package names, highest precedence first.
        references: Registered reference names mapped to their entries.
    """
    moniker: TargetPlatformMoniker
    core_runtime_package: str
    primary_precedence: Tuple[str, ...]
    references: Mapping[str, RegistryEntry]

    def rank(self, package_name: str) -> Optional[int]:
        """Position of ``package_name`` in the precedence list, or None if unranked."""
        try:
            return self.primary_precedence.index(package_name)
        except ValueError:
            return None


class FrameworkRegistry:
    """Read-only lookup table of known shared frameworks per platform."""

    def __init__(self, platforms: Iterable[PlatformRelease]):
        table: Dict[TargetPlatformMoniker, PlatformRelease] = {}
        for release in platforms:
            if release.moniker in table:
                raise RegistryError(f"Platform {release.moniker} is registered more than once")
            table[release.moniker] = release
        self._platforms: Mapping[TargetPlatformMoniker, PlatformRelease] = MappingProxyType(table)

        # Fail at load time rather than during a build
        for release in self._platforms.values():
            for name in release.references:
                self.resolve_alias(release.moniker, name)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Any) -> "FrameworkRegistry":
        """Build a registry from parsed registry data (YAML/JSON document).

        Raises:
            SchemaError: If the document does not match the registry schema.
            RegistryError: If entries are inconsistent (bad version, alias, moniker).
        """
        validate_registry_data(REGISTRY_SCHEMA, data)
        platforms = []
        for moniker_text, body in data["platforms"].items():
            try:
                moniker = TargetPlatformMoniker.parse(moniker_text)
            except ValueError as e:
                raise RegistryError(f"Invalid platform key {moniker_text!r}: {e}") from e
            references = {
                name: _parse_entry(moniker_text, name, raw)
                for name, raw in body["references"].items()
            }
            platforms.append(PlatformRelease(
                moniker=moniker,
                core_runtime_package=body["core_runtime_package"],
                primary_precedence=tuple(body.get("primary_precedence", [])),
                references=MappingProxyType(references),
            ))
        return cls(platforms)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def platform(self, moniker: TargetPlatformMoniker) -> Optional[PlatformRelease]:
        """Return the release data for ``moniker`` or None if unknown."""
        return self._platforms.get(moniker)

    def monikers(self) -> List[TargetPlatformMoniker]:
        return sorted(self._platforms, key=lambda m: (m.family, m.major, m.minor))

    def lookup(self, moniker: TargetPlatformMoniker, reference_name: str) -> Optional[RegistryEntry]:
        """Look up a reference name for a platform; None means NotFound."""
        release = self._platforms.get(moniker)
        if release is None:
            return None
        return release.references.get(reference_name)

    def known_references(self, moniker: TargetPlatformMoniker) -> List[str]:
        """All registered reference names for ``moniker`` (sorted, empty if unknown)."""
        release = self._platforms.get(moniker)
        if release is None:
            return []
        return sorted(release.references)

    def resolve_alias(self, moniker: TargetPlatformMoniker, reference_name: str) -> Tuple[str, DirectEntry]:
        """Follow alias pointers from ``reference_name`` to its direct entry.

        Returns:
            Tuple of (canonical reference name, direct entry).

        Raises:
            KeyError: If ``reference_name`` is not registered for ``moniker``.
            RegistryError: On a dangling alias or an alias cycle.
        """
        release = self._platforms.get(moniker)
        if release is None or reference_name not in release.references:
            raise KeyError(reference_name)

        current = reference_name
        visited: Set[str] = {current}
        for _ in range(Constants.MAX_ALIAS_DEPTH):
            entry = release.references.get(current)
            if entry is None:
                raise RegistryError(
                    f"Alias '{reference_name}' on {moniker} points at unregistered name '{current}'"
                )
            if isinstance(entry, DirectEntry):
                return current, entry
            target = entry.canonical_key
            if target in visited:
                raise RegistryError(
                    f"Alias cycle on {moniker}: {' -> '.join(sorted(visited))} -> {target}"
                )
            visited.add(target)
            current = target

        raise RegistryError(
            f"Alias chain for '{reference_name}' on {moniker} exceeds {Constants.MAX_ALIAS_DEPTH} levels"
        )


def _parse_entry(moniker_text: str, name: str, raw: Dict[str, Any]) -> RegistryEntry:
    """Turn one raw reference record into a registry entry."""
    if "alias_of" in raw:
        return AliasEntry(canonical_key=raw["alias_of"])

    version = str(raw["version"])
    try:
        semantic_version.Version(version)
    except ValueError as e:
        raise RegistryError(
            f"Reference '{name}' on {moniker_text} must pin an exact version, got {version!r}"
        ) from e

    roll_forward = RollForward(raw["roll_forward"]) if raw.get("roll_forward") else None
    return DirectEntry(package=raw["package"], version=version, roll_forward=roll_forward)
