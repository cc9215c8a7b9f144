"""Build project declarations from command-line tokens."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

from models.moniker import TargetPlatformMoniker
from models.project import FrameworkReference, PackageReference, ProjectDeclarations


def tokenize_rightmost_colon(s: str) -> Tuple[str, Optional[str]]:
    """Return (name, version or None) using the rightmost-colon rule."""
    s = s.strip()
    if ':' not in s:
        return s, None
    name, version = s.rsplit(':', 1)
    return name.strip(), version.strip() or None


def parse_package_ref(token: str) -> PackageReference:
    """Parse a ``NAME:VERSION`` package pin.

    Raises:
        ValueError: If the name or the version is missing.
    """
    name, version = tokenize_rightmost_colon(token)
    if not name:
        raise ValueError(f"Package reference {token!r} has no package name")
    if version is None:
        raise ValueError(f"Package reference {token!r} must be given as NAME:VERSION")
    return PackageReference(name=name, version=version)


def parse_framework_refs(tokens: Iterable[str]) -> List[FrameworkReference]:
    """Framework references in declaration order; blank tokens are ignored."""
    return [FrameworkReference(t.strip()) for t in tokens if t and t.strip()]


def build_project(args: Any) -> ProjectDeclarations:
    """Assemble ProjectDeclarations from parsed CLI arguments.

    Raises:
        InvalidMonikerError: If the target framework cannot be parsed.
        ValueError: If a reference is malformed or declared twice.
    """
    moniker = TargetPlatformMoniker.parse(args.TARGET_FRAMEWORK)
    return ProjectDeclarations(
        name=args.PROJECT,
        moniker=moniker,
        framework_references=parse_framework_refs(args.FRAMEWORK_REFS or []),
        package_references=[parse_package_ref(t) for t in (args.PACKAGE_REFS or [])],
        project_file=getattr(args, "PROJECT_FILE", None),
    )
