"""Conflict checks between resolved frameworks and explicit package pins."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from models.diagnostics import Diagnostic, Severity, DiagnosticCode
from models.framework import Resolved, ResolutionResult
from models.project import PackageReference

logger = logging.getLogger(__name__)


def check_conflicts(
    results: Sequence[ResolutionResult],
    package_references: Iterable[PackageReference],
    project: str,
) -> List[Diagnostic]:
    """Warn when a package is declared both as a framework and as an explicit pin.

    Only the package name is compared (case-insensitively, as package ids
    are); the pinned version is ignored. The pin does not override the
    framework resolution, so the check is advisory and never fails the build.

    Args:
        results: Resolution results for the project's framework references.
        package_references: The project's explicit package pins.
        project: Project identity used in the diagnostic.

    Returns:
        One warning per conflicting package name, in resolution order.
    """
    pins: Dict[str, PackageReference] = {}
    for pin in package_references:
        pins.setdefault(pin.name.lower(), pin)

    diagnostics: List[Diagnostic] = []
    warned = set()
    for result in results:
        if not isinstance(result, Resolved):
            continue
        key = result.identity.name.lower()
        pin = pins.get(key)
        if pin is None or key in warned:
            continue
        warned.add(key)
        logger.debug("Explicit pin %s %s shadows framework reference %s",
                     pin.name, pin.version, result.reference.name)
        diagnostics.append(Diagnostic(
            severity=Severity.WARNING,
            code=DiagnosticCode.CONFLICTING_EXPLICIT_PACKAGE_REFERENCE,
            message=(
                f"A PackageReference to '{pin.name}' was found in {project}. "
                f"It is already provided by the framework reference '{result.reference.name}' "
                f"({result.identity}); the explicit reference is not needed and should be removed."
            ),
            project=project,
            subject=result.identity.name,
        ))
    return diagnostics
