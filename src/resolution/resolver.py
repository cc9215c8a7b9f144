"""ReferenceResolver - resolve declared framework references against the registry.

Every declared reference is looked up under the project's platform moniker:
- not registered -> Unresolved + UnknownFrameworkReference error
- alias          -> followed to the canonical entry's package identity
- direct entry   -> its own package identity

Resolution continues past unknown references so all of them are reported in
one pass; the caller fails the build if any error was recorded.

Usage:
    from resolution.resolver import ReferenceResolver

    resolver = ReferenceResolver(get_default_registry())
    outcome = resolver.resolve_project(project)
    if outcome.diagnostics.has_errors:
        ...
"""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from models.diagnostics import DiagnosticBag, DiagnosticCode
from models.framework import Resolved, ResolutionResult, Unresolved
from models.moniker import TargetPlatformMoniker
from models.project import FrameworkReference, ProjectDeclarations
from registry.framework_registry import FrameworkRegistry

logger = logging.getLogger(__name__)


@dataclass
class ResolutionOutcome:
    """Ordered per-reference results plus the diagnostics they produced."""
    results: List[ResolutionResult] = field(default_factory=list)
    diagnostics: DiagnosticBag = field(default_factory=DiagnosticBag)

    @property
    def resolved(self) -> List[Resolved]:
        return [r for r in self.results if isinstance(r, Resolved)]

    @property
    def unresolved(self) -> List[Unresolved]:
        return [r for r in self.results if isinstance(r, Unresolved)]

    @property
    def succeeded(self) -> bool:
        return not self.unresolved and not self.diagnostics.has_errors


class ReferenceResolver:
    """Resolves framework references for one platform moniker at a time."""

    def __init__(self, registry: FrameworkRegistry):
        self._registry = registry

    def resolve_project(self, project: ProjectDeclarations) -> ResolutionOutcome:
        """Resolve every framework reference declared by ``project``."""
        return self.resolve(project.moniker, project.framework_references, project.identity)

    def resolve(
        self,
        moniker: TargetPlatformMoniker,
        references: Sequence[FrameworkReference],
        project: str,
    ) -> ResolutionOutcome:
        """Resolve ``references`` in declaration order.

        Args:
            moniker: The project's target platform.
            references: Declared framework references.
            project: Project identity attached to diagnostics.

        Returns:
            ResolutionOutcome with one result per reference.
        """
        outcome = ResolutionOutcome()
        platform_known = self._registry.platform(moniker) is not None

        for reference in references:
            result = self._resolve_one(moniker, reference)
            outcome.results.append(result)

            if isinstance(result, Unresolved):
                outcome.diagnostics.error(
                    DiagnosticCode.UNKNOWN_FRAMEWORK_REFERENCE,
                    self._unknown_message(moniker, reference, project, platform_known),
                    project=project,
                    subject=reference.name,
                )
                continue

            if is_debug_enabled(logger):
                logger.debug(
                    "Resolved framework reference",
                    extra=extra_context(
                        event="decision",
                        component="resolver",
                        action="resolve",
                        target=reference.name,
                        outcome=str(result.identity),
                        via_alias=result.via_alias,
                    ),
                )

        return outcome

    def _resolve_one(self, moniker: TargetPlatformMoniker, reference: FrameworkReference) -> ResolutionResult:
        entry = self._registry.lookup(moniker, reference.name)
        if entry is None:
            if self._registry.platform(moniker) is None:
                return Unresolved(reference, f"unknown target platform {moniker}")
            return Unresolved(reference, "not registered for this platform")

        canonical_name, direct = self._registry.resolve_alias(moniker, reference.name)
        via_alias: Optional[str] = reference.name if canonical_name != reference.name else None
        return Resolved(
            reference=reference,
            identity=direct.identity,
            roll_forward=direct.roll_forward,
            via_alias=via_alias,
        )

    def _unknown_message(
        self,
        moniker: TargetPlatformMoniker,
        reference: FrameworkReference,
        project: str,
        platform_known: bool,
    ) -> str:
        if not platform_known:
            return (
                f"Unknown framework reference '{reference.name}' in {project}: "
                f"target platform '{moniker}' has no registered shared frameworks."
            )
        message = (
            f"Unknown framework reference '{reference.name}' in {project} "
            f"for target platform '{moniker}'."
        )
        suggestions = difflib.get_close_matches(
            reference.name,
            self._registry.known_references(moniker),
            n=Constants.SUGGESTION_COUNT,
            cutoff=Constants.SUGGESTION_CUTOFF,
        )
        if suggestions:
            message += " Did you mean: " + ", ".join(f"'{s}'" for s in suggestions) + "?"
        return message
