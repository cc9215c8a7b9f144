"""Build pipeline: resolve, check conflicts, then generate manifests.

The pipeline performs no file reading; the CLI loads the registry and the
dependency graph and hands them in. Diagnostics from every stage are
collected into one bag, so a build with several problems reports all of them
before it fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from common.logging_utils import Timer, extra_context, is_debug_enabled
from graph.models import DependencyGraph
from manifest.documents import write_documents
from manifest.generator import GeneratorOptions, ManifestGenerator
from manifest.models import DependencyManifest
from models.diagnostics import Diagnostic, DiagnosticBag, DiagnosticCode
from models.framework import ResolutionResult, RuntimeSelection
from models.project import ProjectDeclarations
from registry.framework_registry import FrameworkRegistry
from resolution.conflicts import check_conflicts
from resolution.resolver import ReferenceResolver

logger = logging.getLogger(__name__)


@dataclass
class BuildOutcome:
    """Result of one project build."""
    project: ProjectDeclarations
    results: List[ResolutionResult] = field(default_factory=list)
    diagnostics: DiagnosticBag = field(default_factory=DiagnosticBag)
    selection: Optional[RuntimeSelection] = None
    manifest: Optional[DependencyManifest] = None

    @property
    def succeeded(self) -> bool:
        return (
            not self.diagnostics.has_errors
            and self.selection is not None
            and self.manifest is not None
        )

    @property
    def warnings(self) -> List[Diagnostic]:
        return self.diagnostics.warnings

    @property
    def errors(self) -> List[Diagnostic]:
        return self.diagnostics.errors

    def write_artifacts(self, output_dir: str) -> Tuple[str, str]:
        """Write the runtimeconfig and deps documents into ``output_dir``.

        Raises:
            RuntimeError: If the build failed; failed builds produce no artifacts.
        """
        if not self.succeeded:
            raise RuntimeError(
                f"Build of {self.project.identity} failed; no artifacts to write"
            )
        assert self.selection is not None and self.manifest is not None
        return write_documents(output_dir, self.project, self.selection, self.manifest)


def run_build(
    project: ProjectDeclarations,
    registry: FrameworkRegistry,
    graph: DependencyGraph,
    options: Optional[GeneratorOptions] = None,
) -> BuildOutcome:
    """Run resolution, conflict checks and manifest generation for ``project``.

    Args:
        project: Project declarations.
        registry: Framework registry to resolve against.
        graph: Upstream dependency graph.
        options: Generator tunables.

    Returns:
        BuildOutcome; ``succeeded`` is False when any error was recorded.
    """
    outcome = BuildOutcome(project=project)
    if is_debug_enabled(logger):
        logger.debug(
            "Build start",
            extra=extra_context(
                event="function_entry",
                component="pipeline",
                action="run_build",
                target=project.identity,
                moniker=str(project.moniker),
            ),
        )

    with Timer() as timer:
        resolution = ReferenceResolver(registry).resolve_project(project)
        outcome.results = resolution.results
        outcome.diagnostics.extend(resolution.diagnostics)
        outcome.diagnostics.extend(
            check_conflicts(resolution.results, project.package_references, project.identity)
        )

        if not outcome.diagnostics.has_errors and registry.platform(project.moniker) is None:
            # Nothing to resolve, but the platform's core runtime is unknown too
            outcome.diagnostics.error(
                DiagnosticCode.MISSING_CORE_RUNTIME_PACKAGE,
                (
                    f"Target platform '{project.moniker}' of {project.identity} is not "
                    f"registered, so its core runtime package is unknown."
                ),
                project=project.identity,
                subject=str(project.moniker),
            )

        if not outcome.diagnostics.has_errors:
            generated = ManifestGenerator(registry, options).generate(
                project, resolution.results, graph
            )
            outcome.diagnostics.extend(generated.diagnostics)
            outcome.selection = generated.selection
            outcome.manifest = generated.manifest

    if outcome.succeeded:
        logger.info("Selected shared framework %s for %s",
                    outcome.selection.identity, project.identity)
    if is_debug_enabled(logger):
        logger.debug(
            "Build finished",
            extra=extra_context(
                event="function_exit",
                component="pipeline",
                action="run_build",
                target=project.identity,
                outcome="success" if outcome.succeeded else "failed",
                errors=len(outcome.errors),
                warnings=len(outcome.warnings),
                duration_ms=timer.duration_ms(),
            ),
        )
    return outcome
