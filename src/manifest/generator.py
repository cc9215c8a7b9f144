"""ManifestGenerator - build the runtime selection and dependency manifest.

Consumes the resolver's results and the upstream dependency graph:
1. Collapse resolved references to canonical package identities and pick the
   single primary framework (registry precedence breaks ties between
   unrelated frameworks).
2. Walk the graph target for the project's platform and attribute every
   runtime/native asset to exactly one library; later claims on an already
   attributed location are dropped.
3. Require the platform's core runtime package to be present in the graph.

Usage:
    generator = ManifestGenerator(registry)
    result = generator.generate(project, outcome.results, graph)
    if result.succeeded:
        write_documents(output_dir, project, result.selection, result.manifest)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from common.logging_utils import extra_context, is_debug_enabled
from graph.models import DependencyGraph, GraphLibrary, GraphTarget
from models.diagnostics import DiagnosticBag, DiagnosticCode
from models.framework import Resolved, ResolutionResult, RuntimeSelection, Unresolved
from models.project import ProjectDeclarations
from registry.framework_registry import FrameworkRegistry, PlatformRelease
from .models import DependencyManifest, ManifestLibrary, logical_path

logger = logging.getLogger(__name__)


@dataclass
class GeneratorOptions:
    """Tunables for manifest generation.

    Attributes:
        include_shared_framework_assets: Keep libraries supplied by the selected
            shared framework (its package, the core runtime package and their
            dependencies) in the manifest. By default they are left out, since
            the launcher loads them from the shared framework, so the manifest
            lists app-local assets only.
    """
    include_shared_framework_assets: bool = False


@dataclass
class GenerationResult:
    """Outputs of one generation pass; selection/manifest are None on failure."""
    selection: Optional[RuntimeSelection] = None
    manifest: Optional[DependencyManifest] = None
    diagnostics: DiagnosticBag = field(default_factory=DiagnosticBag)
    suppressed_assets: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return (
            not self.diagnostics.has_errors
            and self.selection is not None
            and self.manifest is not None
        )


class ManifestGenerator:
    """Generates runtime manifests for one project build."""

    def __init__(self, registry: FrameworkRegistry, options: Optional[GeneratorOptions] = None):
        self._registry = registry
        self._options = options or GeneratorOptions()

    def generate(
        self,
        project: ProjectDeclarations,
        results: Sequence[ResolutionResult],
        graph: DependencyGraph,
    ) -> GenerationResult:
        """Generate the runtime selection and dependency manifest.

        Args:
            project: Declarations of the project being built.
            results: Resolution results; all must be Resolved.
            graph: Upstream dependency graph.

        Returns:
            GenerationResult; on failure it carries error diagnostics.

        Raises:
            ValueError: If any result is Unresolved, or the platform is not
                registered. The caller must fail the build before generating.
        """
        unresolved = [r.reference.name for r in results if isinstance(r, Unresolved)]
        if unresolved:
            raise ValueError(
                f"Cannot generate manifests with unresolved framework references: {', '.join(unresolved)}"
            )
        release = self._registry.platform(project.moniker)
        if release is None:
            raise ValueError(f"Target platform {project.moniker} is not registered")

        result = GenerationResult()
        resolved = [r for r in results if isinstance(r, Resolved)]
        target = graph.target_for(project.moniker)

        selection = self._select_primary(project, release, resolved, target, result.diagnostics)
        core_present = self._check_core_runtime(project, release, target, result.diagnostics)

        if result.diagnostics.has_errors or selection is None or not core_present:
            return result

        assert target is not None
        self._check_framework_version(selection, target)
        result.selection = selection
        excluded: Set[str] = set()
        if not self._options.include_shared_framework_assets:
            excluded = self._framework_closure(project, release, resolved, graph)
        result.manifest = self._collect_assets(project, resolved, target, excluded, result)
        return result

    # ------------------------------------------------------------------
    # Primary framework selection
    # ------------------------------------------------------------------

    def _select_primary(
        self,
        project: ProjectDeclarations,
        release: PlatformRelease,
        resolved: List[Resolved],
        target: Optional[GraphTarget],
        diagnostics: DiagnosticBag,
    ) -> Optional[RuntimeSelection]:
        candidates: List[Resolved] = []
        seen: Dict[str, Resolved] = {}
        for result in resolved:
            name = result.identity.name
            if name in seen:
                if seen[name].identity.version != result.identity.version:
                    logger.warning(
                        "Framework references '%s' and '%s' resolve to %s at different versions; using %s",
                        seen[name].reference.name, result.reference.name, name, seen[name].identity.version,
                    )
                continue
            seen[name] = result
            candidates.append(result)

        if not candidates:
            return self._core_runtime_selection(release, target)

        if len(candidates) == 1:
            chosen = candidates[0]
        else:
            ranked = [c for c in candidates if release.rank(c.identity.name) is not None]
            if not ranked:
                names = ", ".join(f"'{c.identity.name}'" for c in candidates)
                diagnostics.error(
                    DiagnosticCode.AMBIGUOUS_PRIMARY_FRAMEWORK,
                    (
                        f"{project.identity} references unrelated shared frameworks {names} "
                        f"and the registry declares no precedence between them for '{project.moniker}'."
                    ),
                    project=project.identity,
                    subject=candidates[0].identity.name,
                )
                return None
            chosen = min(ranked, key=lambda c: release.rank(c.identity.name))
            dropped = [c for c in candidates if c not in ranked]
            if dropped:
                logger.warning(
                    "Shared frameworks %s are not ranked by the registry for '%s'; using %s",
                    ", ".join(f"'{c.identity.name}'" for c in dropped), project.moniker, chosen.identity,
                )
            logger.info(
                "Selected %s as primary framework out of %s",
                chosen.identity, ", ".join(str(c.identity) for c in candidates),
            )

        return RuntimeSelection(
            name=chosen.identity.name,
            version=chosen.identity.version,
            roll_forward=chosen.roll_forward,
        )

    def _core_runtime_selection(
        self, release: PlatformRelease, target: Optional[GraphTarget]
    ) -> Optional[RuntimeSelection]:
        """Primary for a project without framework references: the core runtime."""
        core = release.core_runtime_package
        if core in release.references:
            _, entry = self._registry.resolve_alias(release.moniker, core)
            return RuntimeSelection(name=entry.package, version=entry.version,
                                    roll_forward=entry.roll_forward)
        library = target.find(core) if target is not None else None
        if library is None:
            # Reported as a missing core runtime package by the caller
            return None
        return RuntimeSelection(name=library.name, version=library.version)

    # ------------------------------------------------------------------
    # Graph checks
    # ------------------------------------------------------------------

    def _check_core_runtime(
        self,
        project: ProjectDeclarations,
        release: PlatformRelease,
        target: Optional[GraphTarget],
        diagnostics: DiagnosticBag,
    ) -> bool:
        core = release.core_runtime_package
        if target is None:
            diagnostics.error(
                DiagnosticCode.MISSING_CORE_RUNTIME_PACKAGE,
                (
                    f"The dependency graph for {project.identity} has no target for "
                    f"'{project.moniker}', so the core runtime package '{core}' is missing."
                ),
                project=project.identity,
                subject=core,
            )
            return False
        if target.find(core) is None:
            diagnostics.error(
                DiagnosticCode.MISSING_CORE_RUNTIME_PACKAGE,
                (
                    f"The core runtime package '{core}' is not present in the dependency graph "
                    f"of {project.identity} for '{project.moniker}'."
                ),
                project=project.identity,
                subject=core,
            )
            return False
        return True

    def _check_framework_version(self, selection: RuntimeSelection, target: GraphTarget) -> None:
        library = target.find(selection.name)
        if library is not None and library.version != selection.version:
            logger.warning(
                "Dependency graph has %s at %s but the registry resolves %s; "
                "the runtime selection keeps the registry version",
                library.name, library.version, selection.version,
            )

    # ------------------------------------------------------------------
    # Asset collection
    # ------------------------------------------------------------------

    def _collect_assets(
        self,
        project: ProjectDeclarations,
        resolved: List[Resolved],
        target: GraphTarget,
        excluded: Set[str],
        result: GenerationResult,
    ) -> DependencyManifest:
        owners: Dict[str, str] = {}
        project_library = ManifestLibrary(
            name=project.name,
            version=project.version,
            type="project",
            runtime=[project.assembly_name],
        )
        owners[logical_path(project.assembly_name)] = project_library.key

        libraries: List[ManifestLibrary] = []
        for library in target.libraries:
            key = library.name.lower()
            if key == project.name.lower() and library.type == "project":
                continue
            if library.key.lower() == project_library.key.lower():
                # Manifest keys must be unique; the project entry owns this one
                logger.warning(
                    "Dependency graph library %s has the same key as the project; "
                    "it is left out of the dependency manifest",
                    library.key,
                )
                continue
            if key in excluded:
                continue
            libraries.append(ManifestLibrary(
                name=library.name,
                version=library.version,
                type="project" if library.type == "project" else "package",
                dependencies={
                    n: v for n, v in library.dependencies if n.lower() not in excluded
                },
                runtime=self._claim(library, library.runtime, owners, result),
                native=self._claim(library, library.native, owners, result),
                serviceable=library.type != "project",
                sha512=library.sha512,
                path=library.path,
            ))

        project_library.dependencies = self._project_dependencies(project, resolved, target, excluded)
        return DependencyManifest(target=project.moniker, libraries=[project_library] + libraries)

    def _framework_closure(
        self,
        project: ProjectDeclarations,
        release: PlatformRelease,
        resolved: List[Resolved],
        graph: DependencyGraph,
    ) -> Set[str]:
        """Libraries the selected shared framework already supplies at run time."""
        roots = [r.identity.name for r in resolved] + [release.core_runtime_package]
        closure = graph.closure(project.moniker, roots)
        if is_debug_enabled(logger):
            logger.debug(
                "Excluding shared framework libraries",
                extra=extra_context(
                    event="decision",
                    component="generator",
                    action="trim",
                    target=project.identity,
                    count=len(closure),
                ),
            )
        return closure

    def _claim(
        self,
        library: GraphLibrary,
        paths: Sequence[str],
        owners: Dict[str, str],
        result: GenerationResult,
    ) -> List[str]:
        """Attribute ``paths`` to ``library`` unless their location is already owned."""
        kept: List[str] = []
        for path in paths:
            location = logical_path(path)
            owner = owners.get(location)
            if owner is None:
                owners[location] = library.key
                kept.append(path)
                continue
            if owner != library.key:
                result.suppressed_assets.append(f"{library.key}:{path}")
                if is_debug_enabled(logger):
                    logger.debug(
                        "Suppressed duplicate runtime asset",
                        extra=extra_context(
                            event="decision",
                            component="generator",
                            action="dedupe",
                            target=path,
                            outcome=f"kept under {owner}",
                            library=library.key,
                        ),
                    )
        return kept

    def _project_dependencies(
        self,
        project: ProjectDeclarations,
        resolved: List[Resolved],
        target: GraphTarget,
        excluded: Set[str],
    ) -> Dict[str, str]:
        """Direct dependencies of the project that the graph actually contains."""
        names = [r.identity.name for r in resolved] + [p.name for p in project.package_references]
        dependencies: Dict[str, str] = {}
        for name in names:
            library = target.find(name)
            if library is None or library.name.lower() in excluded or library.name in dependencies:
                continue
            dependencies[library.name] = library.version
        return dependencies
