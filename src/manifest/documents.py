"""Serialisation of the runtime-selection descriptor and dependency manifest.

Documents are plain dicts built in a fixed key order, validated against the
Draft-7 schemas in ``schemas.py`` and written as indented JSON with a trailing
newline. Nothing time- or host-dependent goes into them, so the same inputs
always produce byte-identical files.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Tuple

from constants import Constants
from models.framework import RuntimeSelection
from models.moniker import TargetPlatformMoniker
from models.project import ProjectDeclarations
from schema_validate import validate_document
from schemas import DEPS_SCHEMA, RUNTIMECONFIG_SCHEMA
from .models import DependencyManifest, ManifestLibrary

logger = logging.getLogger(__name__)


def build_runtimeconfig(selection: RuntimeSelection, moniker: TargetPlatformMoniker) -> Dict[str, Any]:
    """Build the runtime-selection descriptor.

    Args:
        selection: The primary framework chosen by the generator.
        moniker: Target platform of the project.

    Returns:
        dict: Validated ``runtimeOptions`` document.
    """
    options: Dict[str, Any] = {"tfm": moniker.short_name}
    if selection.roll_forward is not None:
        options["rollForward"] = selection.roll_forward.value
    options["framework"] = {"name": selection.name, "version": selection.version}
    document = {"runtimeOptions": options}
    validate_document(RUNTIMECONFIG_SCHEMA, document, "runtime configuration")
    return document


def _target_entry(library: ManifestLibrary) -> Dict[str, Any]:
    entry: Dict[str, Any] = {}
    if library.dependencies:
        entry["dependencies"] = dict(library.dependencies)
    if library.runtime:
        entry["runtime"] = {path: {} for path in library.runtime}
    if library.native:
        entry["native"] = {path: {} for path in library.native}
    return entry


def _library_entry(library: ManifestLibrary) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"type": library.type, "serviceable": library.serviceable}
    if library.sha512:
        entry["sha512"] = library.sha512
    if library.path:
        entry["path"] = library.path
    return entry


def build_deps(manifest: DependencyManifest) -> Dict[str, Any]:
    """Build the dependency manifest document.

    Library order is the manifest's order (project first, then graph order).

    Returns:
        dict: Validated deps document.
    """
    tfm = manifest.target.short_name
    document = {
        "runtimeTarget": {"name": tfm},
        "compilationOptions": {},
        "targets": {tfm: {lib.key: _target_entry(lib) for lib in manifest.libraries}},
        "libraries": {lib.key: _library_entry(lib) for lib in manifest.libraries},
    }
    validate_document(DEPS_SCHEMA, document, "dependency manifest")
    return document


def render_json(document: Dict[str, Any]) -> str:
    """Render a document exactly as it is written to disk."""
    return json.dumps(document, ensure_ascii=False, indent=2) + "\n"


def write_json(document: Dict[str, Any], path: str) -> None:
    """Write ``document`` to ``path``; OSError propagates to the caller."""
    with open(path, "w", encoding="utf-8", newline="\n") as file:
        file.write(render_json(document))
    logger.info("JSON file has been successfully exported at: %s", path)


def document_paths(output_dir: str, project: ProjectDeclarations) -> Tuple[str, str]:
    """(runtimeconfig path, deps path) for ``project`` under ``output_dir``."""
    return (
        os.path.join(output_dir, f"{project.name}{Constants.RUNTIMECONFIG_SUFFIX}"),
        os.path.join(output_dir, f"{project.name}{Constants.DEPS_SUFFIX}"),
    )


def write_documents(
    output_dir: str,
    project: ProjectDeclarations,
    selection: RuntimeSelection,
    manifest: DependencyManifest,
) -> Tuple[str, str]:
    """Build, validate and write both documents for ``project``.

    Both documents are built (and validated) before anything is written, so a
    schema failure leaves no partial output.

    Returns:
        Tuple of the written (runtimeconfig, deps) paths.
    """
    runtimeconfig = build_runtimeconfig(selection, project.moniker)
    deps = build_deps(manifest)
    os.makedirs(output_dir, exist_ok=True)
    runtimeconfig_path, deps_path = document_paths(output_dir, project)
    write_json(runtimeconfig, runtimeconfig_path)
    write_json(deps, deps_path)
    return runtimeconfig_path, deps_path
