"""fxresolve - shared framework resolution and runtime manifest generation.

Resolves a project's framework references against the framework registry,
checks them against explicit package pins, and writes the
``<project>.runtimeconfig.json`` and ``<project>.deps.json`` documents the
application launcher reads.
"""

import logging
import os
import sys
from typing import Any, List, Optional

from args import parse_args
from cli_config import apply_config, load_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from declarations import build_project
from graph.assets_parser import parse_assets_file
from manifest.generator import GeneratorOptions
from models.diagnostics import DiagnosticBag
from models.errors import GraphLoadError, InvalidMonikerError, RegistryError, SchemaError
from models.moniker import TargetPlatformMoniker
from pipeline import BuildOutcome, run_build
from registry.framework_registry import FrameworkRegistry
from registry.loader import get_default_registry

logger = logging.getLogger(__name__)


def _setup_logging(args: Any) -> None:
    """Configure logging based on CLI arguments.

    Args:
        args: Parsed CLI arguments.
    """
    level_name = "CRITICAL" if getattr(args, "QUIET", False) else str(args.LOG_LEVEL).upper()
    configure_logging(level_name)

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def _load_registry(args: Any) -> FrameworkRegistry:
    """Registry from --registry/config, else FXRESOLVE_REGISTRY, else the bundled data."""
    try:
        return get_default_registry(getattr(args, "REGISTRY", None))
    except (RegistryError, SchemaError) as e:
        logging.error("Framework registry couldn't be loaded: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def list_frameworks(registry: FrameworkRegistry, target_framework: str) -> List[str]:
    """Lines describing every reference registered for ``target_framework``."""
    moniker = TargetPlatformMoniker.parse(target_framework)
    release = registry.platform(moniker)
    if release is None:
        return []
    lines = []
    for name in registry.known_references(moniker):
        canonical, entry = registry.resolve_alias(moniker, name)
        suffix = f" (alias of {canonical})" if canonical != name else ""
        lines.append(f"{name} -> {entry.identity}{suffix}")
    return lines


def print_diagnostics(diagnostics: DiagnosticBag, quiet: bool = False) -> None:
    """Print diagnostics one per line in build-log form."""
    if quiet:
        return
    for diagnostic in diagnostics:
        stream = sys.stderr if diagnostic.is_error else sys.stdout
        print(diagnostic.format(), file=stream)


def _write_outputs(outcome: BuildOutcome, output_dir: str) -> None:
    try:
        outcome.write_artifacts(output_dir)
    except SchemaError as e:
        logging.error("Generated document failed validation: %s", e)
        sys.exit(ExitCodes.BUILD_FAILED.value)
    except OSError as e:
        logging.error("Output files couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def main(argv: Optional[List[str]] = None) -> None:
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        config = load_config(getattr(args, "CONFIG", None))
    except (OSError, ValueError) as e:
        logging.error("Configuration error: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    apply_config(args, config)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    registry = _load_registry(args)

    if args.LIST_FRAMEWORKS:
        try:
            lines = list_frameworks(registry, args.TARGET_FRAMEWORK)
        except InvalidMonikerError as e:
            logging.error("%s", e)
            sys.exit(ExitCodes.USAGE_ERROR.value)
        if not lines:
            logging.warning("No shared frameworks registered for %s", args.TARGET_FRAMEWORK)
        for line in lines:
            print(line)
        sys.exit(ExitCodes.SUCCESS.value)

    try:
        project = build_project(args)
    except (InvalidMonikerError, ValueError) as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.USAGE_ERROR.value)

    try:
        graph = parse_assets_file(args.ASSETS)
    except GraphLoadError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    options = GeneratorOptions(include_shared_framework_assets=bool(args.INCLUDE_FRAMEWORK_ASSETS))
    outcome = run_build(project, registry, graph, options)
    print_diagnostics(outcome.diagnostics, quiet=args.QUIET)

    if not outcome.succeeded:
        logging.error("Build failed with %d error(s).", len(outcome.errors))
        sys.exit(ExitCodes.BUILD_FAILED.value)

    _write_outputs(outcome, args.OUTPUT_DIR or os.getcwd())

    if outcome.warnings:
        logging.warning("Build produced %d warning(s).", len(outcome.warnings))
        if args.ERROR_ON_WARNINGS:
            logging.error("Warnings present, exiting with non-zero status code.")
            sys.exit(ExitCodes.EXIT_WARNINGS.value)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(event="function_exit", component="cli", action="main",
                                outcome="success")
        )
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
