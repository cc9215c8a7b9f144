"""Argument parsing functionality for fxresolve."""

import argparse
from typing import List, Optional

from constants import Constants


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the fxresolve CLI."""
    parser = argparse.ArgumentParser(
        prog="fxresolve",
        description=(
            "fxresolve - Resolve shared framework references and generate "
            "runtime manifests"
        ),
        add_help=True,
    )

    parser.add_argument("-p", "--project",
                        dest="PROJECT",
                        help="Project name; base name of the generated documents",
                        action="store", type=str)
    parser.add_argument("--project-file",
                        dest="PROJECT_FILE",
                        help="Project file path shown in diagnostics (default: <project>.csproj)",
                        action="store", type=str)
    parser.add_argument("-t", "--target-framework",
                        dest="TARGET_FRAMEWORK",
                        help="Target platform moniker, i.e: netcoreapp2.1, sample-2.1",
                        action="store", type=str,
                        required=True)
    parser.add_argument("-F", "--framework-ref",
                        dest="FRAMEWORK_REFS",
                        help="Framework reference name (can be used multiple times)",
                        action="append", type=str,
                        default=[])
    parser.add_argument("-P", "--package-ref",
                        dest="PACKAGE_REFS",
                        help="Explicit package reference in NAME:VERSION form (can be used multiple times)",
                        action="append", type=str,
                        default=[])
    parser.add_argument("-a", "--assets",
                        dest="ASSETS",
                        help=f"Path to the resolved dependency graph (default: {Constants.ASSETS_FILE})",
                        action="store", type=str,
                        default=Constants.ASSETS_FILE)
    parser.add_argument("-o", "--output-dir",
                        dest="OUTPUT_DIR",
                        help="Directory for the runtimeconfig and deps documents (default: current directory)",
                        action="store", type=str)
    parser.add_argument("--registry",
                        dest="REGISTRY",
                        help="Path to an alternate framework registry file (YAML or JSON)",
                        action="store", type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store", type=str)
    parser.add_argument("--include-framework-assets",
                        dest="INCLUDE_FRAMEWORK_ASSETS",
                        help="Keep assets supplied by the shared framework in the dependency manifest.",
                        action="store_true",
                        default=None)
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code if warnings are present.",
                        action="store_true",
                        default=None)
    parser.add_argument("--list-frameworks",
                        dest="LIST_FRAMEWORKS",
                        help="List framework references known for the target platform and exit.",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses the arguments passed to the program.

    ``--project`` is only optional together with ``--list-frameworks``.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.LIST_FRAMEWORKS and not args.PROJECT:
        parser.error("the following arguments are required: -p/--project")
    return args
