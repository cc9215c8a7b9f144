"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    USAGE_ERROR = 2
    EXIT_WARNINGS = 3
    BUILD_FAILED = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    RUNTIMECONFIG_SUFFIX = ".runtimeconfig.json"
    DEPS_SUFFIX = ".deps.json"
    PROJECT_FILE_SUFFIX = ".csproj"
    ASSETS_FILE = "project.assets.json"
    DEFAULT_REGISTRY_FILE = "frameworks.yaml"
    DEFAULT_PROJECT_VERSION = "1.0.0"
    SUPPORTED_ASSETS_VERSIONS = (2, 3)
    PLACEHOLDER_ASSET = "_._"
    LOG_FORMAT = "[%(levelname)s] %(message)s"

    # Aliases are hand-curated; anything deeper than this is treated as a cycle.
    MAX_ALIAS_DEPTH = 8

    # Number of "did you mean" suggestions for unknown references
    SUGGESTION_COUNT = 3
    SUGGESTION_CUTOFF = 0.6

    ENV_LOG_LEVEL = "FXRESOLVE_LOG_LEVEL"
    ENV_REGISTRY = "FXRESOLVE_REGISTRY"
