"""Exception hierarchy for FxResolve.

Build-level problems with the user's declarations are reported as
diagnostics (see ``models.diagnostics``); these exceptions cover inputs that
cannot be processed at all.
"""


class FxResolveError(Exception):
    """Base class for all FxResolve errors."""


class InvalidMonikerError(FxResolveError, ValueError):
    """Raised when a target platform moniker cannot be parsed."""


class RegistryError(FxResolveError):
    """Raised when registry data is malformed (bad alias, cycle, bad version)."""


class GraphLoadError(FxResolveError):
    """Raised when the upstream dependency graph cannot be read."""


class SchemaError(FxResolveError, ValueError):
    """Raised when data fails to validate against a provided schema."""
