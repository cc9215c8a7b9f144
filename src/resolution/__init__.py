"""Framework reference resolution.

- resolver.py: registry lookup per declared reference, alias following
- conflicts.py: explicit package pins that duplicate a resolved framework
"""

from .resolver import ReferenceResolver, ResolutionOutcome  # noqa: F401
from .conflicts import check_conflicts  # noqa: F401

__all__ = [
    "ReferenceResolver",
    "ResolutionOutcome",
    "check_conflicts",
]
