"""Build diagnostics: stable codes, severities and an accumulating bag.

Diagnostics are collected for the whole build rather than failing fast, so a
project with several unknown framework references reports all of them in one
pass. Any ERROR fails the build; WARNINGs are surfaced but never block
artifact generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional


class Severity(Enum):
    """Severity of a diagnostic."""
    ERROR = "error"      # Build-fatal
    WARNING = "warning"  # Surfaced to the user, build continues


class DiagnosticCode(Enum):
    """Stable machine-readable diagnostic codes.

    Values are the codes printed in the build log; names are the kind.
    """
    CONFLICTING_EXPLICIT_PACKAGE_REFERENCE = "FXR1071"
    UNKNOWN_FRAMEWORK_REFERENCE = "FXR1072"
    MISSING_CORE_RUNTIME_PACKAGE = "FXR1073"
    AMBIGUOUS_PRIMARY_FRAMEWORK = "FXR1074"

    @property
    def kind(self) -> str:
        """CamelCase kind name, e.g. ``UnknownFrameworkReference``."""
        return "".join(part.capitalize() for part in self.name.split("_"))


@dataclass(frozen=True)
class Diagnostic:
    """A single build diagnostic."""
    severity: Severity
    code: DiagnosticCode
    message: str
    project: str
    subject: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def format(self) -> str:
        """Render in the build-log form ``<project> : error FXR1072: <message>``."""
        return f"{self.project} : {self.severity.value} {self.code.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "code": self.code.value,
            "kind": self.code.kind,
            "message": self.message,
            "project": self.project,
            "subject": self.subject,
        }

    def __str__(self) -> str:
        return self.format()


class DiagnosticBag:
    """Ordered collection of diagnostics for one build invocation."""

    def __init__(self, diagnostics: Optional[Iterable[Diagnostic]] = None):
        self._items: List[Diagnostic] = list(diagnostics or [])

    def add(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._items.extend(diagnostics)

    def error(self, code: DiagnosticCode, message: str, project: str,
              subject: Optional[str] = None) -> Diagnostic:
        """Record and return an ERROR diagnostic."""
        diagnostic = Diagnostic(Severity.ERROR, code, message, project, subject)
        self._items.append(diagnostic)
        return diagnostic

    def warning(self, code: DiagnosticCode, message: str, project: str,
                subject: Optional[str] = None) -> Diagnostic:
        """Record and return a WARNING diagnostic."""
        diagnostic = Diagnostic(Severity.WARNING, code, message, project, subject)
        self._items.append(diagnostic)
        return diagnostic

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self._items)

    def with_code(self, code: DiagnosticCode) -> List[Diagnostic]:
        return [d for d in self._items if d.code == code]

    def to_list(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self._items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
