"""Target platform moniker parsing.

A moniker names the platform family and its major.minor version, e.g.
``netcoreapp2.1``. It is parsed once and then used as a lookup key, so
equality and hashing are structural on (family, major, minor) and ignore the
spelling it was parsed from.

Accepted spellings:
    netcoreapp2.1                 short form
    sample-2.1                    dashed form
    .NETCoreApp,Version=v2.1      long (framework name) form
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from packaging.version import InvalidVersion, Version

from .errors import InvalidMonikerError

_LONG_FORM = re.compile(
    r"^\s*\.?(?P<family>[A-Za-z][A-Za-z0-9.]*?)\s*,\s*Version\s*=\s*v?(?P<version>[0-9][0-9.]*)\s*$"
)
_DASHED_FORM = re.compile(r"^\s*(?P<family>[A-Za-z][A-Za-z0-9.]*?)-(?P<version>[0-9][0-9.]*)\s*$")
_SHORT_FORM = re.compile(r"^\s*(?P<family>[A-Za-z][A-Za-z.]*?)(?P<version>[0-9][0-9.]*)\s*$")


@dataclass(frozen=True)
class TargetPlatformMoniker:
    """Platform family plus major.minor version."""
    family: str
    major: int
    minor: int = 0
    dashed: bool = field(default=False, compare=False)

    @classmethod
    def parse(cls, text: str) -> "TargetPlatformMoniker":
        """Parse a moniker from any accepted spelling.

        Raises:
            InvalidMonikerError: If the text is not a recognizable moniker.
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidMonikerError(f"Empty target platform moniker: {text!r}")

        dashed = False
        match = _LONG_FORM.match(text)
        if match is None:
            match = _DASHED_FORM.match(text)
            dashed = match is not None
        if match is None:
            match = _SHORT_FORM.match(text)
        if match is None:
            raise InvalidMonikerError(f"Unrecognized target platform moniker: {text!r}")

        family = match.group("family").rstrip(".").lower()
        major, minor = _parse_version(match.group("version"), text)
        return cls(family=family, major=major, minor=minor, dashed=dashed)

    @property
    def version(self) -> str:
        return f"{self.major}.{self.minor}"

    @property
    def short_name(self) -> str:
        """Canonical spelling used in emitted documents."""
        separator = "-" if self.dashed else ""
        return f"{self.family}{separator}{self.version}"

    def __str__(self) -> str:
        return self.short_name


def _parse_version(raw: str, text: str):
    try:
        release = Version(raw).release
    except InvalidVersion as e:
        raise InvalidMonikerError(f"Invalid version in moniker {text!r}: {e}") from e
    if len(release) > 2:
        raise InvalidMonikerError(
            f"Moniker {text!r} must carry a major.minor version, got {raw!r}"
        )
    major = release[0]
    minor = release[1] if len(release) > 1 else 0
    return major, minor
