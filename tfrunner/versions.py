"""Package version and Terraform version parsing and comparison."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

_MODULE_VERSION = "0.19.0"

_VERSION_RE = re.compile(
    r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?"
    r"(?:-([0-9A-Za-z\-~]+(?:\.[0-9A-Za-z\-~]+)*))?"
    r"(?:\+([0-9A-Za-z\-~]+(?:\.[0-9A-Za-z\-~]+)*))?$"
)


def module_version() -> str:
    """Return the version of this package."""
    return _MODULE_VERSION


def _prerelease_key(prerelease: str) -> tuple:
    # A release sorts after every pre-release of the same core version.
    if not prerelease:
        return (1, ())
    parts = []
    for ident in prerelease.split("."):
        if ident.isdigit():
            parts.append((0, int(ident), ""))
        else:
            parts.append((1, 0, ident))
    return (0, tuple(parts))


@total_ordering
@dataclass(frozen=True, eq=False)
class TerraformVersion:
    """A semantic version as reported by the Terraform CLI."""

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: str = ""
    metadata: str = ""

    @classmethod
    def parse(cls, text: str) -> "TerraformVersion":
        """Parse a version string such as ``1.6.0-alpha20230719``."""
        match = _VERSION_RE.match(text.strip())
        if match is None:
            raise ValueError(f"malformed version: {text!r}")
        major, minor, patch, prerelease, metadata = match.groups()
        return cls(
            int(major),
            int(minor or 0),
            int(patch or 0),
            prerelease or "",
            metadata or "",
        )

    def core(self) -> "TerraformVersion":
        """Return the version without pre-release and metadata parts."""
        return TerraformVersion(self.major, self.minor, self.patch)

    def _key(self) -> tuple:
        return (self.major, self.minor, self.patch, _prerelease_key(self.prerelease))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TerraformVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TerraformVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.metadata:
            text += f"+{self.metadata}"
        return text