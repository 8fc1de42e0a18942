"""
releaseplan.versioning.svversion - Version String Validation
==============================================================

Strict Semantic Versioning 2.0.0 parsing used to validate both version
groups of a provenance descriptor.

``SVersion.try_parse()`` never raises: the returned object is either valid
(components populated) or carries an ``error_message``. ``SVersion.parse()``
raises ``ValueError`` for callers that prefer exceptions.

Grammar (semver.org):
    <major>.<minor>.<patch>[-<prerelease>][+<build>]
    - numeric identifiers have no leading zeros
    - pre-release identifiers: numeric, or alphanumerics and hyphens
    - build identifiers: non-empty alphanumerics and hyphens
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel


_CORE = re.compile(r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?P<rest>.*)", re.DOTALL | re.ASCII)
_PRERELEASE_ID = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_ID = r"[0-9a-zA-Z-]+"
_REST = re.compile(
    rf"(?:-(?P<prerelease>{_PRERELEASE_ID}(?:\.{_PRERELEASE_ID})*))?"
    rf"(?:\+(?P<build>{_BUILD_ID}(?:\.{_BUILD_ID})*))?",
    re.ASCII,
)


class SVersion(BaseModel):
    """A parsed (or rejected) semantic version.

    Attributes:
        text: The original string (None when parsing None).
        major, minor, patch: Numeric components; None when invalid.
        prerelease: Pre-release segment without the leading "-" ("" if none).
        build_metadata: Build segment without the leading "+" ("" if none).
        error_message: Why the text was rejected; None when valid.
    """

    text: Optional[str] = None
    major: Optional[int] = None
    minor: Optional[int] = None
    patch: Optional[int] = None
    prerelease: str = ""
    build_metadata: str = ""
    error_message: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def is_valid(self) -> bool:
        return self.error_message is None

    @property
    def is_prerelease(self) -> bool:
        return self.is_valid and self.prerelease != ""

    @property
    def normalized_text(self) -> Optional[str]:
        """Canonical form without build metadata, None when invalid."""
        if not self.is_valid:
            return None
        core = f"{self.major}.{self.minor}.{self.patch}"
        return f"{core}-{self.prerelease}" if self.prerelease else core

    @classmethod
    def try_parse(cls, text: Optional[str]) -> SVersion:
        """Parse ``text``; never raises."""
        if text is None:
            return cls(error_message="Null string.")
        if not text.strip():
            return cls(text=text, error_message="Empty string.")

        core = _CORE.fullmatch(text)
        if core is None:
            return cls(
                text=text,
                error_message=(
                    "Expected Major.Minor.Patch numeric identifiers "
                    "without leading zeros."
                ),
            )

        rest = _REST.fullmatch(core.group("rest"))
        if rest is None:
            return cls(
                text=text,
                error_message=(
                    f"Invalid pre-release or build metadata: {core.group('rest')!r}."
                ),
            )

        return cls(
            text=text,
            major=int(core.group(1)),
            minor=int(core.group(2)),
            patch=int(core.group(3)),
            prerelease=rest.group("prerelease") or "",
            build_metadata=rest.group("build") or "",
        )

    @classmethod
    def parse(cls, text: Optional[str]) -> SVersion:
        """Parse ``text`` or raise ``ValueError`` with the rejection reason."""
        version = cls.try_parse(text)
        if not version.is_valid:
            raise ValueError(version.error_message)
        return version

    def __str__(self) -> str:
        return self.text if self.is_valid else (self.error_message or "")


# The canonical zero version.
ZERO_VERSION = SVersion.parse("0.0.0-0")
