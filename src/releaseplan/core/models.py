"""
releaseplan.core.models - Core Data Models
============================================

The input-side data models every other layer speaks in terms of.

Model Overview:
    ArtifactIdentity → WHICH artifact? (name + version, the lookup key)
    ReleaseState     → WHAT kind of build is this? (from version inspection)
    PlanContext      → WHERE is it running? (CI flags, operator decision)

Data Flow:
    ┌────────────────────┐  ReleaseState   ┌──────────────────────┐
    │ Version inspection │ ──────────────→ │ Destination Selector │
    │ (external)         │                 └──────────┬───────────┘
    └────────────────────┘                            │ feeds
    ┌────────────────────┐ ArtifactIdentity[]         ↓
    │ Build driver       │ ──────────────→ ┌──────────────────────┐
    │ (external)         │  PlanContext    │ Publication Planner  │
    └────────────────────┘ ──────────────→ └──────────────────────┘

The ambient CI flags of a build script ("are we on AppVeyor?") are passed
explicitly through PlanContext, so planning is a function of its inputs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Artifact Identity
# =============================================================================
# The dedup/lookup key everywhere. Frozen, so it hashes and compares by value:
#   ArtifactIdentity(name="A", version="1.0.0") == ArtifactIdentity(name="A", version="1.0.0")
# =============================================================================
class ArtifactIdentity(BaseModel):
    """Identity of a publishable artifact: package name and version.

    Example:
        >>> a = ArtifactIdentity(name="CK.Core", version="1.2.0")
        >>> a in {ArtifactIdentity(name="CK.Core", version="1.2.0")}
        True
    """

    name: str = Field(min_length=1, description="Package name")
    version: str = Field(min_length=1, description="Package version string")

    model_config = {"frozen": True}

    @classmethod
    def for_projects(cls, names: Iterable[str], version: str) -> list[ArtifactIdentity]:
        """Build one identity per project name, all sharing ``version``.

        A repository build publishes every project with the same package
        version, so this is the usual way to assemble the candidate list.
        """
        return [cls(name=name, version=version) for name in names]

    def __str__(self) -> str:
        return f"{self.name}.{self.version}"


# =============================================================================
# Release State
# =============================================================================
# Produced by the external version-inspection component (git tags, CI
# numbering). This library only reads it.
# =============================================================================
class ReleaseState(BaseModel):
    """Release classification of the repository for this build.

    Attributes:
        is_valid_release: The commit carries a valid release tag.
        is_valid_ci_build: The commit qualifies for a CI build version.
        pre_release_name: Pre-release tier name ("" for a final release),
            e.g. "alpha", "beta", "prerelease", "rc".
        package_version: Final packaging version (e.g. NuGet version).
        prerelease_segment: Pre-release segment of the final semantic
            version, inspected for the blank marker.

    Example:
        >>> state = ReleaseState(
        ...     is_valid_release=True,
        ...     pre_release_name="beta",
        ...     package_version="1.0.0-beta",
        ...     prerelease_segment="beta",
        ... )
        >>> state.is_valid
        True
    """

    is_valid_release: bool = Field(default=False)
    is_valid_ci_build: bool = Field(default=False)
    pre_release_name: str = Field(default="")
    package_version: str = Field(default="")
    prerelease_segment: str = Field(default="")

    model_config = {"frozen": True}

    @property
    def is_valid(self) -> bool:
        """A state is valid when it is a valid release or a valid CI build."""
        return self.is_valid_release or self.is_valid_ci_build

    def has_marker(self, token: str) -> bool:
        """Whether the pre-release segment contains ``token``."""
        return token in self.prerelease_segment


# =============================================================================
# Plan Context
# =============================================================================
class PlanContext(BaseModel):
    """Environment decisions consumed by the Publication Planner.

    Attributes:
        is_ci: Running inside a continuous-integration environment.
        tolerate_invalid_state: When ``is_ci``, an invalid repository lets
            the run continue (publishing nothing) instead of terminating.
        operator_continue: Outcome of an interactive "proceed anyway?"
            prompt. The prompt itself lives outside this library.
        ignore_no_packages: Do not stop even if nothing has to be published.
        working_dir: Where the local feed search starts. None disables the
            local feed lookup.
        build_id: CI build identifier, used in build-version tokens.
    """

    is_ci: bool = Field(default=False)
    tolerate_invalid_state: bool = Field(default=True)
    operator_continue: bool = Field(default=False)
    ignore_no_packages: bool = Field(default=False)
    working_dir: Optional[Path] = Field(default=None)
    build_id: Optional[str] = Field(default=None)

    model_config = {"frozen": True}
