"""
releaseplan.core.enums - Type-Safe Enumerations
=================================================

All enumeration types used throughout releaseplan. Every enum inherits from
both ``str`` and ``Enum`` so it serializes to a plain string in JSON/YAML and
compares equal to its value:

    >>> BuildConfiguration.RELEASE == "Release"
    True

Decision Flow Mapping:

    ReleaseState ──classify──→ ReleaseLevel ──select──→ FeedKind (remote/local)
         │                                                   │
         └──────────────→ BuildConfiguration                 ↓
                                                  ExistenceOracle (ProbeFailurePolicy)
                                                             │
                                                             ↓
                                           PublicationPlan (InvalidStateDecision)
"""

from enum import Enum


# =============================================================================
# Build Configuration
# =============================================================================
# The compiler configuration handed to the build step. Only the final release
# steps build in Release; every earlier pre-release and every CI build is
# Debug.
# =============================================================================
class BuildConfiguration(str, Enum):
    """Compiler configuration selected for the build."""

    DEBUG = "Debug"
    RELEASE = "Release"


# =============================================================================
# Release Level
# =============================================================================
# The classification of a repository's release state. Each level maps to
# exactly one destination outcome in the Destination Selector's table:
#
#   INVALID      → no destinations at all
#   BLANK_CI     → no remote feed; LocalFeed/Blank if it exists
#   RELEASE      → release feed (+ LocalFeed)
#   PRE_RELEASE  → preview feed (+ LocalFeed)
#   CI_BUILD     → CI feed (+ LocalFeed)
# =============================================================================
class ReleaseLevel(str, Enum):
    """Classification of the repository release state."""

    INVALID = "invalid"
    BLANK_CI = "blank_ci"
    PRE_RELEASE = "pre_release"
    RELEASE = "release"
    CI_BUILD = "ci_build"


# =============================================================================
# Feed Kind
# =============================================================================
class FeedKind(str, Enum):
    """The closed set of destination variants."""

    RELEASE = "release"     # Final releases and the "prerelease"/"rc" tiers
    PREVIEW = "preview"     # alpha, beta, delta, epsilon, gamma, kappa
    CI = "ci"               # CI builds
    LOCAL = "local"         # Local feed directory


# =============================================================================
# Probe Failure Policy
# =============================================================================
# What an indeterminate existence probe (network error, timeout) means.
# ASSUME_MISSING is the historical behavior: a failed probe reads as "does not
# exist", which may cause a duplicate push attempt on a transient failure.
# =============================================================================
class ProbeFailurePolicy(str, Enum):
    """How an existence probe that could not reach a verdict is resolved."""

    ASSUME_MISSING = "assume_missing"   # Failed probe → not found → push
    ASSUME_EXISTS = "assume_exists"     # Failed probe → found → skip
    ABORT = "abort"                     # Failed probe → ProbeError


# =============================================================================
# Invalid State Decision
# =============================================================================
class InvalidStateDecision(str, Enum):
    """What the planner decided for an invalid repository state.

    NOT_APPLICABLE: The release state is valid.
    CONTINUE:       Invalid, but the operator or the CI tolerance lets the
                    run go on (nothing is published).
    TERMINATE:      Invalid and nothing allows continuing; the caller must
                    end the run ("Repository is not ready to be published.").
    """

    NOT_APPLICABLE = "not_applicable"
    CONTINUE = "continue"
    TERMINATE = "terminate"
