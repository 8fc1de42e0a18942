"""
releaseplan.core - Foundation Layer
=====================================

Building blocks every other module depends on:

    - config:      Configuration (ReleasePlanConfig, FeedsConfig, ProbeConfig, CIConfig)
    - enums:       BuildConfiguration, ReleaseLevel, FeedKind, ProbeFailurePolicy, ...
    - models:      ArtifactIdentity, ReleaseState, PlanContext
    - exceptions:  Structured exception hierarchy
    - logging:     structlog setup

Dependency Rule:
    core/ depends on NOTHING else in the releaseplan package.
"""

from releaseplan.core.config import (
    CIConfig,
    FeedConfig,
    FeedsConfig,
    ProbeConfig,
    ReleasePlanConfig,
)
from releaseplan.core.enums import (
    BuildConfiguration,
    FeedKind,
    InvalidStateDecision,
    ProbeFailurePolicy,
    ReleaseLevel,
)
from releaseplan.core.exceptions import (
    BuildReportError,
    ConfigurationError,
    InvalidArgumentError,
    ProbeError,
    ReleasePlanError,
    RepositoryNotReadyError,
)
from releaseplan.core.models import ArtifactIdentity, PlanContext, ReleaseState

__all__ = [
    # Config
    "ReleasePlanConfig",
    "FeedConfig",
    "FeedsConfig",
    "ProbeConfig",
    "CIConfig",
    # Enums
    "BuildConfiguration",
    "ReleaseLevel",
    "FeedKind",
    "ProbeFailurePolicy",
    "InvalidStateDecision",
    # Models
    "ArtifactIdentity",
    "ReleaseState",
    "PlanContext",
    # Exceptions
    "ReleasePlanError",
    "ConfigurationError",
    "InvalidArgumentError",
    "ProbeError",
    "RepositoryNotReadyError",
    "BuildReportError",
]
