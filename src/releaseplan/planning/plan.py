"""
releaseplan.planning.plan - Publication Plan Model
====================================================

The PublicationPlan is the planner's output: the authoritative decision of
build configuration, per-destination artifact sets and whether the run
should go on. It is built once per invocation and never mutated.

    PublicationPlan
        ├── build_configuration       Debug | Release
        ├── remote_target: FeedTarget?   feed + missing artifacts
        ├── local_target:  FeedTarget?   feed + missing artifacts
        ├── all_artifacts_to_publish     ordered union, no duplicates
        ├── should_stop                  nothing to publish and not ignored
        └── must_terminate               invalid repository, nothing allows continuing
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from releaseplan.core.enums import BuildConfiguration, InvalidStateDecision, ReleaseLevel
from releaseplan.core.exceptions import RepositoryNotReadyError
from releaseplan.core.models import ArtifactIdentity
from releaseplan.feeds.destinations import Destination


# =============================================================================
# Feed Target
# =============================================================================
class FeedTarget(BaseModel):
    """A chosen destination together with the artifacts missing from it.

    Attributes:
        feed: The destination.
        missing: Candidates not found at the destination, in candidate
            order, without duplicates.
        total_count: Number of distinct candidates that were checked.
    """

    feed: Destination
    missing: tuple[ArtifactIdentity, ...] = ()
    total_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def existing_count(self) -> int:
        return self.total_count - self.missing_count


# =============================================================================
# Publication Plan
# =============================================================================
class PublicationPlan(BaseModel):
    """The final, immutable publish decision for one build.

    Attributes:
        build_configuration: Compiler configuration for the build.
        release_level: Classification of the release state.
        version: Package version every candidate is published with.
        candidate_count: Number of distinct candidates considered.
        remote_target: Remote feed and its missing artifacts, if any.
        local_target: Local feed and its missing artifacts, if any.
        ignore_no_packages: Do not stop when nothing has to be published.
        invalid_state_decision: What was decided for an invalid state.
        termination_reason: Message for the caller when it must terminate.
        summary: Human-readable lines describing the plan.

    Example:
        >>> if plan.must_terminate:
        ...     plan.raise_for_termination()
        >>> if not plan.should_stop:
        ...     push(plan.all_artifacts_to_publish)
    """

    build_configuration: BuildConfiguration
    release_level: ReleaseLevel
    version: str = ""
    candidate_count: int = Field(default=0, ge=0)
    remote_target: Optional[FeedTarget] = None
    local_target: Optional[FeedTarget] = None
    ignore_no_packages: bool = False
    invalid_state_decision: InvalidStateDecision = InvalidStateDecision.NOT_APPLICABLE
    termination_reason: Optional[str] = None
    summary: tuple[str, ...] = ()

    model_config = {"frozen": True}

    @property
    def all_artifacts_to_publish(self) -> tuple[ArtifactIdentity, ...]:
        """Union of the local and remote missing sets, local first,
        duplicates removed by identity."""
        local = self.local_target.missing if self.local_target else ()
        remote = self.remote_target.missing if self.remote_target else ()
        return tuple(dict.fromkeys((*local, *remote)))

    @property
    def no_packages_to_produce(self) -> bool:
        return not self.all_artifacts_to_publish

    @property
    def should_stop(self) -> bool:
        return self.no_packages_to_produce and not self.ignore_no_packages

    @property
    def must_terminate(self) -> bool:
        return self.invalid_state_decision is InvalidStateDecision.TERMINATE

    def raise_for_termination(self) -> None:
        """Raise RepositoryNotReadyError if the caller must end the run."""
        if self.must_terminate:
            raise RepositoryNotReadyError(
                message=self.termination_reason or "Repository is not ready to be published.",
                details={"release_level": self.release_level.value, "version": self.version},
            )
