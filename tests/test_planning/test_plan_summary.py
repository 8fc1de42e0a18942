"""
Tests for releaseplan.planning.plan and releaseplan.planning.summary
=====================================================================
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from releaseplan.core.enums import BuildConfiguration, InvalidStateDecision, ReleaseLevel
from releaseplan.core.models import ArtifactIdentity
from releaseplan.feeds.destinations import LocalFeed
from releaseplan.planning.plan import FeedTarget, PublicationPlan
from releaseplan.planning.summary import describe_feed_target, describe_plan


A, B, C = ArtifactIdentity.for_projects(["A", "B", "C"], "2.0.0")


def _plan(**kwargs) -> PublicationPlan:
    defaults = {
        "build_configuration": BuildConfiguration.DEBUG,
        "release_level": ReleaseLevel.CI_BUILD,
        "version": "2.0.0",
        "candidate_count": 3,
    }
    defaults.update(kwargs)
    return PublicationPlan(**defaults)


@pytest.fixture
def local(tmp_path: Path) -> LocalFeed:
    return LocalFeed(path=tmp_path)


# =============================================================================
# Tests: FeedTarget / PublicationPlan
# =============================================================================
class TestPublicationPlan:
    """Derived properties of the plan."""

    def test_counts(self, local: LocalFeed) -> None:
        target = FeedTarget(feed=local, missing=(A,), total_count=3)
        assert target.missing_count == 1
        assert target.existing_count == 2

    def test_union_local_first_without_duplicates(self, local: LocalFeed, ci_feed) -> None:
        plan = _plan(
            local_target=FeedTarget(feed=local, missing=(C, A), total_count=3),
            remote_target=FeedTarget(feed=ci_feed, missing=(A, B), total_count=3),
        )
        assert plan.all_artifacts_to_publish == (C, A, B)

    def test_empty_plan_stops(self) -> None:
        plan = _plan()
        assert plan.no_packages_to_produce is True
        assert plan.should_stop is True
        assert plan.must_terminate is False

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            _plan().version = "3.0.0"

    def test_terminate_uses_reason(self) -> None:
        plan = _plan(
            invalid_state_decision=InvalidStateDecision.TERMINATE,
            termination_reason="Not today.",
        )
        with pytest.raises(Exception, match="Not today."):
            plan.raise_for_termination()


# =============================================================================
# Tests: Summary
# =============================================================================
class TestDescribeFeedTarget:
    """One or two lines per destination."""

    def test_all_present(self, local: LocalFeed) -> None:
        target = FeedTarget(feed=local, missing=(), total_count=3)
        assert describe_feed_target(target, [A, B, C]) == [
            f"All 3 packages are already in '{local.path}'."
        ]

    def test_all_missing(self, local: LocalFeed) -> None:
        target = FeedTarget(feed=local, missing=(A, B, C), total_count=3)
        assert describe_feed_target(target, [A, B, C]) == [
            f"All 3 packages must be pushed to '{local.path}'."
        ]

    def test_partial(self, local: LocalFeed) -> None:
        target = FeedTarget(feed=local, missing=(A, C), total_count=3)
        assert describe_feed_target(target, [A, B, C]) == [
            f"2 packages are missing on '{local.path}': A, C.",
            f"1 packages are already pushed on '{local.path}': B.",
        ]


class TestDescribePlan:
    """Full plan description."""

    def test_remote_then_local_then_verdict(self, local: LocalFeed, ci_feed) -> None:
        plan = _plan(
            local_target=FeedTarget(feed=local, missing=(), total_count=3),
            remote_target=FeedTarget(feed=ci_feed, missing=(B,), total_count=3),
        )
        lines = describe_plan(plan, [A, B, C])
        assert lines[0].startswith("1 packages are missing on 'https://www.myget.org/F/invenietis-ci")
        assert lines[2] == f"All 3 packages are already in '{local.path}'."
        assert lines[-1] == (
            "Should actually publish 1 out of 3 projects with version=2.0.0 "
            "and configuration=Debug: B"
        )

    def test_termination_reason_first(self) -> None:
        plan = _plan(
            invalid_state_decision=InvalidStateDecision.TERMINATE,
            termination_reason="Repository is not ready to be published.",
        )
        lines = describe_plan(plan, [A, B, C])
        assert lines == [
            "Repository is not ready to be published.",
            "Should actually publish 0 out of 3 projects with version=2.0.0 "
            "and configuration=Debug: ",
        ]
