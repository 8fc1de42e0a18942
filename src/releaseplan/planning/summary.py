"""
releaseplan.planning.summary - Human-Readable Plan Summary
============================================================

Builds the lines shown to the operator before any push happens: per
destination, how many packages are already there and how many are missing,
then the overall verdict. Produced for every plan, empty ones included.
"""

from __future__ import annotations

from typing import Sequence

from releaseplan.core.models import ArtifactIdentity
from releaseplan.planning.plan import FeedTarget, PublicationPlan


def _names(identities: Sequence[ArtifactIdentity]) -> str:
    return ", ".join(identity.name for identity in identities)


def describe_feed_target(
    target: FeedTarget,
    candidates: Sequence[ArtifactIdentity],
) -> list[str]:
    """Describe one destination's already-present vs. missing packages.

    Args:
        target: The checked destination.
        candidates: The distinct candidates that were checked, in order.
    """
    feed_id = target.feed.identifier
    missing_count = target.missing_count
    exist_count = target.existing_count

    if missing_count == 0:
        return [f"All {exist_count} packages are already in '{feed_id}'."]
    if exist_count == 0:
        return [f"All {missing_count} packages must be pushed to '{feed_id}'."]

    missing = set(target.missing)
    present = [c for c in candidates if c not in missing]
    return [
        f"{missing_count} packages are missing on '{feed_id}': {_names(target.missing)}.",
        f"{exist_count} packages are already pushed on '{feed_id}': {_names(present)}.",
    ]


def describe_plan(
    plan: PublicationPlan,
    candidates: Sequence[ArtifactIdentity],
) -> list[str]:
    """All summary lines for ``plan``: invalid-state note, remote then local
    destination, and the final verdict line."""
    lines: list[str] = []
    if plan.termination_reason:
        lines.append(plan.termination_reason)
    for target in (plan.remote_target, plan.local_target):
        if target is not None:
            lines.extend(describe_feed_target(target, candidates))

    to_publish = plan.all_artifacts_to_publish
    lines.append(
        f"Should actually publish {len(to_publish)} out of {plan.candidate_count} projects "
        f"with version={plan.version} and configuration={plan.build_configuration.value}: "
        f"{_names(to_publish)}"
    )
    return lines
