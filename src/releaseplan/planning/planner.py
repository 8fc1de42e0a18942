"""
releaseplan.planning.planner - Publication Planner
====================================================

Computes the PublicationPlan for one build: which configuration to build,
which destinations to publish to and which candidates are still missing
from each of them.

Planning Flow:

    candidates, ReleaseState, PlanContext
            │
            ↓
    ┌──────────────────────┐
    │ Destination Selector │ → build configuration, release level,
    └──────────┬───────────┘   remote feed?, local feed?
               │
               ├── invalid state? → decide CONTINUE / TERMINATE, no targets
               │
               ↓
    ┌──────────────────────┐
    │ Existence Oracle     │ → one batched query per chosen destination
    │ (remote, then local) │   missing = candidates with exists == False
    └──────────┬───────────┘
               ↓
    PublicationPlan + summary lines (always logged)

Invalid Repository State:
    Never an exception. The plan records the decision:
        operator_continue                  → CONTINUE (the plan still stops:
                                             there is nothing to publish)
        is_ci and tolerate_invalid_state   → CONTINUE with ignore_no_packages,
                                             so CI runs such as pull requests
                                             go on without publishing
        otherwise                          → TERMINATE, "Repository is not
                                             ready to be published."

Side Effects:
    None besides read-only probes and logging. Planning twice against
    unchanged destinations yields equal plans.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, Union

import httpx
import structlog

from releaseplan.core.config import ProbeConfig
from releaseplan.core.enums import InvalidStateDecision
from releaseplan.core.models import ArtifactIdentity, PlanContext, ReleaseState
from releaseplan.feeds.destinations import LocalFeed, RemoteFeed
from releaseplan.feeds.probes import ExistenceOracle, create_prober
from releaseplan.feeds.selector import DestinationSelector
from releaseplan.planning.plan import FeedTarget, PublicationPlan
from releaseplan.planning.summary import describe_plan


# =============================================================================
# Logger
# =============================================================================
logger = structlog.get_logger()


NOT_READY_MESSAGE = "Repository is not ready to be published."

OracleFactory = Callable[[Union[RemoteFeed, LocalFeed]], ExistenceOracle]


class PublicationPlanner:
    """Builds PublicationPlans from release state and candidate artifacts.

    Attributes:
        _selector: Destination Selector (owns the feeds configuration).
        _oracle_factory: Creates the ExistenceOracle for a destination.

    Example:
        >>> planner = PublicationPlanner(DestinationSelector(config.feeds))
        >>> plan = await planner.plan(
        ...     ArtifactIdentity.for_projects(["CK.Core", "CK.Text"], "1.0.0"),
        ...     state,
        ...     PlanContext(working_dir=Path.cwd()),
        ... )
    """

    def __init__(
        self,
        selector: Optional[DestinationSelector] = None,
        *,
        probe_config: Optional[ProbeConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        oracle_factory: Optional[OracleFactory] = None,
    ) -> None:
        """Initialize the planner.

        Args:
            selector: Destination Selector. Defaults to the default feeds.
            probe_config: Settings for remote probes created by the default
                oracle factory.
            client: Shared httpx client for remote probes.
            oracle_factory: Overrides how oracles are created (tests, custom
                destinations). Takes precedence over probe_config/client.
        """
        self._selector = selector or DestinationSelector()
        self._oracle_factory = oracle_factory or (
            lambda destination: create_prober(destination, config=probe_config, client=client)
        )
        self._logger = logger.bind(component="publication_planner")

    @property
    def selector(self) -> DestinationSelector:
        return self._selector

    async def plan(
        self,
        candidates: Iterable[ArtifactIdentity],
        state: ReleaseState,
        context: Optional[PlanContext] = None,
        *,
        local_feed_root: Optional[Path] = None,
    ) -> PublicationPlan:
        """Compute the publication plan.

        Args:
            candidates: Publishable artifacts. Duplicates are tolerated and
                collapsed by identity.
            state: Release state of the repository.
            context: Environment decisions. Defaults to a non-CI context
                without working directory.
            local_feed_root: Explicit local feed root. When None it is
                searched above ``context.working_dir``.

        Returns:
            The immutable PublicationPlan, its summary populated.

        Raises:
            ProbeError: Only when a remote probe is indeterminate under
                ProbeFailurePolicy.ABORT.
        """
        context = context or PlanContext()
        distinct = list(dict.fromkeys(candidates))

        if local_feed_root is None and context.working_dir is not None:
            local_feed_root = self._selector.locate_local_feed(context.working_dir)
        selection = self._selector.select(state, local_feed_root)

        decision = InvalidStateDecision.NOT_APPLICABLE
        ignore_no_packages = context.ignore_no_packages
        termination_reason: Optional[str] = None
        if not state.is_valid:
            decision, ci_tolerated = self._decide_invalid_state(context)
            ignore_no_packages = ignore_no_packages or ci_tolerated
            if decision is InvalidStateDecision.TERMINATE:
                termination_reason = NOT_READY_MESSAGE

        remote_target = (
            await self._check(selection.remote_feed, distinct)
            if selection.remote_feed is not None
            else None
        )
        local_target = (
            await self._check(selection.local_feed, distinct)
            if selection.local_feed is not None
            else None
        )

        plan = PublicationPlan(
            build_configuration=selection.build_configuration,
            release_level=selection.release_level,
            version=state.package_version,
            candidate_count=len(distinct),
            remote_target=remote_target,
            local_target=local_target,
            ignore_no_packages=ignore_no_packages,
            invalid_state_decision=decision,
            termination_reason=termination_reason,
        )
        summary = describe_plan(plan, distinct)
        for line in summary:
            self._logger.info("plan_summary", message=line)
        self._logger.info(
            "plan_computed",
            release_level=plan.release_level.value,
            build_configuration=plan.build_configuration.value,
            to_publish=len(plan.all_artifacts_to_publish),
            candidates=plan.candidate_count,
            should_stop=plan.should_stop,
            must_terminate=plan.must_terminate,
        )
        return plan.model_copy(update={"summary": tuple(summary)})

    def _decide_invalid_state(self, context: PlanContext) -> tuple[InvalidStateDecision, bool]:
        """Decide what an invalid repository state means for this run.

        Returns:
            The decision and whether the CI tolerance applied (which also
            means an empty plan must not stop the run).
        """
        if context.operator_continue:
            self._logger.warning("invalid_state_operator_continue")
            return InvalidStateDecision.CONTINUE, False
        if context.is_ci and context.tolerate_invalid_state:
            self._logger.info("invalid_state_tolerated_on_ci", build_id=context.build_id)
            return InvalidStateDecision.CONTINUE, True
        self._logger.error("repository_not_ready")
        return InvalidStateDecision.TERMINATE, False

    async def _check(
        self,
        destination: Union[RemoteFeed, LocalFeed],
        candidates: Sequence[ArtifactIdentity],
    ) -> FeedTarget:
        oracle = self._oracle_factory(destination)
        found = await oracle.exists_many(candidates)
        missing = tuple(c for c, exists in zip(candidates, found) if not exists)
        return FeedTarget(feed=destination, missing=missing, total_count=len(candidates))
