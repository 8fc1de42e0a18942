"""
releaseplan.facade - Release Planner Facade
=============================================

The single entry point that wires configuration, the Destination Selector,
the Publication Planner, the remote probes and the CI build-version
reporter together.

    ┌──────────────────────────────────────────────────┐
    │              ReleasePlanner (Facade)              │
    │                                                   │
    │  ReleasePlanConfig ──→ DestinationSelector        │
    │                   ──→ PublicationPlanner          │
    │                          │                        │
    │                          ├── RemoteFeedProber ──┐ │
    │                          └── LocalFeedProber    │ │
    │                                                 │ │
    │  BaseBuildVersionReporter ──────── httpx.AsyncClient
    └──────────────────────────────────────────────────┘

Usage:
    >>> from releaseplan import ReleasePlanner
    >>> from releaseplan.core import ArtifactIdentity, ReleaseState
    >>>
    >>> async with ReleasePlanner(load_config()) as planner:
    ...     plan = await planner.check_repository(
    ...         ArtifactIdentity.for_projects(["CK.Core"], "1.2.0"),
    ...         ReleaseState(is_valid_release=True, package_version="1.2.0"),
    ...     )
    ...     plan.raise_for_termination()
    ...     if not plan.should_stop:
    ...         push(plan.all_artifacts_to_publish)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

import httpx
import structlog

from releaseplan.core.config import ReleasePlanConfig
from releaseplan.core.models import ArtifactIdentity, PlanContext, ReleaseState
from releaseplan.feeds.selector import DestinationSelector
from releaseplan.integrations.ci.base import BaseBuildVersionReporter, report_build_version
from releaseplan.integrations.ci.factory import create_build_reporter
from releaseplan.planning.plan import PublicationPlan
from releaseplan.planning.planner import OracleFactory, PublicationPlanner


# =============================================================================
# Logger
# =============================================================================
logger = structlog.get_logger()


class ReleasePlanner:
    """Top-level facade: compute the publication plan for a repository.

    The facade owns one httpx.AsyncClient shared by every remote probe and
    by the AppVeyor reporter, unless a client is passed in. A client passed
    in is never closed by the facade.

    Attributes:
        _config: Release planning configuration.
        _client: Shared HTTP client.
        _owns_client: Whether close() must close ``_client``.
        _selector: Destination Selector built from ``config.feeds``.
        _planner: Publication Planner.
        _reporter: CI build-version reporter, or None.
        _closed: Whether close() has been called.

    Example:
        >>> planner = ReleasePlanner()
        >>> plan = await planner.check_repository(candidates, state)
        >>> await planner.close()
    """

    def __init__(
        self,
        config: Optional[ReleasePlanConfig] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        reporter: Optional[BaseBuildVersionReporter] = None,
        oracle_factory: Optional[OracleFactory] = None,
    ) -> None:
        """Initialize the facade.

        Args:
            config: Configuration. Defaults to ReleasePlanConfig(), which
                reads RELEASEPLAN_* environment variables.
            client: Shared HTTP client. Created (and owned) when None.
            reporter: CI reporter. Defaults to the one selected by
                ``config.ci.provider``.
            oracle_factory: Overrides existence oracle creation.
        """
        self._config = config or ReleasePlanConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

        self._selector = DestinationSelector(self._config.feeds)
        self._planner = PublicationPlanner(
            self._selector,
            probe_config=self._config.probe,
            client=self._client,
            oracle_factory=oracle_factory,
        )
        self._reporter = (
            reporter if reporter is not None
            else create_build_reporter(self._config.ci, client=self._client)
        )

        self._closed = False
        self._logger = logger.bind(component="release_planner")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> ReleasePlanConfig:
        return self._config

    @property
    def selector(self) -> DestinationSelector:
        return self._selector

    @property
    def planner(self) -> PublicationPlanner:
        return self._planner

    @property
    def reporter(self) -> Optional[BaseBuildVersionReporter]:
        return self._reporter

    @property
    def is_closed(self) -> bool:
        return self._closed

    # =========================================================================
    # Planning
    # =========================================================================

    def default_context(self, working_dir: Optional[Path] = None) -> PlanContext:
        """Build the PlanContext implied by ``config.ci``.

        A run counts as CI whenever a CI provider is configured. The local
        feed is searched from ``working_dir``, the current directory by
        default.
        """
        ci = self._config.ci
        return PlanContext(
            is_ci=ci.provider != "none",
            tolerate_invalid_state=ci.tolerate_invalid_state,
            working_dir=working_dir if working_dir is not None else Path.cwd(),
            build_id=ci.build_id,
        )

    async def check_repository(
        self,
        candidates: Iterable[ArtifactIdentity],
        state: ReleaseState,
        context: Optional[PlanContext] = None,
        *,
        local_feed_root: Optional[Path] = None,
    ) -> PublicationPlan:
        """Compute the publication plan and report it to CI.

        The build version is reported only when a reporter is configured and
        available. The plan is returned as-is: callers decide whether to
        call ``plan.raise_for_termination()``.

        Args:
            candidates: Publishable artifacts.
            state: Release state of the repository.
            context: Environment decisions. Defaults to default_context().
            local_feed_root: Explicit local feed root directory.

        Raises:
            RuntimeError: If the facade has been closed.
            ProbeError: If a probe is indeterminate under the ABORT policy.
            BuildReportError: If the CI server rejects the fallback version.
        """
        self._ensure_open()
        context = context or self.default_context()

        plan = await self._planner.plan(
            candidates,
            state,
            context,
            local_feed_root=local_feed_root,
        )

        if self._reporter is not None and self._reporter.is_available:
            await report_build_version(plan, self._reporter, context.build_id)
        else:
            self._logger.debug("build_version_not_reported")
        return plan

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """Release the HTTP client. Idempotent."""
        if self._closed:
            return
        if self._owns_client:
            await self._client.aclose()
        self._closed = True
        self._logger.debug("release_planner_closed")

    async def __aenter__(self) -> ReleasePlanner:
        self._ensure_open()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("ReleasePlanner has been closed.")

    def __repr__(self) -> str:
        return (
            f"ReleasePlanner("
            f"ci={self._config.ci.provider}, "
            f"closed={self._closed})"
        )
