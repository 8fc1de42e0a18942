"""
releaseplan.integrations.ci.base - Build Version Reporting
============================================================

CI servers display a "build version" for every run. Once a plan is known,
the build reports a token that says what the run is about:

    plan.should_stop  → "Already-done-<build id>"   (nothing left to publish)
    otherwise         → "<package version>"
                        fallback "<package version> - <build id>" when the
                        first update is rejected (CI servers refuse a build
                        version that was already used by another run)

Reporters:
    BaseBuildVersionReporter (ABC)
        ├── AppVeyorReporter              - AppVeyor build worker REST API
        └── InMemoryBuildVersionReporter  - records calls (tests, dry runs)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import structlog

from releaseplan.core.exceptions import BuildReportError
from releaseplan.planning.plan import PublicationPlan


logger = structlog.get_logger()


class BaseBuildVersionReporter(ABC):
    """Pushes a build version string to the CI environment."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the CI environment can be reached at all."""
        ...

    @abstractmethod
    async def update_build_version(self, version: str) -> None:
        """Set the CI build version.

        Raises:
            BuildReportError: If the CI environment rejects the update.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(available={self.is_available})"


def already_done_token(build_id: Optional[str]) -> str:
    return f"Already-done-{build_id}"


async def report_build_version(
    plan: PublicationPlan,
    reporter: BaseBuildVersionReporter,
    build_id: Optional[str],
) -> str:
    """Report the build version matching ``plan`` and return the token used.

    Raises:
        BuildReportError: If the fallback update is rejected too.
    """
    log = logger.bind(component="build_version_report", build_id=build_id)
    if plan.should_stop:
        token = already_done_token(build_id)
        await reporter.update_build_version(token)
        log.info("build_version_reported", version=token)
        return token

    try:
        await reporter.update_build_version(plan.version)
        token = plan.version
    except BuildReportError as e:
        log.warning("build_version_rejected", version=plan.version, error=e.message)
        token = f"{plan.version} - {build_id}"
        await reporter.update_build_version(token)
    log.info("build_version_reported", version=token)
    return token
