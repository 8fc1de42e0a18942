"""
releaseplan.integrations.ci.memory - In-Memory Build Version Reporter
=======================================================================

Records every update instead of calling a CI server. Used by tests and by
dry runs outside CI.

Example:
    >>> reporter = InMemoryBuildVersionReporter()
    >>> reporter.reject_versions("1.0.0")
    >>> await report_build_version(plan, reporter, "42")
    '1.0.0 - 42'
    >>> reporter.versions
    ['1.0.0 - 42']
"""

from __future__ import annotations

import structlog

from releaseplan.core.exceptions import BuildReportError
from releaseplan.integrations.ci.base import BaseBuildVersionReporter


logger = structlog.get_logger()


class InMemoryBuildVersionReporter(BaseBuildVersionReporter):
    """Build version reporter that keeps accepted versions in a list.

    Attributes:
        _versions: Accepted versions, in call order.
        _attempts: Every version passed to update_build_version().
        _rejected: Versions that raise BuildReportError.
        _available: Value of is_available.
    """

    def __init__(self, available: bool = True) -> None:
        self._versions: list[str] = []
        self._attempts: list[str] = []
        self._rejected: set[str] = set()
        self._available = available
        self._logger = logger.bind(component="in_memory_build_reporter")

    @property
    def is_available(self) -> bool:
        return self._available

    @property
    def versions(self) -> list[str]:
        return list(self._versions)

    @property
    def attempts(self) -> list[str]:
        return list(self._attempts)

    def reject_versions(self, *versions: str) -> None:
        """Make later updates with any of ``versions`` fail."""
        self._rejected.update(versions)

    async def update_build_version(self, version: str) -> None:
        self._attempts.append(version)
        if version in self._rejected:
            raise BuildReportError(f"Build version {version!r} already used", version=version)
        self._versions.append(version)
        self._logger.debug("build_version_recorded", version=version)
