"""
releaseplan.integrations.ci - CI Build Version Reporting
==========================================================

    - BaseBuildVersionReporter:      Abstract reporter contract
    - AppVeyorReporter:              AppVeyor build worker API
    - InMemoryBuildVersionReporter:  Records calls (tests, dry runs)
    - report_build_version():        Plan → reported build version token

Usage:
    >>> reporter = create_build_reporter(config.ci)
    >>> if reporter is not None and reporter.is_available:
    ...     await report_build_version(plan, reporter, config.ci.build_id)
"""

from releaseplan.integrations.ci.appveyor import AppVeyorReporter, ci_config_from_environment
from releaseplan.integrations.ci.base import (
    BaseBuildVersionReporter,
    already_done_token,
    report_build_version,
)
from releaseplan.integrations.ci.factory import create_build_reporter
from releaseplan.integrations.ci.memory import InMemoryBuildVersionReporter

__all__ = [
    "BaseBuildVersionReporter",
    "AppVeyorReporter",
    "InMemoryBuildVersionReporter",
    "ci_config_from_environment",
    "create_build_reporter",
    "report_build_version",
    "already_done_token",
]
