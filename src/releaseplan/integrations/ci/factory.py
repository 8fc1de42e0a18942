"""
releaseplan.integrations.ci.factory - Build Version Reporter Factory
======================================================================

Maps ``CIConfig.provider`` to a reporter:
    - "none"     → None (no reporting)
    - "memory"   → InMemoryBuildVersionReporter
    - "appveyor" → AppVeyorReporter(api_url)
"""

from __future__ import annotations

from typing import Optional

import httpx

from releaseplan.core.config import CIConfig
from releaseplan.core.exceptions import ConfigurationError
from releaseplan.integrations.ci.base import BaseBuildVersionReporter


def create_build_reporter(
    config: CIConfig,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[BaseBuildVersionReporter]:
    """Create the build version reporter selected by ``config``.

    Raises:
        ConfigurationError: If the provider name is not recognized.
    """
    provider = config.provider.lower()

    if provider == "none":
        return None
    if provider == "memory":
        from releaseplan.integrations.ci.memory import InMemoryBuildVersionReporter
        return InMemoryBuildVersionReporter()
    if provider == "appveyor":
        from releaseplan.integrations.ci.appveyor import AppVeyorReporter
        return AppVeyorReporter(config.api_url, client=client)

    raise ConfigurationError(
        message=f"Unknown CI provider: '{provider}'",
        error_code="UNKNOWN_CI_PROVIDER",
        details={"provider": provider, "available": ["none", "memory", "appveyor"]},
    )
