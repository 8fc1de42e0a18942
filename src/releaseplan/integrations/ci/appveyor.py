"""
releaseplan.integrations.ci.appveyor - AppVeyor Build Worker Reporter
=======================================================================

AppVeyor exposes a build worker REST API to the running build at
``APPVEYOR_API_URL``. ``PUT api/build`` with ``{"version": "..."}`` renames
the current build; it fails when another build already uses that version.

Environment Variables (read only by ci_config_from_environment):
    APPVEYOR=True
    APPVEYOR_API_URL=http://localhost:1030/
    APPVEYOR_BUILD_ID=123456
"""

from __future__ import annotations

from typing import Mapping, Optional

import httpx
import structlog

from releaseplan.core.config import CIConfig
from releaseplan.core.exceptions import BuildReportError
from releaseplan.integrations.ci.base import BaseBuildVersionReporter


logger = structlog.get_logger()


def ci_config_from_environment(environ: Mapping[str, str]) -> CIConfig:
    """Build a CIConfig from AppVeyor's environment variables.

    Returns a CIConfig with provider "none" when not running on AppVeyor.
    """
    if environ.get("APPVEYOR", "").lower() != "true":
        return CIConfig(provider="none")
    return CIConfig(
        provider="appveyor",
        api_url=environ.get("APPVEYOR_API_URL"),
        build_id=environ.get("APPVEYOR_BUILD_ID"),
    )


class AppVeyorReporter(BaseBuildVersionReporter):
    """Updates the AppVeyor build version through the build worker API."""

    def __init__(
        self,
        api_url: Optional[str],
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._api_url = api_url.rstrip("/") if api_url else None
        self._client = client
        self._timeout = timeout_seconds
        self._logger = logger.bind(component="appveyor_reporter")

    @property
    def is_available(self) -> bool:
        return self._api_url is not None

    async def update_build_version(self, version: str) -> None:
        if self._api_url is None:
            raise BuildReportError("AppVeyor API URL is not configured.", version=version)

        url = f"{self._api_url}/api/build"
        try:
            if self._client is not None:
                response = await self._client.put(url, json={"version": version}, timeout=self._timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.put(url, json={"version": version}, timeout=self._timeout)
        except httpx.HTTPError as e:
            raise BuildReportError(
                message=f"AppVeyor build version update failed: {e}",
                version=version,
            ) from e

        if not response.is_success:
            raise BuildReportError(
                message=f"AppVeyor rejected build version {version!r}",
                version=version,
                details={"status_code": response.status_code, "body": response.text},
            )
        self._logger.debug("appveyor_build_version_updated", version=version)
