"""
Tests for releaseplan.integrations.ci
=======================================

These tests verify build-version reporting:
    - report_build_version(): Already-done / version / fallback tokens
    - InMemoryBuildVersionReporter call tracking and rejection
    - AppVeyorReporter against httpx.MockTransport
    - create_build_reporter factory and environment detection
"""

import json

import httpx
import pytest

from releaseplan.core.config import CIConfig
from releaseplan.core.enums import BuildConfiguration, ReleaseLevel
from releaseplan.core.exceptions import BuildReportError, ConfigurationError
from releaseplan.core.models import ArtifactIdentity
from releaseplan.feeds.destinations import LocalFeed
from releaseplan.integrations.ci import (
    AppVeyorReporter,
    BaseBuildVersionReporter,
    InMemoryBuildVersionReporter,
    ci_config_from_environment,
    create_build_reporter,
    report_build_version,
)
from releaseplan.planning.plan import FeedTarget, PublicationPlan


def _plan(tmp_path, missing=(), ignore_no_packages: bool = False) -> PublicationPlan:
    target = FeedTarget(feed=LocalFeed(path=tmp_path), missing=tuple(missing), total_count=1)
    return PublicationPlan(
        build_configuration=BuildConfiguration.RELEASE,
        release_level=ReleaseLevel.RELEASE,
        version="1.0.0",
        candidate_count=1,
        local_target=target,
        ignore_no_packages=ignore_no_packages,
    )


A = ArtifactIdentity(name="A", version="1.0.0")


# =============================================================================
# Tests: report_build_version()
# =============================================================================
class TestReportBuildVersion:
    """Token selection for the CI build version."""

    async def test_stopping_plan_reports_already_done(self, tmp_path, memory_reporter) -> None:
        token = await report_build_version(_plan(tmp_path), memory_reporter, "42")
        assert token == "Already-done-42"
        assert memory_reporter.versions == ["Already-done-42"]

    async def test_proceeding_plan_reports_version(self, tmp_path, memory_reporter) -> None:
        token = await report_build_version(_plan(tmp_path, [A]), memory_reporter, "42")
        assert token == "1.0.0"
        assert memory_reporter.versions == ["1.0.0"]

    async def test_ignored_empty_plan_reports_version(self, tmp_path, memory_reporter) -> None:
        plan = _plan(tmp_path, ignore_no_packages=True)
        assert await report_build_version(plan, memory_reporter, "42") == "1.0.0"

    async def test_rejected_version_falls_back(self, tmp_path, memory_reporter) -> None:
        memory_reporter.reject_versions("1.0.0")

        token = await report_build_version(_plan(tmp_path, [A]), memory_reporter, "42")

        assert token == "1.0.0 - 42"
        assert memory_reporter.attempts == ["1.0.0", "1.0.0 - 42"]
        assert memory_reporter.versions == ["1.0.0 - 42"]

    async def test_rejected_fallback_raises(self, tmp_path, memory_reporter) -> None:
        memory_reporter.reject_versions("1.0.0", "1.0.0 - 42")
        with pytest.raises(BuildReportError):
            await report_build_version(_plan(tmp_path, [A]), memory_reporter, "42")


# =============================================================================
# Tests: InMemoryBuildVersionReporter
# =============================================================================
class TestInMemoryReporter:
    """Tests for the in-memory reporter."""

    def test_initial_state(self, memory_reporter) -> None:
        assert memory_reporter.is_available is True
        assert memory_reporter.versions == []
        assert memory_reporter.attempts == []
        assert isinstance(memory_reporter, BaseBuildVersionReporter)

    def test_unavailable(self) -> None:
        assert InMemoryBuildVersionReporter(available=False).is_available is False

    async def test_rejection(self, memory_reporter) -> None:
        memory_reporter.reject_versions("2.0.0")
        with pytest.raises(BuildReportError) as exc_info:
            await memory_reporter.update_build_version("2.0.0")
        assert exc_info.value.version == "2.0.0"
        assert memory_reporter.versions == []

    def test_repr(self, memory_reporter) -> None:
        assert "InMemoryBuildVersionReporter" in repr(memory_reporter)


# =============================================================================
# Tests: AppVeyorReporter
# =============================================================================
class TestAppVeyorReporter:
    """Tests for the AppVeyor build worker API reporter."""

    async def test_puts_version(self) -> None:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            reporter = AppVeyorReporter("http://localhost:1030/", client=client)
            await reporter.update_build_version("1.2.3")

        assert requests[0].method == "PUT"
        assert str(requests[0].url) == "http://localhost:1030/api/build"
        assert json.loads(requests[0].content) == {"version": "1.2.3"}

    async def test_rejected_update_raises(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(400, text="duplicate"))
        async with httpx.AsyncClient(transport=transport) as client:
            reporter = AppVeyorReporter("http://localhost:1030", client=client)
            with pytest.raises(BuildReportError) as exc_info:
                await reporter.update_build_version("1.2.3")

        assert exc_info.value.details["status_code"] == 400

    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            reporter = AppVeyorReporter("http://localhost:1030", client=client)
            with pytest.raises(BuildReportError):
                await reporter.update_build_version("1.2.3")

    async def test_not_configured(self) -> None:
        reporter = AppVeyorReporter(None)
        assert reporter.is_available is False
        with pytest.raises(BuildReportError):
            await reporter.update_build_version("1.2.3")

    async def test_fallback_through_appveyor(self, tmp_path) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            version = json.loads(request.content)["version"]
            seen.append(version)
            return httpx.Response(409 if version == "1.0.0" else 204)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            reporter = AppVeyorReporter("http://localhost:1030", client=client)
            token = await report_build_version(_plan(tmp_path, [A]), reporter, "7")

        assert token == "1.0.0 - 7"
        assert seen == ["1.0.0", "1.0.0 - 7"]


# =============================================================================
# Tests: Factory and Environment
# =============================================================================
class TestCreateBuildReporter:
    """Tests for create_build_reporter() and ci_config_from_environment()."""

    def test_none(self) -> None:
        assert create_build_reporter(CIConfig()) is None

    def test_memory(self) -> None:
        assert isinstance(create_build_reporter(CIConfig(provider="memory")), InMemoryBuildVersionReporter)

    def test_appveyor(self) -> None:
        reporter = create_build_reporter(CIConfig(provider="appveyor", api_url="http://localhost:1030/"))
        assert isinstance(reporter, AppVeyorReporter)
        assert reporter.is_available is True

    def test_unknown_provider(self) -> None:
        config = CIConfig.model_construct(provider="jenkins")
        with pytest.raises(ConfigurationError) as exc_info:
            create_build_reporter(config)
        assert exc_info.value.error_code == "UNKNOWN_CI_PROVIDER"

    def test_environment_outside_appveyor(self) -> None:
        assert ci_config_from_environment({}).provider == "none"

    def test_environment_on_appveyor(self) -> None:
        config = ci_config_from_environment({
            "APPVEYOR": "True",
            "APPVEYOR_API_URL": "http://localhost:1030/",
            "APPVEYOR_BUILD_ID": "123",
        })
        assert config.provider == "appveyor"
        assert config.api_url == "http://localhost:1030/"
        assert config.build_id == "123"
