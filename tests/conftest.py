"""
Shared Test Fixtures for releaseplan
======================================

Reusable pytest fixtures, organized by layer:

    1. Configuration fixtures
    2. Model fixtures (candidates, release states)
    3. Feed fixtures (remote feeds, local feed directories, fake feed server)
    4. Integration fixtures (CI reporter)
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

import httpx
import pytest

from releaseplan.core.config import CIConfig, FeedsConfig, ProbeConfig, ReleasePlanConfig
from releaseplan.core.enums import FeedKind
from releaseplan.core.models import ArtifactIdentity, ReleaseState
from releaseplan.feeds.destinations import RemoteFeed, remote_feed_for
from releaseplan.integrations.ci.memory import InMemoryBuildVersionReporter


# =============================================================================
# Fake Feed Server
# =============================================================================
class FakeFeedServer:
    """httpx.MockTransport handler answering HEAD lookups like a package feed.

    Packages registered with ``publish()`` answer 200; everything else
    answers ``missing_status`` (404 by default). Every request is recorded.
    """

    def __init__(self, missing_status: int = 404) -> None:
        self.published: set[str] = set()
        self.requests: list[httpx.Request] = []
        self.missing_status = missing_status

    def publish(self, feed: RemoteFeed, identities: Iterable[ArtifactIdentity]) -> None:
        for identity in identities:
            self.published.add(feed.lookup_url(identity))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) in self.published:
            return httpx.Response(200)
        return httpx.Response(self.missing_status)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture
def config():
    """ReleasePlanConfig with defaults."""
    return ReleasePlanConfig()


@pytest.fixture
def feeds_config():
    """Default FeedsConfig (invenietis MyGet feeds)."""
    return FeedsConfig()


@pytest.fixture
def probe_config():
    """ProbeConfig with short timeouts for tests."""
    return ProbeConfig(timeout_seconds=1.0, max_concurrency=4)


@pytest.fixture
def memory_ci_config():
    """CIConfig selecting the in-memory reporter."""
    return CIConfig(provider="memory", build_id="42")


# =============================================================================
# Models
# =============================================================================

@pytest.fixture
def make_candidates() -> Callable[..., list[ArtifactIdentity]]:
    """Factory for candidate lists sharing one version."""
    def _make(*names: str, version: str = "1.0.0") -> list[ArtifactIdentity]:
        return ArtifactIdentity.for_projects(names or ("CK.Core", "CK.Text"), version)
    return _make


@pytest.fixture
def release_state():
    """A valid final release 1.0.0."""
    return ReleaseState(is_valid_release=True, package_version="1.0.0")


@pytest.fixture
def invalid_state():
    """A repository that is neither a valid release nor a valid CI build."""
    return ReleaseState(package_version="0.0.0-0")


# =============================================================================
# Feeds
# =============================================================================

@pytest.fixture
def release_feed(feeds_config):
    """The resolved release RemoteFeed."""
    return remote_feed_for(FeedKind.RELEASE, feeds_config)


@pytest.fixture
def ci_feed(feeds_config):
    """The resolved CI RemoteFeed."""
    return remote_feed_for(FeedKind.CI, feeds_config)


@pytest.fixture
def local_feed_root(tmp_path) -> Path:
    """A LocalFeed directory with a nested working directory below it."""
    root = tmp_path / "LocalFeed"
    root.mkdir()
    (tmp_path / "repo" / "src").mkdir(parents=True)
    return root


@pytest.fixture
def feed_server():
    """Fresh FakeFeedServer where nothing is published."""
    return FakeFeedServer()


# =============================================================================
# CI Reporter
# =============================================================================

@pytest.fixture
def memory_reporter():
    """Fresh InMemoryBuildVersionReporter."""
    return InMemoryBuildVersionReporter()
