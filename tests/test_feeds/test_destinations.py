"""
Tests for releaseplan.feeds.destinations
==========================================
"""

from pathlib import Path

import pytest
from pydantic import TypeAdapter

from releaseplan.core.config import FeedConfig, FeedsConfig
from releaseplan.core.enums import FeedKind
from releaseplan.core.models import ArtifactIdentity
from releaseplan.feeds.destinations import (
    Destination,
    LocalFeed,
    RemoteFeed,
    find_directory_above,
    remote_feed_for,
)


class TestRemoteFeed:
    """Remote feeds are resolved from configuration."""

    def test_release_feed_urls(self, feeds_config: FeedsConfig) -> None:
        feed = remote_feed_for(FeedKind.RELEASE, feeds_config)
        assert feed.kind is FeedKind.RELEASE
        assert feed.feed_name == "invenietis-release"
        assert feed.push_url == "https://www.myget.org/F/invenietis-release/api/v2/package"
        assert feed.push_symbol_url == (
            "https://www.myget.org/F/invenietis-release/symbols/api/v2/package"
        )
        assert feed.api_key_name == "MYGET_RELEASE_API_KEY"
        assert feed.identifier == feed.push_url

    def test_lookup_url(self, ci_feed: RemoteFeed) -> None:
        identity = ArtifactIdentity(name="CK.Core", version="1.0.0-ci.7")
        assert ci_feed.lookup_url(identity) == (
            "https://www.myget.org/feed/invenietis-ci/package/nuget/CK.Core/1.0.0-ci.7"
        )

    def test_symbol_push_can_be_disabled(self) -> None:
        feeds = FeedsConfig(
            preview=FeedConfig(
                name="previews",
                api_key_name="PREVIEW_KEY",
                push_symbol_url_template=None,
            )
        )
        feed = remote_feed_for(FeedKind.PREVIEW, feeds)
        assert feed.push_symbol_url is None
        assert feed.push_url == "https://www.myget.org/F/previews/api/v2/package"

    def test_local_kind_is_not_remote(self, feeds_config: FeedsConfig) -> None:
        with pytest.raises(ValueError):
            remote_feed_for(FeedKind.LOCAL, feeds_config)


class TestLocalFeed:
    """Local feeds name package files inside a directory."""

    def test_package_path(self, tmp_path: Path) -> None:
        feed = LocalFeed(path=tmp_path)
        identity = ArtifactIdentity(name="CK.Core", version="1.0.0")
        assert feed.package_path(identity) == tmp_path / "CK.Core.1.0.0.nupkg"
        assert feed.identifier == str(tmp_path)
        assert feed.kind is FeedKind.LOCAL

    def test_custom_extension(self, tmp_path: Path) -> None:
        feed = LocalFeed(path=tmp_path, package_extension="tgz")
        identity = ArtifactIdentity(name="pkg", version="2.0.0")
        assert feed.package_path(identity).name == "pkg.2.0.0.tgz"


class TestDestinationUnion:
    """Destination is a discriminated union on ``kind``."""

    def test_validates_local(self, tmp_path: Path) -> None:
        destination = TypeAdapter(Destination).validate_python(
            {"kind": FeedKind.LOCAL, "path": str(tmp_path)}
        )
        assert isinstance(destination, LocalFeed)

    def test_validates_remote(self, release_feed: RemoteFeed) -> None:
        data = release_feed.model_dump()
        destination = TypeAdapter(Destination).validate_python(data)
        assert destination == release_feed


class TestFindDirectoryAbove:
    """find_directory_above() walks up to the filesystem root."""

    def test_found_in_ancestor(self, tmp_path: Path, local_feed_root: Path) -> None:
        start = tmp_path / "repo" / "src"
        assert find_directory_above(start, "LocalFeed") == local_feed_root.resolve()

    def test_found_in_start(self, tmp_path: Path, local_feed_root: Path) -> None:
        assert find_directory_above(tmp_path, "LocalFeed") == local_feed_root.resolve()

    def test_file_is_not_a_directory(self, tmp_path: Path) -> None:
        (tmp_path / "Marker").write_text("not a dir")
        start = tmp_path / "a"
        start.mkdir()
        assert find_directory_above(start, "Marker") is None

    def test_not_found(self, tmp_path: Path) -> None:
        assert find_directory_above(tmp_path, "NoSuchFeedDirectory-7f3a") is None
