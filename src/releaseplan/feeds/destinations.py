"""
releaseplan.feeds.destinations - Publication Destinations
===========================================================

A destination is a place where packages can be checked for existence and
later pushed to. The set of variants is closed and every variant is plain
data resolved from configuration:

    ┌──────────────────────────────────────────────────────────────────┐
    │ Destination                                                       │
    │   ├── RemoteFeed (kind = release | preview | ci)                  │
    │   │     push_url, push_symbol_url, api_key_name, lookup_url(id)   │
    │   └── LocalFeed  (kind = local)                                   │
    │         path, package_path(id) = <path>/<Name>.<Version>.<ext>    │
    └──────────────────────────────────────────────────────────────────┘

Existence checks live in releaseplan.feeds.probes; this module only knows
how to name things.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from releaseplan.core.config import FeedConfig, FeedsConfig
from releaseplan.core.enums import FeedKind
from releaseplan.core.models import ArtifactIdentity


# =============================================================================
# Remote Feed
# =============================================================================
class RemoteFeed(BaseModel):
    """A remote package feed with its resolved URLs.

    Attributes:
        kind: Which of the three remote feeds this is.
        feed_name: The feed name the URLs were resolved with.
        push_url: Package push endpoint.
        push_symbol_url: Symbol push endpoint; None skips symbols.
        api_key_name: Environment variable (secret) holding the push key.
        lookup_url_template: Template used by ``lookup_url()``.

    Example:
        >>> feed = remote_feed_for(FeedKind.CI, FeedsConfig())
        >>> feed.push_url
        'https://www.myget.org/F/invenietis-ci/api/v2/package'
    """

    kind: Literal[FeedKind.RELEASE, FeedKind.PREVIEW, FeedKind.CI]
    feed_name: str
    push_url: str
    push_symbol_url: Optional[str] = None
    api_key_name: str
    lookup_url_template: str

    model_config = {"frozen": True}

    @property
    def identifier(self) -> str:
        """Display name of the feed in summaries and logs."""
        return self.push_url

    def lookup_url(self, identity: ArtifactIdentity) -> str:
        """URL probed to check whether ``identity`` exists on this feed."""
        return self.lookup_url_template.format(
            feed=self.feed_name,
            name=identity.name,
            version=identity.version,
        )


# =============================================================================
# Local Feed
# =============================================================================
class LocalFeed(BaseModel):
    """A local feed directory holding package files."""

    kind: Literal[FeedKind.LOCAL] = FeedKind.LOCAL
    path: Path
    package_extension: str = "nupkg"

    model_config = {"frozen": True}

    @property
    def identifier(self) -> str:
        return str(self.path)

    def package_path(self, identity: ArtifactIdentity) -> Path:
        return self.path / f"{identity.name}.{identity.version}.{self.package_extension}"


Destination = Annotated[Union[RemoteFeed, LocalFeed], Field(discriminator="kind")]


# =============================================================================
# Resolution helpers
# =============================================================================
def remote_feed_for(kind: FeedKind, feeds: FeedsConfig) -> RemoteFeed:
    """Resolve the remote feed of ``kind`` from configuration.

    Raises:
        ValueError: If ``kind`` is FeedKind.LOCAL.
    """
    configs: dict[FeedKind, FeedConfig] = {
        FeedKind.RELEASE: feeds.release,
        FeedKind.PREVIEW: feeds.preview,
        FeedKind.CI: feeds.ci,
    }
    if kind not in configs:
        raise ValueError(f"Not a remote feed kind: {kind!r}")
    config = configs[kind]
    symbol_template = config.push_symbol_url_template
    return RemoteFeed(
        kind=kind,
        feed_name=config.name,
        push_url=config.push_url_template.format(feed=config.name),
        push_symbol_url=symbol_template.format(feed=config.name) if symbol_template else None,
        api_key_name=config.api_key_name,
        lookup_url_template=config.lookup_url_template,
    )


def find_directory_above(start: Path, name: str) -> Optional[Path]:
    """Find a directory called ``name`` in ``start`` or any of its parents.

    Returns:
        The first ``<ancestor>/<name>`` directory found walking up, or None.
    """
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / name
        if candidate.is_dir():
            return candidate
    return None
