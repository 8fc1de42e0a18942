"""
releaseplan.feeds.selector - Destination Selector
===================================================

Maps a ReleaseState to a build configuration, a release level and the
destinations the build's packages must go to. The mapping is a total
decision table:

    is_valid │ blank │ release │ pre_release_name      │ level       │ remote
    ─────────┼───────┼─────────┼───────────────────────┼─────────────┼─────────
    False    │   *   │    *    │ *                     │ INVALID     │ none
    True     │ True  │    *    │ *                     │ BLANK_CI    │ none
    True     │ False │  True   │ in release_tiers      │ RELEASE     │ release
    True     │ False │  True   │ any other tier        │ PRE_RELEASE │ preview
    True     │ False │  False  │ * (valid CI build)    │ CI_BUILD    │ ci

Local destination:
    INVALID   → none
    BLANK_CI  → <LocalFeed>/Blank, only if that directory exists
    otherwise → <LocalFeed> when one is found above the working tree

Build configuration:
    Release iff is_valid_release and pre_release_name is in
    release_configuration_tiers ("" or "rc" by default); Debug otherwise.
    Only the last pre-release step builds in Release.

The selector reads the filesystem only to test for directories; it never
touches a feed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import structlog
from pydantic import BaseModel

from releaseplan.core.config import FeedsConfig
from releaseplan.core.enums import BuildConfiguration, FeedKind, ReleaseLevel
from releaseplan.core.models import ReleaseState
from releaseplan.feeds.destinations import (
    LocalFeed,
    RemoteFeed,
    find_directory_above,
    remote_feed_for,
)


logger = structlog.get_logger()


_REMOTE_FEED_BY_LEVEL: dict[ReleaseLevel, FeedKind] = {
    ReleaseLevel.RELEASE: FeedKind.RELEASE,
    ReleaseLevel.PRE_RELEASE: FeedKind.PREVIEW,
    ReleaseLevel.CI_BUILD: FeedKind.CI,
}


class DestinationSelection(BaseModel):
    """Outcome of the Destination Selector."""

    build_configuration: BuildConfiguration
    release_level: ReleaseLevel
    remote_feed: Optional[RemoteFeed] = None
    local_feed: Optional[LocalFeed] = None

    model_config = {"frozen": True}


class DestinationSelector:
    """Chooses configuration and destinations from a ReleaseState.

    Example:
        >>> selector = DestinationSelector(FeedsConfig())
        >>> state = ReleaseState(is_valid_release=True, package_version="1.0.0")
        >>> selection = selector.select(state)
        >>> selection.build_configuration, selection.remote_feed.kind
        (<BuildConfiguration.RELEASE: 'Release'>, <FeedKind.RELEASE: 'release'>)
    """

    def __init__(self, feeds: Optional[FeedsConfig] = None) -> None:
        self._feeds = feeds or FeedsConfig()
        self._logger = logger.bind(component="destination_selector")

    @property
    def feeds(self) -> FeedsConfig:
        return self._feeds

    def select_build_configuration(self, state: ReleaseState) -> BuildConfiguration:
        if (
            state.is_valid_release
            and state.pre_release_name in self._feeds.release_configuration_tiers
        ):
            return BuildConfiguration.RELEASE
        return BuildConfiguration.DEBUG

    def classify(self, state: ReleaseState) -> ReleaseLevel:
        if not state.is_valid:
            return ReleaseLevel.INVALID
        if state.has_marker(self._feeds.blank_marker):
            return ReleaseLevel.BLANK_CI
        if state.is_valid_release:
            if state.pre_release_name in self._feeds.release_tiers:
                return ReleaseLevel.RELEASE
            # alpha, beta, delta, epsilon, gamma, kappa...
            return ReleaseLevel.PRE_RELEASE
        return ReleaseLevel.CI_BUILD

    def locate_local_feed(self, working_dir: Path) -> Optional[Path]:
        """Find the local feed root directory above ``working_dir``."""
        return find_directory_above(working_dir, self._feeds.local_feed_dir_name)

    def select(
        self,
        state: ReleaseState,
        local_feed_root: Optional[Path] = None,
    ) -> DestinationSelection:
        """Apply the decision table.

        Args:
            state: Release state of the repository.
            local_feed_root: The local feed root directory, if one was found
                (see ``locate_local_feed``). None means no local feed.
        """
        build_configuration = self.select_build_configuration(state)
        level = self.classify(state)

        remote_feed: Optional[RemoteFeed] = None
        local_path: Optional[Path] = None
        if level is ReleaseLevel.BLANK_CI:
            if local_feed_root is not None:
                blank = local_feed_root / self._feeds.blank_dir_name
                local_path = blank if blank.is_dir() else None
        elif level is not ReleaseLevel.INVALID:
            remote_feed = remote_feed_for(_REMOTE_FEED_BY_LEVEL[level], self._feeds)
            local_path = local_feed_root

        local_feed = (
            LocalFeed(path=local_path, package_extension=self._feeds.package_extension)
            if local_path is not None
            else None
        )

        self._logger.debug(
            "destinations_selected",
            release_level=level.value,
            build_configuration=build_configuration.value,
            remote_feed=remote_feed.feed_name if remote_feed else None,
            local_feed=str(local_path) if local_path else None,
        )
        return DestinationSelection(
            build_configuration=build_configuration,
            release_level=level,
            remote_feed=remote_feed,
            local_feed=local_feed,
        )
