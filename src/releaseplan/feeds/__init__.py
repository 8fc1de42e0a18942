"""
releaseplan.feeds - Destinations, Selection and Existence Checks
==================================================================

    - destinations:  RemoteFeed / LocalFeed variants and their naming rules
    - selector:      ReleaseState → build configuration + destinations
    - probes:        ExistenceOracle implementations (remote HEAD, local file)
"""

from releaseplan.feeds.destinations import (
    Destination,
    LocalFeed,
    RemoteFeed,
    find_directory_above,
    remote_feed_for,
)
from releaseplan.feeds.probes import (
    ExistenceOracle,
    LocalFeedProber,
    RemoteFeedProber,
    create_prober,
)
from releaseplan.feeds.selector import DestinationSelection, DestinationSelector

__all__ = [
    "Destination",
    "RemoteFeed",
    "LocalFeed",
    "remote_feed_for",
    "find_directory_above",
    "DestinationSelector",
    "DestinationSelection",
    "ExistenceOracle",
    "RemoteFeedProber",
    "LocalFeedProber",
    "create_prober",
]
