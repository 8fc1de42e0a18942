"""
releaseplan.feeds.probes - Existence Oracle
=============================================

Answers "does this artifact version already exist at this destination?".

    ExistenceOracle (ABC)
        ├── RemoteFeedProber  - HEAD on the feed's lookup URL (httpx, concurrent)
        └── LocalFeedProber   - Path.is_file() on <feed>/<Name>.<Version>.<ext>

Remote Probing:
    Only an explicit 200 OK means "exists". Every other status, including
    404 and 501 Not Implemented, means "does not exist".

    A batch is fanned out with asyncio and joined once:

        exists_many([A, B, C])
            │
            ├── probe(A) ─┐
            ├── probe(B) ─┼── Semaphore(max_concurrency)
            └── probe(C) ─┘
            │
            └── asyncio.wait(timeout=batch_timeout) ── join ──→ [True, False, False]

    Each probe writes its own result slot; slots are only read after the
    join, so no locking is needed. A slow probe delays the join, never the
    other probes.

Indeterminate Outcomes:
    A transport error, an unusable lookup URL, a probe timeout or a probe
    still pending when the batch timeout expires has no verdict. ProbeFailurePolicy decides:
        ASSUME_MISSING → False (historical behavior, may cause a duplicate push)
        ASSUME_EXISTS  → True  (may skip a needed push)
        ABORT          → ProbeError
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

import httpx
import structlog

from releaseplan.core.config import ProbeConfig
from releaseplan.core.enums import ProbeFailurePolicy
from releaseplan.core.exceptions import ProbeError
from releaseplan.core.models import ArtifactIdentity
from releaseplan.feeds.destinations import LocalFeed, RemoteFeed


# =============================================================================
# Logger
# =============================================================================
logger = structlog.get_logger()


# =============================================================================
# Abstract Base Class
# =============================================================================
class ExistenceOracle(ABC):
    """Existence check for one destination.

    Subclasses implement ``exists()``. ``exists_many()`` returns one result
    per input, in input order; the default implementation checks
    sequentially.
    """

    @property
    @abstractmethod
    def destination(self) -> Union[RemoteFeed, LocalFeed]:
        """The destination this oracle inspects."""
        ...

    @abstractmethod
    async def exists(self, identity: ArtifactIdentity) -> bool:
        """Whether ``identity`` already exists at the destination."""
        ...

    async def exists_many(self, identities: Sequence[ArtifactIdentity]) -> list[bool]:
        return [await self.exists(identity) for identity in identities]


# =============================================================================
# Remote Feed Prober
# =============================================================================
class RemoteFeedProber(ExistenceOracle):
    """Checks package existence on a remote feed with HEAD requests.

    Attributes:
        _feed: The remote feed.
        _client: Shared httpx.AsyncClient. When None, a client is opened for
            each batch and closed after the join.
        _config: Probe settings (timeouts, concurrency, failure policy).

    Example:
        >>> async with httpx.AsyncClient() as client:
        ...     prober = RemoteFeedProber(feed, client=client)
        ...     found = await prober.exists_many(candidates)
    """

    def __init__(
        self,
        feed: RemoteFeed,
        client: Optional[httpx.AsyncClient] = None,
        config: Optional[ProbeConfig] = None,
    ) -> None:
        self._feed = feed
        self._client = client
        self._config = config or ProbeConfig()
        self._logger = logger.bind(component="remote_feed_prober", feed=feed.feed_name)

    @property
    def destination(self) -> RemoteFeed:
        return self._feed

    @property
    def failure_policy(self) -> ProbeFailurePolicy:
        return self._config.on_failure

    async def exists(self, identity: ArtifactIdentity) -> bool:
        results = await self.exists_many([identity])
        return results[0]

    async def exists_many(
        self,
        identities: Sequence[ArtifactIdentity],
        batch_timeout: Optional[float] = None,
    ) -> list[bool]:
        """Probe every identity concurrently and join once.

        Duplicate identities are probed once and share the verdict.

        Args:
            identities: Artifacts to check.
            batch_timeout: Bound for the whole batch in seconds. Overrides
                ``ProbeConfig.batch_timeout_seconds``; None with no configured
                value waits for every probe.

        Returns:
            One boolean per input identity, in input order.

        Raises:
            ProbeError: If a probe is indeterminate and the failure policy
                is ABORT.
        """
        unique = list(dict.fromkeys(identities))
        if not unique:
            return []
        timeout = batch_timeout if batch_timeout is not None else self._config.batch_timeout_seconds

        if self._client is not None:
            outcomes = await self._probe_batch(self._client, unique, timeout)
        else:
            async with httpx.AsyncClient() as client:
                outcomes = await self._probe_batch(client, unique, timeout)

        verdicts = {
            identity: self._resolve(identity, outcome)
            for identity, outcome in zip(unique, outcomes)
        }
        return [verdicts[identity] for identity in identities]

    async def _probe_batch(
        self,
        client: httpx.AsyncClient,
        identities: list[ArtifactIdentity],
        timeout: Optional[float],
    ) -> list[Optional[bool]]:
        semaphore = asyncio.Semaphore(self._config.max_concurrency)

        async def bounded(identity: ArtifactIdentity) -> Optional[bool]:
            async with semaphore:
                return await self._probe(client, identity)

        tasks = [asyncio.ensure_future(bounded(identity)) for identity in identities]
        done, pending = await asyncio.wait(tasks, timeout=timeout)
        if pending:
            self._logger.warning(
                "probe_batch_timeout",
                pending=len(pending),
                timeout_seconds=timeout,
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        return [task.result() if task in done else None for task in tasks]

    async def _probe(
        self,
        client: httpx.AsyncClient,
        identity: ArtifactIdentity,
    ) -> Optional[bool]:
        """One HEAD probe. Returns None when no verdict could be reached."""
        url = self._feed.lookup_url(identity)
        try:
            response = await client.head(url, timeout=self._config.timeout_seconds)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._logger.warning(
                "probe_failed",
                artifact=str(identity),
                url=url,
                error=str(e) or type(e).__name__,
            )
            return None

        self._logger.debug(
            "probe_completed",
            artifact=str(identity),
            url=url,
            status_code=response.status_code,
        )
        return response.status_code == httpx.codes.OK

    def _resolve(self, identity: ArtifactIdentity, outcome: Optional[bool]) -> bool:
        if outcome is not None:
            return outcome
        policy = self._config.on_failure
        if policy is ProbeFailurePolicy.ABORT:
            raise ProbeError(
                message=f"Unable to determine whether {identity} exists on '{self._feed.feed_name}'.",
                artifact=str(identity),
                destination=self._feed.lookup_url(identity),
            )
        return policy is ProbeFailurePolicy.ASSUME_EXISTS


# =============================================================================
# Local Feed Prober
# =============================================================================
class LocalFeedProber(ExistenceOracle):
    """Checks package existence as a file in a local feed directory."""

    def __init__(self, feed: LocalFeed) -> None:
        self._feed = feed

    @property
    def destination(self) -> LocalFeed:
        return self._feed

    async def exists(self, identity: ArtifactIdentity) -> bool:
        return self._feed.package_path(identity).is_file()


# =============================================================================
# Factory
# =============================================================================
def create_prober(
    destination: Union[RemoteFeed, LocalFeed],
    config: Optional[ProbeConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ExistenceOracle:
    """Create the oracle matching the destination variant.

    Raises:
        TypeError: If ``destination`` is not a known variant.
    """
    if isinstance(destination, RemoteFeed):
        return RemoteFeedProber(destination, client=client, config=config)
    if isinstance(destination, LocalFeed):
        return LocalFeedProber(destination)
    raise TypeError(f"Unsupported destination: {type(destination).__name__}")
