"""
Check Repository Example - Plan a Release Against a Fake Feed
===============================================================

Computes the publication plan for a three-project repository tagged
v1.2.0-rc. The release feed is simulated with httpx.MockTransport
(CK.Core is already published there), and the CI build version goes to the
in-memory reporter, so the example runs offline.

Usage:
    python examples/check_repository.py
"""

from __future__ import annotations

import asyncio

import httpx

from releaseplan.core.config import CIConfig, ReleasePlanConfig
from releaseplan.core.logging import configure_logging
from releaseplan.core.models import ArtifactIdentity, ReleaseState
from releaseplan.facade import ReleasePlanner


PUBLISHED = {
    "https://www.myget.org/feed/invenietis-release/package/nuget/CK.Core/1.2.0-rc",
}


def fake_feed(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200 if str(request.url) in PUBLISHED else 404)


async def main() -> None:
    """Plan the rc release and print the outcome."""
    config = ReleasePlanConfig(ci=CIConfig(provider="memory", build_id="1337"))
    configure_logging(config.log_level, json_format=config.json_logs)

    state = ReleaseState(
        is_valid_release=True,
        pre_release_name="rc",
        package_version="1.2.0-rc",
        prerelease_segment="rc",
    )
    candidates = ArtifactIdentity.for_projects(
        ["CK.Core", "CK.Text", "CK.Monitoring"],
        state.package_version,
    )

    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_feed)) as client:
        async with ReleasePlanner(config, client=client) as planner:
            plan = await planner.check_repository(candidates, state)
            plan.raise_for_termination()

            print("Publication Plan")
            print("-" * 40)
            print(f"Configuration : {plan.build_configuration.value}")
            print(f"Release level : {plan.release_level.value}")
            print(f"Remote feed   : {plan.remote_target.feed.feed_name}")
            print(f"To publish    : {', '.join(a.name for a in plan.all_artifacts_to_publish)}")
            print(f"Should stop   : {plan.should_stop}")
            print(f"Build version : {planner.reporter.versions[-1]}")
            print()
            for line in plan.summary:
                print(line)


if __name__ == "__main__":
    asyncio.run(main())
