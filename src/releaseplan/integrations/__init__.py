"""
releaseplan.integrations - External Service Integration Layer
===============================================================

Adapters for the services around the planner. Each integration sits behind
an interface so a real implementation can be swapped for an in-memory one.

Sub-packages:
    ci/   - Build version reporting to the CI server (AppVeyor, in-memory)
"""

__all__: list[str] = []
