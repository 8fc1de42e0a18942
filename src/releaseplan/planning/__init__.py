"""
releaseplan.planning - Publication Planner
============================================

    - plan:     PublicationPlan / FeedTarget models
    - planner:  PublicationPlanner (selector + existence oracles → plan)
    - summary:  Human-readable plan description
"""

from releaseplan.planning.plan import FeedTarget, PublicationPlan
from releaseplan.planning.planner import NOT_READY_MESSAGE, PublicationPlanner
from releaseplan.planning.summary import describe_feed_target, describe_plan

__all__ = [
    "FeedTarget",
    "PublicationPlan",
    "PublicationPlanner",
    "NOT_READY_MESSAGE",
    "describe_feed_target",
    "describe_plan",
]
