"""
releaseplan - Release Publication Planner
===========================================

Decides, for one build of a multi-package repository, which build
configuration to use, where the resulting packages go and which of them
still have to be published:

    ReleaseState  →  Destination Selector  →  Existence Oracle  →  PublicationPlan
    (tag, CI?)       (Debug/Release,          (HEAD on feeds,      (missing artifacts,
                      remote + local feed)     local files)         stop / terminate)

It also encodes and decodes the provenance descriptor stamped into built
artifacts (``releaseplan.versioning``).

Quick Start:
    >>> from releaseplan import ReleasePlanner
    >>> async with ReleasePlanner() as planner:
    ...     plan = await planner.check_repository(candidates, state)
"""

# =============================================================================
# Package Version
# =============================================================================
__version__ = "0.1.0"

# =============================================================================
# Package-Level Exports
# =============================================================================
# The ReleasePlanner facade is the main entry point. Import components from
# their sub-packages:
#   from releaseplan.core.config import ReleasePlanConfig
#   from releaseplan.versioning import encode, decode
# =============================================================================
from releaseplan.facade import ReleasePlanner

__all__ = ["ReleasePlanner", "__version__"]
