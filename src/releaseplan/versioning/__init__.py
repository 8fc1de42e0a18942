"""
releaseplan.versioning - Provenance Descriptor Codec
======================================================

    - svversion:      Strict semantic version validation (SVersion)
    - informational:  encode()/decode() of the provenance descriptor

This package is independent of the planner.
"""

from releaseplan.versioning.informational import (
    ZERO,
    ZERO_ASSEMBLY_VERSION,
    ZERO_COMMIT_DATE,
    ZERO_COMMIT_SHA,
    ZERO_FILE_VERSION,
    ZERO_INFORMATIONAL_VERSION,
    InformationalVersion,
    decode,
    encode,
    format_commit_date,
)
from releaseplan.versioning.svversion import ZERO_VERSION, SVersion

__all__ = [
    "InformationalVersion",
    "SVersion",
    "encode",
    "decode",
    "format_commit_date",
    "ZERO",
    "ZERO_VERSION",
    "ZERO_INFORMATIONAL_VERSION",
    "ZERO_ASSEMBLY_VERSION",
    "ZERO_FILE_VERSION",
    "ZERO_COMMIT_SHA",
    "ZERO_COMMIT_DATE",
]
