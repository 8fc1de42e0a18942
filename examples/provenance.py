"""
Provenance Example - Stamp and Read Back a Descriptor
=======================================================

Encodes the provenance descriptor a build embeds in its artifacts, writes
it to a stamp file, and decodes it again. Also shows how a malformed
descriptor is reported.

Usage:
    python examples/provenance.py
"""

from __future__ import annotations

import tempfile
from datetime import datetime, timezone
from pathlib import Path

from releaseplan.versioning import ZERO, InformationalVersion, decode, encode


def main() -> None:
    text = encode(
        sem_version="1.2.0-rc",
        nuget_version="1.2.0-rc",
        commit_sha="3f786850e387550fdab836ed7e6dc881de23001b",
        commit_date_utc=datetime(2024, 5, 1, 14, 30, 0, tzinfo=timezone.utc),
    )
    print(f"Descriptor : {text}")

    with tempfile.TemporaryDirectory() as tmp:
        stamp = Path(tmp) / "version.txt"
        stamp.write_text(text + "\n", encoding="utf-8")
        info = InformationalVersion.read_from_file(stamp)

    print(f"Valid      : {info.is_valid_syntax}")
    print(f"SemVersion : {info.sem_version.normalized_text}")
    print(f"Commit     : {info.commit_sha} @ {info.commit_date.isoformat()}")
    print(f"Is zero    : {info == ZERO}")
    print()

    broken = decode(text.replace("Z", "+02:00"))
    print(f"Broken     : {broken.parse_error_message}")


if __name__ == "__main__":
    main()
