"""
releaseplan.versioning.informational - Provenance Descriptor Codec
====================================================================

The provenance descriptor (a.k.a. informational version) binds a build's
semantic version, packaging version, commit SHA and commit date into one
string that is embedded in build metadata:

    "<semVer> (<nugetVer>) - SHA1: <40 hex> - CommitDate: YYYY-MM-DD HH:MM:SSZ"

The syntax check is strict (the ZERO descriptor is a sample) and must stay
strict.

Encoding vs. Decoding:
    encode() is called by build tooling with values it controls. Bad input is
    a programmer error and raises InvalidArgumentError.

    decode() is called on whatever text a file or package carries. It never
    raises; the returned InformationalVersion is either valid or carries a
    parse_error_message. Checks run in a fixed order and the first failure
    is the one reported:

        1. input is None                  → "String to parse is null."
        2. not the four-group layout      → "...does not match the standard ... pattern."
        3. date not "YYYY-MM-DD HH:MM:SS" + offset → "The CommitDate is invalid..."
        4. offset is not "Z"              → "The CommitDate must be Utc..."
        5. semantic version invalid       → "The SemVersion is invalid: ..."
        6. package version invalid        → "The NuGetVersion is invalid: ..."
        7. SHA not 40 hex digits          → "The CommitSha is invalid..."

Usage:
    >>> text = encode("1.0.0", "1.0.0", "a" * 40, datetime(2024, 5, 1, tzinfo=timezone.utc))
    >>> info = decode(text)
    >>> info.is_valid_syntax
    True
    >>> decode(ZERO_INFORMATIONAL_VERSION) == ZERO
    True
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import BaseModel

from releaseplan.core.exceptions import InvalidArgumentError
from releaseplan.versioning.svversion import ZERO_VERSION, SVersion


logger = structlog.get_logger()


_PATTERN = re.compile(r"(.*?) \((.*?)\) - SHA1: (.*?) - CommitDate: (.*?)")
_DATE = re.compile(r"(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})(Z|[+-]\d{2}:?\d{2})", re.ASCII)
_SHA = re.compile(r"[0-9a-fA-F]{40}")


# =============================================================================
# Zero Values
# =============================================================================
# Defaults a project file can carry before the build stamps real values:
#     <Version>0.0.0-0</Version>
#     <AssemblyVersion>0.0.0</AssemblyVersion>
#     <FileVersion>0.0.0.0</FileVersion>
#     <InformationalVersion>(ZERO_INFORMATIONAL_VERSION)</InformationalVersion>
# =============================================================================
ZERO_ASSEMBLY_VERSION = "0.0.0"
ZERO_FILE_VERSION = "0.0.0.0"
ZERO_COMMIT_SHA = "0" * 40
ZERO_COMMIT_DATE = datetime.min.replace(tzinfo=timezone.utc)
ZERO_INFORMATIONAL_VERSION = (
    "0.0.0-0 (0.0.0-0) - SHA1: 0000000000000000000000000000000000000000"
    " - CommitDate: 0001-01-01 00:00:00Z"
)


def format_commit_date(value: datetime) -> str:
    """Format a UTC datetime as ``YYYY-MM-DD HH:MM:SSZ`` (second precision).

    Years below 1000 are zero-padded, which ``strftime("%Y")`` does not
    guarantee on every platform.
    """
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}Z"
    )


def _is_utc(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() == timedelta(0)


def _parse_offset(suffix: str) -> timezone:
    sign = -1 if suffix[0] == "-" else 1
    digits = suffix[1:].replace(":", "")
    delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
    return timezone(sign * delta)


# =============================================================================
# Informational Version
# =============================================================================
class InformationalVersion(BaseModel):
    """A decoded provenance descriptor, valid or not.

    Callers must check ``is_valid_syntax`` before trusting any field: an
    invalid result may still carry the groups that were extracted before the
    failing check.

    Attributes:
        original: The decoded text (None for a null input or a read failure).
        raw_sem_version: First group, as written.
        raw_nuget_version: Second group, as written.
        sem_version: Parsed first group (may be invalid).
        nuget_version: Parsed second group (may be invalid).
        commit_sha: Third group, as written.
        commit_date: Parsed fourth group. Only UTC when the descriptor is valid.
        parse_error_message: Why decoding failed; None when valid.
    """

    original: Optional[str] = None
    raw_sem_version: Optional[str] = None
    raw_nuget_version: Optional[str] = None
    sem_version: Optional[SVersion] = None
    nuget_version: Optional[SVersion] = None
    commit_sha: Optional[str] = None
    commit_date: Optional[datetime] = None
    parse_error_message: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def is_valid_syntax(self) -> bool:
        return self.parse_error_message is None

    def __str__(self) -> str:
        return self.parse_error_message or self.original or ""

    @classmethod
    def parse(cls, text: Optional[str]) -> InformationalVersion:
        """Decode ``text`` or raise ``ValueError`` with the parse error.

        Use ``decode()`` to get an invalid result instead of an exception.
        """
        info = decode(text)
        if not info.is_valid_syntax:
            raise ValueError(info.parse_error_message)
        return info

    @classmethod
    def read_from_file(cls, path: Union[str, Path]) -> InformationalVersion:
        """Read a descriptor stamp file (the descriptor on its first line).

        Never raises for a missing or unreadable file: the result is invalid
        and ``parse_error_message`` explains why.

        Raises:
            ValueError: If ``path`` is empty.
        """
        if not str(path).strip():
            raise ValueError("path must not be empty")
        file_path = Path(path)
        if not file_path.is_file():
            return cls(parse_error_message="File not found.")
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("descriptor_read_failed", path=str(file_path), error=str(e))
            return cls(parse_error_message=f"Exception:{e}")
        lines = content.splitlines()
        if not lines:
            return cls(parse_error_message="The file is empty.")
        return decode(lines[0])


# =============================================================================
# Codec
# =============================================================================
def encode(
    sem_version: str,
    nuget_version: str,
    commit_sha: str,
    commit_date_utc: datetime,
) -> str:
    """Build a descriptor string.

    No syntactic validation is applied to the two version strings beyond
    rejecting blanks.

    Args:
        sem_version: The semantic version. Must not be empty or whitespace.
        nuget_version: The packaging version. Must not be empty or whitespace.
        commit_sha: SHA1 of the commit, exactly 40 hexadecimal digits.
        commit_date_utc: Commit date, timezone-aware at UTC offset zero.
            Sub-second precision is dropped.

    Returns:
        The descriptor string.

    Raises:
        InvalidArgumentError: If any argument is rejected.
    """
    if sem_version is None or not sem_version.strip():
        raise InvalidArgumentError("Must not be empty.", argument="sem_version")
    if nuget_version is None or not nuget_version.strip():
        raise InvalidArgumentError("Must not be empty.", argument="nuget_version")
    if commit_sha is None or _SHA.fullmatch(commit_sha) is None:
        raise InvalidArgumentError("Must be a 40 hex digits string.", argument="commit_sha")
    if not isinstance(commit_date_utc, datetime) or not _is_utc(commit_date_utc):
        raise InvalidArgumentError("Must be a UTC date.", argument="commit_date_utc")
    return (
        f"{sem_version} ({nuget_version}) - SHA1: {commit_sha}"
        f" - CommitDate: {format_commit_date(commit_date_utc)}"
    )


def decode(text: Optional[str]) -> InformationalVersion:
    """Decode a descriptor string. Never raises."""
    if text is None:
        return InformationalVersion(parse_error_message="String to parse is null.")

    m = _PATTERN.fullmatch(text)
    if m is None:
        return InformationalVersion(
            original=text,
            parse_error_message=(
                "The String to parse does not match the standard CSemVer "
                "informational version pattern."
            ),
        )

    raw_sem, raw_nuget, sha, raw_date = m.groups()
    fields = {
        "original": text,
        "raw_sem_version": raw_sem,
        "raw_nuget_version": raw_nuget,
        "sem_version": SVersion.try_parse(raw_sem),
        "nuget_version": SVersion.try_parse(raw_nuget),
        "commit_sha": sha,
    }

    date_match = _DATE.fullmatch(raw_date)
    commit_date: Optional[datetime] = None
    if date_match is not None:
        try:
            naive = datetime.strptime(date_match.group(1), "%Y-%m-%d %H:%M:%S")
            suffix = date_match.group(2)
            tz = timezone.utc if suffix == "Z" else _parse_offset(suffix)
            commit_date = naive.replace(tzinfo=tz)
        except ValueError:
            commit_date = None
    if commit_date is None:
        return InformationalVersion(
            **fields,
            parse_error_message=(
                'The CommitDate is invalid. It must be a UTC DateTime in "u" format.'
            ),
        )

    fields["commit_date"] = commit_date
    if date_match.group(2) != "Z":
        error = (
            f"The CommitDate must be Utc: {raw_date} must be expressed "
            f"with the 'Z' suffix."
        )
    elif not fields["sem_version"].is_valid:
        error = "The SemVersion is invalid: " + fields["sem_version"].error_message
    elif not fields["nuget_version"].is_valid:
        error = "The NuGetVersion is invalid: " + fields["nuget_version"].error_message
    elif _SHA.fullmatch(sha) is None:
        error = "The CommitSha is invalid (must be 40 hex digit)."
    else:
        error = None

    return InformationalVersion(**fields, parse_error_message=error)


# The all-zero descriptor.
ZERO = InformationalVersion(
    original=ZERO_INFORMATIONAL_VERSION,
    raw_sem_version=ZERO_VERSION.normalized_text,
    raw_nuget_version=ZERO_VERSION.normalized_text,
    sem_version=ZERO_VERSION,
    nuget_version=ZERO_VERSION,
    commit_sha=ZERO_COMMIT_SHA,
    commit_date=ZERO_COMMIT_DATE,
)
