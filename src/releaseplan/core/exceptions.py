"""
releaseplan.core.exceptions - Custom Exception Hierarchy
==========================================================

Structured exceptions for releaseplan. Components raise and catch these
specific types instead of bare ValueError/RuntimeError, and every exception
carries a machine-readable error code plus a details dict for logging.

Exception Hierarchy:
    ReleasePlanError (base)
        ├── ConfigurationError          - Invalid config or rejected programmer input
        │     └── InvalidArgumentError  - A descriptor encode() argument is invalid
        ├── ProbeError                  - An existence probe failed under the ABORT policy
        ├── RepositoryNotReadyError     - The plan says the run must terminate
        └── BuildReportError            - The CI build-version update failed

What is NOT an exception:
    - Descriptor decoding failures: decode() returns an invalid result object.
    - An invalid repository state: the planner records a decision on the plan.
      Only PublicationPlan.raise_for_termination() turns it into an error,
      and only when the caller asks for it.

Usage:
    >>> from releaseplan.core.exceptions import InvalidArgumentError
    >>> raise InvalidArgumentError(
    ...     message="Must be a 40 hex digits string.",
    ...     argument="commit_sha",
    ... )
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# Base Exception
# =============================================================================
# All releaseplan exceptions inherit from this base class so callers can catch
# every library-specific failure with a single except clause:
#
#   try:
#       plan = await planner.plan(candidates, state)
#   except ReleasePlanError as e:
#       logger.error(e.message, error_code=e.error_code, details=e.details)
# =============================================================================
class ReleasePlanError(Exception):
    """Base exception for all releaseplan errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code, UPPER_SNAKE_CASE
            (e.g., "INVALID_ARGUMENT", "PROBE_FAILED").
        details: Arbitrary dict with additional debugging context.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize this exception to a dictionary (for structured logs).

        Returns:
            Dictionary with error_type, message, error_code, and details.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


# =============================================================================
# Configuration Error
# =============================================================================
# Raised when configuration is invalid or when a caller hands over values that
# can never be right (a programmer error). These fail fast.
# =============================================================================
class ConfigurationError(ReleasePlanError):
    """Raised when configuration or caller-supplied setup is invalid.

    Common Causes:
        - A YAML configuration file whose top level is not a mapping
        - Values rejected by the configuration models
        - An unknown CI provider name

    Example:
        >>> raise ConfigurationError(
        ...     message="Unknown CI provider: 'travis'",
        ...     error_code="UNKNOWN_CI_PROVIDER",
        ...     details={"provider": "travis"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class InvalidArgumentError(ConfigurationError):
    """Raised by the descriptor encoder when one of its arguments is invalid.

    Attributes:
        argument: Name of the rejected argument.
    """

    def __init__(
        self,
        message: str,
        argument: str,
        error_code: str = "INVALID_ARGUMENT",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["argument"] = argument

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.argument = argument


# =============================================================================
# Probe Error
# =============================================================================
# Only raised when the prober runs with ProbeFailurePolicy.ABORT. With the
# default ASSUME_MISSING policy an indeterminate probe silently reads as
# "does not exist".
# =============================================================================
class ProbeError(ReleasePlanError):
    """Raised when an existence probe cannot reach a verdict and the
    failure policy says to abort.

    Attributes:
        artifact: "<name>/<version>" of the artifact being probed.
        destination: Identifier of the destination (lookup URL or path).
    """

    def __init__(
        self,
        message: str,
        artifact: str,
        destination: str,
        error_code: str = "PROBE_FAILED",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["artifact"] = artifact
        enriched_details["destination"] = destination

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.artifact = artifact
        self.destination = destination


# =============================================================================
# Repository Not Ready Error
# =============================================================================
class RepositoryNotReadyError(ReleasePlanError):
    """Raised by ``PublicationPlan.raise_for_termination()`` when the
    repository state is invalid and nothing allowed the run to continue.
    """

    def __init__(
        self,
        message: str = "Repository is not ready to be published.",
        error_code: str = "REPOSITORY_NOT_READY",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Build Report Error
# =============================================================================
class BuildReportError(ReleasePlanError):
    """Raised when the CI environment rejects a build-version update.

    Attributes:
        version: The build version that could not be reported.
    """

    def __init__(
        self,
        message: str,
        version: str,
        error_code: str = "BUILD_REPORT_FAILED",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        enriched_details["version"] = version

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.version = version
