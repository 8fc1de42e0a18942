"""
releaseplan.core.config - Configuration Management
====================================================

Configuration for releaseplan. Values are resolved with the following
priority (highest first):

    1. Explicit constructor arguments
    2. Environment variables (prefixed with RELEASEPLAN_)
    3. YAML configuration file (releaseplan.yaml)
    4. Default values defined in the models below

Architecture Context:
    The top-level ReleasePlanConfig is created once and handed to the facade,
    which passes the relevant slices down:

        ReleasePlanConfig
            ├── FeedsConfig   → Destination Selector, Publication Planner
            ├── ProbeConfig   → Existence Oracle (remote feed prober)
            └── CIConfig      → Build-version reporter, invalid-state tolerance

    The tier tables in FeedsConfig ("which pre-release names go to the release
    feed", "which build in Release") are data, not code: adding a tier is a
    configuration change.

Environment Variables:
    RELEASEPLAN_LOG_LEVEL=DEBUG
    RELEASEPLAN_PROBE__TIMEOUT_SECONDS=10
    RELEASEPLAN_PROBE__ON_FAILURE=abort
    RELEASEPLAN_CI__PROVIDER=appveyor
    RELEASEPLAN_CI__BUILD_ID=1234
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

from releaseplan.core.enums import ProbeFailurePolicy
from releaseplan.core.exceptions import ConfigurationError


DEFAULT_CONFIG_FILE = "releaseplan.yaml"


# =============================================================================
# Remote Feed Configuration
# =============================================================================
# A remote feed is described by plain data: its name, the environment
# variable holding its push key, and URL templates. Templates may reference
# {feed}, {name} and {version}.
#
# Default templates target MyGet. The lookup template points at the package
# HTML page rather than the download URL: MyGet answers a HEAD on the
# download URL with 501 Not Implemented.
# =============================================================================
class FeedConfig(BaseModel):
    """Configuration of one remote package feed.

    Attributes:
        name: Feed name, substituted for ``{feed}`` in the templates.
        api_key_name: Name of the environment variable (secret) that holds
            the push API key. Never the key itself.
        push_url_template: Package push endpoint.
        push_symbol_url_template: Symbol package push endpoint. None skips
            symbol pushing.
        lookup_url_template: URL probed with HEAD to check whether a
            package version already exists.
    """

    name: str = Field(description="Feed name ({feed} in templates)")
    api_key_name: str = Field(
        description="Environment variable name holding the push API key",
    )
    push_url_template: str = Field(
        default="https://www.myget.org/F/{feed}/api/v2/package",
        description="Push endpoint template",
    )
    push_symbol_url_template: Optional[str] = Field(
        default="https://www.myget.org/F/{feed}/symbols/api/v2/package",
        description="Symbol push endpoint template (None = no symbols)",
    )
    lookup_url_template: str = Field(
        default="https://www.myget.org/feed/{feed}/package/nuget/{name}/{version}",
        description="Existence lookup URL template (probed with HEAD)",
    )


# =============================================================================
# Feeds Configuration
# =============================================================================
class FeedsConfig(BaseModel):
    """The three remote feeds plus the tables that route builds to them.

    Attributes:
        release: Feed for final releases and the release-feed tiers.
        preview: Feed for every other named pre-release tier.
        ci: Feed for CI builds.
        release_tiers: Pre-release names pushed to the release feed
            ("" is a final release).
        release_configuration_tiers: Pre-release names built in Release
            configuration (only for valid releases).
        blank_marker: Token in the packaging pre-release segment that marks
            a blank CI build; such builds never reach a remote feed.
        local_feed_dir_name: Directory searched above the working tree.
        blank_dir_name: Sub-directory of the local feed used for blank builds.
        package_extension: Extension of package files in the local feed.
    """

    release: FeedConfig = Field(
        default_factory=lambda: FeedConfig(
            name="invenietis-release", api_key_name="MYGET_RELEASE_API_KEY"
        ),
    )
    preview: FeedConfig = Field(
        default_factory=lambda: FeedConfig(
            name="invenietis-preview", api_key_name="MYGET_PREVIEW_API_KEY"
        ),
    )
    ci: FeedConfig = Field(
        default_factory=lambda: FeedConfig(
            name="invenietis-ci", api_key_name="MYGET_CI_API_KEY"
        ),
    )
    release_tiers: list[str] = Field(
        default_factory=lambda: ["", "prerelease", "rc"],
        description="Pre-release names routed to the release feed",
    )
    release_configuration_tiers: list[str] = Field(
        default_factory=lambda: ["", "rc"],
        description="Pre-release names built in Release configuration",
    )
    blank_marker: str = Field(
        default="ci-blank.",
        min_length=1,
        description="Pre-release token marking a blank CI build",
    )
    local_feed_dir_name: str = Field(default="LocalFeed", min_length=1)
    blank_dir_name: str = Field(default="Blank", min_length=1)
    package_extension: str = Field(default="nupkg", min_length=1)


# =============================================================================
# Probe Configuration
# =============================================================================
class ProbeConfig(BaseModel):
    """Settings of the remote existence probes.

    Attributes:
        timeout_seconds: Upper bound for a single HEAD probe.
        batch_timeout_seconds: Optional upper bound for a whole batch; probes
            still pending when it expires are indeterminate.
        max_concurrency: Number of probes allowed in flight at once.
        on_failure: How an indeterminate probe is resolved.
    """

    timeout_seconds: float = Field(default=30.0, gt=0)
    batch_timeout_seconds: Optional[float] = Field(default=None, gt=0)
    max_concurrency: int = Field(default=8, ge=1, le=64)
    on_failure: ProbeFailurePolicy = Field(default=ProbeFailurePolicy.ASSUME_MISSING)


# =============================================================================
# CI Configuration
# =============================================================================
class CIConfig(BaseModel):
    """Continuous-integration environment settings.

    Attributes:
        provider: Which build-version reporter to use. "none" disables
            reporting, "memory" records calls (tests), "appveyor" talks to
            the AppVeyor build worker API.
        api_url: Build worker API base URL (APPVEYOR_API_URL on AppVeyor).
        build_id: Identifier of the current CI build.
        tolerate_invalid_state: Let CI runs continue (publishing nothing)
            when the repository state is invalid, e.g. pull request builds.
    """

    provider: Literal["none", "memory", "appveyor"] = Field(default="none")
    api_url: Optional[str] = Field(default=None)
    build_id: Optional[str] = Field(default=None)
    tolerate_invalid_state: bool = Field(default=True)


# =============================================================================
# Main Configuration
# =============================================================================
#   RELEASEPLAN_LOG_LEVEL         → config.log_level
#   RELEASEPLAN_FEEDS__BLANK_MARKER → config.feeds.blank_marker
#   RELEASEPLAN_CI__PROVIDER      → config.ci.provider
# =============================================================================
class ReleasePlanConfig(BaseSettings):
    """Top-level configuration for releaseplan.

    Example:
        >>> config = ReleasePlanConfig(
        ...     log_level="DEBUG",
        ...     probe=ProbeConfig(timeout_seconds=5),
        ... )
    """

    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON instead of the console format",
    )
    feeds: FeedsConfig = Field(default_factory=FeedsConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    ci: CIConfig = Field(default_factory=CIConfig)

    model_config = {
        "env_prefix": "RELEASEPLAN_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
    }


# =============================================================================
# Configuration Loader
# =============================================================================
def load_config(path: Optional[str] = None) -> ReleasePlanConfig:
    """Load configuration from a YAML file and/or environment variables.

    Args:
        path: Path to a YAML configuration file. If None, ``releaseplan.yaml``
            in the current directory is used when it exists; otherwise only
            defaults and environment variables apply.

    Returns:
        A fully validated ReleasePlanConfig.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigurationError: If the file is not a YAML mapping or its values
            fail validation.
    """
    if path is None:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            path = str(default_path)

    yaml_data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(config_path) as f:
            raw_data = yaml.safe_load(f)
        if raw_data is None:
            raw_data = {}
        if not isinstance(raw_data, dict):
            raise ConfigurationError(
                message=f"Configuration file must contain a mapping: {path}",
                error_code="INVALID_CONFIG_FILE",
                details={"path": str(config_path), "type": type(raw_data).__name__},
            )
        yaml_data = raw_data

    try:
        return ReleasePlanConfig(**yaml_data)
    except ValidationError as e:
        raise ConfigurationError(
            message=f"Invalid configuration: {e.error_count()} error(s)",
            error_code="INVALID_CONFIG_VALUE",
            details={"errors": e.errors(include_url=False)},
        ) from e


def get_default_config() -> ReleasePlanConfig:
    """Create a ReleasePlanConfig from defaults and environment variables."""
    return ReleasePlanConfig()
