"""Metadata request configuration.

This module defines configuration for the request lifecycle with
environment variable overrides.

Environment Variables:
- METADATA_REQUEST_TTL_SECONDS: Voting window length in seconds
  (default: 604800, one week). The lifecycle is defined over a fixed
  one-week window; any other value is a deployment override, meant for
  test and staging environments, and the service logs a warning for it
- METADATA_REQUEST_VOTE_TALLY_MODE: How repeated votes combine,
  "additive" or "last_write_wins" (default: additive)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

from metadata_requests.domain.models.metadata_request import REQUEST_TTL
from metadata_requests.domain.models.vote_tally import VoteTallyMode

DEFAULT_TTL_SECONDS: int = int(REQUEST_TTL.total_seconds())


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_tally_mode_env(key: str, default: VoteTallyMode) -> VoteTallyMode:
    """Get vote tally mode environment variable with default.

    Unknown values fall back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return VoteTallyMode(value.strip().lower())
    except ValueError:
        return default


@dataclass(frozen=True)
class MetadataRequestConfig:
    """Configuration for the request lifecycle.

    Attributes:
        ttl_seconds: Length of the voting window after creation.
                     Default: 604800 (one week).
        vote_tally_mode: How repeated votes on a sub-request are combined.
                         Default: ADDITIVE.
    """

    ttl_seconds: int = DEFAULT_TTL_SECONDS
    vote_tally_mode: VoteTallyMode = VoteTallyMode.ADDITIVE

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.ttl_seconds < 1:
            raise ValueError(f"ttl_seconds must be positive, got {self.ttl_seconds}")
        if not isinstance(self.vote_tally_mode, VoteTallyMode):
            raise ValueError(
                f"vote_tally_mode must be a VoteTallyMode, got {self.vote_tally_mode!r}"
            )

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self.ttl_seconds)

    @property
    def has_standard_window(self) -> bool:
        """True when the voting window is the one-week default."""
        return self.ttl == REQUEST_TTL

    @classmethod
    def from_environment(cls) -> "MetadataRequestConfig":
        """Create config from environment variables with defaults.

        Returns:
            MetadataRequestConfig with values from environment or defaults.
        """
        return cls(
            ttl_seconds=_get_int_env("METADATA_REQUEST_TTL_SECONDS", DEFAULT_TTL_SECONDS),
            vote_tally_mode=_get_tally_mode_env(
                "METADATA_REQUEST_VOTE_TALLY_MODE", VoteTallyMode.ADDITIVE
            ),
        )


# Default config: one-week window, additive tallies
DEFAULT_METADATA_REQUEST_CONFIG = MetadataRequestConfig()
