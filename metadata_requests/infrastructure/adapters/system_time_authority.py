"""System time authority: the production clock."""

from __future__ import annotations

from datetime import datetime, timezone

from metadata_requests.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority backed by the host's UTC wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
