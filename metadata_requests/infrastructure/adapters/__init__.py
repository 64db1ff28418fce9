"""Production adapters for application ports."""

from metadata_requests.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)

__all__ = ["SystemTimeAuthority"]
