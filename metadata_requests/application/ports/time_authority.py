"""Time authority port.

Every timestamp a request carries (created_at, expires_at, decided_at,
applied_at, ballot cast_at) and every expiry check reads the clock
through this port. Nothing in the package calls datetime.now() directly
outside SystemTimeAuthority.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Source of the current time.

    Implementations:
        SystemTimeAuthority (infrastructure/adapters): UTC wall clock
        FakeTimeAuthority (tests/helpers): frozen, manually advanced clock
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...
