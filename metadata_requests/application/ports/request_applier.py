"""Request applier port.

Extension point that carries a decided request's changes over to the
owning asset record. What applying means for each request type is owned
by the implementation; this package only decides when an applier may run
(APPROVED or RESOLVED requests) and records the APPLIED transition.
"""

from __future__ import annotations

from typing import Protocol

from metadata_requests.domain.models.metadata_request import MetadataRequest


class RequestApplierProtocol(Protocol):
    """Protocol for applying a decided request to its asset record."""

    def apply(self, request: MetadataRequest) -> None:
        """Apply the approved sub-requests of a decided request.

        Args:
            request: An APPROVED or RESOLVED request.

        Raises:
            Exception: If the changes could not be applied. The request
                then stays in its decided status.
        """
        ...
