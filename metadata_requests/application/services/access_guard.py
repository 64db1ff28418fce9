"""Request access guard.

Predicate checks composed by the request service before any mutation.
Each check either returns the loaded record or raises its own error kind;
none of them silently no-ops and none of them changes state.

Checks:
- require_pending: record exists and is PENDING
- require_active_pending: require_pending and the deadline has not passed
- require_not_expired: expires_at >= now
- require_is_collection_owner: caller is the collection's current owner
- require_is_requester: caller created the request
- require_sub_request_index: index addresses an existing sub-request
"""

from __future__ import annotations

from datetime import datetime

from metadata_requests.application.ports.metadata_request_repository import (
    MetadataRequestRepositoryProtocol,
)
from metadata_requests.application.ports.owner_resolver import OwnerResolverProtocol
from metadata_requests.application.services.base import LoggingMixin
from metadata_requests.domain.errors.request import (
    NotCollectionOwnerError,
    NotRequesterError,
    RequestExpiredError,
    RequestNotFoundError,
    RequestNotPendingError,
    SubRequestIndexOutOfRangeError,
)
from metadata_requests.domain.models.metadata_request import (
    MetadataRequest,
    RequestStatus,
)


class RequestAccessGuard(LoggingMixin):
    """Stateless precondition checks for request operations.

    The guard reads the store and the owner resolver but never writes.
    Owners are resolved on every call so an ownership transfer takes
    effect immediately.

    Attributes:
        _repository: Request store used to load records.
        _owner_resolver: Oracle for the current collection owner.
    """

    def __init__(
        self,
        repository: MetadataRequestRepositoryProtocol,
        owner_resolver: OwnerResolverProtocol,
    ) -> None:
        self._repository = repository
        self._owner_resolver = owner_resolver
        self._init_logger(component="access_guard")

    def require_exists(self, request_id: int) -> MetadataRequest:
        """Load a request or fail.

        Raises:
            RequestNotFoundError: If the id is unknown.
        """
        request = self._repository.get(request_id)
        if request is None:
            self._log.warning("request_not_found", request_id=request_id)
            raise RequestNotFoundError(request_id)
        return request

    def require_pending(self, request_id: int) -> MetadataRequest:
        """Load a request that must still be PENDING.

        Raises:
            RequestNotFoundError: If the id is unknown.
            RequestNotPendingError: If the request left PENDING.
        """
        request = self.require_exists(request_id)
        if request.status != RequestStatus.PENDING:
            self._log.warning(
                "request_not_pending",
                request_id=request_id,
                status=request.status.value,
            )
            raise RequestNotPendingError(request_id, request.status)
        return request

    def require_not_expired(self, request: MetadataRequest, now: datetime) -> None:
        """Fail once the voting window has closed.

        Raises:
            RequestExpiredError: If now is past expires_at.
        """
        if request.is_expired(now):
            self._log.warning(
                "request_expired",
                request_id=request.id,
                expires_at=request.expires_at.isoformat(),
                now=now.isoformat(),
            )
            raise RequestExpiredError(request.id, request.expires_at, now)

    def require_active_pending(self, request_id: int, now: datetime) -> MetadataRequest:
        """Load a PENDING request whose voting window is still open.

        Raises:
            RequestNotFoundError: If the id is unknown.
            RequestNotPendingError: If the request left PENDING.
            RequestExpiredError: If now is past expires_at.
        """
        request = self.require_pending(request_id)
        self.require_not_expired(request, now)
        return request

    def require_is_collection_owner(self, request: MetadataRequest, caller: str) -> str:
        """Check the caller currently owns the request's collection.

        Returns:
            The resolved owner identity.

        Raises:
            NotCollectionOwnerError: If caller is not the current owner.
        """
        owner = self._owner_resolver.resolve_owner(request.collection_ref)
        if caller != owner:
            self._log.warning(
                "caller_not_collection_owner",
                request_id=request.id,
                caller=caller,
                collection_ref=request.collection_ref,
            )
            raise NotCollectionOwnerError(request.id, caller, owner)
        return owner

    def require_is_requester(self, request: MetadataRequest, caller: str) -> None:
        """Check the caller created the request.

        Raises:
            NotRequesterError: If caller is not the original requester.
        """
        if caller != request.requester:
            self._log.warning(
                "caller_not_requester",
                request_id=request.id,
                caller=caller,
            )
            raise NotRequesterError(request.id, caller)

    def require_sub_request_index(self, request: MetadataRequest, index: int) -> None:
        """Check index addresses an existing sub-request.

        Raises:
            SubRequestIndexOutOfRangeError: If index is outside [0, len).
        """
        size = len(request.sub_requests)
        if not 0 <= index < size:
            self._log.warning(
                "sub_request_index_out_of_range",
                request_id=request.id,
                index=index,
                size=size,
            )
            raise SubRequestIndexOutOfRangeError(request.id, index, size)
