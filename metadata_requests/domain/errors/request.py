"""Metadata request domain errors.

This module provides exception classes for request lifecycle failures:
creation, voting, cancellation, finalization and the apply extension.

Every error is raised before any mutation happens, so a rejected
operation never leaves a partially updated request behind.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from metadata_requests.domain.exceptions import MetadataRequestError

if TYPE_CHECKING:
    from metadata_requests.domain.models.metadata_request import RequestStatus


class RequestError(MetadataRequestError):
    """Base error for metadata request operations.

    Subclasses expose the offending identifiers as attributes and can be
    rendered as RFC 7807 problem details for outer layers.
    """

    problem_type: str = "urn:metadata-requests:error"
    title: str = "Metadata Request Error"
    http_status: int = 400

    def to_rfc7807_dict(self) -> dict[str, Any]:
        """Serialize to RFC 7807 problem details format.

        Returns:
            Dictionary conforming to RFC 7807 problem details.
        """
        return {
            "type": self.problem_type,
            "title": self.title,
            "status": self.http_status,
            "detail": str(self),
        }


class MismatchedLengthsError(RequestError):
    """Raised when request types and payloads differ in length.

    Attributes:
        types_count: Number of request types supplied.
        data_count: Number of data payloads supplied.
    """

    problem_type = "urn:metadata-requests:mismatched-lengths"
    title = "Mismatched Lengths"

    def __init__(self, types_count: int, data_count: int) -> None:
        """Initialize the error.

        Args:
            types_count: Number of request types supplied.
            data_count: Number of data payloads supplied.
        """
        self.types_count = types_count
        self.data_count = data_count
        super().__init__(
            f"Request types and data must have equal length: "
            f"got {types_count} types and {data_count} payloads"
        )

    def to_rfc7807_dict(self) -> dict[str, Any]:
        result = super().to_rfc7807_dict()
        result["types_count"] = self.types_count
        result["data_count"] = self.data_count
        return result


class EmptyRequestError(RequestError):
    """Raised when a request is created without any sub-request."""

    problem_type = "urn:metadata-requests:empty-request"
    title = "Empty Request"

    def __init__(self) -> None:
        super().__init__("A request must contain at least one sub-request")


class RequestNotFoundError(RequestError):
    """Raised when an operation references an unknown request id.

    HTTP Status: 404 Not Found

    Attributes:
        request_id: The request id that was not found.
    """

    problem_type = "urn:metadata-requests:not-found"
    title = "Request Not Found"
    http_status = 404

    def __init__(self, request_id: int) -> None:
        """Initialize the error.

        Args:
            request_id: The request id that was not found.
        """
        self.request_id = request_id
        super().__init__(f"Request not found: {request_id}")

    def to_rfc7807_dict(self) -> dict[str, Any]:
        result = super().to_rfc7807_dict()
        result["request_id"] = self.request_id
        return result


class RequestNotPendingError(RequestError):
    """Raised when an operation needs a PENDING request and finds another status.

    HTTP Status: 409 Conflict

    Attributes:
        request_id: The request id.
        status: The status the request is actually in.
    """

    problem_type = "urn:metadata-requests:not-pending"
    title = "Request Not Pending"
    http_status = 409

    def __init__(self, request_id: int, status: RequestStatus) -> None:
        """Initialize the error.

        Args:
            request_id: The request id.
            status: Current status of the request.
        """
        self.request_id = request_id
        self.status = status
        super().__init__(
            f"Request {request_id} is {status.value}, expected PENDING"
        )

    def to_rfc7807_dict(self) -> dict[str, Any]:
        result = super().to_rfc7807_dict()
        result["request_id"] = self.request_id
        result["current_status"] = self.status.value
        return result


class RequestExpiredError(RequestError):
    """Raised when voting or finalizing after the request deadline.

    HTTP Status: 410 Gone

    Attributes:
        request_id: The request id.
        expires_at: Deadline of the voting window.
        now: Time the operation was attempted.
    """

    problem_type = "urn:metadata-requests:expired"
    title = "Request Expired"
    http_status = 410

    def __init__(self, request_id: int, expires_at: datetime, now: datetime) -> None:
        """Initialize the error.

        Args:
            request_id: The request id.
            expires_at: Deadline of the voting window.
            now: Time the operation was attempted.
        """
        self.request_id = request_id
        self.expires_at = expires_at
        self.now = now
        super().__init__(
            f"Request {request_id} expired at {expires_at.isoformat()} "
            f"(now {now.isoformat()})"
        )

    def to_rfc7807_dict(self) -> dict[str, Any]:
        result = super().to_rfc7807_dict()
        result["request_id"] = self.request_id
        result["expires_at"] = self.expires_at.isoformat()
        return result


class NotCollectionOwnerError(RequestError):
    """Raised when someone other than the collection owner tries to vote.

    HTTP Status: 403 Forbidden

    Attributes:
        request_id: The request id.
        caller: Identity that attempted the vote.
        owner: Current owner of the collection.
    """

    problem_type = "urn:metadata-requests:not-owner"
    title = "Not Collection Owner"
    http_status = 403

    def __init__(self, request_id: int, caller: str, owner: str) -> None:
        self.request_id = request_id
        self.caller = caller
        self.owner = owner
        super().__init__(
            f"Caller {caller} is not the owner of the collection for request {request_id}"
        )

    def to_rfc7807_dict(self) -> dict[str, Any]:
        result = super().to_rfc7807_dict()
        result["request_id"] = self.request_id
        result["caller"] = self.caller
        return result


class NotRequesterError(RequestError):
    """Raised when someone other than the original requester tries to cancel.

    HTTP Status: 403 Forbidden

    Attributes:
        request_id: The request id.
        caller: Identity that attempted the cancellation.
    """

    problem_type = "urn:metadata-requests:not-requester"
    title = "Not Requester"
    http_status = 403

    def __init__(self, request_id: int, caller: str) -> None:
        self.request_id = request_id
        self.caller = caller
        super().__init__(
            f"Caller {caller} did not create request {request_id}"
        )

    def to_rfc7807_dict(self) -> dict[str, Any]:
        result = super().to_rfc7807_dict()
        result["request_id"] = self.request_id
        result["caller"] = self.caller
        return result


class SubRequestIndexOutOfRangeError(RequestError):
    """Raised when a vote targets a sub-request index that does not exist.

    Attributes:
        request_id: The request id.
        index: The requested sub-request index.
        size: Number of sub-requests in the request.
    """

    problem_type = "urn:metadata-requests:index-out-of-range"
    title = "Sub-Request Index Out Of Range"

    def __init__(self, request_id: int, index: int, size: int) -> None:
        self.request_id = request_id
        self.index = index
        self.size = size
        super().__init__(
            f"Sub-request index {index} out of range for request {request_id} "
            f"with {size} sub-request(s)"
        )

    def to_rfc7807_dict(self) -> dict[str, Any]:
        result = super().to_rfc7807_dict()
        result["request_id"] = self.request_id
        result["index"] = self.index
        result["size"] = self.size
        return result


class InvalidVoteWeightError(RequestError):
    """Raised when a vote weight is negative, NaN or infinite.

    Attributes:
        weight: The rejected weight.
    """

    problem_type = "urn:metadata-requests:invalid-weight"
    title = "Invalid Vote Weight"

    def __init__(self, weight: int | float) -> None:
        self.weight = weight
        super().__init__(
            f"Vote weight must be a finite non-negative number, got {weight}"
        )


class InvalidStateTransitionError(RequestError):
    """Raised when a status change is not in the transition matrix.

    HTTP Status: 409 Conflict

    Attributes:
        from_status: Current status of the request.
        to_status: Attempted target status.
        allowed_transitions: Valid target statuses from the current status.
    """

    problem_type = "urn:metadata-requests:invalid-transition"
    title = "Invalid State Transition"
    http_status = 409

    def __init__(
        self,
        from_status: RequestStatus,
        to_status: RequestStatus,
        allowed_transitions: list[RequestStatus] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            from_status: Current request status.
            to_status: Attempted invalid target status.
            allowed_transitions: Valid statuses from current status (optional).
        """
        self.from_status = from_status
        self.to_status = to_status
        self.allowed_transitions = allowed_transitions or []

        allowed_str = (
            f" Valid transitions: {sorted(s.value for s in self.allowed_transitions)}"
            if self.allowed_transitions
            else ""
        )
        super().__init__(
            f"Invalid state transition: {from_status.value} -> {to_status.value}.{allowed_str}"
        )


class RequestNotApplicableError(RequestError):
    """Raised when apply is attempted on a request that was not approved.

    Only APPROVED and RESOLVED requests can be handed to the applier.

    Attributes:
        request_id: The request id.
        status: Current status of the request.
    """

    problem_type = "urn:metadata-requests:not-applicable"
    title = "Request Not Applicable"
    http_status = 409

    def __init__(self, request_id: int, status: RequestStatus) -> None:
        self.request_id = request_id
        self.status = status
        super().__init__(
            f"Request {request_id} cannot be applied from status {status.value}"
        )


class RequestApplierNotConfiguredError(RequestError):
    """Raised when apply is requested but no applier has been wired in."""

    problem_type = "urn:metadata-requests:applier-not-configured"
    title = "Request Applier Not Configured"
    http_status = 501

    def __init__(self) -> None:
        super().__init__("No request applier is configured")


class EventEmissionError(RequestError):
    """Raised when a lifecycle event could not be emitted.

    The store change that preceded the emission has been rolled back
    by the time this error reaches the caller.

    Attributes:
        request_id: The request whose event failed, if one was allocated.
        event_type: The event type that failed.
        cause: The underlying exception.
    """

    problem_type = "urn:metadata-requests:event-emission-failed"
    title = "Event Emission Failed"
    http_status = 500

    def __init__(
        self,
        request_id: int | None,
        event_type: str,
        cause: Exception,
    ) -> None:
        self.request_id = request_id
        self.event_type = event_type
        self.cause = cause
        super().__init__(
            f"Failed to emit {event_type} for request {request_id}: {cause}"
        )
