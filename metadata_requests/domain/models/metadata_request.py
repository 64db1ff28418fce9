"""Metadata request domain model.

This module defines the request lifecycle for off-chain metadata changes:
- RequestType: the kind of change a sub-request proposes
- RequestStatus: lifecycle states and the transition matrix
- Ballot: a single vote cast against a sub-request
- SubRequest: one independently votable component of a request
- MetadataRequest: the bundled proposal against a collection/DID pair

All models are frozen dataclasses. The store replaces records with new
instances; nothing outside the store holds a mutable reference.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

# Voting window for every request
REQUEST_TTL: timedelta = timedelta(weeks=1)


def is_valid_weight(value: int | float) -> bool:
    """True for finite, non-negative vote weights and tallies."""
    return math.isfinite(value) and value >= 0


class RequestType(Enum):
    """Kind of metadata change a sub-request proposes.

    Types:
        ALLOW_NETWORK_ACCESS: Let the asset's compute jobs reach the network
        TRUSTED_ALGORITHM: Add an algorithm to the asset's trusted list
        TRUSTED_ALGORITHM_PUBLISHER: Trust every algorithm from a publisher
    """

    ALLOW_NETWORK_ACCESS = "ALLOW_NETWORK_ACCESS"
    TRUSTED_ALGORITHM = "TRUSTED_ALGORITHM"
    TRUSTED_ALGORITHM_PUBLISHER = "TRUSTED_ALGORITHM_PUBLISHER"

    @classmethod
    def parse(cls, value: RequestType | str | int) -> RequestType:
        """Coerce a caller-supplied type into a RequestType.

        Accepts an existing member, its value string, or its ordinal
        position in declaration order.

        Raises:
            ValueError: If the value does not name a known type.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"Unknown request type ordinal: {value}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown request type: {value!r}") from None


class RequestStatus(Enum):
    """State in the request lifecycle.

    State Machine:
        PENDING -> APPROVED (finalize, every sub-request approved)
        PENDING -> RESOLVED (finalize, some sub-requests approved)
        PENDING -> REJECTED (finalize, no sub-request approved)
        PENDING -> CANCELLED (requester withdraws)
        APPROVED -> APPLIED (apply extension)
        RESOLVED -> APPLIED (apply extension)

    Every state other than PENDING is terminal for voting: decided_at is
    set when the request leaves PENDING and never changes afterwards.
    """

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"
    APPLIED = "APPLIED"
    CANCELLED = "CANCELLED"

    def is_terminal(self) -> bool:
        """Check whether the request has left the voting phase."""
        return self in TERMINAL_STATES

    def valid_transitions(self) -> frozenset[RequestStatus]:
        """Get valid transitions from this state.

        Returns:
            Frozenset of states this state can transition to.
        """
        return STATE_TRANSITION_MATRIX.get(self, frozenset())


TERMINAL_STATES: frozenset[RequestStatus] = frozenset(
    {
        RequestStatus.APPROVED,
        RequestStatus.RESOLVED,
        RequestStatus.REJECTED,
        RequestStatus.APPLIED,
        RequestStatus.CANCELLED,
    }
)

# Outcomes an applier may act on
APPLICABLE_STATES: frozenset[RequestStatus] = frozenset(
    {RequestStatus.APPROVED, RequestStatus.RESOLVED}
)

STATE_TRANSITION_MATRIX: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset(
        {
            RequestStatus.APPROVED,
            RequestStatus.RESOLVED,
            RequestStatus.REJECTED,
            RequestStatus.CANCELLED,
        }
    ),
    RequestStatus.APPROVED: frozenset({RequestStatus.APPLIED}),
    RequestStatus.RESOLVED: frozenset({RequestStatus.APPLIED}),
    RequestStatus.REJECTED: frozenset(),
    RequestStatus.APPLIED: frozenset(),
    RequestStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True, eq=True)
class Ballot:
    """A single vote cast against a sub-request.

    Attributes:
        voter: Identity that cast the vote.
        in_favour: True for a yes vote, False for a no vote.
        weight: Caller-supplied magnitude of the vote.
        cast_at: When the vote was recorded (UTC).
    """

    voter: str
    in_favour: bool
    weight: int | float
    cast_at: datetime

    def __post_init__(self) -> None:
        if not is_valid_weight(self.weight):
            raise ValueError(
                f"Ballot weight must be finite and non-negative, got {self.weight}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "voter": self.voter,
            "in_favour": self.in_favour,
            "weight": self.weight,
            "cast_at": self.cast_at.isoformat(),
        }


@dataclass(frozen=True, eq=True)
class SubRequest:
    """One typed, independently votable component of a request.

    The data payload is opaque: its meaning depends on request_type and
    is never interpreted here.

    Attributes:
        request_type: Kind of change proposed.
        data: Opaque payload for the change.
        yes_weight: Accumulated weight in favour.
        no_weight: Accumulated weight against.
        ballots: Every vote cast against this sub-request, in order.
    """

    request_type: RequestType
    data: str
    yes_weight: int | float = 0
    no_weight: int | float = 0
    ballots: tuple[Ballot, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate tallies are finite and non-negative."""
        if not (is_valid_weight(self.yes_weight) and is_valid_weight(self.no_weight)):
            raise ValueError(
                f"Tallies must be finite and non-negative, got yes={self.yes_weight} "
                f"no={self.no_weight}"
            )

    @property
    def is_approved(self) -> bool:
        """A sub-request is approved only on a strict yes majority."""
        return self.yes_weight > self.no_weight

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_type": self.request_type.value,
            "data": self.data,
            "yes_weight": self.yes_weight,
            "no_weight": self.no_weight,
            "ballots": [b.to_dict() for b in self.ballots],
        }


@dataclass(frozen=True, eq=True)
class MetadataRequest:
    """A bundled proposal to change metadata of one asset record.

    Attributes:
        id: Store-assigned identifier, strictly increasing, never reused.
        collection_ref: Collection the request concerns.
        subject_id: DID of the asset record within the collection.
        requester: Identity that created the request.
        owner: Collection owner resolved when the request was created.
        sub_requests: Ordered sub-requests, fixed at creation.
        created_at: Creation timestamp (UTC).
        expires_at: End of the voting window.
        status: Current lifecycle state.
        decided_at: When the request left PENDING.
        applied_at: When the apply extension consumed the request.
    """

    id: int
    collection_ref: str
    subject_id: str
    requester: str
    owner: str
    sub_requests: tuple[SubRequest, ...]
    created_at: datetime
    expires_at: datetime
    status: RequestStatus = field(default=RequestStatus.PENDING)
    decided_at: datetime | None = field(default=None)
    applied_at: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate request fields.

        Raises:
            ValueError: If any field validation fails.
        """
        if not self.sub_requests:
            raise ValueError("A request must contain at least one sub-request")
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware (UTC)")
        if self.expires_at < self.created_at:
            raise ValueError("expires_at must not precede created_at")
        if self.status == RequestStatus.PENDING and self.decided_at is not None:
            raise ValueError("decided_at must be unset while PENDING")
        if self.status.is_terminal() and self.decided_at is None:
            raise ValueError(f"decided_at must be set for {self.status.value}")

    @property
    def request_types(self) -> tuple[RequestType, ...]:
        return tuple(s.request_type for s in self.sub_requests)

    @property
    def data(self) -> tuple[str, ...]:
        return tuple(s.data for s in self.sub_requests)

    def is_expired(self, now: datetime) -> bool:
        """Check whether the voting window has closed.

        The deadline itself is still inside the window.
        """
        return now > self.expires_at

    def with_status(self, new_status: RequestStatus, at: datetime) -> MetadataRequest:
        """Create new request with updated status.

        Enforces the transition matrix. Leaving PENDING stamps decided_at;
        moving to APPLIED stamps applied_at and keeps decided_at.

        Args:
            new_status: The status to transition to.
            at: Timestamp of the transition.

        Returns:
            New MetadataRequest with the updated status.

        Raises:
            InvalidStateTransitionError: If the transition is not permitted.
        """
        # Import here to avoid circular dependency
        from metadata_requests.domain.errors.request import (
            InvalidStateTransitionError,
        )

        valid_transitions = self.status.valid_transitions()
        if new_status not in valid_transitions:
            raise InvalidStateTransitionError(
                from_status=self.status,
                to_status=new_status,
                allowed_transitions=list(valid_transitions),
            )

        if new_status == RequestStatus.APPLIED:
            return replace(self, status=new_status, applied_at=at)
        return replace(self, status=new_status, decided_at=at)

    def with_sub_request(self, index: int, sub_request: SubRequest) -> MetadataRequest:
        """Create new request with one sub-request replaced.

        The number and order of sub-requests never change.
        """
        if sub_request.request_type != self.sub_requests[index].request_type:
            raise ValueError("Sub-request type is fixed at creation")
        updated = list(self.sub_requests)
        updated[index] = sub_request
        return replace(self, sub_requests=tuple(updated))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for read models and logging.

        Returns:
            Dictionary with ISO timestamps and enum values.
        """
        return {
            "id": self.id,
            "collection_ref": self.collection_ref,
            "subject_id": self.subject_id,
            "requester": self.requester,
            "owner": self.owner,
            "status": self.status.value,
            "sub_requests": [s.to_dict() for s in self.sub_requests],
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
            "applied_at": self.applied_at.isoformat() if self.applied_at else None,
        }
