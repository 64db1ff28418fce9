"""Metadata request event payloads.

This module defines the event payloads for the request lifecycle:
- RequestCreatedEvent: A request was opened
- VoteCastEvent: The collection owner voted on a sub-request
- VotingFinishedEvent: Finalize resolved the request
- RequestCancelledEvent: The requester withdrew the request
- RequestAppliedEvent: The apply extension consumed the request

Payloads carry exactly the fields observers rely on. Envelope data such
as the schema version and emission time is added by the emitter.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Union

REQUEST_CREATED_EVENT_TYPE: str = "metadata_request.created"
VOTE_CAST_EVENT_TYPE: str = "metadata_request.vote_cast"
VOTING_FINISHED_EVENT_TYPE: str = "metadata_request.voting_finished"
REQUEST_CANCELLED_EVENT_TYPE: str = "metadata_request.cancelled"
REQUEST_APPLIED_EVENT_TYPE: str = "metadata_request.applied"

# Schema version stamped on every emitted envelope
EVENT_SCHEMA_VERSION: str = "1.0.0"


def _canonical(content: dict[str, Any]) -> bytes:
    return json.dumps(content, sort_keys=True).encode("utf-8")


@dataclass(frozen=True, eq=True)
class RequestCreatedEvent:
    """Payload for a newly created request.

    Attributes:
        request_id: Id allocated by the store.
        collection_ref: Collection the request concerns.
        subject_id: DID of the asset record.
        requester: Identity that created the request.
        request_types: Sub-request types, in order.
        data: Sub-request payloads, in the same order.
        expires_at: End of the voting window.
    """

    event_type: ClassVar[str] = REQUEST_CREATED_EVENT_TYPE

    request_id: int
    collection_ref: str
    subject_id: str
    requester: str
    request_types: tuple[str, ...]
    data: tuple[str, ...]
    expires_at: datetime

    def signable_content(self) -> bytes:
        """Return canonical bytes of the payload.

        The content is JSON-serialized with sorted keys to ensure
        deterministic output regardless of dict ordering.
        """
        return _canonical(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "collection_ref": self.collection_ref,
            "subject_id": self.subject_id,
            "requester": self.requester,
            "request_types": list(self.request_types),
            "data": list(self.data),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RequestCreatedEvent:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
        """
        return cls(
            request_id=data["request_id"],
            collection_ref=data["collection_ref"],
            subject_id=data["subject_id"],
            requester=data["requester"],
            request_types=tuple(data["request_types"]),
            data=tuple(data["data"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
        )


@dataclass(frozen=True, eq=True)
class VoteCastEvent:
    """Payload for a vote on one sub-request.

    Attributes:
        request_id: The request voted on.
        voter: Identity that cast the vote.
        in_favour: Direction of the vote.
        weight: Weight added to the tally.
    """

    event_type: ClassVar[str] = VOTE_CAST_EVENT_TYPE

    request_id: int
    voter: str
    in_favour: bool
    weight: int | float

    def signable_content(self) -> bytes:
        return _canonical(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "voter": self.voter,
            "in_favour": self.in_favour,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VoteCastEvent:
        return cls(
            request_id=data["request_id"],
            voter=data["voter"],
            in_favour=data["in_favour"],
            weight=data["weight"],
        )


@dataclass(frozen=True, eq=True)
class VotingFinishedEvent:
    """Payload emitted when finalize resolves a request.

    Attributes:
        request_id: The finalized request.
        status: Resulting status (APPROVED, RESOLVED or REJECTED).
    """

    event_type: ClassVar[str] = VOTING_FINISHED_EVENT_TYPE

    request_id: int
    status: str

    def signable_content(self) -> bytes:
        return _canonical(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {"request_id": self.request_id, "status": self.status}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VotingFinishedEvent:
        return cls(request_id=data["request_id"], status=data["status"])


@dataclass(frozen=True, eq=True)
class RequestCancelledEvent:
    """Payload emitted when the requester cancels a pending request."""

    event_type: ClassVar[str] = REQUEST_CANCELLED_EVENT_TYPE

    request_id: int

    def signable_content(self) -> bytes:
        return _canonical(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {"request_id": self.request_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RequestCancelledEvent:
        return cls(request_id=data["request_id"])


@dataclass(frozen=True, eq=True)
class RequestAppliedEvent:
    """Payload emitted after the applier consumed a decided request.

    Attributes:
        request_id: The applied request.
        previous_status: Status before apply (APPROVED or RESOLVED).
    """

    event_type: ClassVar[str] = REQUEST_APPLIED_EVENT_TYPE

    request_id: int
    previous_status: str

    def signable_content(self) -> bytes:
        return _canonical(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "previous_status": self.previous_status,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RequestAppliedEvent:
        return cls(
            request_id=data["request_id"],
            previous_status=data["previous_status"],
        )


RequestEventPayload = Union[
    RequestCreatedEvent,
    VoteCastEvent,
    VotingFinishedEvent,
    RequestCancelledEvent,
    RequestAppliedEvent,
]
