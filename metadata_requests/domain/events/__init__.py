"""
Domain events for metadata change requests.

Events are the only externally observable record of the request
lifecycle. All payloads are immutable and carry exactly the fields
observers rely on.
"""

from metadata_requests.domain.events.metadata_request import (
    EVENT_SCHEMA_VERSION,
    REQUEST_APPLIED_EVENT_TYPE,
    REQUEST_CANCELLED_EVENT_TYPE,
    REQUEST_CREATED_EVENT_TYPE,
    VOTE_CAST_EVENT_TYPE,
    VOTING_FINISHED_EVENT_TYPE,
    RequestAppliedEvent,
    RequestCancelledEvent,
    RequestCreatedEvent,
    RequestEventPayload,
    VoteCastEvent,
    VotingFinishedEvent,
)

__all__: list[str] = [
    "EVENT_SCHEMA_VERSION",
    "REQUEST_APPLIED_EVENT_TYPE",
    "REQUEST_CANCELLED_EVENT_TYPE",
    "REQUEST_CREATED_EVENT_TYPE",
    "VOTE_CAST_EVENT_TYPE",
    "VOTING_FINISHED_EVENT_TYPE",
    "RequestAppliedEvent",
    "RequestCancelledEvent",
    "RequestCreatedEvent",
    "RequestEventPayload",
    "VoteCastEvent",
    "VotingFinishedEvent",
]
