"""Domain models for metadata change requests."""

from metadata_requests.domain.models.metadata_request import (
    APPLICABLE_STATES,
    REQUEST_TTL,
    STATE_TRANSITION_MATRIX,
    TERMINAL_STATES,
    Ballot,
    MetadataRequest,
    RequestStatus,
    RequestType,
    SubRequest,
    is_valid_weight,
)
from metadata_requests.domain.models.vote_tally import VoteTallyMode

__all__: list[str] = [
    "APPLICABLE_STATES",
    "REQUEST_TTL",
    "STATE_TRANSITION_MATRIX",
    "TERMINAL_STATES",
    "Ballot",
    "MetadataRequest",
    "RequestStatus",
    "RequestType",
    "SubRequest",
    "VoteTallyMode",
    "is_valid_weight",
]
