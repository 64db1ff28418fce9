"""Request Event Emitter Port.

This module defines the protocol for emitting request lifecycle events to
the append-only event log observers read from.

Emission rules:
1. EVENT AFTER SAVE - Events are emitted only after the store was updated
2. FAIL LOUD - Emission failures raise; the caller rolls the store back
"""

from __future__ import annotations

from typing import Protocol

from metadata_requests.domain.events.metadata_request import (
    RequestAppliedEvent,
    RequestCancelledEvent,
    RequestCreatedEvent,
    VoteCastEvent,
    VotingFinishedEvent,
)


class RequestEventEmitterPort(Protocol):
    """Protocol for request lifecycle event emission.

    Every method MUST raise on failure so the calling service can undo the
    state change that the event describes.
    """

    def emit_request_created(self, event: RequestCreatedEvent) -> None:
        """Emit metadata_request.created after a request is stored."""
        ...

    def emit_vote_cast(self, event: VoteCastEvent) -> None:
        """Emit metadata_request.vote_cast after a tally changed."""
        ...

    def emit_voting_finished(self, event: VotingFinishedEvent) -> None:
        """Emit metadata_request.voting_finished after finalize."""
        ...

    def emit_request_cancelled(self, event: RequestCancelledEvent) -> None:
        """Emit metadata_request.cancelled after a cancellation."""
        ...

    def emit_request_applied(self, event: RequestAppliedEvent) -> None:
        """Emit metadata_request.applied after the applier ran."""
        ...
