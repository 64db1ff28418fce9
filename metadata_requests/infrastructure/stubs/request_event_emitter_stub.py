"""Request event emitter stub: an in-memory append-only event log.

This stub captures emitted events for test assertions and local runs
without requiring a real event ledger.

Usage in tests:
    emitter = RequestEventEmitterStub()
    service = MetadataRequestService(..., event_emitter=emitter)

    request_id = service.create_request(...)

    assert len(emitter.events) == 1
    assert emitter.events[0].event_type == "metadata_request.created"
    assert emitter.events[0].payload.request_id == request_id

    # Failure path: the service must roll back
    emitter.should_fail = True
    with pytest.raises(EventEmissionError):
        service.cancel_request(request_id, caller=requester)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from structlog import get_logger

from metadata_requests.application.ports.request_event_emitter import (
    RequestEventEmitterPort,
)
from metadata_requests.application.ports.time_authority import TimeAuthorityProtocol
from metadata_requests.domain.events.metadata_request import (
    EVENT_SCHEMA_VERSION,
    RequestAppliedEvent,
    RequestCancelledEvent,
    RequestCreatedEvent,
    RequestEventPayload,
    VoteCastEvent,
    VotingFinishedEvent,
)

logger = get_logger()


@dataclass(frozen=True)
class RecordedRequestEvent:
    """Envelope of one event in the log.

    Attributes:
        sequence: Position in the log, starting at 1.
        event_type: Event type constant of the payload.
        schema_version: Payload schema version.
        payload: The event payload.
        emitted_at: When the event was appended.
    """

    sequence: int
    event_type: str
    schema_version: str
    payload: RequestEventPayload
    emitted_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "sequence": self.sequence,
            "event_type": self.event_type,
            "schema_version": self.schema_version,
            "payload": self.payload.to_dict(),
            "emitted_at": self.emitted_at.isoformat(),
        }


class RequestEventEmitterStub(RequestEventEmitterPort):
    """In-memory implementation of RequestEventEmitterPort.

    Attributes:
        events: Every event appended so far, in order.
        should_fail: If True, every emit raises RuntimeError.
        fail_exception: If set, every emit raises this exception.
    """

    def __init__(self, time_authority: TimeAuthorityProtocol | None = None) -> None:
        """Initialize the stub with an empty log.

        Args:
            time_authority: Optional clock for emitted_at. Defaults to the
                            UTC wall clock.
        """
        self._time = time_authority
        self.events: list[RecordedRequestEvent] = []
        self.should_fail: bool = False
        self.fail_exception: Exception | None = None

    def emit_request_created(self, event: RequestCreatedEvent) -> None:
        self._append(event)

    def emit_vote_cast(self, event: VoteCastEvent) -> None:
        self._append(event)

    def emit_voting_finished(self, event: VotingFinishedEvent) -> None:
        self._append(event)

    def emit_request_cancelled(self, event: RequestCancelledEvent) -> None:
        self._append(event)

    def emit_request_applied(self, event: RequestAppliedEvent) -> None:
        self._append(event)

    def events_of_type(self, event_type: str) -> list[RecordedRequestEvent]:
        """Return logged events of one type, in order."""
        return [e for e in self.events if e.event_type == event_type]

    @property
    def event_types(self) -> list[str]:
        return [e.event_type for e in self.events]

    def reset(self) -> None:
        """Clear the log and failure flags."""
        self.events.clear()
        self.should_fail = False
        self.fail_exception = None

    def _append(self, payload: RequestEventPayload) -> None:
        if self.fail_exception is not None:
            raise self.fail_exception
        if self.should_fail:
            raise RuntimeError(f"Simulated emission failure for {payload.event_type}")

        emitted_at = self._time.now() if self._time else datetime.now(timezone.utc)
        recorded = RecordedRequestEvent(
            sequence=len(self.events) + 1,
            event_type=payload.event_type,
            schema_version=EVENT_SCHEMA_VERSION,
            payload=payload,
            emitted_at=emitted_at,
        )
        self.events.append(recorded)
        logger.debug(
            "request_event_recorded",
            event_type=payload.event_type,
            sequence=recorded.sequence,
            request_id=payload.request_id,
        )
