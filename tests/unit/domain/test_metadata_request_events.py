"""Unit tests for metadata request event payloads."""

import json
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from metadata_requests.domain.events.metadata_request import (
    REQUEST_APPLIED_EVENT_TYPE,
    REQUEST_CANCELLED_EVENT_TYPE,
    REQUEST_CREATED_EVENT_TYPE,
    VOTE_CAST_EVENT_TYPE,
    VOTING_FINISHED_EVENT_TYPE,
    RequestAppliedEvent,
    RequestCancelledEvent,
    RequestCreatedEvent,
    VoteCastEvent,
    VotingFinishedEvent,
)

EXPIRES_AT = datetime(2026, 1, 8, tzinfo=timezone.utc)


@pytest.fixture
def created_event() -> RequestCreatedEvent:
    return RequestCreatedEvent(
        request_id=7,
        collection_ref="0xc011ec7100",
        subject_id="did:op:8d2f6e1a",
        requester="0xrequester",
        request_types=("ALLOW_NETWORK_ACCESS", "TRUSTED_ALGORITHM"),
        data=("true", "did:op:algo"),
        expires_at=EXPIRES_AT,
    )


class TestEventTypes:
    def test_event_type_constants(self) -> None:
        assert RequestCreatedEvent.event_type == REQUEST_CREATED_EVENT_TYPE
        assert VoteCastEvent.event_type == VOTE_CAST_EVENT_TYPE
        assert VotingFinishedEvent.event_type == VOTING_FINISHED_EVENT_TYPE
        assert RequestCancelledEvent.event_type == REQUEST_CANCELLED_EVENT_TYPE
        assert RequestAppliedEvent.event_type == REQUEST_APPLIED_EVENT_TYPE

    def test_event_type_not_in_payload(self, created_event: RequestCreatedEvent) -> None:
        assert "event_type" not in created_event.to_dict()


class TestRequestCreatedEvent:
    def test_to_dict(self, created_event: RequestCreatedEvent) -> None:
        result = created_event.to_dict()

        assert result == {
            "request_id": 7,
            "collection_ref": "0xc011ec7100",
            "subject_id": "did:op:8d2f6e1a",
            "requester": "0xrequester",
            "request_types": ["ALLOW_NETWORK_ACCESS", "TRUSTED_ALGORITHM"],
            "data": ["true", "did:op:algo"],
            "expires_at": EXPIRES_AT.isoformat(),
        }

    def test_from_dict_restores_event(self, created_event: RequestCreatedEvent) -> None:
        assert RequestCreatedEvent.from_dict(created_event.to_dict()) == created_event

    def test_from_dict_missing_field(self) -> None:
        with pytest.raises(KeyError):
            RequestCreatedEvent.from_dict({"request_id": 1})

    def test_signable_content_is_sorted_json(
        self, created_event: RequestCreatedEvent
    ) -> None:
        content = created_event.signable_content()

        parsed = json.loads(content)
        assert list(parsed) == sorted(parsed)
        assert parsed["request_id"] == 7

    def test_signable_content_deterministic(
        self, created_event: RequestCreatedEvent
    ) -> None:
        clone = RequestCreatedEvent.from_dict(created_event.to_dict())
        assert clone.signable_content() == created_event.signable_content()

    def test_frozen(self, created_event: RequestCreatedEvent) -> None:
        with pytest.raises(FrozenInstanceError):
            created_event.request_id = 8  # type: ignore[misc]


class TestLifecyclePayloads:
    def test_vote_cast_fields(self) -> None:
        event = VoteCastEvent(request_id=1, voter="0xowner", in_favour=False, weight=4)

        assert event.to_dict() == {
            "request_id": 1,
            "voter": "0xowner",
            "in_favour": False,
            "weight": 4,
        }
        assert VoteCastEvent.from_dict(event.to_dict()) == event

    def test_vote_cast_fractional_weight(self) -> None:
        event = VoteCastEvent(
            request_id=1, voter="0xowner", in_favour=True, weight=0.25
        )

        assert json.loads(event.signable_content())["weight"] == 0.25
        assert VoteCastEvent.from_dict(event.to_dict()) == event

    def test_voting_finished_fields(self) -> None:
        event = VotingFinishedEvent(request_id=2, status="RESOLVED")

        assert event.to_dict() == {"request_id": 2, "status": "RESOLVED"}

    def test_cancelled_carries_only_id(self) -> None:
        assert RequestCancelledEvent(request_id=3).to_dict() == {"request_id": 3}

    def test_applied_fields(self) -> None:
        event = RequestAppliedEvent(request_id=4, previous_status="APPROVED")

        assert RequestAppliedEvent.from_dict(event.to_dict()) == event
        assert json.loads(event.signable_content()) == {
            "previous_status": "APPROVED",
            "request_id": 4,
        }
