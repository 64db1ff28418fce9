"""Unit tests for MetadataRequestRepositoryStub."""

from datetime import datetime, timedelta, timezone

import pytest

from metadata_requests.domain.errors.request import RequestNotFoundError
from metadata_requests.domain.models.metadata_request import (
    MetadataRequest,
    RequestStatus,
    RequestType,
    SubRequest,
)
from metadata_requests.infrastructure.stubs.metadata_request_repository_stub import (
    MetadataRequestRepositoryStub,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def create(
    repo: MetadataRequestRepositoryStub,
    subject_id: str = "did:op:a",
    owner: str = "0xowner",
) -> MetadataRequest:
    return repo.create(
        collection_ref="0xcollection",
        subject_id=subject_id,
        requester="0xrequester",
        owner=owner,
        sub_requests=[SubRequest(RequestType.ALLOW_NETWORK_ACCESS, "true")],
        created_at=NOW,
        expires_at=NOW + timedelta(weeks=1),
    )


class TestCreate:
    def test_ids_start_at_one(self) -> None:
        repo = MetadataRequestRepositoryStub()

        assert [create(repo).id for _ in range(3)] == [1, 2, 3]

    def test_custom_first_id(self) -> None:
        assert create(MetadataRequestRepositoryStub(first_id=100)).id == 100

    def test_created_record_is_pending_and_stored(self) -> None:
        repo = MetadataRequestRepositoryStub()

        request = create(repo)

        assert request.status == RequestStatus.PENDING
        assert repo.get(request.id) is request
        assert repo.count() == 1

    def test_invalid_record_skips_id(self) -> None:
        repo = MetadataRequestRepositoryStub()
        with pytest.raises(ValueError):
            repo.create(
                collection_ref="0xcollection",
                subject_id="did:op:a",
                requester="0xrequester",
                owner="0xowner",
                sub_requests=[],
                created_at=NOW,
                expires_at=NOW,
            )

        assert repo.count() == 0
        assert repo.list_ids_by_did("did:op:a") == []
        assert create(repo).id == 2


class TestIndexes:
    def test_indexes_preserve_creation_order(self) -> None:
        repo = MetadataRequestRepositoryStub()
        a = create(repo, subject_id="did:op:a", owner="0x1")
        b = create(repo, subject_id="did:op:b", owner="0x1")
        c = create(repo, subject_id="did:op:a", owner="0x2")

        assert repo.list_ids_by_did("did:op:a") == [a.id, c.id]
        assert repo.list_ids_by_owner("0x1") == [a.id, b.id]
        assert repo.list_ids_by_owner("0x2") == [c.id]

    def test_list_returns_copy(self) -> None:
        repo = MetadataRequestRepositoryStub()
        create(repo)

        ids = repo.list_ids_by_did("did:op:a")
        ids.append(999)

        assert repo.list_ids_by_did("did:op:a") == [1]

    def test_unknown_keys_are_empty(self) -> None:
        repo = MetadataRequestRepositoryStub()

        assert repo.list_ids_by_did("did:op:none") == []
        assert repo.list_ids_by_owner("0xnone") == []


class TestUpdateAndDiscard:
    def test_update_replaces_record(self) -> None:
        repo = MetadataRequestRepositoryStub()
        request = create(repo)
        cancelled = request.with_status(RequestStatus.CANCELLED, NOW)

        repo.update(cancelled)

        assert repo.get(request.id) == cancelled

    def test_update_unknown_raises(self) -> None:
        repo = MetadataRequestRepositoryStub()
        request = create(repo)
        repo.clear()

        with pytest.raises(RequestNotFoundError):
            repo.update(request)

    def test_discard_removes_record_and_index_entries(self) -> None:
        repo = MetadataRequestRepositoryStub()
        first = create(repo)
        second = create(repo)

        repo.discard(second.id)

        assert repo.get(second.id) is None
        assert repo.list_ids_by_did("did:op:a") == [first.id]
        assert repo.list_ids_by_owner("0xowner") == [first.id]

    def test_discard_unknown_is_noop(self) -> None:
        repo = MetadataRequestRepositoryStub()

        repo.discard(5)

        assert repo.count() == 0

    def test_discarded_id_never_reused(self) -> None:
        repo = MetadataRequestRepositoryStub()
        request = create(repo)
        repo.discard(request.id)

        assert create(repo).id == request.id + 1

    def test_clear_keeps_sequence(self) -> None:
        repo = MetadataRequestRepositoryStub()
        create(repo)
        repo.clear()

        assert repo.count() == 0
        assert create(repo).id == 2
