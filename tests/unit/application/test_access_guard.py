"""Unit tests for RequestAccessGuard."""

from datetime import timedelta

import pytest

from metadata_requests.application.services.access_guard import RequestAccessGuard
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
    RequestType,
    SubRequest,
)
from metadata_requests.infrastructure.stubs.metadata_request_repository_stub import (
    MetadataRequestRepositoryStub,
)
from metadata_requests.infrastructure.stubs.owner_resolver_stub import (
    OwnerResolverStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.identities import (
    COLLECTION,
    DID,
    OTHER_OWNER,
    OWNER,
    REQUESTER,
    STRANGER,
)


@pytest.fixture
def guard(
    repository: MetadataRequestRepositoryStub,
    owner_resolver: OwnerResolverStub,
) -> RequestAccessGuard:
    return RequestAccessGuard(repository, owner_resolver)


@pytest.fixture
def stored(
    repository: MetadataRequestRepositoryStub,
    fake_time: FakeTimeAuthority,
) -> MetadataRequest:
    now = fake_time.now()
    return repository.create(
        collection_ref=COLLECTION,
        subject_id=DID,
        requester=REQUESTER,
        owner=OWNER,
        sub_requests=(
            SubRequest(RequestType.ALLOW_NETWORK_ACCESS, "true"),
            SubRequest(RequestType.TRUSTED_ALGORITHM, "did:op:algo"),
        ),
        created_at=now,
        expires_at=now + timedelta(weeks=1),
    )


class TestRequireExistsAndPending:
    def test_require_exists_returns_record(
        self, guard: RequestAccessGuard, stored: MetadataRequest
    ) -> None:
        assert guard.require_exists(stored.id) == stored

    def test_require_exists_unknown(self, guard: RequestAccessGuard) -> None:
        with pytest.raises(RequestNotFoundError) as exc_info:
            guard.require_exists(404)

        assert exc_info.value.request_id == 404

    def test_require_pending_accepts_pending(
        self, guard: RequestAccessGuard, stored: MetadataRequest
    ) -> None:
        assert guard.require_pending(stored.id) is stored

    def test_require_pending_rejects_terminal(
        self,
        guard: RequestAccessGuard,
        stored: MetadataRequest,
        repository: MetadataRequestRepositoryStub,
        fake_time: FakeTimeAuthority,
    ) -> None:
        repository.update(stored.with_status(RequestStatus.REJECTED, fake_time.now()))

        with pytest.raises(RequestNotPendingError) as exc_info:
            guard.require_pending(stored.id)

        assert exc_info.value.status == RequestStatus.REJECTED


class TestExpiry:
    def test_deadline_is_inclusive(
        self, guard: RequestAccessGuard, stored: MetadataRequest
    ) -> None:
        guard.require_not_expired(stored, stored.expires_at)

    def test_after_deadline(
        self, guard: RequestAccessGuard, stored: MetadataRequest
    ) -> None:
        with pytest.raises(RequestExpiredError):
            guard.require_not_expired(stored, stored.expires_at + timedelta(seconds=1))

    def test_require_active_pending(
        self,
        guard: RequestAccessGuard,
        stored: MetadataRequest,
        fake_time: FakeTimeAuthority,
    ) -> None:
        assert guard.require_active_pending(stored.id, fake_time.now()) is stored

        fake_time.advance(delta=timedelta(weeks=2))
        with pytest.raises(RequestExpiredError):
            guard.require_active_pending(stored.id, fake_time.now())


class TestCallerChecks:
    def test_owner_accepted(
        self, guard: RequestAccessGuard, stored: MetadataRequest
    ) -> None:
        assert guard.require_is_collection_owner(stored, OWNER) == OWNER

    def test_stranger_rejected(
        self, guard: RequestAccessGuard, stored: MetadataRequest
    ) -> None:
        with pytest.raises(NotCollectionOwnerError) as exc_info:
            guard.require_is_collection_owner(stored, STRANGER)

        assert exc_info.value.owner == OWNER

    def test_owner_resolved_on_every_call(
        self,
        guard: RequestAccessGuard,
        stored: MetadataRequest,
        owner_resolver: OwnerResolverStub,
    ) -> None:
        guard.require_is_collection_owner(stored, OWNER)
        owner_resolver.transfer(COLLECTION, OTHER_OWNER)

        with pytest.raises(NotCollectionOwnerError):
            guard.require_is_collection_owner(stored, OWNER)
        assert guard.require_is_collection_owner(stored, OTHER_OWNER) == OTHER_OWNER
        assert owner_resolver.lookups == [COLLECTION, COLLECTION, COLLECTION]

    def test_requester_accepted(
        self, guard: RequestAccessGuard, stored: MetadataRequest
    ) -> None:
        guard.require_is_requester(stored, REQUESTER)

    def test_owner_is_not_requester(
        self, guard: RequestAccessGuard, stored: MetadataRequest
    ) -> None:
        with pytest.raises(NotRequesterError):
            guard.require_is_requester(stored, OWNER)


class TestSubRequestIndex:
    @pytest.mark.parametrize("index", [0, 1])
    def test_valid_indexes(
        self, guard: RequestAccessGuard, stored: MetadataRequest, index: int
    ) -> None:
        guard.require_sub_request_index(stored, index)

    @pytest.mark.parametrize("index", [-1, 2, 100])
    def test_invalid_indexes(
        self, guard: RequestAccessGuard, stored: MetadataRequest, index: int
    ) -> None:
        with pytest.raises(SubRequestIndexOutOfRangeError) as exc_info:
            guard.require_sub_request_index(stored, index)

        assert exc_info.value.size == 2
