"""
Pytest configuration and shared fixtures for metadata request tests.

Testing Standards:
- Unit tests go in tests/unit/, grouped by layer
- Time-dependent tests use FakeTimeAuthority, never the wall clock
- Services are wired with the in-memory stubs from infrastructure/stubs
"""

import pytest

from metadata_requests.application.services.metadata_request_service import (
    MetadataRequestService,
)
from metadata_requests.infrastructure.stubs.metadata_request_repository_stub import (
    MetadataRequestRepositoryStub,
)
from metadata_requests.infrastructure.stubs.owner_resolver_stub import (
    OwnerResolverStub,
)
from metadata_requests.infrastructure.stubs.request_applier_stub import (
    RequestApplierStub,
)
from metadata_requests.infrastructure.stubs.request_event_emitter_stub import (
    RequestEventEmitterStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.identities import COLLECTION, OTHER_COLLECTION, OTHER_OWNER, OWNER


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from metadata_requests import __version__

    return __version__


@pytest.fixture
def fake_time() -> FakeTimeAuthority:
    """Time authority frozen at 2026-01-01T00:00:00 UTC."""
    return FakeTimeAuthority()


@pytest.fixture
def repository() -> MetadataRequestRepositoryStub:
    """Fresh in-memory request store."""
    return MetadataRequestRepositoryStub()


@pytest.fixture
def owner_resolver() -> OwnerResolverStub:
    """Owner resolver with two collections registered."""
    return OwnerResolverStub({COLLECTION: OWNER, OTHER_COLLECTION: OTHER_OWNER})


@pytest.fixture
def event_emitter(fake_time: FakeTimeAuthority) -> RequestEventEmitterStub:
    """Event log stub sharing the fake clock."""
    return RequestEventEmitterStub(time_authority=fake_time)


@pytest.fixture
def applier() -> RequestApplierStub:
    """Applier stub that records applied requests."""
    return RequestApplierStub()


@pytest.fixture
def service(
    repository: MetadataRequestRepositoryStub,
    owner_resolver: OwnerResolverStub,
    fake_time: FakeTimeAuthority,
    event_emitter: RequestEventEmitterStub,
    applier: RequestApplierStub,
) -> MetadataRequestService:
    """Metadata request service wired with stubs and the fake clock."""
    return MetadataRequestService(
        repository=repository,
        owner_resolver=owner_resolver,
        time_authority=fake_time,
        event_emitter=event_emitter,
        applier=applier,
    )
