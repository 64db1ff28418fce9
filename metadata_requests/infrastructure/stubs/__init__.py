"""In-memory stub implementations of the application ports.

Stubs are used for local runs and tests. They are NOT durable storage.
"""

from metadata_requests.infrastructure.stubs.metadata_request_repository_stub import (
    MetadataRequestRepositoryStub,
)
from metadata_requests.infrastructure.stubs.owner_resolver_stub import (
    OwnerResolverStub,
    UnknownCollectionError,
)
from metadata_requests.infrastructure.stubs.request_applier_stub import (
    RequestApplierStub,
)
from metadata_requests.infrastructure.stubs.request_event_emitter_stub import (
    RecordedRequestEvent,
    RequestEventEmitterStub,
)

__all__ = [
    "MetadataRequestRepositoryStub",
    "OwnerResolverStub",
    "RecordedRequestEvent",
    "RequestApplierStub",
    "RequestEventEmitterStub",
    "UnknownCollectionError",
]
