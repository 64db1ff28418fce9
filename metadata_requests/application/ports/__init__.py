"""Application ports (interfaces) for metadata requests.

Ports define the contracts between the application layer and the
infrastructure adapters that implement them.
"""

from metadata_requests.application.ports.metadata_request_repository import (
    MetadataRequestRepositoryProtocol,
)
from metadata_requests.application.ports.owner_resolver import OwnerResolverProtocol
from metadata_requests.application.ports.request_applier import RequestApplierProtocol
from metadata_requests.application.ports.request_event_emitter import (
    RequestEventEmitterPort,
)
from metadata_requests.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "MetadataRequestRepositoryProtocol",
    "OwnerResolverProtocol",
    "RequestApplierProtocol",
    "RequestEventEmitterPort",
    "TimeAuthorityProtocol",
]
