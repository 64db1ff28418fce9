"""Bootstrap wiring for metadata request dependencies."""

from __future__ import annotations

from structlog import get_logger

from metadata_requests.application.ports.metadata_request_repository import (
    MetadataRequestRepositoryProtocol,
)
from metadata_requests.application.ports.owner_resolver import OwnerResolverProtocol
from metadata_requests.application.ports.request_applier import RequestApplierProtocol
from metadata_requests.application.ports.request_event_emitter import (
    RequestEventEmitterPort,
)
from metadata_requests.application.ports.time_authority import TimeAuthorityProtocol
from metadata_requests.application.services.metadata_request_service import (
    MetadataRequestService,
)
from metadata_requests.config.request_config import MetadataRequestConfig
from metadata_requests.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
from metadata_requests.infrastructure.stubs.metadata_request_repository_stub import (
    MetadataRequestRepositoryStub,
)
from metadata_requests.infrastructure.stubs.owner_resolver_stub import (
    OwnerResolverStub,
)
from metadata_requests.infrastructure.stubs.request_event_emitter_stub import (
    RequestEventEmitterStub,
)

logger = get_logger()

_repository: MetadataRequestRepositoryProtocol | None = None
_owner_resolver: OwnerResolverProtocol | None = None
_time_authority: TimeAuthorityProtocol | None = None
_event_emitter: RequestEventEmitterPort | None = None
_applier: RequestApplierProtocol | None = None
_config: MetadataRequestConfig | None = None
_service: MetadataRequestService | None = None


def get_metadata_request_repository() -> MetadataRequestRepositoryProtocol:
    """Get request store instance.

    Only the in-memory store is available; records do not survive a restart.
    """
    global _repository
    if _repository is None:
        logger.warning(
            "metadata_request_repository_initialized",
            repository_type="InMemoryStub",
            message="Using in-memory request store (data will not persist)",
        )
        _repository = MetadataRequestRepositoryStub()
    return _repository


def get_owner_resolver() -> OwnerResolverProtocol:
    """Get owner resolver instance.

    Defaults to an empty in-memory resolver; register owners on it or
    inject a real resolver with set_owner_resolver().
    """
    global _owner_resolver
    if _owner_resolver is None:
        logger.warning(
            "owner_resolver_initialized",
            resolver_type="InMemoryStub",
            message="No owner resolver configured - using empty in-memory resolver",
        )
        _owner_resolver = OwnerResolverStub()
    return _owner_resolver


def get_time_authority() -> TimeAuthorityProtocol:
    """Get time authority instance."""
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_request_event_emitter() -> RequestEventEmitterPort:
    """Get request event emitter instance."""
    global _event_emitter
    if _event_emitter is None:
        _event_emitter = RequestEventEmitterStub(time_authority=get_time_authority())
    return _event_emitter


def get_request_applier() -> RequestApplierProtocol | None:
    """Get request applier, None until one is injected."""
    return _applier


def get_metadata_request_config() -> MetadataRequestConfig:
    """Get metadata request configuration."""
    global _config
    if _config is None:
        _config = MetadataRequestConfig.from_environment()
        logger.info(
            "metadata_request_config_loaded",
            ttl_seconds=_config.ttl_seconds,
            vote_tally_mode=_config.vote_tally_mode.value,
        )
    return _config


def get_metadata_request_service() -> MetadataRequestService:
    """Get the metadata request service wired with the current dependencies."""
    global _service
    if _service is None:
        _service = MetadataRequestService(
            repository=get_metadata_request_repository(),
            owner_resolver=get_owner_resolver(),
            time_authority=get_time_authority(),
            event_emitter=get_request_event_emitter(),
            applier=get_request_applier(),
            config=get_metadata_request_config(),
        )
    return _service


def reset_metadata_request_dependencies() -> None:
    """Reset metadata request dependency singletons."""
    global _repository
    global _owner_resolver
    global _time_authority
    global _event_emitter
    global _applier
    global _config
    global _service

    _repository = None
    _owner_resolver = None
    _time_authority = None
    _event_emitter = None
    _applier = None
    _config = None
    _service = None


def set_metadata_request_repository(repo: MetadataRequestRepositoryProtocol) -> None:
    """Set custom request store."""
    global _repository, _service
    _repository = repo
    _service = None


def set_owner_resolver(resolver: OwnerResolverProtocol) -> None:
    """Set custom owner resolver."""
    global _owner_resolver, _service
    _owner_resolver = resolver
    _service = None


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set custom time authority for testing."""
    global _time_authority, _service
    _time_authority = time_authority
    _service = None


def set_request_event_emitter(emitter: RequestEventEmitterPort) -> None:
    """Set custom event emitter."""
    global _event_emitter, _service
    _event_emitter = emitter
    _service = None


def set_request_applier(applier: RequestApplierProtocol | None) -> None:
    """Set the applier used by apply_request."""
    global _applier, _service
    _applier = applier
    _service = None


def set_metadata_request_config(config: MetadataRequestConfig) -> None:
    """Set custom configuration."""
    global _config, _service
    _config = config
    _service = None
