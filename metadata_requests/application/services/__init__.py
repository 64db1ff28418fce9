"""Application services for metadata requests."""

from metadata_requests.application.services.access_guard import RequestAccessGuard
from metadata_requests.application.services.base import LoggingMixin
from metadata_requests.application.services.metadata_request_service import (
    MetadataRequestService,
)

__all__ = [
    "LoggingMixin",
    "MetadataRequestService",
    "RequestAccessGuard",
]
