"""Metadata request repository stub implementation.

This module provides an in-memory implementation of
MetadataRequestRepositoryProtocol: the request store with its id
sequence and its append-only indexes by DID and by owner.
"""

from __future__ import annotations

import itertools
from collections import defaultdict
from collections.abc import Sequence
from datetime import datetime

from structlog import get_logger

from metadata_requests.application.ports.metadata_request_repository import (
    MetadataRequestRepositoryProtocol,
)
from metadata_requests.domain.errors.request import RequestNotFoundError
from metadata_requests.domain.models.metadata_request import (
    MetadataRequest,
    SubRequest,
)

logger = get_logger()


class MetadataRequestRepositoryStub(MetadataRequestRepositoryProtocol):
    """In-memory implementation of MetadataRequestRepositoryProtocol.

    Ids come from a private sequence that is only advanced by create(),
    so an id is never handed out twice, even after discard().

    Attributes:
        _requests: Mapping of request id to the current record.
        _ids_by_did: Append-only index of request ids per DID.
        _ids_by_owner: Append-only index of request ids per owner.
    """

    def __init__(self, first_id: int = 1) -> None:
        """Initialize the stub with empty storage.

        Args:
            first_id: Id given to the first request created.
        """
        self._requests: dict[int, MetadataRequest] = {}
        self._ids_by_did: defaultdict[str, list[int]] = defaultdict(list)
        self._ids_by_owner: defaultdict[str, list[int]] = defaultdict(list)
        self._sequence = itertools.count(first_id)

    def create(
        self,
        *,
        collection_ref: str,
        subject_id: str,
        requester: str,
        owner: str,
        sub_requests: Sequence[SubRequest],
        created_at: datetime,
        expires_at: datetime,
    ) -> MetadataRequest:
        """Store a new PENDING request under the next id.

        An id consumed by a record that fails validation is skipped.
        """
        request_id = next(self._sequence)
        request = MetadataRequest(
            id=request_id,
            collection_ref=collection_ref,
            subject_id=subject_id,
            requester=requester,
            owner=owner,
            sub_requests=tuple(sub_requests),
            created_at=created_at,
            expires_at=expires_at,
        )
        self._requests[request_id] = request
        self._ids_by_did[subject_id].append(request_id)
        self._ids_by_owner[owner].append(request_id)
        return request

    def get(self, request_id: int) -> MetadataRequest | None:
        return self._requests.get(request_id)

    def update(self, request: MetadataRequest) -> None:
        """Replace a stored request with a new version.

        Raises:
            RequestNotFoundError: If the request doesn't exist.
        """
        if request.id not in self._requests:
            raise RequestNotFoundError(request.id)
        self._requests[request.id] = request

    def discard(self, request_id: int) -> None:
        """Remove an uncommitted creation and its index entries."""
        request = self._requests.pop(request_id, None)
        if request is None:
            return
        self._ids_by_did[request.subject_id].remove(request_id)
        self._ids_by_owner[request.owner].remove(request_id)
        logger.warning("request_creation_discarded", request_id=request_id)

    def list_ids_by_did(self, subject_id: str) -> list[int]:
        return list(self._ids_by_did.get(subject_id, []))

    def list_ids_by_owner(self, owner: str) -> list[int]:
        return list(self._ids_by_owner.get(owner, []))

    def count(self) -> int:
        return len(self._requests)

    def clear(self) -> None:
        """Clear all requests and indexes (for testing).

        The id sequence is not reset.
        """
        self._requests.clear()
        self._ids_by_did.clear()
        self._ids_by_owner.clear()
