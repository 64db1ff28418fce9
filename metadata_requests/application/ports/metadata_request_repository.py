"""Metadata request repository port.

This module defines the abstract interface for the request store: the
mapping of request id to MetadataRequest plus the append-only secondary
indexes by DID and by collection owner.

Store rules:
1. Ids come from a sequence owned by the store, strictly increasing and
   never reused, even when a creation is rolled back.
2. Index entries are appended at creation and never removed afterwards.
3. Records are immutable values: updates replace the stored instance.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from metadata_requests.domain.models.metadata_request import (
    MetadataRequest,
    SubRequest,
)


class MetadataRequestRepositoryProtocol(Protocol):
    """Protocol for metadata request storage operations.

    Methods:
        create: Allocate an id, store a new PENDING request and index it
        get: Retrieve a request by id
        update: Replace an existing request
        discard: Roll back a creation whose event could not be emitted
        list_ids_by_did: Request ids created for a DID
        list_ids_by_owner: Request ids created under an owner
        count: Number of stored requests
    """

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

        Args:
            collection_ref: Collection the request concerns.
            subject_id: DID of the asset record.
            requester: Identity creating the request.
            owner: Collection owner at creation time (index key).
            sub_requests: Sub-requests, non-empty.
            created_at: Creation timestamp.
            expires_at: End of the voting window.

        Returns:
            The stored request, carrying its allocated id.
        """
        ...

    def get(self, request_id: int) -> MetadataRequest | None:
        """Retrieve a request by id.

        Returns:
            The request if found, None otherwise.
        """
        ...

    def update(self, request: MetadataRequest) -> None:
        """Replace a stored request with a new version.

        Raises:
            RequestNotFoundError: If the request doesn't exist.
        """
        ...

    def discard(self, request_id: int) -> None:
        """Remove a request created in the current call and its index entries.

        Only used to roll back a creation that never became observable.
        The id is not handed out again.
        """
        ...

    def list_ids_by_did(self, subject_id: str) -> list[int]:
        """Return request ids for a DID in creation order."""
        ...

    def list_ids_by_owner(self, owner: str) -> list[int]:
        """Return request ids indexed under an owner in creation order."""
        ...

    def count(self) -> int:
        """Return the number of stored requests."""
        ...
