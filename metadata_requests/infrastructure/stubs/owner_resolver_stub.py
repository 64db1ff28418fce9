"""Owner resolver stub implementation.

In-memory mapping of collection reference to owner identity. Ownership
can be transferred at any time to exercise owner changes between calls.
"""

from __future__ import annotations

from metadata_requests.application.ports.owner_resolver import OwnerResolverProtocol


class UnknownCollectionError(LookupError):
    """Raised when a collection has no registered owner."""

    def __init__(self, collection_ref: str) -> None:
        self.collection_ref = collection_ref
        super().__init__(f"No owner registered for collection {collection_ref}")


class OwnerResolverStub(OwnerResolverProtocol):
    """In-memory implementation of OwnerResolverProtocol.

    Attributes:
        _owners: Mapping of collection reference to current owner.
        lookups: Collection references resolved so far, in call order.

    Example:
        resolver = OwnerResolverStub({"0xcollection": "0xowner"})
        resolver.transfer("0xcollection", "0xnew-owner")
        assert resolver.resolve_owner("0xcollection") == "0xnew-owner"
    """

    def __init__(self, owners: dict[str, str] | None = None) -> None:
        self._owners: dict[str, str] = dict(owners or {})
        self.lookups: list[str] = []

    def resolve_owner(self, collection_ref: str) -> str:
        """Return the current owner of a collection.

        Raises:
            UnknownCollectionError: If no owner is registered.
        """
        self.lookups.append(collection_ref)
        try:
            return self._owners[collection_ref]
        except KeyError:
            raise UnknownCollectionError(collection_ref) from None

    def set_owner(self, collection_ref: str, owner: str) -> None:
        """Register the owner of a collection."""
        self._owners[collection_ref] = owner

    def transfer(self, collection_ref: str, new_owner: str) -> None:
        """Transfer ownership of an existing collection.

        Raises:
            UnknownCollectionError: If the collection is not registered.
        """
        if collection_ref not in self._owners:
            raise UnknownCollectionError(collection_ref)
        self._owners[collection_ref] = new_owner
