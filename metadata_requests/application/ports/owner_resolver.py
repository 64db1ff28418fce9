"""Owner resolver port.

Resolves the identity that currently controls a collection. The resolver
is treated as a read-only oracle that is always available: results are
never cached, so an ownership transfer between two calls is picked up on
the next call.
"""

from __future__ import annotations

from typing import Protocol


class OwnerResolverProtocol(Protocol):
    """Protocol for collection owner lookups.

    Methods:
        resolve_owner: Return the current owner of a collection
    """

    def resolve_owner(self, collection_ref: str) -> str:
        """Return the identity currently controlling a collection.

        Args:
            collection_ref: Reference of the collection.

        Returns:
            The owner identity.
        """
        ...
