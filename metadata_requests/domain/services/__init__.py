"""Domain services for metadata change requests.

Domain services contain business logic that doesn't naturally fit in
entities or value objects. They must NOT depend on infrastructure.

Available services:
- cast_ballot: Record a vote against a sub-request under a tally mode
- compute_tally: Recompute yes/no weight from a ballot history
- resolve_outcome: Turn sub-request tallies into a terminal status
"""

from metadata_requests.domain.services.vote_aggregation import (
    cast_ballot,
    compute_tally,
    latest_ballots,
    resolve_outcome,
)

__all__ = [
    "cast_ballot",
    "compute_tally",
    "latest_ballots",
    "resolve_outcome",
]
