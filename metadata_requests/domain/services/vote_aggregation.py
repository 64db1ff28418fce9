"""Vote aggregation domain service.

This module holds the pure voting logic for metadata requests:
- Recording a ballot against a sub-request under a tally mode
- Deciding the terminal status of a request from its sub-request tallies

Decision table used by finalize:

    all approved   any approved   status
    ------------   ------------   --------
    True           True           APPROVED
    False          True           RESOLVED
    False          False          REJECTED

A sub-request is approved only when yes_weight > no_weight. Ties are not
approval.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from metadata_requests.domain.models.metadata_request import (
    Ballot,
    RequestStatus,
    SubRequest,
)
from metadata_requests.domain.models.vote_tally import VoteTallyMode


def latest_ballots(ballots: Iterable[Ballot]) -> list[Ballot]:
    """Return each voter's most recent ballot, in first-vote order.

    Args:
        ballots: Ballots in the order they were cast.

    Returns:
        One ballot per voter.
    """
    latest: dict[str, Ballot] = {}
    for ballot in ballots:
        latest[ballot.voter] = ballot
    return list(latest.values())


def compute_tally(
    ballots: Iterable[Ballot],
    mode: VoteTallyMode = VoteTallyMode.ADDITIVE,
) -> tuple[int | float, int | float]:
    """Compute (yes_weight, no_weight) from a ballot history.

    Args:
        ballots: Ballots in the order they were cast.
        mode: How repeated votes by the same voter are combined.

    Returns:
        Tuple of yes and no weight.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2026, 1, 1, tzinfo=timezone.utc)
        >>> history = [Ballot("0xa", True, 3, t), Ballot("0xa", True, 2, t)]
        >>> compute_tally(history)
        (5, 0)
        >>> compute_tally(history, VoteTallyMode.LAST_WRITE_WINS)
        (2, 0)
    """
    if mode == VoteTallyMode.LAST_WRITE_WINS:
        counted: Iterable[Ballot] = latest_ballots(ballots)
    else:
        counted = ballots

    yes_weight: int | float = 0
    no_weight: int | float = 0
    for ballot in counted:
        if ballot.in_favour:
            yes_weight += ballot.weight
        else:
            no_weight += ballot.weight
    return yes_weight, no_weight


def cast_ballot(
    sub_request: SubRequest,
    ballot: Ballot,
    mode: VoteTallyMode = VoteTallyMode.ADDITIVE,
) -> SubRequest:
    """Record a ballot and return the updated sub-request.

    In ADDITIVE mode the ballot weight is added to the matching tally, so
    both tallies only ever grow. In LAST_WRITE_WINS mode the tallies are
    recomputed from each voter's latest ballot.

    Args:
        sub_request: The sub-request being voted on.
        ballot: The vote to record.
        mode: Tally mode.

    Returns:
        New SubRequest with the ballot appended and tallies updated.
    """
    ballots = sub_request.ballots + (ballot,)

    if mode == VoteTallyMode.LAST_WRITE_WINS:
        yes_weight, no_weight = compute_tally(ballots, mode)
    elif ballot.in_favour:
        yes_weight = sub_request.yes_weight + ballot.weight
        no_weight = sub_request.no_weight
    else:
        yes_weight = sub_request.yes_weight
        no_weight = sub_request.no_weight + ballot.weight

    return replace(
        sub_request,
        yes_weight=yes_weight,
        no_weight=no_weight,
        ballots=ballots,
    )


def resolve_outcome(sub_requests: Sequence[SubRequest]) -> RequestStatus:
    """Resolve the terminal status of a request from its sub-requests.

    Args:
        sub_requests: All sub-requests of the request (non-empty).

    Returns:
        APPROVED, RESOLVED or REJECTED according to the decision table.

    Raises:
        ValueError: If sub_requests is empty.
    """
    if not sub_requests:
        raise ValueError("Cannot resolve a request without sub-requests")

    approvals = [s.is_approved for s in sub_requests]
    if all(approvals):
        return RequestStatus.APPROVED
    if any(approvals):
        return RequestStatus.RESOLVED
    return RequestStatus.REJECTED
