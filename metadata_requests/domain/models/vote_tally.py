"""Vote tally modes for sub-request aggregation.

ADDITIVE keeps the original behaviour: every vote adds its weight and
repeated votes by the same identity are counted again. LAST_WRITE_WINS
keeps only each voter's most recent ballot and recomputes the tallies as
a sum over those ballots, which makes re-voting idempotent per voter.
"""

from __future__ import annotations

from enum import Enum


class VoteTallyMode(str, Enum):
    """How repeated votes on a sub-request are combined."""

    ADDITIVE = "additive"
    LAST_WRITE_WINS = "last_write_wins"
