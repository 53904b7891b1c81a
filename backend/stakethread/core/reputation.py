"""Reputation Engine — derives the reputation score from activity counters.

Invariants:
    - compute_reputation_score is PURE and integer-only (floor division)
    - base = upvotes*10 + threads*5 + replies*2
    - score = base when downvotes == 0, else base*100 // (100 + downvotes*5)
    - Tips and stake never enter the score

Design Decisions:
    - Counter bumps return a fresh record with the score already recomputed,
      so no caller can persist counters and a stale score together
"""

from dataclasses import replace

from stakethread.core.domain_types import (
    UPVOTE_WEIGHT, THREAD_WEIGHT, REPLY_WEIGHT, DOWNVOTE_PENALTY_PERCENT,
)
from stakethread.core.ledger_records import UserReputation


def compute_reputation_score(
    upvotes: int, downvotes: int, thread_count: int, reply_count: int,
) -> int:
    """Score from counters. Must stay bit-exact across re-execution."""
    base = (
        upvotes * UPVOTE_WEIGHT
        + thread_count * THREAD_WEIGHT
        + reply_count * REPLY_WEIGHT
    )
    if downvotes == 0:
        return base
    return (base * 100) // (100 + downvotes * DOWNVOTE_PENALTY_PERCENT)


def recompute(reputation: UserReputation) -> UserReputation:
    """Return the record with reputation_score brought in line with its counters."""
    return replace(
        reputation,
        reputation_score=compute_reputation_score(
            reputation.total_upvotes,
            reputation.total_downvotes,
            reputation.threads_created,
            reputation.replies_created,
        ),
    )


def bump(reputation: UserReputation, **increments: int) -> UserReputation:
    """Add increments to named counters, then recompute the score."""
    if "reputation_score" in increments:
        raise ValueError("reputation_score is derived and cannot be incremented")
    changes = {
        name: getattr(reputation, name) + delta
        for name, delta in increments.items()
    }
    return recompute(replace(reputation, **changes))


def with_staked_amount(reputation: UserReputation, amount: int) -> UserReputation:
    return recompute(replace(reputation, staked_amount=amount))
