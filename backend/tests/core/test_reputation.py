"""Reputation Engine — tests for the integer score formula and counter bumps.

Tests cover:
    - compute_reputation_score weights (upvote 10, thread 5, reply 2)
    - downvote penalty uses floor division, never floats
    - bump() recomputes the score and refuses to touch it directly
    - tips and stake never move the score
"""

import pytest

from stakethread.core.domain_types import Principal
from stakethread.core.ledger_records import UserReputation
from stakethread.core.reputation import (
    bump,
    compute_reputation_score,
    recompute,
    with_staked_amount,
)


# ─── compute_reputation_score ───────────────────────────────────

def test_zero_activity_scores_zero():
    assert compute_reputation_score(0, 0, 0, 0) == 0


@pytest.mark.parametrize(
    "upvotes, threads, replies, expected",
    [(1, 0, 0, 10), (0, 1, 0, 5), (0, 0, 1, 2), (3, 2, 4, 48)],
)
def test_base_score_weights(upvotes, threads, replies, expected):
    assert compute_reputation_score(upvotes, 0, threads, replies) == expected


def test_one_downvote_applies_five_percent_penalty_with_floor():
    # 10 * 100 // 105 = 9 (9.52 truncated)
    assert compute_reputation_score(1, 1, 0, 0) == 9


def test_many_downvotes_shrink_but_never_negative():
    assert compute_reputation_score(10, 100, 0, 0) == 100 * 100 // 600
    assert compute_reputation_score(0, 50, 0, 0) == 0


def test_score_matches_end_to_end_example():
    assert compute_reputation_score(0, 0, 1, 0) == 5
    assert compute_reputation_score(0, 0, 1, 1) == 7


# ─── bump / recompute ───────────────────────────────────────────

def test_bump_increments_counters_and_recomputes():
    rep = UserReputation.empty(Principal("alice"))
    rep = bump(rep, threads_created=1)
    rep = bump(rep, replies_created=1, total_upvotes=2)
    assert rep.threads_created == 1
    assert rep.replies_created == 1
    assert rep.total_upvotes == 2
    assert rep.reputation_score == 2 * 10 + 5 + 2


def test_bump_returns_new_record():
    rep = UserReputation.empty(Principal("alice"))
    bumped = bump(rep, threads_created=1)
    assert rep.threads_created == 0
    assert bumped is not rep


def test_bump_rejects_direct_score_change():
    rep = UserReputation.empty(Principal("alice"))
    with pytest.raises(ValueError):
        bump(rep, reputation_score=100)


def test_tips_do_not_change_score():
    rep = bump(UserReputation.empty(Principal("alice")), threads_created=1)
    tipped = bump(rep, tips_received=500, tips_sent=20)
    assert tipped.reputation_score == rep.reputation_score == 5


def test_stake_does_not_change_score():
    rep = bump(UserReputation.empty(Principal("alice")), replies_created=3)
    staked = with_staked_amount(rep, 1_000_000)
    assert staked.staked_amount == 1_000_000
    assert staked.reputation_score == 6


def test_recompute_repairs_stale_score():
    stale = UserReputation(
        principal=Principal("alice"), total_upvotes=1, reputation_score=999,
    )
    assert recompute(stale).reputation_score == 10
