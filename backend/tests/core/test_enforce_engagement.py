"""Voting & Tipping Enforcement — tests for vote uniqueness and tip rules.

Tests cover:
    - validate_vote: missing target → NotFound, repeat → AlreadyVoted
    - validate_tip order: InvalidTip, NotFound, SelfTip
"""

from stakethread.core.domain_types import (
    BlockHeight, Principal, ReplyId, TargetKind, ThreadId, VoteKey,
)
from stakethread.core.enforce_engagement import (
    check_target_exists,
    validate_tip,
    validate_vote,
)
from stakethread.core.errors import (
    AlreadyVotedError,
    ErrorKind,
    InvalidTipError,
    NotFoundError,
    SelfTipError,
)
from stakethread.core.ledger_records import Reply, Thread, VoteRecord

ALICE = Principal("alice")
BOB = Principal("bob")
THREAD = Thread(
    id=ThreadId(1), author=ALICE, title="t", content="c",
    is_premium=False, premium_price=0, created_at=BlockHeight(1),
)
REPLY = Reply(
    id=ReplyId(1), thread_id=ThreadId(1), author=BOB, content="r",
    created_at=BlockHeight(2),
)


# ─── votes ───────────────────────────────────────────────────────

def test_not_found_names_the_target_kind():
    error = check_target_exists(TargetKind.REPLY, 3, None)
    assert isinstance(error, NotFoundError)
    assert error.resource_type == "Reply"


def test_first_vote_passes():
    key = VoteKey(TargetKind.THREAD, 1, BOB)
    assert validate_vote(key, THREAD, None) is None


def test_vote_on_missing_target_is_not_found():
    key = VoteKey(TargetKind.THREAD, 2, BOB)
    assert isinstance(validate_vote(key, None, None), NotFoundError)


def test_second_vote_is_already_voted():
    key = VoteKey(TargetKind.THREAD, 1, BOB)
    existing = VoteRecord(TargetKind.THREAD, 1, BOB, is_upvote=True)
    error = validate_vote(key, THREAD, existing)
    assert isinstance(error, AlreadyVotedError)
    assert error.kind == ErrorKind.ALREADY_VOTED
    assert error.voter == BOB


def test_author_may_vote_on_own_content():
    key = VoteKey(TargetKind.THREAD, 1, ALICE)
    assert validate_vote(key, THREAD, None) is None


# ─── tips ────────────────────────────────────────────────────────

def test_zero_tip_is_invalid_before_target_lookup():
    error = validate_tip(BOB, TargetKind.THREAD, 99, None, 0)
    assert isinstance(error, InvalidTipError)


def test_tip_on_missing_target_is_not_found():
    error = validate_tip(BOB, TargetKind.THREAD, 99, None, 10)
    assert isinstance(error, NotFoundError)


def test_tip_to_own_reply_is_self_tip():
    error = validate_tip(BOB, TargetKind.REPLY, 1, REPLY, 10)
    assert isinstance(error, SelfTipError)


def test_tip_to_someone_else_passes():
    assert validate_tip(BOB, TargetKind.THREAD, 1, THREAD, 10) is None
