"""Voting & Tipping Enforcement — one vote per (target, voter), no self-tips.

Invariants:
    - All functions are PURE: no IO, no state mutation
    - A VoteRecord, once present, is never overwritten (AlreadyVoted)
    - Tips must be positive and may not go to the sender's own content
    - Tip check order: amount, target exists, self-tip
"""

from stakethread.core.domain_types import Principal, TargetKind, VoteKey
from stakethread.core.errors import (
    AlreadyVotedError, InvalidTipError, NotFoundError, ProtocolError, SelfTipError,
)
from stakethread.core.ledger_records import Reply, Thread, VoteRecord


def check_target_exists(
    kind: TargetKind, target_id: int, target: Thread | Reply | None,
) -> NotFoundError | None:
    if target is None:
        return NotFoundError(kind.value.capitalize(), target_id)
    return None


def check_not_voted(key: VoteKey, existing: VoteRecord | None) -> AlreadyVotedError | None:
    if existing is not None:
        return AlreadyVotedError(key.target_kind.value, key.target_id, key.voter)
    return None


def check_tip_amount(amount: int) -> InvalidTipError | None:
    if amount <= 0:
        return InvalidTipError(amount)
    return None


def check_not_self_tip(sender: Principal, target: Thread | Reply) -> SelfTipError | None:
    if target.author == sender:
        return SelfTipError(sender)
    return None


def validate_vote(
    key: VoteKey, target: Thread | Reply | None, existing: VoteRecord | None,
) -> ProtocolError | None:
    return (
        check_target_exists(key.target_kind, key.target_id, target)
        or check_not_voted(key, existing)
    )


def validate_tip(
    sender: Principal,
    kind: TargetKind,
    target_id: int,
    target: Thread | Reply | None,
    amount: int,
) -> ProtocolError | None:
    return (
        check_tip_amount(amount)
        or check_target_exists(kind, target_id, target)
        or check_not_self_tip(sender, target)
    )
