"""Ledger Records — immutable value types stored in the ledger tables.

Invariants:
    - Every record is a frozen dataclass; updates go through dataclasses.replace
    - Records carry their own key fields so they can be persisted without a side-channel
    - Reply.parent_reply_id is None when the reply answers the thread directly
    - UserReputation.empty() is the value read for identities with no record

Design Decisions:
    - Frozen records: a staged write can never leak into committed state through aliasing
    - Counter helpers return new records; score recomputation lives in core/reputation.py
"""

from dataclasses import dataclass, field, replace

from stakethread.core.domain_types import (
    BlockHeight, Principal, ReplyId, TargetKind, ThreadId,
    PremiumAccessKey, VoteKey,
    DEFAULT_MIN_STAKE_AMOUNT, DEFAULT_PLATFORM_FEE_RATE, MAX_BOOSTERS_PER_THREAD,
)


@dataclass(frozen=True)
class Thread:
    """Top-level discussion post."""
    id: ThreadId
    author: Principal
    title: str
    content: str
    is_premium: bool
    premium_price: int
    created_at: BlockHeight
    upvotes: int = 0
    downvotes: int = 0
    tips_received: int = 0
    is_locked: bool = False
    reply_count: int = 0


@dataclass(frozen=True)
class Reply:
    """Response to a thread or to another reply in the same thread."""
    id: ReplyId
    thread_id: ThreadId
    author: Principal
    content: str
    created_at: BlockHeight
    upvotes: int = 0
    downvotes: int = 0
    tips_received: int = 0
    parent_reply_id: ReplyId | None = None


@dataclass(frozen=True)
class UserReputation:
    """Per-identity activity counters and the derived score."""
    principal: Principal
    total_upvotes: int = 0
    total_downvotes: int = 0
    threads_created: int = 0
    replies_created: int = 0
    tips_sent: int = 0
    tips_received: int = 0
    staked_amount: int = 0
    reputation_score: int = 0

    @classmethod
    def empty(cls, principal: Principal) -> "UserReputation":
        return cls(principal=principal)


@dataclass(frozen=True)
class Stake:
    principal: Principal
    amount: int
    locked_until: BlockHeight


@dataclass(frozen=True)
class PremiumAccessGrant:
    """Permanent unlock of one premium thread for one identity."""
    thread_id: ThreadId
    user: Principal
    purchased_at: BlockHeight

    @property
    def key(self) -> PremiumAccessKey:
        return PremiumAccessKey(self.thread_id, self.user)


@dataclass(frozen=True)
class VoteRecord:
    target_kind: TargetKind
    target_id: int
    voter: Principal
    is_upvote: bool

    @property
    def key(self) -> VoteKey:
        return VoteKey(self.target_kind, self.target_id, self.voter)


@dataclass(frozen=True)
class ThreadBoost:
    """Stored amplification record. No operation writes it yet."""
    thread_id: ThreadId
    boost_amount: int = 0
    boosters: tuple[Principal, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if len(self.boosters) > MAX_BOOSTERS_PER_THREAD:
            raise ValueError(
                f"A thread holds at most {MAX_BOOSTERS_PER_THREAD} boosters",
            )


@dataclass(frozen=True)
class ProtocolConfig:
    """Owner-mutable protocol parameters."""
    owner: Principal
    platform_treasury: Principal
    stake_escrow: Principal
    min_stake_amount: int = DEFAULT_MIN_STAKE_AMOUNT
    platform_fee_rate: int = DEFAULT_PLATFORM_FEE_RATE


# ─── Counter helpers ────────────────────────────────────────────

def with_vote(record, is_upvote: bool):
    """Return a Thread or Reply with one more up- or downvote."""
    if is_upvote:
        return replace(record, upvotes=record.upvotes + 1)
    return replace(record, downvotes=record.downvotes + 1)


def with_tip(record, amount: int):
    """Return a Thread or Reply with `amount` added to tips_received."""
    return replace(record, tips_received=record.tips_received + amount)
