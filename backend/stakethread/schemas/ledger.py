"""Ledger Schemas — public read models for threads, replies, users and config.

Invariants:
    - Read models mirror core records field-for-field (from_attributes=True)
    - Every amount is an int in minor units
"""

from pydantic import BaseModel, ConfigDict

from stakethread.core.domain_types import TargetKind


class _RecordModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ThreadResponse(_RecordModel):
    id: int
    author: str
    title: str
    content: str
    is_premium: bool
    premium_price: int
    created_at: int
    upvotes: int
    downvotes: int
    tips_received: int
    is_locked: bool
    reply_count: int


class ReplyResponse(_RecordModel):
    id: int
    thread_id: int
    author: str
    content: str
    created_at: int
    upvotes: int
    downvotes: int
    tips_received: int
    parent_reply_id: int | None = None


class ReputationResponse(_RecordModel):
    principal: str
    total_upvotes: int
    total_downvotes: int
    threads_created: int
    replies_created: int
    tips_sent: int
    tips_received: int
    staked_amount: int
    reputation_score: int


class StakeResponse(BaseModel):
    principal: str
    amount: int
    locked_until: int
    is_staked: bool


class VoteResponse(_RecordModel):
    target_kind: TargetKind
    target_id: int
    voter: str
    is_upvote: bool


class BoostResponse(_RecordModel):
    thread_id: int
    boost_amount: int
    boosters: list[str]


class ProtocolConfigResponse(_RecordModel):
    owner: str
    platform_treasury: str
    stake_escrow: str
    min_stake_amount: int
    platform_fee_rate: int


class CountResponse(BaseModel):
    count: int
