"""Action Schemas — Pydantic models for transactions submitted to the ledger.

Invariants:
    - Every action carries a Literal `type`; TransactionEnvelope.action is a
      discriminated union over them
    - Text fields are bounded here AND re-checked by the core; emptiness is left
      to the core so it surfaces as the protocol's InvalidAmount kind
    - Amounts are non-negative ints; zero is left to the core for the same reason

Design Decisions:
    - Literal discriminators over a str Enum: Pydantic validates and routes natively
    - sender and block_height on the envelope, not the action: both are supplied by
      the sequencing ledger, never chosen by the action itself
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from stakethread.core.domain_types import (
    TargetKind,
    MAX_AMOUNT, MAX_TITLE_LENGTH, MAX_THREAD_CONTENT_LENGTH, MAX_REPLY_CONTENT_LENGTH,
)


# --- Threads & replies --------------------------------------------------------

class CreateThreadAction(BaseModel):
    type: Literal["create_thread"] = "create_thread"
    title: str = Field(max_length=MAX_TITLE_LENGTH)
    content: str = Field(max_length=MAX_THREAD_CONTENT_LENGTH)
    is_premium: bool = False
    premium_price: int = Field(0, ge=0, le=MAX_AMOUNT)


class CreateReplyAction(BaseModel):
    type: Literal["create_reply"] = "create_reply"
    thread_id: int = Field(ge=1)
    content: str = Field(max_length=MAX_REPLY_CONTENT_LENGTH)
    parent_reply_id: int | None = Field(None, ge=1)


class LockThreadAction(BaseModel):
    type: Literal["lock_thread"] = "lock_thread"
    thread_id: int = Field(ge=1)


class UnlockThreadAction(BaseModel):
    type: Literal["unlock_thread"] = "unlock_thread"
    thread_id: int = Field(ge=1)


# --- Premium, votes, tips -----------------------------------------------------

class PurchasePremiumAccessAction(BaseModel):
    type: Literal["purchase_premium_access"] = "purchase_premium_access"
    thread_id: int = Field(ge=1)


class VoteAction(BaseModel):
    type: Literal["vote"] = "vote"
    target_kind: TargetKind
    target_id: int = Field(ge=1)
    upvote: bool


class TipAction(BaseModel):
    type: Literal["tip"] = "tip"
    target_kind: TargetKind
    target_id: int = Field(ge=1)
    amount: int = Field(ge=0, le=MAX_AMOUNT)


# --- Staking ------------------------------------------------------------------

class StakeAction(BaseModel):
    type: Literal["stake"] = "stake"
    amount: int = Field(ge=0, le=MAX_AMOUNT)
    lock_period: int = Field(0, ge=0, le=MAX_AMOUNT)


class UnstakeAction(BaseModel):
    type: Literal["unstake"] = "unstake"


# --- Protocol administration --------------------------------------------------

class SetMinStakeAmountAction(BaseModel):
    type: Literal["set_min_stake_amount"] = "set_min_stake_amount"
    amount: int = Field(ge=0, le=MAX_AMOUNT)


class SetPlatformFeeRateAction(BaseModel):
    type: Literal["set_platform_fee_rate"] = "set_platform_fee_rate"
    fee_rate: int = Field(ge=0, le=MAX_AMOUNT)


class SetPlatformTreasuryAction(BaseModel):
    type: Literal["set_platform_treasury"] = "set_platform_treasury"
    treasury: str = Field(max_length=128)


LedgerAction = Annotated[
    Union[
        CreateThreadAction,
        CreateReplyAction,
        LockThreadAction,
        UnlockThreadAction,
        PurchasePremiumAccessAction,
        VoteAction,
        TipAction,
        StakeAction,
        UnstakeAction,
        SetMinStakeAmountAction,
        SetPlatformFeeRateAction,
        SetPlatformTreasuryAction,
    ],
    Field(discriminator="type"),
]


class TransactionEnvelope(BaseModel):
    """One sequenced transaction: who sent it, at which height, doing what."""
    sender: str = Field(min_length=1, max_length=128)
    block_height: int = Field(ge=0, le=MAX_AMOUNT)
    action: LedgerAction


class TransactionReceipt(BaseModel):
    """Result of a committed transaction."""
    status: Literal["ok"] = "ok"
    action: str
    sender: str
    block_height: int
    result: int | bool | str | dict | None = None
