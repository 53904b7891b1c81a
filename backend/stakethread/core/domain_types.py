"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ThreadId and ReplyId are positive ints allocated from separate global sequences
    - Principal is an opaque identity string supplied by the ledger (never parsed)
    - BlockHeight is the only notion of time inside the core
    - All amounts are non-negative ints in minor units — no floats anywhere

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Composite keys as NamedTuples: hashable, ordered, self-describing in logs
"""

from enum import Enum
from typing import NamedTuple, NewType


# ─── Identity Types ──────────────────────────────────────────────

ThreadId = NewType("ThreadId", int)
ReplyId = NewType("ReplyId", int)
Principal = NewType("Principal", str)


# ─── Value Types ─────────────────────────────────────────────────

BlockHeight = NewType("BlockHeight", int)


# ─── Enums ───────────────────────────────────────────────────────

class TargetKind(str, Enum):
    """What a vote or tip points at — threads and replies have separate id spaces."""
    THREAD = "thread"
    REPLY = "reply"


class LedgerTable(str, Enum):
    """Keyed tables of the ledger state — maps 1:1 to persisted tables."""
    THREADS = "threads"
    REPLIES = "replies"
    REPUTATIONS = "user_reputations"
    STAKES = "stakes"
    PREMIUM_ACCESS = "premium_access_grants"
    VOTES = "votes"
    BOOSTS = "thread_boosts"
    BALANCES = "native_balances"


# ─── Composite Keys ──────────────────────────────────────────────

class PremiumAccessKey(NamedTuple):
    thread_id: ThreadId
    user: Principal


class VoteKey(NamedTuple):
    target_kind: TargetKind
    target_id: int
    voter: Principal


# ─── Protocol Constants ──────────────────────────────────────────

MAX_TITLE_LENGTH: int = 256
MAX_THREAD_CONTENT_LENGTH: int = 2048
MAX_REPLY_CONTENT_LENGTH: int = 1024
MAX_BOOSTERS_PER_THREAD: int = 20

BASIS_POINTS_DENOMINATOR: int = 10_000
DEFAULT_MIN_STAKE_AMOUNT: int = 1_000_000
DEFAULT_PLATFORM_FEE_RATE: int = 250  # 2.5%
MAX_AMOUNT: int = 2**63 - 1  # BIGINT column ceiling

# Reputation weights
UPVOTE_WEIGHT: int = 10
THREAD_WEIGHT: int = 5
REPLY_WEIGHT: int = 2
DOWNVOTE_PENALTY_PERCENT: int = 5
