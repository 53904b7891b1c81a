"""Ledger State — the committed, process-wide state of the discussion protocol.

Invariants:
    - Mutated only by LedgerTransaction.commit() (core/ledger_transaction.py)
    - thread_nonce / reply_nonce equal the highest id ever issued (0 = none yet)
    - last_block_height never decreases
    - Tables never delete records; every write is an insert or an overwrite

Design Decisions:
    - One explicit state object instead of module globals; the service owns the single instance
    - Plain dicts keyed by id / composite key: O(1) gate checks
"""

from dataclasses import dataclass, field

from stakethread.core.domain_types import (
    BlockHeight, LedgerTable, Principal, ReplyId, ThreadId,
    PremiumAccessKey, VoteKey,
    DEFAULT_MIN_STAKE_AMOUNT, DEFAULT_PLATFORM_FEE_RATE,
)
from stakethread.core.ledger_records import (
    PremiumAccessGrant, ProtocolConfig, Reply, Stake, Thread, ThreadBoost,
    UserReputation, VoteRecord,
)

_TABLE_ATTRS: dict[LedgerTable, str] = {
    LedgerTable.THREADS: "threads",
    LedgerTable.REPLIES: "replies",
    LedgerTable.REPUTATIONS: "reputations",
    LedgerTable.STAKES: "stakes",
    LedgerTable.PREMIUM_ACCESS: "premium_access",
    LedgerTable.VOTES: "votes",
    LedgerTable.BOOSTS: "boosts",
    LedgerTable.BALANCES: "balances",
}


@dataclass
class LedgerState:
    """All keyed tables plus counters and config."""

    config: ProtocolConfig

    # === Sequences ===
    thread_nonce: int = 0
    reply_nonce: int = 0
    last_block_height: BlockHeight = BlockHeight(0)

    # === Tables ===
    threads: dict[ThreadId, Thread] = field(default_factory=dict)
    replies: dict[ReplyId, Reply] = field(default_factory=dict)
    reputations: dict[Principal, UserReputation] = field(default_factory=dict)
    stakes: dict[Principal, Stake] = field(default_factory=dict)
    premium_access: dict[PremiumAccessKey, PremiumAccessGrant] = field(default_factory=dict)
    votes: dict[VoteKey, VoteRecord] = field(default_factory=dict)
    boosts: dict[ThreadId, ThreadBoost] = field(default_factory=dict)

    # Native balances — stand-in for the ledger's value-transfer primitive
    balances: dict[Principal, int] = field(default_factory=dict)

    @classmethod
    def genesis(
        cls,
        owner: str,
        platform_treasury: str | None = None,
        stake_escrow: str = "stakethread.escrow",
        min_stake_amount: int = DEFAULT_MIN_STAKE_AMOUNT,
        platform_fee_rate: int = DEFAULT_PLATFORM_FEE_RATE,
        balances: dict[str, int] | None = None,
    ) -> "LedgerState":
        """Fresh state as deployed by `owner`. Treasury defaults to the owner."""
        config = ProtocolConfig(
            owner=Principal(owner),
            platform_treasury=Principal(platform_treasury or owner),
            stake_escrow=Principal(stake_escrow),
            min_stake_amount=min_stake_amount,
            platform_fee_rate=platform_fee_rate,
        )
        return cls(
            config=config,
            balances={Principal(k): v for k, v in (balances or {}).items()},
        )

    def table(self, name: LedgerTable) -> dict:
        """Backing dict for a named table."""
        return getattr(self, _TABLE_ATTRS[name])

    @property
    def thread_count(self) -> int:
        return self.thread_nonce

    @property
    def reply_count(self) -> int:
        return self.reply_nonce
