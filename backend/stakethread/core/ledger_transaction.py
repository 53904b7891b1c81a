"""Ledger Transaction — write-ahead buffer that makes every entry point atomic.

Invariants:
    - Reads see staged writes first, then committed state (read-your-writes)
    - Nothing reaches LedgerState until commit(); dropping the object is a full abort
    - A transaction commits at most once; further writes after commit raise
    - transfer() checks the sender's staged balance and raises InsufficientBalanceError
      before staging anything, so a failed transfer leaves the buffer as it was
    - Zero-amount and self transfers move nothing and always succeed

Design Decisions:
    - Buffer over copy-on-write: cost is proportional to the writes, not the state size
    - changes() is separate from commit(): the shell persists the change set first,
      then publishes it in memory only once the database accepted it
"""

from dataclasses import dataclass, field

from stakethread.core.domain_types import (
    BlockHeight, LedgerTable, Principal, ReplyId, TargetKind, ThreadId,
    PremiumAccessKey, VoteKey,
)
from stakethread.core.errors import InsufficientBalanceError, InvalidAmountError
from stakethread.core.ledger_records import (
    PremiumAccessGrant, ProtocolConfig, Reply, Stake, Thread,
    UserReputation, VoteRecord,
)
from stakethread.core.ledger_state import LedgerState


@dataclass
class ChangeSet:
    """Everything one transaction wrote — the unit of persistence."""
    writes: dict[LedgerTable, dict] = field(default_factory=dict)
    thread_nonce: int = 0
    reply_nonce: int = 0
    last_block_height: BlockHeight = BlockHeight(0)
    config: ProtocolConfig | None = None

    @classmethod
    def from_state(cls, state: LedgerState) -> "ChangeSet":
        """Every record of a state, e.g. to persist a freshly built genesis."""
        return cls(
            writes={t: dict(state.table(t)) for t in LedgerTable if state.table(t)},
            thread_nonce=state.thread_nonce,
            reply_nonce=state.reply_nonce,
            last_block_height=state.last_block_height,
            config=state.config,
        )

    @property
    def record_count(self) -> int:
        return sum(len(rows) for rows in self.writes.values())

    def rows(self, table: LedgerTable) -> dict:
        return self.writes.get(table, {})


class LedgerTransaction:
    """Staged view of LedgerState for one sender at one block height."""

    def __init__(
        self, state: LedgerState, sender: Principal, block_height: BlockHeight,
    ):
        self._state = state
        self.sender = sender
        self.now = block_height
        self.config = state.config
        self.thread_nonce = state.thread_nonce
        self.reply_nonce = state.reply_nonce
        self._writes: dict[LedgerTable, dict] = {t: {} for t in LedgerTable}
        self._committed = False

    # --- Generic table access ---------------------------------------------------

    def read(self, table: LedgerTable, key, default=None):
        staged = self._writes[table]
        if key in staged:
            return staged[key]
        return self._state.table(table).get(key, default)

    def write(self, table: LedgerTable, key, value) -> None:
        if self._committed:
            raise RuntimeError("Transaction already committed")
        self._writes[table][key] = value

    # --- Typed reads ------------------------------------------------------------

    def thread(self, thread_id: ThreadId) -> Thread | None:
        return self.read(LedgerTable.THREADS, thread_id)

    def reply(self, reply_id: ReplyId) -> Reply | None:
        return self.read(LedgerTable.REPLIES, reply_id)

    def target(self, kind: TargetKind, target_id: int) -> Thread | Reply | None:
        """Thread or reply addressed by a vote or tip."""
        if kind == TargetKind.THREAD:
            return self.thread(ThreadId(target_id))
        return self.reply(ReplyId(target_id))

    def reputation(self, principal: Principal) -> UserReputation:
        return self.read(
            LedgerTable.REPUTATIONS, principal,
        ) or UserReputation.empty(principal)

    def stake(self, principal: Principal) -> Stake | None:
        return self.read(LedgerTable.STAKES, principal)

    def balance(self, principal: Principal) -> int:
        return self.read(LedgerTable.BALANCES, principal, 0)

    def grant(self, thread_id: ThreadId, user: Principal) -> PremiumAccessGrant | None:
        return self.read(LedgerTable.PREMIUM_ACCESS, PremiumAccessKey(thread_id, user))

    def vote_record(self, key: VoteKey) -> VoteRecord | None:
        return self.read(LedgerTable.VOTES, key)

    # --- Typed writes -----------------------------------------------------------

    def put_thread(self, thread: Thread) -> None:
        self.write(LedgerTable.THREADS, thread.id, thread)

    def put_reply(self, reply: Reply) -> None:
        self.write(LedgerTable.REPLIES, reply.id, reply)

    def put_target(self, record: Thread | Reply) -> None:
        if isinstance(record, Thread):
            self.put_thread(record)
        else:
            self.put_reply(record)

    def put_reputation(self, reputation: UserReputation) -> None:
        self.write(LedgerTable.REPUTATIONS, reputation.principal, reputation)

    def put_stake(self, stake: Stake) -> None:
        self.write(LedgerTable.STAKES, stake.principal, stake)

    def put_grant(self, grant: PremiumAccessGrant) -> None:
        self.write(LedgerTable.PREMIUM_ACCESS, grant.key, grant)

    def put_vote(self, vote: VoteRecord) -> None:
        self.write(LedgerTable.VOTES, vote.key, vote)

    def set_config(self, config: ProtocolConfig) -> None:
        if self._committed:
            raise RuntimeError("Transaction already committed")
        self.config = config

    # --- Sequences --------------------------------------------------------------

    def next_thread_id(self) -> ThreadId:
        self.thread_nonce += 1
        return ThreadId(self.thread_nonce)

    def next_reply_id(self) -> ReplyId:
        self.reply_nonce += 1
        return ReplyId(self.reply_nonce)

    # --- Value transfer ---------------------------------------------------------

    def transfer(self, sender: Principal, recipient: Principal, amount: int) -> None:
        """Move `amount` native units. All-or-nothing."""
        if amount < 0:
            raise InvalidAmountError(
                f"Transfer amount must be non-negative, got {amount}", "amount",
            )
        if amount == 0 or sender == recipient:
            return
        available = self.balance(sender)
        if available < amount:
            raise InsufficientBalanceError(sender, amount, available)
        self.write(LedgerTable.BALANCES, sender, available - amount)
        self.write(LedgerTable.BALANCES, recipient, self.balance(recipient) + amount)

    # --- Completion -------------------------------------------------------------

    @property
    def committed(self) -> bool:
        return self._committed

    def changes(self) -> ChangeSet:
        """Snapshot of staged writes. Does not publish anything."""
        return ChangeSet(
            writes={t: dict(rows) for t, rows in self._writes.items() if rows},
            thread_nonce=self.thread_nonce,
            reply_nonce=self.reply_nonce,
            last_block_height=max(self.now, self._state.last_block_height),
            config=self.config,
        )

    def commit(self) -> ChangeSet:
        """Publish staged writes to the committed state."""
        if self._committed:
            raise RuntimeError("Transaction already committed")
        changes = self.changes()
        for table, rows in changes.writes.items():
            self._state.table(table).update(rows)
        self._state.thread_nonce = changes.thread_nonce
        self._state.reply_nonce = changes.reply_nonce
        self._state.last_block_height = changes.last_block_height
        self._state.config = self.config
        self._committed = True
        return changes
