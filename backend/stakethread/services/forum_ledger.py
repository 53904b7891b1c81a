"""Forum Ledger — synchronous state machine over one LedgerState.

Invariants:
    - Every mutation runs inside exactly one LedgerTransaction; a raised error
      means the transaction is dropped uncommitted and state is unchanged
    - Block heights never go backwards: begin() rejects a height below the last
      committed one (StaleBlockHeightError)
    - Reads never stage anything and never raise for absent records

Design Decisions:
    - begin() is public so the async shell can persist a change set between
      staging and commit; the convenience methods below begin and commit in one go
"""

from typing import Callable, TypeVar

from stakethread.core.domain_types import (
    BlockHeight, PremiumAccessKey, Principal, ReplyId, TargetKind, ThreadId, VoteKey,
)
from stakethread.core.enforce_premium import has_premium_access
from stakethread.core.enforce_stake import is_staked
from stakethread.core.errors import StaleBlockHeightError
from stakethread.core.ledger_records import (
    ProtocolConfig, Reply, Stake, Thread, ThreadBoost, UserReputation, VoteRecord,
)
from stakethread.core.ledger_state import LedgerState
from stakethread.core.ledger_transaction import LedgerTransaction
from stakethread.schemas.actions import LedgerAction
from stakethread.services.action_dispatch import ActionDispatch
from stakethread.services.handle_admin import AdminHandlers
from stakethread.services.handle_engagement import EngagementHandlers
from stakethread.services.handle_premium import PremiumHandlers
from stakethread.services.handle_replies import ReplyHandlers
from stakethread.services.handle_staking import StakingHandlers
from stakethread.services.handle_threads import ThreadHandlers

T = TypeVar("T")


class ForumLedger:
    """Public entry points of the protocol, one atomic transaction each."""

    def __init__(self, state: LedgerState):
        self.state = state

    # --- Transaction plumbing -----------------------------------------------------

    def begin(self, sender: str, block_height: int) -> LedgerTransaction:
        if block_height < self.state.last_block_height:
            raise StaleBlockHeightError(block_height, self.state.last_block_height)
        return LedgerTransaction(self.state, Principal(sender), BlockHeight(block_height))

    def execute(
        self, sender: str, block_height: int,
        operation: Callable[[LedgerTransaction], T],
    ) -> T:
        """Run operation in a fresh transaction and commit only if it returns."""
        txn = self.begin(sender, block_height)
        result = operation(txn)
        txn.commit()
        return result

    def submit(self, sender: str, block_height: int, action: LedgerAction):
        """Execute a schema-validated action."""
        return self.execute(
            sender, block_height, lambda txn: ActionDispatch(txn).execute(action),
        )

    # --- Thread Registry ----------------------------------------------------------

    def create_thread(
        self, sender: str, block_height: int, title: str, content: str,
        is_premium: bool = False, premium_price: int = 0,
    ) -> ThreadId:
        return self.execute(
            sender, block_height,
            lambda txn: ThreadHandlers(txn).create_thread(
                title, content, is_premium, premium_price,
            ),
        )

    def lock_thread(self, sender: str, block_height: int, thread_id: int) -> bool:
        return self.execute(
            sender, block_height,
            lambda txn: ThreadHandlers(txn).lock_thread(ThreadId(thread_id)),
        )

    def unlock_thread(self, sender: str, block_height: int, thread_id: int) -> bool:
        return self.execute(
            sender, block_height,
            lambda txn: ThreadHandlers(txn).unlock_thread(ThreadId(thread_id)),
        )

    # --- Reply Tree ---------------------------------------------------------------

    def create_reply(
        self, sender: str, block_height: int, thread_id: int, content: str,
        parent_reply_id: int | None = None,
    ) -> ReplyId:
        parent = ReplyId(parent_reply_id) if parent_reply_id is not None else None
        return self.execute(
            sender, block_height,
            lambda txn: ReplyHandlers(txn).create_reply(
                ThreadId(thread_id), content, parent,
            ),
        )

    # --- Premium Access Gateway ---------------------------------------------------

    def purchase_premium_access(
        self, sender: str, block_height: int, thread_id: int,
    ) -> dict:
        return self.execute(
            sender, block_height,
            lambda txn: PremiumHandlers(txn).purchase_premium_access(ThreadId(thread_id)),
        )

    # --- Voting & Tipping ---------------------------------------------------------

    def vote(
        self, sender: str, block_height: int,
        target_kind: TargetKind, target_id: int, upvote: bool,
    ) -> bool:
        return self.execute(
            sender, block_height,
            lambda txn: EngagementHandlers(txn).vote(
                TargetKind(target_kind), target_id, upvote,
            ),
        )

    def tip(
        self, sender: str, block_height: int,
        target_kind: TargetKind, target_id: int, amount: int,
    ) -> int:
        return self.execute(
            sender, block_height,
            lambda txn: EngagementHandlers(txn).tip(
                TargetKind(target_kind), target_id, amount,
            ),
        )

    # --- Stake Ledger -------------------------------------------------------------

    def stake(
        self, sender: str, block_height: int, amount: int, lock_period: int = 0,
    ) -> dict:
        return self.execute(
            sender, block_height,
            lambda txn: StakingHandlers(txn).stake(amount, lock_period),
        )

    def unstake(self, sender: str, block_height: int) -> int:
        return self.execute(
            sender, block_height, lambda txn: StakingHandlers(txn).unstake(),
        )

    # --- Protocol administration --------------------------------------------------

    def set_min_stake_amount(self, sender: str, block_height: int, amount: int) -> int:
        return self.execute(
            sender, block_height,
            lambda txn: AdminHandlers(txn).set_min_stake_amount(amount),
        )

    def set_platform_fee_rate(self, sender: str, block_height: int, fee_rate: int) -> int:
        return self.execute(
            sender, block_height,
            lambda txn: AdminHandlers(txn).set_platform_fee_rate(fee_rate),
        )

    def set_platform_treasury(self, sender: str, block_height: int, treasury: str) -> str:
        return self.execute(
            sender, block_height,
            lambda txn: AdminHandlers(txn).set_platform_treasury(treasury),
        )

    # --- Reads ----------------------------------------------------------------------

    def get_thread(self, thread_id: int) -> Thread | None:
        return self.state.threads.get(ThreadId(thread_id))

    def get_reply(self, reply_id: int) -> Reply | None:
        return self.state.replies.get(ReplyId(reply_id))

    def get_user_reputation(self, principal: str) -> UserReputation:
        return self.state.reputations.get(
            Principal(principal),
        ) or UserReputation.empty(Principal(principal))

    def get_thread_count(self) -> int:
        return self.state.thread_count

    def get_reply_count(self) -> int:
        return self.state.reply_count

    def has_premium_access(self, thread_id: int, user: str) -> bool:
        thread = self.get_thread(thread_id)
        grant = self.state.premium_access.get(
            PremiumAccessKey(ThreadId(thread_id), Principal(user)),
        )
        return has_premium_access(thread, grant)

    def get_user_vote_on_thread(self, thread_id: int, voter: str) -> VoteRecord | None:
        return self.state.votes.get(VoteKey(TargetKind.THREAD, thread_id, Principal(voter)))

    def get_user_vote_on_reply(self, reply_id: int, voter: str) -> VoteRecord | None:
        return self.state.votes.get(VoteKey(TargetKind.REPLY, reply_id, Principal(voter)))

    def get_thread_boost(self, thread_id: int) -> ThreadBoost | None:
        return self.state.boosts.get(ThreadId(thread_id))

    def get_stake(self, principal: str) -> Stake | None:
        return self.state.stakes.get(Principal(principal))

    def is_staked(self, principal: str, block_height: int | None = None) -> bool:
        """Stake gate as of block_height (defaults to the last committed height)."""
        now = self.state.last_block_height if block_height is None else block_height
        return is_staked(
            self.get_stake(principal), self.state.config.min_stake_amount, BlockHeight(now),
        )

    def get_balance(self, principal: str) -> int:
        return self.state.balances.get(Principal(principal), 0)

    def get_config(self) -> ProtocolConfig:
        return self.state.config
