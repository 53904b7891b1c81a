"""Action Dispatch — explicit routing from action type to handler method.

Invariants:
    - Every action->handler mapping is visible — no getattr magic, no auto-discovery
    - Handlers are instantiated per transaction over the same LedgerTransaction
    - Unknown action types raise ValueError (schemas make this unreachable from the API)

Design Decisions:
    - Explicit dict over getattr: adding an action requires editing this dict
    - Split handlers by component: one class per ledger component, few methods each
"""

from typing import Any, Callable

from stakethread.core.domain_types import ReplyId, ThreadId
from stakethread.core.ledger_transaction import LedgerTransaction
from stakethread.schemas.actions import LedgerAction
from stakethread.services.handle_admin import AdminHandlers
from stakethread.services.handle_engagement import EngagementHandlers
from stakethread.services.handle_premium import PremiumHandlers
from stakethread.services.handle_replies import ReplyHandlers
from stakethread.services.handle_staking import StakingHandlers
from stakethread.services.handle_threads import ThreadHandlers


class ActionDispatch:
    """Routes action.type -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, txn: LedgerTransaction):
        self._txn = txn
        threads = ThreadHandlers(txn)
        replies = ReplyHandlers(txn)
        premium = PremiumHandlers(txn)
        engagement = EngagementHandlers(txn)
        staking = StakingHandlers(txn)
        admin = AdminHandlers(txn)

        self._handlers: dict[str, Callable[[Any], Any]] = {
            # Thread Registry
            "create_thread": lambda a: threads.create_thread(
                a.title, a.content, a.is_premium, a.premium_price,
            ),
            "lock_thread": lambda a: threads.lock_thread(ThreadId(a.thread_id)),
            "unlock_thread": lambda a: threads.unlock_thread(ThreadId(a.thread_id)),

            # Reply Tree
            "create_reply": lambda a: replies.create_reply(
                ThreadId(a.thread_id), a.content,
                ReplyId(a.parent_reply_id) if a.parent_reply_id is not None else None,
            ),

            # Premium Access Gateway
            "purchase_premium_access": lambda a: premium.purchase_premium_access(
                ThreadId(a.thread_id),
            ),

            # Voting & Tipping Ledger
            "vote": lambda a: engagement.vote(a.target_kind, a.target_id, a.upvote),
            "tip": lambda a: engagement.tip(a.target_kind, a.target_id, a.amount),

            # Stake Ledger
            "stake": lambda a: staking.stake(a.amount, a.lock_period),
            "unstake": lambda a: staking.unstake(),

            # Protocol administration
            "set_min_stake_amount": lambda a: admin.set_min_stake_amount(a.amount),
            "set_platform_fee_rate": lambda a: admin.set_platform_fee_rate(a.fee_rate),
            "set_platform_treasury": lambda a: admin.set_platform_treasury(a.treasury),
        }

    def execute(self, action: LedgerAction) -> Any:
        """Run the handler for action.type against the transaction."""
        handler = self._handlers.get(action.type)
        if handler is None:
            raise ValueError(f"Unknown action type: {action.type}")
        return handler(action)
