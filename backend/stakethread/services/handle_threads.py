"""Thread Handlers — create_thread and author moderation (3 methods).

Invariants:
    - Every check runs before the first write (validate_* returns the first error)
    - Thread ids come from the transaction's sequence: nonce + 1, no gaps
    - Creating a thread bumps the author's threads_created and recomputes the score

Design Decisions:
    - Handlers operate on a LedgerTransaction, never on LedgerState directly
"""

import logging
from dataclasses import replace

from stakethread.core.domain_types import ThreadId
from stakethread.core.enforce_threads import (
    validate_thread_creation, validate_thread_moderation,
)
from stakethread.core.ledger_records import Thread
from stakethread.core.ledger_transaction import LedgerTransaction
from stakethread.core.reputation import bump

logger = logging.getLogger(__name__)


class ThreadHandlers:
    """Thread Registry — creation and locking."""

    def __init__(self, txn: LedgerTransaction):
        self.txn = txn

    def create_thread(
        self, title: str, content: str, is_premium: bool, premium_price: int,
    ) -> ThreadId:
        txn = self.txn
        error = validate_thread_creation(
            txn.sender, txn.stake(txn.sender), txn.config, txn.now,
            title, content, is_premium, premium_price,
        )
        if error:
            raise error

        thread_id = txn.next_thread_id()
        txn.put_thread(Thread(
            id=thread_id,
            author=txn.sender,
            title=title,
            content=content,
            is_premium=is_premium,
            premium_price=premium_price,
            created_at=txn.now,
        ))
        txn.put_reputation(bump(txn.reputation(txn.sender), threads_created=1))

        logger.debug(
            f"Thread {thread_id} staged by {txn.sender}",
            extra={"thread_id": thread_id, "sender": txn.sender},
        )
        return thread_id

    def lock_thread(self, thread_id: ThreadId) -> bool:
        return self._set_locked(thread_id, True)

    def unlock_thread(self, thread_id: ThreadId) -> bool:
        return self._set_locked(thread_id, False)

    def _set_locked(self, thread_id: ThreadId, locked: bool) -> bool:
        thread = self.txn.thread(thread_id)
        error = validate_thread_moderation(self.txn.sender, thread_id, thread)
        if error:
            raise error
        if thread.is_locked != locked:
            self.txn.put_thread(replace(thread, is_locked=locked))
        return locked
