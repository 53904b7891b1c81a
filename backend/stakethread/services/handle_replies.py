"""Reply Handlers — create_reply (1 method).

Invariants:
    - All six checks pass before any write; a failure leaves the transaction untouched
    - Reply ids are global across threads and strictly increasing from 1
    - Success bumps the thread's reply_count and the author's replies_created
"""

import logging
from dataclasses import replace

from stakethread.core.domain_types import ReplyId, ThreadId
from stakethread.core.enforce_replies import validate_reply_creation
from stakethread.core.ledger_records import Reply
from stakethread.core.ledger_transaction import LedgerTransaction
from stakethread.core.reputation import bump

logger = logging.getLogger(__name__)


class ReplyHandlers:
    """Reply Tree — nested replies under a thread."""

    def __init__(self, txn: LedgerTransaction):
        self.txn = txn

    def create_reply(
        self,
        thread_id: ThreadId,
        content: str,
        parent_reply_id: ReplyId | None = None,
    ) -> ReplyId:
        txn = self.txn
        thread = txn.thread(thread_id)
        parent = txn.reply(parent_reply_id) if parent_reply_id is not None else None
        error = validate_reply_creation(
            txn.sender, txn.stake(txn.sender), txn.config, txn.now,
            thread_id, thread, content, parent_reply_id, parent,
            txn.grant(thread_id, txn.sender),
        )
        if error:
            raise error

        reply_id = txn.next_reply_id()
        txn.put_reply(Reply(
            id=reply_id,
            thread_id=thread_id,
            author=txn.sender,
            content=content,
            created_at=txn.now,
            parent_reply_id=parent_reply_id,
        ))
        txn.put_thread(replace(thread, reply_count=thread.reply_count + 1))
        txn.put_reputation(bump(txn.reputation(txn.sender), replies_created=1))

        logger.debug(
            f"Reply {reply_id} staged on thread {thread_id} by {txn.sender}",
            extra={"thread_id": thread_id, "reply_id": reply_id, "sender": txn.sender},
        )
        return reply_id
