"""Engagement Handlers — vote and tip on threads and replies (2 methods).

Invariants:
    - At most one VoteRecord per (target_kind, target_id, voter); never overwritten
    - A vote moves the target's counter and the target author's reputation together
    - A tip transfers value to the author before any counter moves; a failed
      transfer aborts the transaction
"""

import logging

from stakethread.core.domain_types import TargetKind, VoteKey
from stakethread.core.enforce_engagement import validate_tip, validate_vote
from stakethread.core.ledger_records import VoteRecord, with_tip, with_vote
from stakethread.core.ledger_transaction import LedgerTransaction
from stakethread.core.reputation import bump

logger = logging.getLogger(__name__)


class EngagementHandlers:
    """Voting & Tipping Ledger."""

    def __init__(self, txn: LedgerTransaction):
        self.txn = txn

    def vote(self, target_kind: TargetKind, target_id: int, upvote: bool) -> bool:
        txn = self.txn
        key = VoteKey(target_kind, target_id, txn.sender)
        target = txn.target(target_kind, target_id)
        error = validate_vote(key, target, txn.vote_record(key))
        if error:
            raise error

        txn.put_target(with_vote(target, upvote))
        author = txn.reputation(target.author)
        if upvote:
            txn.put_reputation(bump(author, total_upvotes=1))
        else:
            txn.put_reputation(bump(author, total_downvotes=1))
        txn.put_vote(VoteRecord(
            target_kind=target_kind, target_id=target_id,
            voter=txn.sender, is_upvote=upvote,
        ))
        return upvote

    def tip(self, target_kind: TargetKind, target_id: int, amount: int) -> int:
        txn = self.txn
        target = txn.target(target_kind, target_id)
        error = validate_tip(txn.sender, target_kind, target_id, target, amount)
        if error:
            raise error

        txn.transfer(txn.sender, target.author, amount)
        txn.put_target(with_tip(target, amount))
        txn.put_reputation(bump(txn.reputation(txn.sender), tips_sent=amount))
        txn.put_reputation(bump(txn.reputation(target.author), tips_received=amount))

        logger.debug(
            f"Tip of {amount} staged from {txn.sender} to {target.author} "
            f"on {target_kind.value} {target_id}",
            extra={"sender": txn.sender},
        )
        return amount
