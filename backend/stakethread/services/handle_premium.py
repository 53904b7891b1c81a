"""Premium Handlers — purchase_premium_access with creator/treasury split (1 method).

Invariants:
    - Checks (exists, premium, no prior grant) run before any transfer
    - Author transfer, treasury transfer and grant succeed or fail as one unit
    - author_payment + platform_fee == premium_price
"""

import logging

from stakethread.core.domain_types import ThreadId
from stakethread.core.enforce_premium import split_premium_payment, validate_premium_purchase
from stakethread.core.ledger_records import PremiumAccessGrant
from stakethread.core.ledger_transaction import LedgerTransaction

logger = logging.getLogger(__name__)


class PremiumHandlers:
    """Premium Access Gateway + Payment Distributor."""

    def __init__(self, txn: LedgerTransaction):
        self.txn = txn

    def purchase_premium_access(self, thread_id: ThreadId) -> dict:
        txn = self.txn
        thread = txn.thread(thread_id)
        error = validate_premium_purchase(
            txn.sender, thread_id, thread, txn.grant(thread_id, txn.sender),
        )
        if error:
            raise error

        split = split_premium_payment(thread.premium_price, txn.config.platform_fee_rate)
        # InsufficientBalanceError here aborts the whole transaction
        txn.transfer(txn.sender, thread.author, split.author_payment)
        txn.transfer(txn.sender, txn.config.platform_treasury, split.platform_fee)
        txn.put_grant(PremiumAccessGrant(
            thread_id=thread_id, user=txn.sender, purchased_at=txn.now,
        ))

        logger.debug(
            f"Premium access to thread {thread_id} staged for {txn.sender}: "
            f"author={split.author_payment} fee={split.platform_fee}",
            extra={"thread_id": thread_id, "sender": txn.sender},
        )
        return {
            "thread_id": thread_id,
            "author_payment": split.author_payment,
            "platform_fee": split.platform_fee,
        }
