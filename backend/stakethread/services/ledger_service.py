"""Ledger Service — async shell that sequences, persists and publishes transactions.

Invariants:
    - Submissions are serialized by one asyncio.Lock: exactly one transaction in flight
    - Order per submission: stage -> persist change set -> commit in memory
    - A protocol error or a database error leaves both memory and database untouched
    - Every committed transaction is logged at INFO, every rejection at WARNING

Design Decisions:
    - Singleton service initialized on startup, same lifecycle as db_manager
    - repository is optional: without one the ledger is purely in-memory (tests, tooling)
"""

import asyncio
import logging

from stakethread.config import Settings
from stakethread.core.errors import StakeThreadError
from stakethread.core.ledger_state import LedgerState
from stakethread.core.ledger_transaction import ChangeSet
from stakethread.core.repository_protocols import LedgerRepository
from stakethread.schemas.actions import TransactionEnvelope, TransactionReceipt
from stakethread.services.action_dispatch import ActionDispatch
from stakethread.services.forum_ledger import ForumLedger

logger = logging.getLogger(__name__)


class LedgerService:
    """Single writer in front of a ForumLedger."""

    def __init__(
        self, ledger: ForumLedger, repository: LedgerRepository | None = None,
    ):
        self.ledger = ledger
        self._repository = repository
        self._lock = asyncio.Lock()

    async def submit(self, envelope: TransactionEnvelope) -> TransactionReceipt:
        """Apply one transaction atomically. Raises StakeThreadError on abort."""
        action_type = envelope.action.type
        async with self._lock:
            try:
                txn = self.ledger.begin(envelope.sender, envelope.block_height)
                result = ActionDispatch(txn).execute(envelope.action)
                changes = txn.changes()
                if self._repository is not None:
                    await self._repository.save(changes)
                txn.commit()
            except StakeThreadError as exc:
                exc.context.sender = envelope.sender
                exc.context.action = action_type
                exc.context.block_height = envelope.block_height
                logger.warning(
                    f"Transaction rejected: {exc.message}",
                    extra={
                        "error_code": exc.code, "sender": envelope.sender,
                        "action": action_type, "block_height": envelope.block_height,
                    },
                )
                raise

        logger.info(
            f"Committed {action_type} ({changes.record_count} record(s))",
            extra={
                "sender": envelope.sender, "action": action_type,
                "block_height": envelope.block_height,
            },
        )
        return TransactionReceipt(
            action=action_type,
            sender=envelope.sender,
            block_height=envelope.block_height,
            result=result,
        )


async def load_or_create_state(
    settings: Settings, repository: LedgerRepository,
) -> LedgerState:
    """Load persisted state, or build and persist genesis on first start."""
    state = await repository.load()
    if state is not None:
        logger.info(
            f"Ledger loaded at block {state.last_block_height} "
            f"({state.thread_count} threads, {state.reply_count} replies)",
        )
        return state

    state = LedgerState.genesis(
        owner=settings.protocol_owner,
        platform_treasury=settings.platform_treasury,
        stake_escrow=settings.stake_escrow,
        min_stake_amount=settings.min_stake_amount,
        platform_fee_rate=settings.platform_fee_rate,
        balances=settings.genesis_balances,
    )
    await repository.save(ChangeSet.from_state(state))
    logger.info(f"Ledger genesis created for owner {settings.protocol_owner}")
    return state


# Singleton (initialized on startup)
ledger_service: LedgerService | None = None


def init_ledger_service(service: LedgerService) -> None:
    global ledger_service
    ledger_service = service


def get_ledger_service() -> LedgerService:
    """FastAPI dependency for the ledger service."""
    if not ledger_service:
        raise RuntimeError("Ledger service not initialized")
    return ledger_service
