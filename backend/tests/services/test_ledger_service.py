"""Ledger Service — sequencing, persistence and recovery of committed transactions.

Invariants:
    - A committed submission is visible in memory AND in the database
    - A protocol rejection or a database failure leaves both untouched
    - load_or_create_state returns the persisted state, or persists genesis once
"""

import pytest

from stakethread.config import Settings
from stakethread.core.domain_types import TargetKind
from stakethread.core.errors import (
    DatabaseError,
    InsufficientStakeError,
    StaleBlockHeightError,
)
from stakethread.infrastructure.database import DatabaseSessionManager
from stakethread.infrastructure.ledger_repository import SqlLedgerRepository
from stakethread.schemas.actions import (
    CreateReplyAction,
    CreateThreadAction,
    PurchasePremiumAccessAction,
    StakeAction,
    TransactionEnvelope,
    VoteAction,
)
from stakethread.services.forum_ledger import ForumLedger
from stakethread.services.ledger_service import LedgerService, load_or_create_state


def _envelope(sender: str, height: int, action) -> TransactionEnvelope:
    return TransactionEnvelope(sender=sender, block_height=height, action=action)


class _FailingRepository:
    async def load(self):
        return None

    async def save(self, changes):
        raise DatabaseError("disk full", "commit")


async def test_submit_returns_receipt(service):
    receipt = await service.submit(
        _envelope("alice", 1, StakeAction(amount=1_000_000)),
    )
    assert receipt.status == "ok"
    assert receipt.action == "stake"
    assert receipt.result == {"amount": 1_000_000, "locked_until": 1}


async def test_committed_state_survives_reload(service, repository):
    await service.submit(_envelope("alice", 1, StakeAction(amount=1_000_000)))
    await service.submit(_envelope("bob", 1, StakeAction(amount=1_000_000)))
    await service.submit(_envelope(
        "bob", 2,
        CreateThreadAction(title="Paid", content="x", is_premium=True, premium_price=1_000),
    ))
    await service.submit(_envelope("alice", 3, PurchasePremiumAccessAction(thread_id=1)))
    await service.submit(_envelope("alice", 4, CreateReplyAction(thread_id=1, content="hi")))
    await service.submit(_envelope(
        "bob", 5, VoteAction(target_kind=TargetKind.REPLY, target_id=1, upvote=True),
    ))

    reloaded = ForumLedger(await repository.load())
    assert reloaded.state == service.ledger.state
    assert reloaded.get_thread_count() == 1
    assert reloaded.get_reply(1).upvotes == 1
    assert reloaded.has_premium_access(1, "alice") is True
    assert reloaded.get_user_vote_on_reply(1, "bob").is_upvote is True
    assert reloaded.state.last_block_height == 5


async def test_rejected_transaction_is_not_persisted(service, repository):
    with pytest.raises(InsufficientStakeError) as exc_info:
        await service.submit(_envelope(
            "alice", 1, CreateThreadAction(title="Hello", content="World"),
        ))
    assert exc_info.value.context.sender == "alice"
    assert exc_info.value.context.action == "create_thread"
    assert exc_info.value.context.block_height == 1
    assert service.ledger.get_thread_count() == 0
    persisted = await repository.load()
    assert persisted.thread_nonce == 0
    assert persisted == service.ledger.state


async def test_database_failure_leaves_memory_untouched(ledger):
    service = LedgerService(ledger, _FailingRepository())
    before = ledger.get_balance("alice")
    with pytest.raises(DatabaseError):
        await service.submit(_envelope("alice", 1, StakeAction(amount=1_000_000)))
    assert ledger.get_stake("alice") is None
    assert ledger.get_balance("alice") == before
    assert ledger.state.last_block_height == 0


async def test_stale_block_height_is_rejected(service):
    await service.submit(_envelope("alice", 5, StakeAction(amount=1_000_000)))
    with pytest.raises(StaleBlockHeightError):
        await service.submit(_envelope("bob", 4, StakeAction(amount=1_000_000)))
    assert service.ledger.get_stake("bob") is None


async def test_in_memory_service_needs_no_repository(ledger):
    service = LedgerService(ledger)
    await service.submit(_envelope("alice", 1, StakeAction(amount=1_000_000)))
    assert ledger.is_staked("alice") is True


# ─── load_or_create_state ────────────────────────────────────────

async def test_genesis_is_created_once(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path}/genesis.db")
    await manager.create_all()
    repository = SqlLedgerRepository(manager)
    settings = Settings(
        protocol_owner="deployer",
        platform_fee_rate=300,
        genesis_balances={"alice": 42},
    )
    try:
        first = await load_or_create_state(settings, repository)
        assert first.config.owner == "deployer"
        assert first.config.platform_treasury == "deployer"
        assert first.config.platform_fee_rate == 300
        assert first.balances == {"alice": 42}

        other = Settings(protocol_owner="someone-else", genesis_balances={})
        second = await load_or_create_state(other, repository)
        assert second.config.owner == "deployer"
        assert second.balances == {"alice": 42}
    finally:
        await manager.dispose()
