"""Service test fixtures — ledger state, SQLite-backed repository, FastAPI test client.

Invariants:
    - Every test gets a fresh ledger and a fresh SQLite database file
    - Ledger and database singletons are patched, never left initialized between tests
    - "alice", "bob" and "carol" start with 10_000_000 native units each

Design Decisions:
    - File-backed SQLite under tmp_path: survives engine disposal, so reload tests
      can open a second manager on the same data
    - min_stake_amount uses the production default so the end-to-end figures hold
"""

import pytest
from httpx import ASGITransport, AsyncClient

from stakethread.core.ledger_state import LedgerState
from stakethread.core.ledger_transaction import ChangeSet
from stakethread.infrastructure import database as db_module
from stakethread.infrastructure.database import DatabaseSessionManager
from stakethread.infrastructure.ledger_repository import SqlLedgerRepository
from stakethread.services import ledger_service as service_module
from stakethread.services.forum_ledger import ForumLedger
from stakethread.services.ledger_service import LedgerService
from stakethread.main import app

OWNER = "owner"
TREASURY = "treasury"
MIN_STAKE = 1_000_000
STARTING_BALANCE = 10_000_000


@pytest.fixture
def state() -> LedgerState:
    return LedgerState.genesis(
        owner=OWNER,
        platform_treasury=TREASURY,
        min_stake_amount=MIN_STAKE,
        platform_fee_rate=250,
        balances={
            "alice": STARTING_BALANCE,
            "bob": STARTING_BALANCE,
            "carol": STARTING_BALANCE,
        },
    )


@pytest.fixture
def ledger(state) -> ForumLedger:
    return ForumLedger(state)


@pytest.fixture
def staked_ledger(ledger) -> ForumLedger:
    """Ledger where alice, bob and carol hold an unlocked minimum stake at block 1."""
    for user in ("alice", "bob", "carol"):
        ledger.stake(user, 1, MIN_STAKE)
    return ledger


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path}/ledger.db")
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture
def repository(db_manager) -> SqlLedgerRepository:
    return SqlLedgerRepository(db_manager)


@pytest.fixture
async def service(ledger, repository) -> LedgerService:
    """Service over the per-test ledger, with its genesis already persisted."""
    await repository.save(ChangeSet.from_state(ledger.state))
    return LedgerService(ledger, repository)


@pytest.fixture
async def client(service, db_manager, monkeypatch):
    """FastAPI test client wired to the per-test ledger service and database."""
    monkeypatch.setattr(service_module, "ledger_service", service)
    monkeypatch.setattr(db_module, "db_manager", db_manager)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
