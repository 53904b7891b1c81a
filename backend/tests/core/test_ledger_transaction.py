"""Ledger Transaction — tests for the write-ahead buffer and value transfers.

Tests cover:
    - reads see staged writes; committed state is untouched until commit()
    - dropping a transaction is a full abort
    - nonces advance only on commit
    - transfer(): insufficient balance raises without staging, zero/self are no-ops
    - changes() snapshots writes and block height; commit() publishes once
    - ChangeSet.from_state captures a whole genesis state
"""

import pytest

from stakethread.core.domain_types import (
    BlockHeight, LedgerTable, Principal, ThreadId, MAX_BOOSTERS_PER_THREAD,
)
from stakethread.core.errors import InsufficientBalanceError, InvalidAmountError
from stakethread.core.ledger_records import Stake, Thread, ThreadBoost, UserReputation
from stakethread.core.ledger_state import LedgerState
from stakethread.core.ledger_transaction import ChangeSet, LedgerTransaction

ALICE = Principal("alice")
BOB = Principal("bob")


def _state() -> LedgerState:
    return LedgerState.genesis(
        owner="owner", balances={"alice": 100, "bob": 5},
    )


def _thread(thread_id: int) -> Thread:
    return Thread(
        id=ThreadId(thread_id), author=ALICE, title="t", content="c",
        is_premium=False, premium_price=0, created_at=BlockHeight(1),
    )


# ─── Genesis ─────────────────────────────────────────────────────

def test_genesis_treasury_defaults_to_owner():
    state = _state()
    assert state.config.platform_treasury == "owner"
    assert state.thread_count == 0
    assert state.reply_count == 0


def test_genesis_seeds_balances():
    assert _state().balances == {"alice": 100, "bob": 5}


# ─── Staging ─────────────────────────────────────────────────────

def test_staged_write_is_visible_to_the_transaction_only():
    state = _state()
    txn = LedgerTransaction(state, ALICE, BlockHeight(1))
    txn.put_thread(_thread(1))
    assert txn.thread(ThreadId(1)) is not None
    assert ThreadId(1) not in state.threads


def test_dropping_transaction_leaves_state_untouched():
    state = _state()
    txn = LedgerTransaction(state, ALICE, BlockHeight(1))
    txn.next_thread_id()
    txn.put_thread(_thread(1))
    txn.transfer(ALICE, BOB, 50)
    del txn
    assert state.threads == {}
    assert state.thread_nonce == 0
    assert state.balances[ALICE] == 100


def test_reputation_defaults_to_empty_record():
    txn = LedgerTransaction(_state(), ALICE, BlockHeight(1))
    assert txn.reputation(BOB) == UserReputation.empty(BOB)


def test_sequences_start_at_one():
    txn = LedgerTransaction(_state(), ALICE, BlockHeight(1))
    assert txn.next_thread_id() == 1
    assert txn.next_thread_id() == 2
    assert txn.next_reply_id() == 1


# ─── transfer ────────────────────────────────────────────────────

def test_transfer_moves_balance():
    txn = LedgerTransaction(_state(), ALICE, BlockHeight(1))
    txn.transfer(ALICE, BOB, 30)
    assert txn.balance(ALICE) == 70
    assert txn.balance(BOB) == 35


def test_transfer_to_new_identity_creates_balance():
    txn = LedgerTransaction(_state(), ALICE, BlockHeight(1))
    txn.transfer(ALICE, Principal("treasury"), 1)
    assert txn.balance(Principal("treasury")) == 1


def test_insufficient_balance_raises_without_staging():
    txn = LedgerTransaction(_state(), BOB, BlockHeight(1))
    with pytest.raises(InsufficientBalanceError) as exc_info:
        txn.transfer(BOB, ALICE, 6)
    assert exc_info.value.required == 6
    assert exc_info.value.available == 5
    assert txn.changes().rows(LedgerTable.BALANCES) == {}


def test_zero_and_self_transfers_are_noops():
    txn = LedgerTransaction(_state(), ALICE, BlockHeight(1))
    txn.transfer(ALICE, BOB, 0)
    txn.transfer(ALICE, ALICE, 1_000)
    assert txn.changes().record_count == 0


def test_negative_transfer_is_invalid():
    txn = LedgerTransaction(_state(), ALICE, BlockHeight(1))
    with pytest.raises(InvalidAmountError):
        txn.transfer(ALICE, BOB, -1)


# ─── changes / commit ────────────────────────────────────────────

def test_commit_publishes_writes_and_nonces():
    state = _state()
    txn = LedgerTransaction(state, ALICE, BlockHeight(7))
    thread_id = txn.next_thread_id()
    txn.put_thread(_thread(thread_id))
    txn.put_stake(Stake(ALICE, 10, BlockHeight(0)))
    changes = txn.commit()
    assert state.threads[ThreadId(1)].id == 1
    assert state.stakes[ALICE].amount == 10
    assert state.thread_nonce == 1
    assert state.last_block_height == 7
    assert changes.record_count == 2
    assert txn.committed


def test_changes_does_not_publish():
    state = _state()
    txn = LedgerTransaction(state, ALICE, BlockHeight(2))
    txn.put_thread(_thread(1))
    changes = txn.changes()
    assert changes.rows(LedgerTable.THREADS)[ThreadId(1)].title == "t"
    assert state.threads == {}
    assert state.last_block_height == 0


def test_commit_twice_raises():
    txn = LedgerTransaction(_state(), ALICE, BlockHeight(1))
    txn.commit()
    with pytest.raises(RuntimeError):
        txn.commit()


def test_write_after_commit_raises():
    txn = LedgerTransaction(_state(), ALICE, BlockHeight(1))
    txn.commit()
    with pytest.raises(RuntimeError):
        txn.put_thread(_thread(1))


def test_block_height_never_moves_backwards_on_commit():
    state = _state()
    state.last_block_height = BlockHeight(10)
    txn = LedgerTransaction(state, ALICE, BlockHeight(4))
    assert txn.changes().last_block_height == 10


def test_change_set_from_state_includes_all_tables():
    state = _state()
    state.threads[ThreadId(1)] = _thread(1)
    changes = ChangeSet.from_state(state)
    assert set(changes.writes) == {LedgerTable.THREADS, LedgerTable.BALANCES}
    assert changes.config == state.config


def test_thread_boost_caps_boosters():
    boosters = tuple(Principal(f"user{i}") for i in range(MAX_BOOSTERS_PER_THREAD))
    assert len(ThreadBoost(ThreadId(1), 0, boosters).boosters) == MAX_BOOSTERS_PER_THREAD
    with pytest.raises(ValueError):
        ThreadBoost(ThreadId(1), 0, boosters + (Principal("one-too-many"),))
