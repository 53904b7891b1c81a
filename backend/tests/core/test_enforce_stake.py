"""Stake Gate Enforcement — tests for is_staked and stake/unstake validation.

Tests cover:
    - is_staked requires a record, amount >= minimum and now >= locked_until
    - the expired-lock semantics are pinned: a still-locked stake does NOT pass
    - check_staked returns InsufficientStakeError for the sender
    - check_stake_deposit rejects non-positive amounts and negative lock periods
    - check_stake_deposit rejects lock heights past the BIGINT ceiling
    - validate_unstake: missing/empty stake → NotFound, locked → Unauthorized
    - the stake escrow identity can neither stake nor unstake
"""

from stakethread.core.domain_types import MAX_AMOUNT, BlockHeight, Principal
from stakethread.core.enforce_stake import (
    check_stake_deposit,
    validate_stake_deposit,
    check_staked,
    is_staked,
    validate_unstake,
)
from stakethread.core.errors import (
    ErrorKind,
    InsufficientStakeError,
    InvalidAmountError,
    NotFoundError,
    UnauthorizedError,
)
from stakethread.core.ledger_records import ProtocolConfig, Stake

ALICE = Principal("alice")


def _stake(amount: int = 1_000, locked_until: int = 10) -> Stake:
    return Stake(principal=ALICE, amount=amount, locked_until=BlockHeight(locked_until))


def _config(min_stake: int = 1_000) -> ProtocolConfig:
    return ProtocolConfig(
        owner=Principal("owner"),
        platform_treasury=Principal("treasury"),
        stake_escrow=Principal("escrow"),
        min_stake_amount=min_stake,
    )


# ─── is_staked ───────────────────────────────────────────────────

def test_no_stake_record_is_not_staked():
    assert is_staked(None, 0, BlockHeight(100)) is False


def test_stake_at_minimum_after_lock_is_staked():
    assert is_staked(_stake(1_000, 10), 1_000, BlockHeight(10)) is True
    assert is_staked(_stake(1_000, 10), 1_000, BlockHeight(11)) is True


def test_stake_below_minimum_is_not_staked():
    assert is_staked(_stake(999, 0), 1_000, BlockHeight(10)) is False


def test_stake_still_locked_does_not_pass_gate():
    """Gate passes once the lock height is reached, not while still locked."""
    assert is_staked(_stake(5_000, 10), 1_000, BlockHeight(9)) is False


def test_zero_minimum_admits_empty_unlocked_stake():
    assert is_staked(_stake(0, 0), 0, BlockHeight(0)) is True


# ─── check_staked ────────────────────────────────────────────────

def test_check_staked_returns_error_for_missing_stake():
    error = check_staked(ALICE, None, _config(), BlockHeight(5))
    assert isinstance(error, InsufficientStakeError)
    assert error.kind == ErrorKind.INSUFFICIENT_STAKE
    assert error.sender == ALICE


def test_check_staked_returns_none_when_gate_passes():
    assert check_staked(ALICE, _stake(1_000, 0), _config(), BlockHeight(5)) is None


# ─── check_stake_deposit ─────────────────────────────────────────

def test_stake_deposit_rejects_zero_amount():
    error = check_stake_deposit(0, 0, BlockHeight(0))
    assert isinstance(error, InvalidAmountError)
    assert error.field == "amount"


def test_stake_deposit_rejects_negative_lock_period():
    error = check_stake_deposit(10, -1, BlockHeight(0))
    assert isinstance(error, InvalidAmountError)
    assert error.field == "lock_period"


def test_stake_deposit_accepts_positive_amount():
    assert check_stake_deposit(10, 0, BlockHeight(0)) is None


def test_stake_deposit_rejects_lock_height_past_ceiling():
    error = check_stake_deposit(10, MAX_AMOUNT, BlockHeight(1))
    assert isinstance(error, InvalidAmountError)
    assert error.field == "lock_period"


def test_stake_deposit_accepts_lock_height_at_ceiling():
    assert check_stake_deposit(10, MAX_AMOUNT - 5, BlockHeight(5)) is None


# ─── validate_unstake ────────────────────────────────────────────

def test_unstake_without_stake_is_not_found():
    error = validate_unstake(ALICE, _config(), None, BlockHeight(1))
    assert isinstance(error, NotFoundError)


def test_unstake_of_emptied_stake_is_not_found():
    error = validate_unstake(ALICE, _config(), _stake(0, 0), BlockHeight(1))
    assert isinstance(error, NotFoundError)


def test_unstake_while_locked_is_unauthorized():
    error = validate_unstake(ALICE, _config(), _stake(1_000, 10), BlockHeight(9))
    assert isinstance(error, UnauthorizedError)


def test_unstake_at_lock_height_is_allowed():
    assert validate_unstake(ALICE, _config(), _stake(1_000, 10), BlockHeight(10)) is None


# ─── escrow identity ─────────────────────────────────────────────

def test_escrow_identity_cannot_stake():
    error = validate_stake_deposit(Principal("escrow"), _config(), 5_000, 0, BlockHeight(1))
    assert isinstance(error, UnauthorizedError)


def test_escrow_check_precedes_amount_check():
    error = validate_stake_deposit(Principal("escrow"), _config(), 0, 0, BlockHeight(1))
    assert isinstance(error, UnauthorizedError)


def test_regular_identity_deposit_passes():
    assert validate_stake_deposit(ALICE, _config(), 5_000, 0, BlockHeight(1)) is None


def test_escrow_identity_cannot_unstake():
    stake = Stake(Principal("escrow"), 1_000, BlockHeight(0))
    error = validate_unstake(Principal("escrow"), _config(), stake, BlockHeight(5))
    assert isinstance(error, UnauthorizedError)
