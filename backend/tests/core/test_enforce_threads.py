"""Thread Registry Enforcement — tests for thread creation and moderation checks.

Tests cover:
    - check_text: empty and oversized text → InvalidAmount with the field name
    - check_premium_price: premium needs a positive price, free needs zero
    - validate_thread_creation: stake gate is checked first
    - validate_thread_moderation: NotFound, then author-only
"""

from stakethread.core.domain_types import (
    BlockHeight, Principal, ThreadId, MAX_THREAD_CONTENT_LENGTH, MAX_TITLE_LENGTH,
)
from stakethread.core.enforce_threads import (
    check_premium_price,
    check_text,
    validate_thread_creation,
    validate_thread_moderation,
)
from stakethread.core.errors import (
    InsufficientStakeError,
    InvalidAmountError,
    NotFoundError,
    UnauthorizedError,
)
from stakethread.core.ledger_records import ProtocolConfig, Stake, Thread

ALICE = Principal("alice")
NOW = BlockHeight(5)
CONFIG = ProtocolConfig(
    owner=Principal("owner"),
    platform_treasury=Principal("treasury"),
    stake_escrow=Principal("escrow"),
    min_stake_amount=100,
)
STAKE = Stake(principal=ALICE, amount=100, locked_until=BlockHeight(0))


def _thread(author: str = "alice") -> Thread:
    return Thread(
        id=ThreadId(1), author=Principal(author), title="t", content="c",
        is_premium=False, premium_price=0, created_at=BlockHeight(1),
    )


# ─── check_text ──────────────────────────────────────────────────

def test_empty_text_is_invalid_amount():
    error = check_text("", "title", MAX_TITLE_LENGTH)
    assert isinstance(error, InvalidAmountError)
    assert error.field == "title"


def test_text_at_max_length_is_accepted():
    assert check_text("x" * MAX_TITLE_LENGTH, "title", MAX_TITLE_LENGTH) is None


def test_text_over_max_length_is_rejected():
    error = check_text("x" * (MAX_THREAD_CONTENT_LENGTH + 1), "content", MAX_THREAD_CONTENT_LENGTH)
    assert isinstance(error, InvalidAmountError)
    assert error.field == "content"


# ─── check_premium_price ─────────────────────────────────────────

def test_premium_with_zero_price_is_rejected():
    assert isinstance(check_premium_price(True, 0), InvalidAmountError)


def test_free_thread_with_price_is_rejected():
    assert isinstance(check_premium_price(False, 10), InvalidAmountError)


def test_consistent_prices_are_accepted():
    assert check_premium_price(True, 1) is None
    assert check_premium_price(False, 0) is None


# ─── validate_thread_creation ────────────────────────────────────

def test_creation_checks_stake_before_text():
    error = validate_thread_creation(ALICE, None, CONFIG, NOW, "", "", False, 0)
    assert isinstance(error, InsufficientStakeError)


def test_creation_rejects_empty_title_when_staked():
    error = validate_thread_creation(ALICE, STAKE, CONFIG, NOW, "", "body", False, 0)
    assert isinstance(error, InvalidAmountError)
    assert error.field == "title"


def test_creation_rejects_empty_content_when_staked():
    error = validate_thread_creation(ALICE, STAKE, CONFIG, NOW, "Hello", "", False, 0)
    assert isinstance(error, InvalidAmountError)
    assert error.field == "content"


def test_creation_passes_with_valid_input():
    assert validate_thread_creation(
        ALICE, STAKE, CONFIG, NOW, "Hello", "World", True, 1_000,
    ) is None


# ─── validate_thread_moderation ──────────────────────────────────

def test_moderation_of_missing_thread_is_not_found():
    error = validate_thread_moderation(ALICE, ThreadId(7), None)
    assert isinstance(error, NotFoundError)
    assert error.resource_id == 7


def test_moderation_by_non_author_is_unauthorized():
    error = validate_thread_moderation(Principal("bob"), ThreadId(1), _thread("alice"))
    assert isinstance(error, UnauthorizedError)


def test_moderation_by_author_is_allowed():
    assert validate_thread_moderation(ALICE, ThreadId(1), _thread("alice")) is None
