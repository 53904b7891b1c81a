"""Thread Registry Enforcement — validates thread creation and moderation.

Invariants:
    - All functions are PURE: no IO, no state mutation
    - Return an error instance on violation, None on success
    - validate_thread_creation chains all checks — first error wins, stake gate first
    - premium_price > 0 exactly when is_premium

Design Decisions:
    - Empty and oversized text both map to InvalidAmount: the protocol has a single
      "bad input value" kind, and the offending field travels on the error
"""

from stakethread.core.domain_types import (
    BlockHeight, Principal, ThreadId,
    MAX_TITLE_LENGTH, MAX_THREAD_CONTENT_LENGTH,
)
from stakethread.core.enforce_stake import check_staked
from stakethread.core.errors import (
    InvalidAmountError, NotFoundError, ProtocolError, UnauthorizedError,
)
from stakethread.core.ledger_records import ProtocolConfig, Stake, Thread


def check_text(value: str, field: str, max_length: int) -> InvalidAmountError | None:
    """Non-empty and at most max_length code points."""
    if not value:
        return InvalidAmountError(f"{field} cannot be empty", field)
    if len(value) > max_length:
        return InvalidAmountError(
            f"{field} exceeds {max_length} characters ({len(value)})", field,
        )
    return None


def check_premium_price(is_premium: bool, premium_price: int) -> InvalidAmountError | None:
    if is_premium and premium_price <= 0:
        return InvalidAmountError(
            "Premium threads require a positive premium_price", "premium_price",
        )
    if not is_premium and premium_price != 0:
        return InvalidAmountError(
            "Free threads cannot carry a premium_price", "premium_price",
        )
    return None


def validate_thread_creation(
    sender: Principal,
    stake: Stake | None,
    config: ProtocolConfig,
    now: BlockHeight,
    title: str,
    content: str,
    is_premium: bool,
    premium_price: int,
) -> ProtocolError | None:
    """Chain all create_thread checks. Returns first error or None."""
    return (
        check_staked(sender, stake, config, now)
        or check_text(title, "title", MAX_TITLE_LENGTH)
        or check_text(content, "content", MAX_THREAD_CONTENT_LENGTH)
        or check_premium_price(is_premium, premium_price)
    )


def check_thread_exists(thread_id: ThreadId, thread: Thread | None) -> NotFoundError | None:
    if thread is None:
        return NotFoundError("Thread", thread_id)
    return None


def validate_thread_moderation(
    sender: Principal, thread_id: ThreadId, thread: Thread | None,
) -> ProtocolError | None:
    """Lock/unlock: thread must exist and the sender must be its author."""
    return check_thread_exists(thread_id, thread) or _check_author(sender, thread)


def _check_author(sender: Principal, thread: Thread) -> UnauthorizedError | None:
    if thread.author != sender:
        return UnauthorizedError(
            f"Only the author can moderate thread '{thread.id}'",
        )
    return None
