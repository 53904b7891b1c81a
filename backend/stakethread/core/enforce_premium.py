"""Premium Access Enforcement — purchase validation and fee arithmetic.

Invariants:
    - All functions are PURE: no IO, no state mutation
    - platform_fee = price * fee_rate // 10_000; author_payment = price - platform_fee
    - author_payment + platform_fee == price, always
    - A grant is permanent: a second purchase is rejected with Unauthorized
"""

from typing import NamedTuple

from stakethread.core.domain_types import Principal, ThreadId, BASIS_POINTS_DENOMINATOR
from stakethread.core.enforce_threads import check_thread_exists
from stakethread.core.errors import ProtocolError, ThreadNotPremiumError, UnauthorizedError
from stakethread.core.ledger_records import PremiumAccessGrant, Thread


class PaymentSplit(NamedTuple):
    author_payment: int
    platform_fee: int


def split_premium_payment(price: int, fee_rate: int) -> PaymentSplit:
    """Split a premium price into creator and treasury shares (floor on the fee)."""
    platform_fee = (price * fee_rate) // BASIS_POINTS_DENOMINATOR
    return PaymentSplit(author_payment=price - platform_fee, platform_fee=platform_fee)


def has_premium_access(thread: Thread | None, grant: PremiumAccessGrant | None) -> bool:
    """Free threads are open to everyone; premium ones need a grant."""
    if thread is None:
        return False
    return not thread.is_premium or grant is not None


def check_thread_is_premium(thread: Thread) -> ThreadNotPremiumError | None:
    if not thread.is_premium:
        return ThreadNotPremiumError(f"Thread '{thread.id}' is not premium")
    return None


def check_no_existing_grant(
    sender: Principal, thread_id: ThreadId, grant: PremiumAccessGrant | None,
) -> UnauthorizedError | None:
    if grant is not None:
        return UnauthorizedError(
            f"'{sender}' already holds access to thread '{thread_id}'",
        )
    return None


def validate_premium_purchase(
    sender: Principal,
    thread_id: ThreadId,
    thread: Thread | None,
    grant: PremiumAccessGrant | None,
) -> ProtocolError | None:
    """Chain purchase checks. Transfers are validated by the transaction itself."""
    return (
        check_thread_exists(thread_id, thread)
        or check_thread_is_premium(thread)
        or check_no_existing_grant(sender, thread_id, grant)
    )
