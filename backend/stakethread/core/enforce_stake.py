"""Stake Gate Enforcement — decides who may create threads and replies.

Invariants:
    - All functions are PURE: no IO, no state mutation
    - Return an error instance on violation, None on success
    - is_staked is True only when amount >= minimum AND now >= locked_until
    - The stake escrow identity never stakes or unstakes (Unauthorized)
    - A stake lock height never exceeds MAX_AMOUNT

Design Decisions:
    - The lock comparison is kept literally: a stake counts as active once its
      lock height has been reached, not while it is still locked. Reproduced as-is
      and pinned by tests; changing it is a protocol decision, not a fix.
"""

from stakethread.core.domain_types import MAX_AMOUNT, BlockHeight, Principal
from stakethread.core.errors import (
    InsufficientStakeError, InvalidAmountError, NotFoundError, UnauthorizedError,
)
from stakethread.core.ledger_records import ProtocolConfig, Stake


def is_staked(stake: Stake | None, min_stake_amount: int, now: BlockHeight) -> bool:
    """Stake gate. O(1), no side effects."""
    if stake is None:
        return False
    return stake.amount >= min_stake_amount and now >= stake.locked_until


def check_staked(
    sender: Principal, stake: Stake | None, config: ProtocolConfig, now: BlockHeight,
) -> InsufficientStakeError | None:
    if not is_staked(stake, config.min_stake_amount, now):
        return InsufficientStakeError(sender)
    return None


def check_not_escrow(
    sender: Principal, config: ProtocolConfig,
) -> UnauthorizedError | None:
    """The escrow identity cannot stake: its deposit would be a self-transfer."""
    if sender == config.stake_escrow:
        return UnauthorizedError(f"Escrow identity '{sender}' cannot hold a stake")
    return None


def check_stake_deposit(
    amount: int, lock_period: int, now: BlockHeight,
) -> InvalidAmountError | None:
    if amount <= 0:
        return InvalidAmountError(
            f"Stake amount must be positive, got {amount}", "amount",
        )
    if lock_period < 0:
        return InvalidAmountError(
            f"Lock period must be non-negative, got {lock_period}", "lock_period",
        )
    if lock_period > MAX_AMOUNT - now:
        return InvalidAmountError(
            f"Lock period {lock_period} from height {now} overflows the lock height",
            "lock_period",
        )
    return None


def validate_stake_deposit(
    sender: Principal, config: ProtocolConfig, amount: int, lock_period: int,
    now: BlockHeight,
) -> UnauthorizedError | InvalidAmountError | None:
    return (
        check_not_escrow(sender, config)
        or check_stake_deposit(amount, lock_period, now)
    )


def validate_unstake(
    sender: Principal, config: ProtocolConfig, stake: Stake | None, now: BlockHeight,
) -> NotFoundError | UnauthorizedError | None:
    """Withdrawal needs a non-empty stake whose lock height has been reached."""
    return check_not_escrow(sender, config) or _check_withdrawable(sender, stake, now)


def _check_withdrawable(
    sender: Principal, stake: Stake | None, now: BlockHeight,
) -> NotFoundError | UnauthorizedError | None:
    if stake is None or stake.amount == 0:
        return NotFoundError("Stake", sender)
    if now < stake.locked_until:
        return UnauthorizedError(
            f"Stake of '{sender}' is locked until block {stake.locked_until}",
        )
    return None
