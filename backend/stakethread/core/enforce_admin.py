"""Protocol Administration Enforcement — owner-only config mutations.

Invariants:
    - All functions are PURE: no IO, no state mutation
    - Only ProtocolConfig.owner may change protocol parameters (OwnerOnly)
    - Ownership is checked before the new value
    - platform_fee_rate stays within 0..10_000 basis points
"""

from stakethread.core.domain_types import Principal, BASIS_POINTS_DENOMINATOR
from stakethread.core.errors import InvalidAmountError, OwnerOnlyError, ProtocolError
from stakethread.core.ledger_records import ProtocolConfig


def check_owner(sender: Principal, config: ProtocolConfig) -> OwnerOnlyError | None:
    if sender != config.owner:
        return OwnerOnlyError(sender)
    return None


def check_min_stake_amount(amount: int) -> InvalidAmountError | None:
    if amount < 0:
        return InvalidAmountError(
            f"Minimum stake must be non-negative, got {amount}", "min_stake_amount",
        )
    return None


def check_fee_rate(fee_rate: int) -> InvalidAmountError | None:
    if not 0 <= fee_rate <= BASIS_POINTS_DENOMINATOR:
        return InvalidAmountError(
            f"Fee rate must be within 0..{BASIS_POINTS_DENOMINATOR} basis points, "
            f"got {fee_rate}",
            "platform_fee_rate",
        )
    return None


def check_treasury(treasury: str) -> InvalidAmountError | None:
    if not treasury:
        return InvalidAmountError("Treasury identity cannot be empty", "platform_treasury")
    return None


def validate_min_stake_update(
    sender: Principal, config: ProtocolConfig, amount: int,
) -> ProtocolError | None:
    return check_owner(sender, config) or check_min_stake_amount(amount)


def validate_fee_rate_update(
    sender: Principal, config: ProtocolConfig, fee_rate: int,
) -> ProtocolError | None:
    return check_owner(sender, config) or check_fee_rate(fee_rate)


def validate_treasury_update(
    sender: Principal, config: ProtocolConfig, treasury: str,
) -> ProtocolError | None:
    return check_owner(sender, config) or check_treasury(treasury)
