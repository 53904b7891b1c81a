"""Admin Handlers — owner-only protocol configuration (3 methods)."""

import logging
from dataclasses import replace

from stakethread.core.domain_types import Principal
from stakethread.core.enforce_admin import (
    validate_fee_rate_update, validate_min_stake_update, validate_treasury_update,
)
from stakethread.core.ledger_transaction import LedgerTransaction

logger = logging.getLogger(__name__)


class AdminHandlers:
    """Protocol configuration."""

    def __init__(self, txn: LedgerTransaction):
        self.txn = txn

    def set_min_stake_amount(self, amount: int) -> int:
        error = validate_min_stake_update(self.txn.sender, self.txn.config, amount)
        if error:
            raise error
        self.txn.set_config(replace(self.txn.config, min_stake_amount=amount))
        logger.debug(f"Minimum stake set to {amount}")
        return amount

    def set_platform_fee_rate(self, fee_rate: int) -> int:
        error = validate_fee_rate_update(self.txn.sender, self.txn.config, fee_rate)
        if error:
            raise error
        self.txn.set_config(replace(self.txn.config, platform_fee_rate=fee_rate))
        logger.debug(f"Platform fee rate set to {fee_rate} bps")
        return fee_rate

    def set_platform_treasury(self, treasury: str) -> str:
        error = validate_treasury_update(self.txn.sender, self.txn.config, treasury)
        if error:
            raise error
        self.txn.set_config(
            replace(self.txn.config, platform_treasury=Principal(treasury)),
        )
        logger.debug(f"Platform treasury set to {treasury}")
        return treasury
