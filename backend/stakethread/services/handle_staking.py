"""Staking Handlers — deposit into and withdraw from the stake escrow (2 methods).

Invariants:
    - Staked funds sit on ProtocolConfig.stake_escrow's native balance
    - locked_until only ever moves forward on top-ups
    - Reputation.staked_amount mirrors Stake.amount after every change
"""

from dataclasses import replace

from stakethread.core.domain_types import BlockHeight
from stakethread.core.enforce_stake import validate_stake_deposit, validate_unstake
from stakethread.core.ledger_records import Stake
from stakethread.core.ledger_transaction import LedgerTransaction
from stakethread.core.reputation import with_staked_amount


class StakingHandlers:
    """Stake Ledger writes."""

    def __init__(self, txn: LedgerTransaction):
        self.txn = txn

    def stake(self, amount: int, lock_period: int) -> dict:
        txn = self.txn
        error = validate_stake_deposit(
            txn.sender, txn.config, amount, lock_period, txn.now,
        )
        if error:
            raise error

        txn.transfer(txn.sender, txn.config.stake_escrow, amount)
        current = txn.stake(txn.sender)
        locked_until = BlockHeight(txn.now + lock_period)
        if current is None:
            stake = Stake(principal=txn.sender, amount=amount, locked_until=locked_until)
        else:
            stake = replace(
                current,
                amount=current.amount + amount,
                locked_until=max(current.locked_until, locked_until),
            )
        txn.put_stake(stake)
        txn.put_reputation(with_staked_amount(txn.reputation(txn.sender), stake.amount))
        return {"amount": stake.amount, "locked_until": stake.locked_until}

    def unstake(self) -> int:
        txn = self.txn
        current = txn.stake(txn.sender)
        error = validate_unstake(txn.sender, txn.config, current, txn.now)
        if error:
            raise error

        txn.transfer(txn.config.stake_escrow, txn.sender, current.amount)
        txn.put_stake(replace(current, amount=0))
        txn.put_reputation(with_staked_amount(txn.reputation(txn.sender), 0))
        return current.amount
