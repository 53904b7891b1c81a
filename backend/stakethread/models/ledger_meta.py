"""LedgerMeta ORM — single row holding sequences, last block height and config.

Invariants:
    - Exactly one row, id = 1
    - Written in the same database transaction as the records it accompanies
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from stakethread.db.base import Base

LEDGER_META_ID = 1


class LedgerMeta(Base):
    __tablename__ = "ledger_meta"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    thread_nonce: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reply_nonce: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_block_height: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    owner: Mapped[str] = mapped_column(String(128), nullable=False)
    platform_treasury: Mapped[str] = mapped_column(String(128), nullable=False)
    stake_escrow: Mapped[str] = mapped_column(String(128), nullable=False)
    min_stake_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    platform_fee_rate: Mapped[int] = mapped_column(Integer, nullable=False)
