"""NativeBalance ORM — native value held by each identity."""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from stakethread.db.base import Base


class NativeBalance(Base):
    __tablename__ = "native_balances"

    principal: Mapped[str] = mapped_column(String(128), primary_key=True)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
