"""ThreadBoost ORM — boost amount and up to 20 contributing identities."""

from sqlalchemy import BigInteger, ForeignKey, Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from stakethread.db.base import Base


class ThreadBoost(Base):
    __tablename__ = "thread_boosts"

    thread_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("threads.id"), primary_key=True,
    )
    boost_amount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    boosters: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
