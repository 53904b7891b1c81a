"""UserReputation ORM — per-identity counters and the derived score."""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from stakethread.db.base import Base


class UserReputation(Base):
    __tablename__ = "user_reputations"

    principal: Mapped[str] = mapped_column(String(128), primary_key=True)
    total_upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    threads_created: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    replies_created: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tips_sent: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    tips_received: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    staked_amount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    reputation_score: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
