"""PremiumAccessGrant ORM — permanent unlock keyed by (thread_id, user).

Invariants:
    - Composite primary key: at most one grant per thread and user
    - Rows are never deleted
"""

from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from stakethread.db.base import Base


class PremiumAccessGrant(Base):
    __tablename__ = "premium_access_grants"

    thread_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("threads.id"), primary_key=True,
    )
    user: Mapped[str] = mapped_column(String(128), primary_key=True)
    purchased_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
