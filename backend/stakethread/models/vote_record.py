"""VoteRecord ORM — one vote per (target_kind, target_id, voter).

Invariants:
    - Composite primary key prevents duplicate votes from the same voter
    - target_id is not a foreign key: it points into threads or replies
      depending on target_kind
"""

from sqlalchemy import Boolean, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from stakethread.db.base import Base


class VoteRecord(Base):
    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint(
            "target_kind IN ('thread', 'reply')", name="ck_votes_target_kind",
        ),
    )

    target_kind: Mapped[str] = mapped_column(String(10), primary_key=True)
    target_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    voter: Mapped[str] = mapped_column(String(128), primary_key=True)
    is_upvote: Mapped[bool] = mapped_column(Boolean, nullable=False)
