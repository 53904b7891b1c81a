"""Reply ORM — persists a reply and its optional parent link.

Invariants:
    - thread_id is immutable after insert
    - parent_reply_id, when set, points at a reply with the same thread_id
      (enforced by the ledger before the row is written)
"""

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from stakethread.db.base import Base


class Reply(Base):
    """Reply row — ids are global across threads."""
    __tablename__ = "replies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    thread_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("threads.id"), nullable=False, index=True,
    )
    author: Mapped[str] = mapped_column(String(128), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tips_received: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    parent_reply_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("replies.id"), nullable=True,
    )
