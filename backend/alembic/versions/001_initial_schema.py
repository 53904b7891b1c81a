"""Initial schema — threads, replies, reputations, stakes, grants, votes, boosts, balances, meta.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "threads",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("author", sa.String(128), nullable=False, index=True),
        sa.Column("title", sa.String(256), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("is_premium", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("premium_price", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("created_at", sa.BigInteger, nullable=False),
        sa.Column("upvotes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("tips_received", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("is_locked", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("reply_count", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "replies",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("thread_id", sa.Integer, sa.ForeignKey("threads.id"), nullable=False, index=True),
        sa.Column("author", sa.String(128), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("created_at", sa.BigInteger, nullable=False),
        sa.Column("upvotes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("tips_received", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("parent_reply_id", sa.Integer, sa.ForeignKey("replies.id"), nullable=True),
    )

    op.create_table(
        "user_reputations",
        sa.Column("principal", sa.String(128), primary_key=True),
        sa.Column("total_upvotes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_downvotes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("threads_created", sa.Integer, nullable=False, server_default="0"),
        sa.Column("replies_created", sa.Integer, nullable=False, server_default="0"),
        sa.Column("tips_sent", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("tips_received", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("staked_amount", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("reputation_score", sa.BigInteger, nullable=False, server_default="0"),
    )

    op.create_table(
        "stakes",
        sa.Column("principal", sa.String(128), primary_key=True),
        sa.Column("amount", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("locked_until", sa.BigInteger, nullable=False, server_default="0"),
    )

    op.create_table(
        "premium_access_grants",
        sa.Column("thread_id", sa.Integer, sa.ForeignKey("threads.id"), primary_key=True),
        sa.Column("user", sa.String(128), primary_key=True),
        sa.Column("purchased_at", sa.BigInteger, nullable=False),
    )

    op.create_table(
        "votes",
        sa.Column("target_kind", sa.String(10), primary_key=True),
        sa.Column("target_id", sa.Integer, primary_key=True),
        sa.Column("voter", sa.String(128), primary_key=True),
        sa.Column("is_upvote", sa.Boolean, nullable=False),
        sa.CheckConstraint(
            "target_kind IN ('thread', 'reply')", name="ck_votes_target_kind",
        ),
    )

    op.create_table(
        "thread_boosts",
        sa.Column("thread_id", sa.Integer, sa.ForeignKey("threads.id"), primary_key=True),
        sa.Column("boost_amount", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("boosters", sa.JSON, nullable=False),
    )

    op.create_table(
        "native_balances",
        sa.Column("principal", sa.String(128), primary_key=True),
        sa.Column("balance", sa.BigInteger, nullable=False, server_default="0"),
    )

    op.create_table(
        "ledger_meta",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("thread_nonce", sa.Integer, nullable=False, server_default="0"),
        sa.Column("reply_nonce", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_block_height", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("platform_treasury", sa.String(128), nullable=False),
        sa.Column("stake_escrow", sa.String(128), nullable=False),
        sa.Column("min_stake_amount", sa.BigInteger, nullable=False),
        sa.Column("platform_fee_rate", sa.Integer, nullable=False),
    )


def downgrade() -> None:
    op.drop_table("ledger_meta")
    op.drop_table("native_balances")
    op.drop_table("thread_boosts")
    op.drop_table("votes")
    op.drop_table("premium_access_grants")
    op.drop_table("stakes")
    op.drop_table("user_reputations")
    op.drop_table("replies")
    op.drop_table("threads")
