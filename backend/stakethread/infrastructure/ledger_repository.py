"""SQL Ledger Repository — persists ChangeSets and rebuilds LedgerState from the database.

Invariants:
    - save() writes one ChangeSet in ONE database transaction (all rows + meta, or nothing)
    - Rows are upserted via session.merge(); the ledger never deletes records
    - load() returns None when no ledger_meta row exists (fresh database)
    - Tables are written in LedgerTable order so parents precede children

Design Decisions:
    - Explicit per-table converters: every column mapping visible in one place
    - Implements core.repository_protocols.LedgerRepository structurally (no inheritance)
"""

import logging
from typing import Callable

from sqlalchemy import select

from stakethread.core.domain_types import (
    BlockHeight, LedgerTable, Principal, ReplyId, TargetKind, ThreadId,
    PremiumAccessKey, VoteKey,
)
from stakethread.core import ledger_records as records
from stakethread.core.ledger_state import LedgerState
from stakethread.core.ledger_transaction import ChangeSet
from stakethread.infrastructure.database import DatabaseSessionManager
from stakethread.models.ledger_meta import LedgerMeta, LEDGER_META_ID
from stakethread.models.native_balance import NativeBalance
from stakethread.models.premium_access_grant import PremiumAccessGrant as GrantModel
from stakethread.models.reply import Reply as ReplyModel
from stakethread.models.stake import Stake as StakeModel
from stakethread.models.thread import Thread as ThreadModel
from stakethread.models.thread_boost import ThreadBoost as BoostModel
from stakethread.models.user_reputation import UserReputation as ReputationModel
from stakethread.models.vote_record import VoteRecord as VoteModel

logger = logging.getLogger(__name__)


# ─── Record -> row ──────────────────────────────────────────────

def _thread_row(key: ThreadId, t: records.Thread) -> ThreadModel:
    return ThreadModel(
        id=t.id, author=t.author, title=t.title, content=t.content,
        is_premium=t.is_premium, premium_price=t.premium_price,
        created_at=t.created_at, upvotes=t.upvotes, downvotes=t.downvotes,
        tips_received=t.tips_received, is_locked=t.is_locked,
        reply_count=t.reply_count,
    )


def _reply_row(key: ReplyId, r: records.Reply) -> ReplyModel:
    return ReplyModel(
        id=r.id, thread_id=r.thread_id, author=r.author, content=r.content,
        created_at=r.created_at, upvotes=r.upvotes, downvotes=r.downvotes,
        tips_received=r.tips_received, parent_reply_id=r.parent_reply_id,
    )


def _reputation_row(key: Principal, u: records.UserReputation) -> ReputationModel:
    return ReputationModel(
        principal=u.principal, total_upvotes=u.total_upvotes,
        total_downvotes=u.total_downvotes, threads_created=u.threads_created,
        replies_created=u.replies_created, tips_sent=u.tips_sent,
        tips_received=u.tips_received, staked_amount=u.staked_amount,
        reputation_score=u.reputation_score,
    )


def _stake_row(key: Principal, s: records.Stake) -> StakeModel:
    return StakeModel(principal=s.principal, amount=s.amount, locked_until=s.locked_until)


def _grant_row(key: PremiumAccessKey, g: records.PremiumAccessGrant) -> GrantModel:
    return GrantModel(thread_id=g.thread_id, user=g.user, purchased_at=g.purchased_at)


def _vote_row(key: VoteKey, v: records.VoteRecord) -> VoteModel:
    return VoteModel(
        target_kind=v.target_kind.value, target_id=v.target_id,
        voter=v.voter, is_upvote=v.is_upvote,
    )


def _boost_row(key: ThreadId, b: records.ThreadBoost) -> BoostModel:
    return BoostModel(
        thread_id=b.thread_id, boost_amount=b.boost_amount, boosters=list(b.boosters),
    )


def _balance_row(key: Principal, balance: int) -> NativeBalance:
    return NativeBalance(principal=key, balance=balance)


_TO_ROW: dict[LedgerTable, Callable] = {
    LedgerTable.THREADS: _thread_row,
    LedgerTable.REPLIES: _reply_row,
    LedgerTable.REPUTATIONS: _reputation_row,
    LedgerTable.STAKES: _stake_row,
    LedgerTable.PREMIUM_ACCESS: _grant_row,
    LedgerTable.VOTES: _vote_row,
    LedgerTable.BOOSTS: _boost_row,
    LedgerTable.BALANCES: _balance_row,
}


def _meta_row(changes: ChangeSet) -> LedgerMeta:
    config = changes.config
    return LedgerMeta(
        id=LEDGER_META_ID,
        thread_nonce=changes.thread_nonce,
        reply_nonce=changes.reply_nonce,
        last_block_height=changes.last_block_height,
        owner=config.owner,
        platform_treasury=config.platform_treasury,
        stake_escrow=config.stake_escrow,
        min_stake_amount=config.min_stake_amount,
        platform_fee_rate=config.platform_fee_rate,
    )


# ─── Row -> record ──────────────────────────────────────────────

def _thread_record(row: ThreadModel) -> records.Thread:
    return records.Thread(
        id=ThreadId(row.id), author=Principal(row.author), title=row.title,
        content=row.content, is_premium=row.is_premium,
        premium_price=row.premium_price, created_at=BlockHeight(row.created_at),
        upvotes=row.upvotes, downvotes=row.downvotes,
        tips_received=row.tips_received, is_locked=row.is_locked,
        reply_count=row.reply_count,
    )


def _reply_record(row: ReplyModel) -> records.Reply:
    return records.Reply(
        id=ReplyId(row.id), thread_id=ThreadId(row.thread_id),
        author=Principal(row.author), content=row.content,
        created_at=BlockHeight(row.created_at), upvotes=row.upvotes,
        downvotes=row.downvotes, tips_received=row.tips_received,
        parent_reply_id=(
            ReplyId(row.parent_reply_id) if row.parent_reply_id is not None else None
        ),
    )


def _reputation_record(row: ReputationModel) -> records.UserReputation:
    return records.UserReputation(
        principal=Principal(row.principal), total_upvotes=row.total_upvotes,
        total_downvotes=row.total_downvotes, threads_created=row.threads_created,
        replies_created=row.replies_created, tips_sent=row.tips_sent,
        tips_received=row.tips_received, staked_amount=row.staked_amount,
        reputation_score=row.reputation_score,
    )


def _config_record(meta: LedgerMeta) -> records.ProtocolConfig:
    return records.ProtocolConfig(
        owner=Principal(meta.owner),
        platform_treasury=Principal(meta.platform_treasury),
        stake_escrow=Principal(meta.stake_escrow),
        min_stake_amount=meta.min_stake_amount,
        platform_fee_rate=meta.platform_fee_rate,
    )


class SqlLedgerRepository:
    """LedgerRepository backed by SQLAlchemy async sessions."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def save(self, changes: ChangeSet) -> None:
        """Upsert every staged row plus the meta row, in one commit."""
        if changes.config is None:
            raise ValueError("ChangeSet without config cannot be persisted")
        async with self._db.session() as db:
            for table in LedgerTable:
                to_row = _TO_ROW[table]
                for key, value in changes.rows(table).items():
                    await db.merge(to_row(key, value))
            await db.merge(_meta_row(changes))
            await db.commit()
        logger.debug(
            f"Persisted {changes.record_count} record(s) at block "
            f"{changes.last_block_height}",
            extra={"block_height": changes.last_block_height},
        )

    async def load(self) -> LedgerState | None:
        """Rebuild the full state, or None for an empty database."""
        async with self._db.session() as db:
            meta = await db.get(LedgerMeta, LEDGER_META_ID)
            if meta is None:
                return None

            state = LedgerState(
                config=_config_record(meta),
                thread_nonce=meta.thread_nonce,
                reply_nonce=meta.reply_nonce,
                last_block_height=BlockHeight(meta.last_block_height),
            )
            for row in (await db.execute(select(ThreadModel))).scalars():
                state.threads[ThreadId(row.id)] = _thread_record(row)
            for row in (await db.execute(select(ReplyModel))).scalars():
                state.replies[ReplyId(row.id)] = _reply_record(row)
            for row in (await db.execute(select(ReputationModel))).scalars():
                state.reputations[Principal(row.principal)] = _reputation_record(row)
            for row in (await db.execute(select(StakeModel))).scalars():
                state.stakes[Principal(row.principal)] = records.Stake(
                    principal=Principal(row.principal), amount=row.amount,
                    locked_until=BlockHeight(row.locked_until),
                )
            for row in (await db.execute(select(GrantModel))).scalars():
                grant = records.PremiumAccessGrant(
                    thread_id=ThreadId(row.thread_id), user=Principal(row.user),
                    purchased_at=BlockHeight(row.purchased_at),
                )
                state.premium_access[grant.key] = grant
            for row in (await db.execute(select(VoteModel))).scalars():
                vote = records.VoteRecord(
                    target_kind=TargetKind(row.target_kind), target_id=row.target_id,
                    voter=Principal(row.voter), is_upvote=row.is_upvote,
                )
                state.votes[vote.key] = vote
            for row in (await db.execute(select(BoostModel))).scalars():
                state.boosts[ThreadId(row.thread_id)] = records.ThreadBoost(
                    thread_id=ThreadId(row.thread_id), boost_amount=row.boost_amount,
                    boosters=tuple(Principal(p) for p in row.boosters),
                )
            for row in (await db.execute(select(NativeBalance))).scalars():
                state.balances[Principal(row.principal)] = row.balance

        logger.debug(f"Loaded ledger state at block {state.last_block_height}")
        return state
