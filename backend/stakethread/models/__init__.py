"""ORM Models — SQLAlchemy declarative models for the persisted ledger tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Primary keys mirror the ledger's own keys; the database never allocates ids

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from stakethread.models.thread import Thread  # noqa: F401
from stakethread.models.reply import Reply  # noqa: F401
from stakethread.models.user_reputation import UserReputation  # noqa: F401
from stakethread.models.stake import Stake  # noqa: F401
from stakethread.models.premium_access_grant import PremiumAccessGrant  # noqa: F401
from stakethread.models.vote_record import VoteRecord  # noqa: F401
from stakethread.models.thread_boost import ThreadBoost  # noqa: F401
from stakethread.models.native_balance import NativeBalance  # noqa: F401
from stakethread.models.ledger_meta import LedgerMeta  # noqa: F401
