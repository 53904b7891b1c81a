"""Reply Tree Enforcement — validates reply creation before any mutation.

Invariants:
    - All functions are PURE: no IO, no state mutation
    - Check order: stake, thread exists, unlocked, content, parent, premium grant
    - A parent reply must exist and belong to the same thread
    - Premium threads need a grant even for their own author
"""

from stakethread.core.domain_types import (
    BlockHeight, Principal, ReplyId, ThreadId, MAX_REPLY_CONTENT_LENGTH,
)
from stakethread.core.enforce_premium import has_premium_access
from stakethread.core.enforce_stake import check_staked
from stakethread.core.enforce_threads import check_text, check_thread_exists
from stakethread.core.errors import (
    InvalidParentReplyError, ProtocolError, ThreadLockedError, ThreadNotPremiumError,
)
from stakethread.core.ledger_records import (
    PremiumAccessGrant, ProtocolConfig, Reply, Stake, Thread,
)


def check_thread_unlocked(thread: Thread) -> ThreadLockedError | None:
    if thread.is_locked:
        return ThreadLockedError(thread.id)
    return None


def check_parent_reply(
    thread_id: ThreadId,
    parent_reply_id: ReplyId | None,
    parent: Reply | None,
) -> InvalidParentReplyError | None:
    """No parent is always valid; a given parent must resolve inside the thread."""
    if parent_reply_id is None:
        return None
    if parent is None or parent.thread_id != thread_id:
        return InvalidParentReplyError(parent_reply_id, thread_id)
    return None


def check_premium_gate(
    sender: Principal, thread: Thread, grant: PremiumAccessGrant | None,
) -> ThreadNotPremiumError | None:
    if not has_premium_access(thread, grant):
        return ThreadNotPremiumError(
            f"'{sender}' has not purchased access to premium thread '{thread.id}'",
        )
    return None


def validate_reply_creation(
    sender: Principal,
    stake: Stake | None,
    config: ProtocolConfig,
    now: BlockHeight,
    thread_id: ThreadId,
    thread: Thread | None,
    content: str,
    parent_reply_id: ReplyId | None,
    parent: Reply | None,
    grant: PremiumAccessGrant | None,
) -> ProtocolError | None:
    """Chain all create_reply checks. Returns first error or None."""
    return (
        check_staked(sender, stake, config, now)
        or check_thread_exists(thread_id, thread)
        or check_thread_unlocked(thread)
        or check_text(content, "content", MAX_REPLY_CONTENT_LENGTH)
        or check_parent_reply(thread_id, parent_reply_id, parent)
        or check_premium_gate(sender, thread, grant)
    )
