"""Error Hierarchy — typed, categorized exceptions for all StakeThread failure modes.

Invariants:
    - Every protocol error has a code (str), kind (ErrorKind), category, severity
    - One exception class per ErrorKind; no numeric codes cross the core boundary
    - Protocol errors (400-level) abort a transaction with zero state change
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with StakeThreadError base: FastAPI global handler catches all
    - Check functions return these instances (or None) and handlers raise them,
      so the same object describes the failure in tests, logs and responses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PERMISSION = "permission"
    PAYMENT = "payment"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """Protocol error taxonomy — one variant per abort condition."""
    OWNER_ONLY = "OWNER_ONLY"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    THREAD_LOCKED = "THREAD_LOCKED"
    ALREADY_VOTED = "ALREADY_VOTED"
    INVALID_TIP = "INVALID_TIP"
    SELF_TIP = "SELF_TIP"
    THREAD_NOT_PREMIUM = "THREAD_NOT_PREMIUM"
    INSUFFICIENT_STAKE = "INSUFFICIENT_STAKE"
    INVALID_PARENT_REPLY = "INVALID_PARENT_REPLY"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    sender: str | None = None
    action: str | None = None
    block_height: int | None = None
    debug_info: dict[str, Any] | None = None


class StakeThreadError(Exception):
    """Base exception for all StakeThread errors."""

    kind: ErrorKind | None = None

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "sender": self.context.sender,
                    "action": self.context.action,
                    "block_height": self.context.block_height,
                },
            }
        }


class ProtocolError(StakeThreadError):
    """Abort raised by a protocol rule. Subclasses fix kind, category and status."""

    kind: ErrorKind
    category: ErrorCategory = ErrorCategory.BUSINESS_RULE
    http_status: int = 400

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, self.kind.value, type(self).category,
            ErrorSeverity.ERROR, context, type(self).http_status,
        )


# ─── Protocol Errors (400-level) ────────────────────────────────

class OwnerOnlyError(ProtocolError):
    """Config mutation attempted by someone other than the protocol owner."""
    kind = ErrorKind.OWNER_ONLY
    category = ErrorCategory.PERMISSION
    http_status = 403

    def __init__(self, sender: str, context: ErrorContext | None = None):
        super().__init__(f"'{sender}' is not the protocol owner", context)
        self.sender = sender


class NotFoundError(ProtocolError):
    """Referenced thread, reply or stake does not exist."""
    kind = ErrorKind.NOT_FOUND
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: object,
        context: ErrorContext | None = None,
    ):
        super().__init__(f"{resource_type} '{resource_id}' not found", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


class UnauthorizedError(ProtocolError):
    """Caller is not entitled to the action."""
    kind = ErrorKind.UNAUTHORIZED
    category = ErrorCategory.PERMISSION
    http_status = 403


class InsufficientBalanceError(ProtocolError):
    """A value transfer cannot be covered by the sender's balance."""
    kind = ErrorKind.INSUFFICIENT_BALANCE
    category = ErrorCategory.PAYMENT
    http_status = 402

    def __init__(
        self, sender: str, required: int, available: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"'{sender}' needs {required} but holds {available}", context,
        )
        self.sender = sender
        self.required = required
        self.available = available


class InvalidAmountError(ProtocolError):
    """Empty or oversized text, zero amount, or inconsistent premium price."""
    kind = ErrorKind.INVALID_AMOUNT
    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(message, context)
        self.field = field


class ThreadLockedError(ProtocolError):
    kind = ErrorKind.THREAD_LOCKED
    http_status = 409

    def __init__(self, thread_id: int, context: ErrorContext | None = None):
        super().__init__(f"Thread '{thread_id}' is locked", context)
        self.thread_id = thread_id


class AlreadyVotedError(ProtocolError):
    kind = ErrorKind.ALREADY_VOTED
    category = ErrorCategory.CONFLICT
    http_status = 409

    def __init__(
        self, target_kind: str, target_id: int, voter: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"'{voter}' already voted on {target_kind} '{target_id}'", context,
        )
        self.target_kind = target_kind
        self.target_id = target_id
        self.voter = voter


class InvalidTipError(ProtocolError):
    kind = ErrorKind.INVALID_TIP
    category = ErrorCategory.VALIDATION

    def __init__(self, amount: int, context: ErrorContext | None = None):
        super().__init__(f"Tip amount must be positive, got {amount}", context)
        self.amount = amount


class SelfTipError(ProtocolError):
    kind = ErrorKind.SELF_TIP

    def __init__(self, sender: str, context: ErrorContext | None = None):
        super().__init__(f"'{sender}' cannot tip their own content", context)
        self.sender = sender


class ThreadNotPremiumError(ProtocolError):
    """Premium-only action on a free thread, or premium content without a grant."""
    kind = ErrorKind.THREAD_NOT_PREMIUM
    http_status = 403


class InsufficientStakeError(ProtocolError):
    kind = ErrorKind.INSUFFICIENT_STAKE
    http_status = 403

    def __init__(self, sender: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{sender}' does not hold an active stake at or above the minimum",
            context,
        )
        self.sender = sender


class InvalidParentReplyError(ProtocolError):
    kind = ErrorKind.INVALID_PARENT_REPLY
    category = ErrorCategory.VALIDATION

    def __init__(
        self, parent_reply_id: int, thread_id: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Reply '{parent_reply_id}' is not a reply in thread '{thread_id}'",
            context,
        )
        self.parent_reply_id = parent_reply_id
        self.thread_id = thread_id


# ─── Infrastructure Errors ──────────────────────────────────────

class StaleBlockHeightError(StakeThreadError):
    """Transaction carries a block height older than the last committed one."""
    def __init__(
        self, block_height: int, last_block_height: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Block height {block_height} precedes last committed height "
            f"{last_block_height}",
            "STALE_BLOCK_HEIGHT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.block_height = block_height
        self.last_block_height = last_block_height


class DatabaseError(StakeThreadError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
