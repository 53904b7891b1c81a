"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the state machine itself stays
      synchronous; the shell awaits around it
"""

from typing import Protocol

from stakethread.core.ledger_state import LedgerState
from stakethread.core.ledger_transaction import ChangeSet


class LedgerRepository(Protocol):
    """Contract for ledger persistence — implemented by shell."""
    async def load(self) -> LedgerState | None: ...
    async def save(self, changes: ChangeSet) -> None: ...
