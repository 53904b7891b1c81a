"""Core Layer — pure protocol logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Check functions are pure and deterministic; only LedgerTransaction.commit()
      mutates LedgerState

Design Decisions:
    - Functional core separated from imperative shell
"""
