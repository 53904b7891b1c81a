"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain protocol logic (delegate to LedgerService / ForumLedger)
    - Only transactions.py writes; every other module is read-only
"""
