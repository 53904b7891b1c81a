"""Infrastructure Layer — database sessions, ledger persistence and logging.

Invariants:
    - Infrastructure depends on core/ types, never on services/ or api/
    - All SQLAlchemy failures mapped to DatabaseError before leaving this layer

Design Decisions:
    - Repository implements core.repository_protocols.LedgerRepository structurally
"""
