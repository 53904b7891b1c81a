"""Services Layer — transaction handlers, action dispatch, ForumLedger and LedgerService.

Invariants:
    - Handlers split by component (Thread Registry, Reply Tree, Premium, Engagement,
      Staking, Admin); each validates via core/ before staging a single write
    - Action dispatch uses explicit dict mapping (no auto-discovery)
    - Only LedgerService touches persistence; handlers see a LedgerTransaction only

Design Decisions:
    - One handler file per component for locality (no god objects)
"""
