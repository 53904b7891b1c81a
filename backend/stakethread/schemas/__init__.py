"""Schemas — Pydantic models at the API boundary.

Invariants:
    - actions.py describes what may be submitted; ledger.py describes what may be read
"""
