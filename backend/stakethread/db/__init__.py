"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Every ORM model inherits from db.base.Base

Design Decisions:
    - asyncpg driver for PostgreSQL (native async, no thread pool overhead)
"""
