"""Root conftest — shared test configuration."""

import os

# Settings are read at import time by stakethread.main; never reach a real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
