"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Protocol parameters here only seed genesis; afterwards the ledger's own
      config (owner-mutable) is authoritative
    - platform_fee_rate is validated to 0..10_000 basis points

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from stakethread.core.domain_types import (
    BASIS_POINTS_DENOMINATOR, DEFAULT_MIN_STAKE_AMOUNT, DEFAULT_PLATFORM_FEE_RATE,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://stakethread:stakethread@db:5432/stakethread"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Protocol genesis
    protocol_owner: str = "deployer"
    platform_treasury: str | None = None  # None = owner
    stake_escrow: str = "stakethread.escrow"
    min_stake_amount: int = DEFAULT_MIN_STAKE_AMOUNT
    platform_fee_rate: int = DEFAULT_PLATFORM_FEE_RATE
    genesis_balances: dict[str, int] = {}

    @field_validator("platform_fee_rate")
    @classmethod
    def check_fee_rate(cls, v: int) -> int:
        if not 0 <= v <= BASIS_POINTS_DENOMINATOR:
            raise ValueError(
                f"platform_fee_rate must be within 0..{BASIS_POINTS_DENOMINATOR}",
            )
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
