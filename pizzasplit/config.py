"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - The engine never reads Settings: routes turn defaults + request into an
      explicit OrderSettings per calculation

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Order defaults mirror the classic pizzeria menu (8-slice large, 6-slice small,
      small at 80% of large, every 3rd pizza free)
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://pizza:pizza@db:5432/pizzasplit"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Order defaults (applied when a request omits a field)
    default_scheme_id: str = "equal-price"
    default_large_slices: int = 8
    default_small_slices: int = 6
    default_large_price: int = 800
    default_small_price_percent: int | None = 80
    default_free_pizza_threshold: int = 3
    default_free_pizza_size: str = "large"
    default_use_free_promotion: bool = True
    default_currency: str = "RUB"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
