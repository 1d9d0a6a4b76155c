"""
Application settings loaded from environment variables.

Uses pydantic-settings for type-safe configuration with .env file support.
"""

from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Global application settings."""

    # App
    APP_NAME: str = "MoneyFlow Core"
    APP_ENV: str = "development"
    DEBUG: bool = True

    # Supabase (profile store)
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    PROFILE_SOURCE_MOCK: bool = True  # set False in production to call Supabase
    PROFILE_FETCH_TIMEOUT_SECONDS: float = 10.0

    # Profile cache
    PROFILE_CACHE_TTL_SECONDS: float = 60.0
    PROFILE_CACHE_MAXSIZE: int = 10000

    # Currency
    CURRENCY_CODE: str = "XAF"
    CURRENCY_QUANTUM: Decimal = Decimal("1")  # XAF has no minor unit

    # Withdrawal fees
    WITHDRAWAL_FEE_RATE_STANDARD: Decimal = Decimal("0.015")
    WITHDRAWAL_FEE_RATE_EXTENDED: Decimal = Decimal("0.06")
    AGENT_COMMISSION_SHARE: str = "1/3"  # parsed as a Fraction

    # Limits
    MONTHLY_TRANSFER_LIMIT: Decimal = Decimal("2000000")

    # Roles
    MAIN_ADMIN_PHONE: str = "+221773637752"

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:8080"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
