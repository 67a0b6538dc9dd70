from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Consignment API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    # Database (Postgres in production, SQLite for local dev and tests)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./consignment_dev.db",
        alias="DATABASE_URL",
    )
    sql_echo: bool = Field(default=False, alias="SQL_ECHO")

    # Auth
    password_hash_rounds: int = Field(default=10, alias="PASSWORD_HASH_ROUNDS")
    default_user_role: str = "readOnly"

    # Metrics windows
    upcoming_window_days: int = Field(default=30, alias="UPCOMING_WINDOW_DAYS")
    trend_window_days: int = Field(default=30, alias="TREND_WINDOW_DAYS")
    installment_reminder_days: int = Field(default=7, alias="INSTALLMENT_REMINDER_DAYS")

    # Payouts: a sold item counts as pending until the vendor has received
    # this share of what clients paid for it
    payout_pending_share: Decimal = Field(default=Decimal("0.70"), alias="PAYOUT_PENDING_SHARE")

    # Contracts
    default_terms_text: str = Field(
        default="Términos y condiciones estándar", alias="DEFAULT_TERMS_TEXT",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
