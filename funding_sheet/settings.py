"""Environment-backed settings for funding sheet."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://ftx.com/api"


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = Field(default=None, alias="API_KEY")
    api_secret: str | None = Field(default=None, alias="API_SECRET")
    subaccount: str | None = Field(default=None, alias="SUBACCOUNT")
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, alias="API_BASE_URL")

    google_sheet_id: str | None = Field(default=None, alias="GOOGLE_SHEET_ID")
    google_service_account_email: str | None = Field(
        default=None, alias="GOOGLE_SERVICE_ACCOUNT_EMAIL"
    )
    google_private_key: str | None = Field(default=None, alias="GOOGLE_PRIVATE_KEY")

    # usd -> hkd multiplier used by the summary formulas
    hkd_to_usd_rate: float = Field(default=7.78, alias="HKD_TO_USD_RATE")
    concurrency_limit: int = Field(default=10, alias="CONCURRENCY_LIMIT")
