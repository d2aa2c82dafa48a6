"""Client configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STAGING_BASE_URL = "https://sbdevzone.sterling.ng/Spay"
PRODUCTION_BASE_URL = "https://webapps.sterling.ng/spay"
REQUERY_BASE_URL = "https://epayments.sterling.ng"


class Settings(BaseSettings):
    """
    SPay client settings loaded from environment variables.

    All settings can be overridden via environment variables with the
    SPAY_ prefix or a .env file:
        SPAY_APP_ID=1234
        SPAY_SHARED_KEY=0101...
        SPAY_SHARED_VECTOR=0110...
    """

    model_config = SettingsConfigDict(
        env_prefix="SPAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Gateway
    base_url: str = STAGING_BASE_URL
    app_id: int = 0
    request_timeout: float = Field(default=30.0, gt=0.0)

    # Shared secret, as bit-strings
    shared_key: str = Field(default="", repr=False)
    shared_vector: str = Field(default="", repr=False)

    # Envelope behaviour
    encrypt_requests: bool = True
    decrypt_response: bool = False
    verify_encryption: bool = Field(
        default=True,
        description="Log a decrypt-after-encrypt check for every outbound request",
    )

    # Account
    from_account: str = ""
    bank_code: str = "232"
    teller_id: str = "sample-teller-e5dc63e264d29b7578e96bf"
    default_location: str = "6.44,3.53"
    transfer_cost: float = 10.0

    # Inflow requery
    requery_base_url: str = REQUERY_BASE_URL

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("base_url", "requery_base_url")
    @classmethod
    def _require_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base url is required for the spay api")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
