"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8010
    debug: bool = True
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Backend API
    api_base_url: str = "http://localhost:5000"
    api_prefix: str = "/api"
    api_timeout: float = 15.0
    api_token: str | None = None

    # Payment gateway script
    gateway_script_url: str = "https://checkout.razorpay.com/v1/checkout.js"
    gateway_probe_timeout: float = 10.0

    # Checkout widget policy
    checkout_timeout_seconds: int = 900
    checkout_retry_enabled: bool = True
    checkout_retry_max_count: int = 1
    checkout_currency: str = "INR"
    merchant_name: str = "K&M Events"
    merchant_logo_url: str = "/logo.png"
    theme_color: str = "#4F46E5"

    # Unit the /payments/create-order endpoint expects for `amount`
    create_order_amount_unit: Literal["major", "minor"] = "major"

    # Status page links
    support_url: str = "/help"
    home_url: str = "/"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
