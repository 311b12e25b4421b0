"""Configuration management using Pydantic Settings"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "nepali-ledger"
    log_level: str = "INFO"

    # Calendar - IANA zone for "today"; empty uses the system local zone
    local_timezone: str = ""

    # Interest
    interest_base: Literal["compounded", "principal"] = "compounded"
    days_per_month: int = 30  # daily tier divisor

    # Presentation
    money_decimal_places: int = 2


settings = Settings()
