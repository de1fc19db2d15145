"""
Runtime settings for RoadGuard, read from ``ROADGUARD_*`` environment
variables or a local ``.env`` file.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings. Engine knobs bound the forecast and patterns views."""

    model_config = SettingsConfigDict(
        env_prefix="ROADGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Record source
    workbook_path: str = Field(
        default="./data/accidents.xlsx",
        description="Daily accident workbook; only the first sheet is read",
    )

    # HTTP
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=4000, ge=1, le=65535)
    api_reload: bool = False
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated origins allowed by CORS",
    )

    # Logging
    log_level: str = "info"
    log_format: Literal["json", "console"] = "json"

    # Engine
    forecast_window_days: int = Field(
        default=30, ge=2, description="Trailing records used to fit the forecast trend"
    )
    forecast_default_days: int = Field(
        default=7, ge=1, description="Forecast horizon when none is requested"
    )
    forecast_max_days: int = Field(
        default=90, ge=1, description="Upper bound applied to the forecast horizon"
    )
    patterns_risk_window: int = Field(
        default=90, ge=1, description="Trailing records scored in the patterns view"
    )

    dev_mode: bool = False
    testing: bool = False

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def cors_origin_list(self) -> List[str]:
        """Configured CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Settings singleton; environment is read once per process."""
    return Settings()
