# tenure/core/config.py
from __future__ import annotations
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field

# Resolve the .env alongside the tenure package root
ENV_PATH = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):

    # --- App info ---
    APP_NAME: str = Field(default="Experience Tenure")

    # --- Date normalization ---
    MIN_YEAR: int = Field(default=1900, description="Earliest calendar year accepted in a date token")
    MAX_YEAR: int = Field(default=2100, description="Latest calendar year accepted in a date token")

    # --- Aggregation ---
    STINT_GAP_MONTHS: int = Field(
        default=1,
        ge=0,
        description="Largest gap (in months) between two positions at one employer that keeps them in a single stint",
    )

    # --- Logging ---
    LOG_LEVEL: str = Field(default="INFO", description="Default log level for the command-line entry point")

    class Config:
        env_file = str(ENV_PATH)
        env_prefix = "TENURE_"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
