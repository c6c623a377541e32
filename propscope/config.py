"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings

from propscope.calculations.properties import (
    GlobalSettings,
    OccupancyTiers,
    RentalAssumption,
)

DEFAULT_RENTAL_ASSUMPTIONS = (
    ("3 Bedrooms", 2500.0),
    ("2 Bedrooms", 2000.0),
    ("Studio", 1500.0),
)


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "PropScope"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Default financing assumptions (percentages, not decimals)
    default_interest_rate: float = 4.5
    default_loan_tenure: int = 35
    default_lppsa_interest_rate: float = 4.0
    default_loan_percentage_1: float = 90.0
    default_loan_percentage_2: float = 70.0

    # Default operating assumptions
    default_management_fee_percent: float = 12.0
    default_maintenance_fee_psf: float = 0.33
    default_airbnb_operator_fee_percent: float = 20.0
    default_occupancy_current: float = 65.0
    default_occupancy_best: float = 80.0
    default_occupancy_worst: float = 50.0

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def default_global_settings(settings: Optional[Settings] = None) -> GlobalSettings:
    """Build the default projection assumptions from configuration."""
    settings = settings or get_settings()
    return GlobalSettings(
        interest_rate=settings.default_interest_rate,
        loan_tenure=settings.default_loan_tenure,
        management_fee_percent=settings.default_management_fee_percent,
        maintenance_fee_psf=settings.default_maintenance_fee_psf,
        lppsa_interest_rate=settings.default_lppsa_interest_rate,
        airbnb_operator_fee_percent=settings.default_airbnb_operator_fee_percent,
        airbnb_occupancy=OccupancyTiers(
            current=settings.default_occupancy_current,
            best=settings.default_occupancy_best,
            worst=settings.default_occupancy_worst,
        ),
        rental_assumptions=[
            RentalAssumption(type=t, rent=r) for t, r in DEFAULT_RENTAL_ASSUMPTIONS
        ],
    )
