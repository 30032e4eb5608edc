from decimal import Decimal
from functools import lru_cache
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

# Prefer .env.production if present, else default .env
load_dotenv(dotenv_path=".env.production")
load_dotenv()


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./delivery.db"
    sql_echo: bool = False
    log_level: str = "INFO"

    # "today" stats start at local midnight in this zone
    timezone: str = "UTC"

    estimated_earnings_rate: Decimal = Decimal("0.15")
    default_driver_earnings: Decimal = Decimal("10.00")  # flat amount until real pricing lands
    available_orders_limit: int = 10
    default_driver_rating: float = 4.8  # no rating system yet

    placeholder_restaurant_name: str = "Demo Restaurant"
    placeholder_restaurant_phone: str = "+967771234567"
    placeholder_restaurant_address: str = "Sanaa, Al-Zubairi Street"

    cors_origins: List[str] = ["*"]

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone: {value}")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
