"""Centralised application configuration.

Values come from ``STOREFRONT_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.domain.model.value_objects import Money
from storefront.domain.service.pricing import PricingPolicy


class Settings(BaseSettings):
    """Storefront settings."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        extra="ignore",
    )

    # Storage
    data_dir: Path = Path("data")

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # API
    api_title: str = "Storefront API"
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    # Pricing
    free_shipping_threshold: Decimal = Decimal("50")
    flat_shipping_fee: Decimal = Decimal("10")
    tax_rate: Decimal = Decimal("0.08")

    # Order listing
    default_page_size: int = 10
    max_page_size: int = 100

    def pricing_policy(self) -> PricingPolicy:
        return PricingPolicy(
            free_shipping_threshold=Money(self.free_shipping_threshold),
            flat_shipping_fee=Money(self.flat_shipping_fee),
            tax_rate=self.tax_rate,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
