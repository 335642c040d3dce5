"""Shopper Client Configuration"""

from decimal import Decimal
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache

from vault import ContactCodec


class Settings(BaseSettings):
    """Client settings loaded from environment"""

    # Storefront connection
    storefront_base_url: str = "http://localhost:8001"
    request_timeout: float = 30.0

    # Anonymous cart storage
    data_dir: str = ".marketplace"
    device_id: str = "local-device"

    # Contact PII encryption
    pii_secret: Optional[str] = None
    pii_retired_secrets: list[str] = []

    # Checkout pricing
    tax_rate: Decimal = Decimal("0.08")
    flat_shipping_fee: Decimal = Decimal("5.99")
    free_shipping_threshold: Decimal = Decimal("50")

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def get_codec(self) -> ContactCodec:
        """Build the contact codec"""
        if not self.pii_secret:
            raise ValueError("PII_SECRET must be set to encrypt contact details")
        return ContactCodec(self.pii_secret, self.pii_retired_secrets)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
