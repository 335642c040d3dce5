"""Storefront Service Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache

from vault import ContactCodec


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Marketplace Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001

    # Identity tokens (issued by the auth provider, verified here)
    identity_token_secret: str = "dev-identity-secret-change-me-0123456789"
    identity_token_algorithm: str = "HS256"

    # Contact PII encryption
    pii_secret: Optional[str] = None
    pii_retired_secrets: list[str] = []

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def pii_configured(self) -> bool:
        """Check if contact decryption is available"""
        return bool(self.pii_secret)

    def get_codec(self) -> Optional[ContactCodec]:
        """Build the contact codec, if a secret is configured"""
        if not self.pii_secret:
            return None
        return ContactCodec(self.pii_secret, self.pii_retired_secrets)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
