"""
Application configuration loaded from environment variables.
"""
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_PEPPER = "some-secret-random-string"
DEV_HMAC_KEY = "secret-random-hmac-key"


class Environment(str, Enum):
    """Deployment environment."""
    DEV = "dev"
    PROD = "prod"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: Environment = Environment.DEV

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "clinic_db"

    # Secrets. Rotating hmac_key revokes every issued remember token.
    pepper: str = DEV_PEPPER
    hmac_key: str = DEV_HMAC_KEY

    # bcrypt work factor
    bcrypt_rounds: int = 12

    # Bootstrap admin
    admin_username: str = "admin"
    admin_initial_password: str = "adminPass"

    # Session cookie
    remember_cookie_name: str = "remember_token"

    # Logging
    log_level: str = "DEBUG"
    log_file: Optional[str] = None

    @property
    def is_prod(self) -> bool:
        return self.env == Environment.PROD

    @model_validator(mode="after")
    def check_prod_secrets(self) -> "Settings":
        """Refuse to run production with the development secrets."""
        if self.is_prod and (self.pepper == DEV_PEPPER or self.hmac_key == DEV_HMAC_KEY):
            raise ValueError("pepper and hmac_key must be set in production")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
