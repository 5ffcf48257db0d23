# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (SQLAlchemy URL, e.g. postgresql+psycopg2://... or sqlite:///...)
      - JWT_SECRET (HS signing secret for admin session tokens)

    Optional:
      - ENVIRONMENT ("development" | "production"); production hides
        internal error details from API responses
      - UPLOAD_DIR / UPLOADS_URL_PREFIX for the product image store
      - PUBLIC_DIR for the marketing web-root
    """

    PROJECT_NAME: str = "Storefront Admin API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"

    DATABASE_URL: str

    # Session tokens
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Product image store (flat directory on local disk)
    UPLOAD_DIR: str = "uploads"
    UPLOADS_URL_PREFIX: str = "/uploads/"
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

    # Marketing site
    PUBLIC_DIR: str = "public"
    PLACEHOLDER_IMAGE: str = "/assets/placeholder.jpg"
    # Product name -> image shown when a card's own image fails to load
    FALLBACK_IMAGES: dict[str, str] = {}
    CONTACT_EMAIL: str = "info@example.com"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
