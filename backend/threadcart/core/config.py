from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MongoDB Configuration
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "threadcart_db"

    # JWT Configuration
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days

    # Cart pricing
    GIFT_WRAPPING_COST: float = 30.0
    BUNDLE_CATEGORY: str = "Tshirt"
    BUNDLE_SIZE: int = 3
    BUNDLE_PRICE: float = 1299.0

    # Application Settings
    BACKEND_CORS_ORIGINS: List[str] = ["*"]
    API_V1_PREFIX: str = "/api"
    PROJECT_NAME: str = "ThreadCart"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
