from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # API
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Finance Tracker"
    VERSION: str = "0.1.0"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str):
            return [i.strip() for i in v.split(",")]
        return v

    # Storage
    STORE_BACKEND: str = "memory"  # memory or sql
    DATABASE_URL: str = "sqlite:///./finance_tracker.db"
    SEED_DEMO_DATA: bool = True

    # Auth stub
    DEMO_OWNER_ID: str = "user-1"

    # Export
    EXPORT_FILENAME_PREFIX: str = "transactions"
    EXPORT_CURRENCY: str = "USD"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False


settings = Settings()
