# backend/docvault/config.py
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./docvault.db"  # Default if not in .env

    # Storage Paths
    STORAGE_PATH: Path = Path("storage")
    LOG_PATH: Path | None = None  # Will be set based on STORAGE_PATH
    LOG_LEVEL: str = "INFO"

    # Credentials
    SECRET_KEY: str = "docvault-development-secret"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # System roles, seeded on startup and never modified through the API
    ADMIN_ROLE_ID: int = 1
    ADMIN_ROLE_TITLE: str = "admin"
    DEFAULT_ROLE_ID: int = 2
    DEFAULT_ROLE_TITLE: str = "regular"

    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to set derived paths"""
        if isinstance(self.STORAGE_PATH, str):
            self.STORAGE_PATH = Path(self.STORAGE_PATH)

        self.LOG_PATH = Path(self.LOG_PATH) if self.LOG_PATH else self.STORAGE_PATH / "logs"
        self.LOG_PATH.mkdir(parents=True, exist_ok=True)

    @property
    def system_role_ids(self) -> frozenset[int]:
        return frozenset({self.ADMIN_ROLE_ID, self.DEFAULT_ROLE_ID})

settings = Settings()
