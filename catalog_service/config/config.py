from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Config settings"""

    # Postgres
    POSTGRES_HOST: str = "localhost"
    POSTGRES_USER: str = "catalog"
    POSTGRES_PASSWORD: str = "catalog"
    POSTGRES_DB: str = "catalog"

    # Full URL override, e.g. "sqlite://" for local runs
    CATALOG_DATABASE_URL: Optional[str] = None

    # Insert the preconfigured catalog when the store is empty
    SEED_ON_STARTUP: bool = True

    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8014

    @property
    def DATABASE_URL(self) -> str:
        """Method to return Database url"""
        if self.CATALOG_DATABASE_URL:
            return self.CATALOG_DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}/{self.POSTGRES_DB}"

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent.parent / ".env.catalog",
        env_file_encoding="utf-8",
        extra="ignore",
    )


config = Config()
