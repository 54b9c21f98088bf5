"""Application configuration from environment."""
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

# Load .env from project root (parent of itemoptions/) so env vars are available everywhere
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


class Settings(BaseSettings):
    app_name: str = "Item Options"
    app_env: str = "development"
    debug: bool = True

    database_url: str = "sqlite:///./itemoptions.db"
    sql_echo: bool = False

    log_level: str = "INFO"

    @field_validator("database_url", "log_level", mode="before")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper() or "INFO"

    class Config:
        env_file = str(_env_path)
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
