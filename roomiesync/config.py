from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Literal

BASE_DIR = Path(__file__).resolve().parent.parent
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    # Application
    PROJECT_NAME: str = "RoomieSync"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False

    # Database (remote CRUD service)
    # Default to a local sqlite file for development; override via .env for MySQL/PostgreSQL.
    DATABASE_URL: str = "sqlite:///./roomiesync.db"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Household client storage
    STORAGE_BACKEND: Literal["local", "remote"] = "local"
    LOCAL_STORAGE_DIR: str = str(BASE_DIR / ".roomiesync")
    REMOTE_API_URL: str = "http://localhost:8000/api/v1"
    REMOTE_API_TIMEOUT: float = 10.0

    # AI Configuration
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0.4
    GEMINI_MAX_TOKENS: int = 512

    # Ledger
    DEFAULT_AGREED_CONTRIBUTION: float = 6000
    CURRENCY_PREFIX: str = "Rs."

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE), case_sensitive=True, extra="ignore"
    )


settings = Settings()
