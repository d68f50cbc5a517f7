# backend/collabx/core/settings.py

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # SQLAlchemy database URL
    db_url: str = "sqlite:///./collabx.db"

    # Debug mode: colored console logs instead of JSON
    app_debug: bool = True

    environment: str = "dev"

    # Overrides the level implied by app_debug (e.g. "WARNING")
    log_level: Optional[str] = None

    # Identity provider token verification (shared-secret HS256)
    jwt_secret: str = "dev-secret-key-change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # When true, teamSize is a hard cap on the roster; otherwise advisory
    enforce_team_capacity: bool = False

    allowed_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
