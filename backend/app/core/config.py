# backend/app/core/config.py
from __future__ import annotations
import json
import secrets
from pathlib import Path
from typing import Annotated, List, Optional
from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Resolves to <repo-root>/backend/.env
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App meta
    APP_NAME: str = "INVESTA Backend"
    APP_VERSION: str = "1.0.0"
    ENV: str = "development"

    # --- MongoDB
    MONGO_URI: str = Field(
        default="mongodb://127.0.0.1:27017",
        validation_alias=AliasChoices("MONGO_URI", "MONGO_URL"),
    )
    MONGO_DB_NAME: str = "investa"
    MONGO_TIMEOUT_MS: int = 5000

    # --- Auth
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 10

    # --- CORS (comma-separated in .env, or a JSON list)
    CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",
        "https://investa-lilac.vercel.app",
    ]

    # --- Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Path = Path(__file__).resolve().parents[2] / "logs"

    # --- Server (used by app/__main__.py)
    HOST: str = "0.0.0.0"
    PORT: int = 3002
    RELOAD: bool = False

    # Set when JWT_SECRET was missing and a per-process secret was generated
    JWT_SECRET_GENERATED: bool = False

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v):
        if isinstance(v, list):
            return v
        raw = str(v or "")
        if raw.strip().startswith("["):
            return [str(o).strip() for o in json.loads(raw) if str(o).strip()]
        return [o.strip() for o in raw.split(",") if o.strip()]

    @field_validator("RELOAD", mode="before")
    @classmethod
    def _parse_reload_bool(cls, v):
        if isinstance(v, bool):
            return v
        return str(v).lower() in ("1", "true", "yes", "on")

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def _validate_bcrypt_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("ACCESS_TOKEN_EXPIRE_DAYS")
    @classmethod
    def _validate_expiry(cls, v):
        if v <= 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_DAYS must be positive")
        return v

    @model_validator(mode="after")
    def _ensure_jwt_secret(self):
        if self.JWT_SECRET:
            return self
        if self.ENV.lower() == "production":
            raise ValueError("JWT_SECRET must be set when ENV=production")
        # Tokens issued with a generated secret do not survive a restart
        self.JWT_SECRET = secrets.token_urlsafe(32)
        self.JWT_SECRET_GENERATED = True
        return self


settings = Settings()
