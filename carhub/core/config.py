import json
from typing import Annotated, List, Optional, Union
from pydantic import PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, NoDecode
from dotenv import load_dotenv

# Values from .env take precedence over system-wide environment variables.
load_dotenv(override=True)

class Settings(BaseSettings):
    """Settings for the CarHub API."""

    # API settings
    API_PREFIX: str = ""
    PROJECT_NAME: str = "CarHub API"
    LOG_LEVEL: str = "INFO"

    # CORS settings; empty means every origin is allowed
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    # Database settings
    # Default values for local development, override these in .env file
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "carhub"
    POSTGRES_PORT: int = 5432

    # Full connection string (hosted Postgres, SQLite for local runs)
    DATABASE_URL: Optional[str] = None

    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        values = info.data
        if values.get("DATABASE_URL"):
            return values["DATABASE_URL"]

        if isinstance(v, str):
            return v
        return str(PostgresDsn.build(
            scheme="postgresql",
            username=values.get("POSTGRES_USER"),
            password=values.get("POSTGRES_PASSWORD"),
            host=values.get("POSTGRES_SERVER"),
            port=values.get("POSTGRES_PORT"),
            path=values.get("POSTGRES_DB") or "",
        ))

    # Authentication settings
    # "google" verifies Google ID tokens, "local" verifies HS256 tokens signed with JWT_SECRET_KEY
    AUTH_MODE: str = "google"

    # Must be the same client id the web front end signs in with
    GOOGLE_CLIENT_ID: Optional[str] = None
    GOOGLE_CERTS_URL: str = "https://www.googleapis.com/oauth2/v3/certs"
    GOOGLE_ISSUERS: List[str] = ["accounts.google.com", "https://accounts.google.com"]
    GOOGLE_CERTS_CACHE_SECONDS: int = 3600

    JWT_SECRET_KEY: str = "your-secret-key"  # Change this in production
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ENABLE_TEST_TOKENS: bool = False

    @field_validator("AUTH_MODE")
    @classmethod
    def check_auth_mode(cls, v: str) -> str:
        v = v.lower()
        if v not in ("google", "local"):
            raise ValueError(f"AUTH_MODE must be 'google' or 'local', got {v!r}")
        return v

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "validate_default": True,
    }

# Create settings instance
settings = Settings()
