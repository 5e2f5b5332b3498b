from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env lives at the project root: healthvault/core/config.py -> healthvault/core -> healthvault -> root
_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _ROOT / ".env"

DEFAULT_SECRET_KEY = "change-me-in-production"
STORAGE_BACKENDS = ("auto", "memory", "sql")


class Settings(BaseSettings):
    secret_key: str = DEFAULT_SECRET_KEY
    environment: str = "development"  # production: no silent fallback to the in-memory store
    # auto: sql when database_url is set, otherwise memory (development only)
    storage_backend: str = "auto"
    database_url: str = ""
    # must be set explicitly to run the in-memory store in production
    allow_memory_storage: bool = False
    upload_dir: str = "./uploads"
    upload_max_mb: int = 5
    # CORS: comma separated origin list
    cors_origins: str = "*"
    # per-IP limit for /api/auth/register and /api/auth/login
    rate_limit_auth_per_minute: int = 10
    log_level: str = "INFO"

    model_config = {
        "env_file": _ENV_FILE if _ENV_FILE.is_file() else ".env",
        "extra": "ignore",
    }

    @field_validator("database_url", "secret_key", mode="before")
    @classmethod
    def strip_value(cls, v: str | None) -> str:
        """Guards against stray whitespace from copy-pasted values."""
        return (v or "").strip()

    @field_validator("storage_backend", "environment", mode="before")
    @classmethod
    def lower_value(cls, v: str | None) -> str:
        return (v or "").strip().lower()

    @field_validator("storage_backend")
    @classmethod
    def known_backend(cls, v: str) -> str:
        if v not in STORAGE_BACKENDS:
            raise ValueError(f"storage_backend must be one of {', '.join(STORAGE_BACKENDS)}")
        return v

    @property
    def upload_max_bytes(self) -> int:
        return self.upload_max_mb * 1024 * 1024

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def cors_origins_list(self) -> list[str]:
        if not self.cors_origins or self.cors_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
