# core/config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Values are read when the dataclass is instantiated, so environment
    variables must be set before ``core.config`` is first imported (or a new
    ``Settings()`` must be built explicitly).
    """

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Library Ledger API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "0.1.0"))
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///library.db"))
    sql_echo: bool = field(default_factory=lambda: _env_flag("SQL_ECHO"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)
    api_host: str = field(default_factory=lambda: os.getenv("API_HOST", "127.0.0.1"))
    api_port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))
    # Comma-separated list, "*" allows any origin
    cors_origins: List[str] = field(
        default_factory=lambda: [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    )


settings = Settings()
