"""
Service Configuration
=====================
Centralised settings for the assistant, report store, SMTP relay and the
HTTP app. Secrets come from the environment, optionally seeded from the
project-level .env file.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(PROJECT_ROOT / ".env")


def _first_env(*names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first non-empty variable among ``names``."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if not value:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AssistantConfig:
    """Hosted assistant (OpenAI Assistants API) settings."""
    api_key: Optional[str] = field(default_factory=lambda: os.getenv("OPENAI_API_KEY"))
    assistant_id: Optional[str] = field(default_factory=lambda: os.getenv("OPENAI_ASSISTANT_ID"))

    # Run polling: fixed interval, fixed attempt count
    poll_interval_seconds: float = field(default_factory=lambda: _env_float("ASSISTANT_POLL_INTERVAL", 0.7))
    max_polls: int = field(default_factory=lambda: _env_int("ASSISTANT_MAX_POLLS", 120))

    request_timeout_seconds: float = 60.0


@dataclass
class StorageConfig:
    """MongoDB report store settings."""
    uri: Optional[str] = field(default_factory=lambda: _first_env("MONGODB_URI", "MONGO_URI"))
    database: str = field(default_factory=lambda: os.getenv("MONGODB_DB", "hydrawav3"))
    collection: str = field(default_factory=lambda: os.getenv("MONGODB_COLLECTION", "reports"))
    server_selection_timeout_ms: int = 5000


@dataclass
class SmtpConfig:
    """SMTP relay settings. Each value accepts two variable names."""
    host: Optional[str] = field(default_factory=lambda: _first_env("SMTP_HOST", "SMTP_SERVER"))
    port: int = field(default_factory=lambda: _env_int("SMTP_PORT", 587))
    username: Optional[str] = field(default_factory=lambda: _first_env("SMTP_LOGIN_EMAIL", "SMTP_USER"))
    password: Optional[str] = field(default_factory=lambda: _first_env("SMTP_SERVER_KEY", "SMTP_PASSWORD"))
    from_email: Optional[str] = field(default_factory=lambda: os.getenv("SMTP_FROM_EMAIL"))
    verify_tls: bool = field(default_factory=lambda: _env_bool("SMTP_VERIFY_TLS", False))
    timeout_seconds: float = 30.0

    def __post_init__(self):
        if not self.from_email:
            self.from_email = self.username or "no-reply@hydrawav3.com"

    @property
    def is_complete(self) -> bool:
        return bool(self.host and self.username and self.password)

    @property
    def use_ssl(self) -> bool:
        """Port 465 speaks implicit TLS; everything else upgrades via STARTTLS."""
        return self.port == 465


@dataclass
class AppConfig:
    """HTTP app settings."""
    brand: str = field(default_factory=lambda: os.getenv("APP_BRAND", "Hydrawav3"))
    version: str = "1.0.0"
    cors_origins: List[str] = field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)
