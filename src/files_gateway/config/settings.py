# src/files_gateway/config/settings.py
import logging
import re
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from files_gateway.errors import ConfigurationError

DEFAULT_TELEGRAM_API_URL = "https://api.telegram.org"
# The Bot API refuses multipart uploads above 50 MB
DEFAULT_MAX_UPLOAD_SIZE_BYTES = 50 * 1024 * 1024
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0

# `bot<id>:<secret>` as it appears in Bot API URLs
BOT_TOKEN_PATTERN = re.compile(r"bot\d+:[A-Za-z0-9_-]+")


class Settings(BaseSettings):
    """
    Single source of truth for gateway settings.

    Configuration precedence:
    1. Values passed to the constructor (tests, ``create_app(settings)``)
    2. Environment variables
    3. .env file (if exists)
    4. Default values in this class

    Usage:
        from files_gateway.config.settings import get_settings
        settings = get_settings()
        token = settings.bot_token
    """

    app_name: str = Field(
        default="Files Gateway",
        description="Application name, shown as the OpenAPI title"
    )

    # Remote file-store credentials
    bot_token: Optional[str] = Field(
        default=None,
        description="Telegram bot access token (BOT_TOKEN)"
    )

    chat_id: Optional[str] = Field(
        default=None,
        description="Chat that receives uploaded files (CHAT_ID)"
    )

    telegram_api_url: str = Field(
        default=DEFAULT_TELEGRAM_API_URL,
        description="Base URL of the Telegram Bot API"
    )

    # Upload limits
    max_upload_size_bytes: int = Field(
        default=DEFAULT_MAX_UPLOAD_SIZE_BYTES,
        gt=0,
        description="Largest accepted upload; bounds per-request memory"
    )

    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Deadline applied to every call to the remote file-store"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("bot_token", "chat_id", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat empty or whitespace-only secrets as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("telegram_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one the logging module understands."""
        level = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if level not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return level

    def missing_credentials(self) -> List[str]:
        """Names of the required secrets that are not configured."""
        missing = []
        if not self.bot_token:
            missing.append("BOT_TOKEN")
        if not self.chat_id:
            missing.append("CHAT_ID")
        return missing

    @property
    def is_configured(self) -> bool:
        return not self.missing_credentials()

    def require_credentials(self, *names: str) -> None:
        """Raise ConfigurationError unless the named secrets (default: all) are present."""
        missing = self.missing_credentials()
        if names:
            missing = [name for name in missing if name in names]
        if missing:
            raise ConfigurationError(missing)

    @property
    def masked_bot_token(self) -> str:
        """Token safe for logs and CLI output."""
        if not self.bot_token:
            return "<unset>"
        return f"{self.bot_token[:4]}...{self.bot_token[-2:]}" if len(self.bot_token) > 8 else "***"

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()


class TokenRedactingFilter(logging.Filter):
    """Mask bot tokens in log records, including request lines from urllib3."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = BOT_TOKEN_PATTERN.sub("bot<token>", message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the API process and the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # urllib3 logs every request line at DEBUG, and Bot API paths carry the token
    logging.getLogger("urllib3").setLevel(max(log_level, logging.INFO))

    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, TokenRedactingFilter) for f in handler.filters):
            handler.addFilter(TokenRedactingFilter())
