import logging
import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Model provider (OpenAI-compatible chat completions)
    deepseek_api_key: str | None = os.getenv("DEEPSEEK_API_KEY")
    deepseek_base_url: str = os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com")
    model_name: str = os.getenv("MODEL_NAME", "deepseek-chat")
    model_timeout: float = float(os.getenv("MODEL_TIMEOUT", "60"))

    # Response cache
    cache_ttl_seconds: int = int(os.getenv("CACHE_TTL_SECONDS", "86400"))  # 24 hours

    # Call history / log buffer
    history_limit: int = int(os.getenv("HISTORY_LIMIT", "1000"))
    log_buffer_limit: int = int(os.getenv("LOG_BUFFER_LIMIT", "1000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", "*"))
    )

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl_seconds <= 0:
            raise ValueError("CACHE_TTL_SECONDS must be positive")

        if self.history_limit <= 0:
            raise ValueError(f"HISTORY_LIMIT must be positive, got {self.history_limit}")

        if self.log_buffer_limit <= 0:
            raise ValueError(f"LOG_BUFFER_LIMIT must be positive, got {self.log_buffer_limit}")

        if self.model_timeout <= 0:
            raise ValueError("MODEL_TIMEOUT must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


@lru_cache(maxsize=1)
def configure_logging(level: str | None = None) -> None:
    """Configure application logging.

    Console output with timestamps and module names. Noisy HTTP client
    loggers are kept at WARNING.
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    logging.getLogger("learning_assistant").setLevel(log_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
