import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # HTTP transport
    http_timeout: float = float(os.getenv("SIREN_HTTP_TIMEOUT", "30.0"))
    http_max_connections: int = int(os.getenv("SIREN_HTTP_MAX_CONNECTIONS", "100"))
    http_max_keepalive: int = int(os.getenv("SIREN_HTTP_MAX_KEEPALIVE", "20"))

    # Entity store
    coalesce_requests: bool = os.getenv("SIREN_COALESCE_REQUESTS", "true").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.http_timeout <= 0:
            raise ValueError("SIREN_HTTP_TIMEOUT must be greater than 0")

        if self.http_max_keepalive > self.http_max_connections:
            raise ValueError(
                "SIREN_HTTP_MAX_KEEPALIVE must not exceed SIREN_HTTP_MAX_CONNECTIONS, "
                f"got {self.http_max_keepalive} > {self.http_max_connections}"
            )

        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {list(_LOG_LEVELS)}, got {self.log_level}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and the API process.

    Args:
        level: Level name override. Defaults to settings.log_level.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
