"""
Configuration management.
"""

import logging
import os
from dataclasses import dataclass, field


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    # Intake backend
    api_base_url: str = field(
        default_factory=lambda: os.getenv("KEYLIGHT_API_BASE_URL", "http://localhost:3000")
    )

    # Sessions
    max_sessions: int = field(
        default_factory=lambda: int(os.getenv("INTAKE_MAX_SESSIONS", "1000"))
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()


def configure_logging(config: Config) -> None:
    """Set up root logging once for the process."""
    level = logging.DEBUG if config.debug else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
