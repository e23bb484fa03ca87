"""BCX application settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    DEMO = "demo"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application-wide settings loaded from environment variables / .env file.

    Latency simulation is off unless SIMULATE_LATENCY is set; it exists only
    so demo builds can show loading states against the in-memory registry.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/demo/staging/prod).",
    )

    # --- Simulated latency (demo builds only) ---
    SIMULATE_LATENCY: bool = Field(
        default=False,
        description="Inject artificial delays before engine and registry calls.",
    )
    VALIDATE_LATENCY_MS: int = Field(default=1200, ge=0)
    INTEGRITY_LATENCY_MS: int = Field(default=1500, ge=0)
    PRICE_LATENCY_MS: int = Field(default=800, ge=0)
    REGISTRY_LATENCY_MS: int = Field(default=200, ge=0)

    @property
    def latency_ms(self) -> dict[str, int]:
        """Per-flow simulated delays, keyed by flow name."""
        return {
            "validate": self.VALIDATE_LATENCY_MS,
            "integrity": self.INTEGRITY_LATENCY_MS,
            "price": self.PRICE_LATENCY_MS,
            "registry": self.REGISTRY_LATENCY_MS,
        }


def get_settings() -> Settings:
    """Factory function for dependency injection via FastAPI Depends."""
    return Settings()
