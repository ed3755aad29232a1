"""Configuration and settings management using pydantic-settings."""
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Node pack settings with environment variable loading."""

    model_config = SettingsConfigDict(
        env_prefix="MEALIE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core settings
    env: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(default=True, description="Emit JSON log lines")

    # Default server connection (used by MealieServerConfig.from_settings)
    url: str | None = Field(default=None, description="Mealie server base URL")
    api_token: SecretStr | None = Field(
        default=None,
        description="Mealie API token",
    )
    timeout_s: float = Field(
        default=5.0,
        description="Client request timeout in seconds",
    )
    client_factory: str | None = Field(
        default=None,
        description="Import path of the client factory ('module:callable')",
    )

    # Node lifecycle
    stale_max_inactivity_s: float = Field(
        default=3600.0,
        description="Idle time after which an untracked node entry is reaped",
    )
    stale_cleanup_interval_s: float = Field(
        default=1800.0,
        description="Interval between stale node sweeps",
    )
    close_wait_timeout_s: float = Field(
        default=5.0,
        description="Max time a closing node waits for in-flight requests",
    )

    @field_validator(
        "timeout_s",
        "stale_max_inactivity_s",
        "stale_cleanup_interval_s",
        "close_wait_timeout_s",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate that durations are positive."""
        if v <= 0:
            raise ValueError("duration settings must be positive")
        return v

    @property
    def reaper_enabled(self) -> bool:
        """Periodic stale-node sweeps are off under test."""
        return self.env != "test"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
