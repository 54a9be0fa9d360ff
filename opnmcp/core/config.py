"""
Configuration management using pydantic-settings.

Handles environment variables (OPNSENSE_ prefix), locates the packaged build
configuration, and provides typed connection parameters for the API client.
"""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_package_root() -> Path:
    """Get the opnmcp package directory (2 levels up from this file)."""
    return Path(__file__).parent.parent


def _get_build_config_path() -> Path:
    """Get the default build configuration file shipped with the package."""
    return _get_package_root() / "build_config.json"


class ConnectionConfig(BaseModel):
    """Parameters needed to open a connection to the OPNsense API."""

    host: str = Field(description="OPNsense base URL (e.g., 'https://192.168.1.1')")
    api_key: str = Field(description="OPNsense API key")
    api_secret: str = Field(description="OPNsense API secret")
    verify_ssl: bool = Field(default=True, description="Verify the appliance TLS certificate")


class Settings(BaseSettings):
    """
    Application-wide configuration.

    Loads from .env file and environment variables.
    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPNSENSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Connection Configuration
    # All three of host/api_key/api_secret must be set for a client to be created
    host: str | None = Field(
        default=None,
        description="OPNsense base URL (e.g., 'https://192.168.1.1')",
    )
    api_key: str | None = Field(default=None, description="OPNsense API key")
    api_secret: str | None = Field(default=None, description="OPNsense API secret")
    verify_ssl: bool = Field(
        default=True,
        description="Verify the appliance TLS certificate",
    )
    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for a single API request",
    )

    # Plugin Configuration
    plugins: bool = Field(
        default=False,
        description="Enable plugin tools and handlers",
    )
    build_config_path: Path = Field(
        default_factory=_get_build_config_path,
        description="Build configuration declaring the compiled-in modules",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Console log level")
    log_max_bytes: int = Field(
        default=5 * 1024 * 1024,
        description="Size in bytes before the log file is rotated",
    )
    log_backup_count: int = Field(
        default=3,
        description="Number of rotated log files to keep",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Normalize paths (resolve symlinks, make absolute)
        self.build_config_path = self.build_config_path.resolve()

    def connection(self) -> ConnectionConfig | None:
        """Return connection parameters, or None if any of host/key/secret is missing."""
        if not (self.host and self.api_key and self.api_secret):
            return None
        return ConnectionConfig(
            host=self.host,
            api_key=self.api_key,
            api_secret=self.api_secret,
            verify_ssl=self.verify_ssl,
        )


# Global settings instance
# Import this in other modules: `from opnmcp.core.config import settings`
settings = Settings()
