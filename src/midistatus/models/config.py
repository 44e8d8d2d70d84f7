"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path("config.json")


class AppConfig(BaseModel):
    """Application settings shared by every profile.

    Holds connection details for the metric sources. Which sources are
    drawn, and where, is decided by the profile.
    """

    default_device: str = Field(
        default="",
        description="MIDI input id or name prefix used when neither CLI nor profile name a device",
    )
    timeout: int = Field(
        default=2000, ge=1, description="HTTP timeout for Jellyfin and TrueNAS requests (ms)"
    )

    # Jellyfin
    jellyfin_url: str = Field(default="", description="Jellyfin server base URL")
    jellyfin_api_key: str = Field(default="", description="Jellyfin API key (X-Emby-Token)")
    jellyfin_active_user_time: int = Field(
        default=5000,
        ge=0,
        description="A session counts as active if its last activity is newer than this (ms)",
    )

    # TrueNAS
    truenas_url: str = Field(default="", description="TrueNAS server base URL")
    truenas_api_key: str = Field(default="", description="TrueNAS API key (bearer token)")
    truenas_interface: str = Field(
        default="enp2s0", description="Network interface queried for the 'interface' graph"
    )

    # Ping
    ping_timeout: int = Field(default=5000, ge=1, description="HTTP timeout for ping requests (ms)")

    @property
    def is_jellyfin_configured(self) -> bool:
        """Check if Jellyfin URL and API key are set."""
        return bool(self.jellyfin_url) and bool(self.jellyfin_api_key)

    @property
    def is_truenas_configured(self) -> bool:
        """Check if TrueNAS URL and API key are set."""
        return bool(self.truenas_url) and bool(self.truenas_api_key)

    @classmethod
    def load_or_create(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file, writing the defaults first if it is missing.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        from midistatus.persistence import PydanticPersistence

        return PydanticPersistence.load_or_create(path or DEFAULT_CONFIG_PATH, cls)
