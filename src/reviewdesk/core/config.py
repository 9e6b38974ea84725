"""Configuration management for ReviewDesk."""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

from .constants import FileConstants


PACKAGE_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Hostaway API
    hostaway_account_id: str = Field("", description="Hostaway account ID")
    hostaway_api_key: str = Field("", description="Hostaway API key")
    hostaway_base_url: str = Field("https://api.hostaway.com/v1", description="Hostaway API base URL")
    use_mock: bool = Field(False, description="Always serve the mock Hostaway payload")

    # Google Places API
    google_places_api_key: str = Field("", description="Google Places API key")

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    # Storage
    data_dir: str = Field("data", description="Directory for persisted data")
    approvals_file: str = Field("", description="Approvals JSON file (defaults to <data_dir>/approvals.json)")
    approvals_backend: str = Field("json", description="Approval store backend: json or diskcache")
    mock_file: str = Field("", description="Mock Hostaway payload (defaults to the packaged sample)")
    field_aliases_file: str = Field("", description="Optional YAML override for raw field names")

    # Provider requests
    request_timeout: float = Field(10.0, description="Timeout for provider requests in seconds")
    max_retries: int = Field(3, description="Maximum retry attempts")
    retry_delay: float = Field(1.0, description="Base retry delay in seconds")
    retry_backoff: float = Field(2.0, description="Retry backoff multiplier")
    cache_dir: str = Field("cache/hostaway", description="Provider response cache directory")
    cache_ttl_seconds: int = Field(300, description="Provider response cache TTL (0 disables)")

    # API server
    host: str = Field("127.0.0.1", description="API bind address")
    port: int = Field(3000, description="API port")

    @property
    def approvals_path(self) -> Path:
        """Resolved location of the approvals file."""
        if self.approvals_file:
            return Path(self.approvals_file)
        return Path(self.data_dir) / FileConstants.APPROVALS_FILENAME

    @property
    def mock_path(self) -> Path:
        """Resolved location of the mock Hostaway payload."""
        if self.mock_file:
            return Path(self.mock_file)
        return PACKAGE_DATA_DIR / FileConstants.MOCK_FILENAME


# Global settings instance
settings = Settings()
