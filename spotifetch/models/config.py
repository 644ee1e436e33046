"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

DEFAULT_API_BASE_URL = "https://apis.davidcyriltech.my.id/spotifydl"
DEFAULT_APP_DOWNLOAD_URL = (
    "https://www.mediafire.com/file/c258ri21spt535j/Spotify+downloader.apk/file"
)
DEFAULT_HISTORY_KEY = "spotifyDlHistory"
MAX_HISTORY_ITEMS = 5


class AppConfig(BaseModel):
    """A validated configuration model for the application."""

    # Lookup service
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 30.0

    # History
    history_max_items: int = MAX_HISTORY_ITEMS
    history_storage_key: str = DEFAULT_HISTORY_KEY

    # Companion app
    app_download_url: str = DEFAULT_APP_DOWNLOAD_URL

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("api_base_url", "app_download_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Ensures service URLs are absolute http(s) URLs."""
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Expected an absolute http(s) URL, got: {v!r}")
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Request timeout must be a positive number of seconds.")
        return v

    @field_validator("history_max_items")
    @classmethod
    def validate_history_size(cls, v: int) -> int:
        """Ensures a reasonable history size."""
        if v < 1 or v > 50:
            raise ValueError("History size must be between 1 and 50.")
        return v

    @field_validator("history_storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        if not v:
            raise ValueError("History storage key cannot be empty.")
        if any(sep in v for sep in ("/", "\\")) or v.startswith("."):
            raise ValueError("History storage key cannot contain path separators.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
