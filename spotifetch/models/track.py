"""
Pydantic models for the data that flows through a lookup: the submitted link,
the resolved track and the persisted history entries.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from spotifetch.core.url_normalizer import canonicalize, validate
from spotifetch.exceptions import ValidationFailedError


class TrackReference(BaseModel):
    """A validated track link together with its canonical form."""

    raw_url: str
    canonical_url: str

    class Config:
        """Pydantic model configuration."""

        frozen = True

    @classmethod
    def from_raw(cls, raw_url: str) -> "TrackReference":
        """Builds a reference, refusing links that do not point to a single track."""
        if not validate(raw_url):
            raise ValidationFailedError(f"Not a Spotify track link: {raw_url}")
        return cls(raw_url=raw_url, canonical_url=canonicalize(raw_url))


class LookupResult(BaseModel):
    """A successfully resolved track as reported by the lookup service."""

    title: str
    artist: str | None = None
    thumbnail_url: str | None = None
    download_link: str
    success: bool = True

    class Config:
        """Pydantic model configuration."""

        frozen = True

    @classmethod
    def from_api_payload(cls, payload: dict[str, Any]) -> "LookupResult":
        """Maps the service's field names onto the model."""
        return cls(
            title=payload["title"],
            artist=payload.get("channel") or None,
            thumbnail_url=payload.get("thumbnail") or None,
            download_link=payload["DownloadLink"],
            success=bool(payload.get("success")),
        )


class HistoryEntry(BaseModel):
    """A previously successful lookup, keyed by the link the user submitted."""

    title: str
    artist: str = "N/A"
    thumbnail: str | None = None
    # Entries written by the browser version of the app used "spotifyUrl".
    source_url: str = Field(
        validation_alias=AliasChoices("sourceUrl", "spotifyUrl", "source_url"),
        serialization_alias="sourceUrl",
    )
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    class Config:
        """Pydantic model configuration."""

        frozen = True
        populate_by_name = True

    @classmethod
    def from_result(cls, result: LookupResult, source_url: str) -> "HistoryEntry":
        return cls(
            title=result.title,
            artist=result.artist or "N/A",
            thumbnail=result.thumbnail_url,
            source_url=source_url,
        )

    def to_storage(self) -> dict[str, Any]:
        """Serializes the entry with the field names used in storage."""
        return self.model_dump(by_alias=True)
