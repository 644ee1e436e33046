"""
Validation and canonicalization of Spotify track links.
"""

from urllib.parse import urlsplit

ACCEPTED_HOSTS = ("open.spotify.com", "spotify.com")
TRACK_SEGMENT = "track"


def canonicalize(raw: str) -> str:
    """
    Rebuilds a URL from its scheme, host and path, dropping the query string and
    fragment. Input that cannot be parsed is returned unchanged.
    """
    try:
        parts = urlsplit(raw.strip())
        hostname = parts.hostname
    except (AttributeError, ValueError):
        return raw

    if not parts.scheme or not hostname:
        return raw

    return f"{parts.scheme}://{hostname}{parts.path or '/'}"


def validate(raw: str) -> bool:
    """
    Checks that `raw` is a link to a single track on one of the accepted hosts.

    Album, playlist and artist links are rejected because their path lacks a
    `track` segment followed by an identifier.
    """
    if not raw or not isinstance(raw, str):
        return False

    try:
        parts = urlsplit(canonicalize(raw))
        hostname = parts.hostname
    except ValueError:
        return False

    if not parts.scheme or hostname not in ACCEPTED_HOSTS:
        return False

    segments = [segment for segment in parts.path.split("/") if segment]
    if TRACK_SEGMENT not in segments:
        return False

    track_index = segments.index(TRACK_SEGMENT)
    return len(segments) > track_index + 1
