"""
User-facing wording for lookup failures.
"""

from spotifetch.exceptions import TrackLookupError

NOT_FOUND_MESSAGE = (
    "Song not found or link is invalid. Please double-check the Spotify URL."
)
UNAVAILABLE_MESSAGE = (
    "The download service is temporarily unavailable. Please try again later."
)
UNEXPECTED_ERROR_MESSAGE = (
    "An unexpected error occurred while fetching song data."
)
NOT_RESOLVABLE_MESSAGE = (
    "Could not retrieve song information. The API might be down, the link invalid, "
    "or the song not downloadable via this service."
)


def describe_error(error: Exception) -> str:
    """
    Turns a lookup failure into the message shown to the user.

    404s and "not found" texts become a single not-found message and 5xx
    statuses become a service-unavailable message. Anything else keeps its own
    text.
    """
    message = str(error) or UNEXPECTED_ERROR_MESSAGE
    status = error.status_code if isinstance(error, TrackLookupError) else None

    if status == 404 or "Status: 404" in message or "not found" in message.lower():
        return NOT_FOUND_MESSAGE
    if (status is not None and 500 <= status < 600) or "Status: 5" in message:
        return UNAVAILABLE_MESSAGE
    return message
