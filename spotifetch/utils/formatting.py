"""
Helper functions for formatting data into human-readable strings.
"""

from datetime import datetime, timezone


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def format_age(timestamp: str, now: datetime | None = None) -> str:
    """
    Formats an ISO-8601 timestamp as an age relative to `now` (e.g., '5m ago').
    Unparsable timestamps are returned as-is.
    """
    try:
        then = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return str(timestamp)

    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    elapsed = (now - then).total_seconds()
    if elapsed < 60:
        return "just now"
    if elapsed >= 86400:
        return then.strftime("%Y-%m-%d")
    # Drop the seconds for anything older than a minute.
    return f"{format_duration(elapsed - elapsed % 60)} ago"


def truncate(text: str, width: int = 60) -> str:
    """Shortens `text` to `width` characters, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"
