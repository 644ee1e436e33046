"""
The lookup session ties input validation, the lookup service, the history and
the clipboard together and keeps the state a front end renders.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from spotifetch.api.client import LookupClient, LookupOutcome
from spotifetch.exceptions import (
    ClipboardUnavailableError,
    InvalidInputError,
    SpotifetchError,
    ValidationFailedError,
)
from spotifetch.models.track import HistoryEntry, LookupResult, TrackReference
from spotifetch.storage.history import HistoryStore

from .clipboard import ClipboardWatcher

log = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please paste a Spotify song URL."
INVALID_LINK_MESSAGE = (
    "Please enter a valid Spotify song URL. It should point directly to a track "
    "(e.g., https://open.spotify.com/track/...). Album or playlist links are not "
    "supported."
)


class NotifyKind(Enum):
    """Severity of a notification emitted by the session."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


Notifier = Callable[[NotifyKind, str], None]


@dataclass
class SessionState:
    """Everything a front end needs to render the current screen."""

    input_text: str = ""
    is_loading: bool = False
    error: str | None = None
    result: LookupResult | None = None
    suggestion: str | None = None
    history: list[HistoryEntry] = field(default_factory=list)


class LookupSession:
    """
    Coordinates a single user's lookups.

    At most one lookup runs at a time: while one is pending, further submissions
    are refused, so a slow response can never overwrite a newer one.
    """

    def __init__(
        self,
        client: LookupClient,
        history: HistoryStore,
        watcher: ClipboardWatcher | None = None,
        on_notify: Notifier | None = None,
    ):
        self.client = client
        self.history = history
        self.watcher = watcher or ClipboardWatcher()
        self._on_notify = on_notify
        self.state = SessionState(history=history.load())

    def _notify(self, kind: NotifyKind, message: str) -> None:
        if self._on_notify:
            self._on_notify(kind, message)

    def set_input(self, text: str) -> None:
        self.state.input_text = text

    def _reject(self, error: SpotifetchError) -> None:
        self.state.error = str(error)
        self._notify(NotifyKind.ERROR, str(error))

    async def submit(self, raw: str | None = None) -> LookupOutcome | None:
        """
        Validates and resolves `raw` (or the current input) and updates the state.

        Returns the lookup outcome, or None when the input was rejected before any
        request was made.
        """
        if self.state.is_loading:
            log.debug("Ignoring submission while a lookup is pending.")
            self._notify(NotifyKind.INFO, "A lookup is already in progress.")
            return None

        if raw is not None:
            self.state.input_text = raw
        text = self.state.input_text

        if not isinstance(text, str) or not text.strip():
            self._reject(InvalidInputError(EMPTY_INPUT_MESSAGE))
            return None
        try:
            reference = TrackReference.from_raw(text)
        except ValidationFailedError:
            self._reject(ValidationFailedError(INVALID_LINK_MESSAGE))
            return None

        self.state.is_loading = True
        self.state.error = None
        self.state.result = None
        try:
            outcome = await self.client.resolve(reference.canonical_url)
        finally:
            self.state.is_loading = False

        if outcome.ok:
            self.state.result = outcome.result
            # The link as typed is kept for history, the canonical form was sent.
            self.state.history = self.history.record_result(
                outcome.result, reference.raw_url
            )
            self._notify(NotifyKind.SUCCESS, f"Song Found! {outcome.result.title}")
        else:
            self.state.error = outcome.message
            self._notify(NotifyKind.ERROR, outcome.message)
        return outcome

    async def on_activate(self) -> str | None:
        """
        Lifecycle hook for the host shell, called on start-up and whenever the
        application regains focus. Offers a copied track link as a suggestion.

        Returns the suggested link, or None when the clipboard holds nothing to
        offer, in which case any earlier suggestion is withdrawn.
        """
        suggestion = await self.watcher.check_once(
            current_input_is_empty=self.state.input_text == ""
        )
        self.state.suggestion = suggestion
        if suggestion is None:
            return None

        self._notify(
            NotifyKind.INFO,
            f"Spotify Link Detected! We found a Spotify link in your clipboard: "
            f"{suggestion}",
        )
        return suggestion

    def accept_suggestion(self) -> str | None:
        """Moves the pending clipboard suggestion into the input."""
        suggestion = self.state.suggestion
        if not suggestion:
            return None
        self.state.suggestion = None
        self.state.input_text = suggestion
        self._notify(NotifyKind.SUCCESS, "Pasted! Link pasted from clipboard detection.")
        return suggestion

    async def paste_from_clipboard(self) -> str | None:
        """Explicit paste action: copies the clipboard text into the input."""
        try:
            text = await self.watcher.read_text()
        except ClipboardUnavailableError as e:
            log.debug(f"Paste failed: {e}")
            self._notify(
                NotifyKind.ERROR,
                "Paste Error: Could not read from clipboard. Check permissions.",
            )
            return None

        if not text:
            self._notify(NotifyKind.ERROR, "Clipboard Empty: Nothing to paste from clipboard.")
            return None

        self.state.input_text = text
        self._notify(NotifyKind.SUCCESS, "Pasted from clipboard! URL populated from clipboard.")
        return text

    def load_from_history(self, source_url: str) -> None:
        """Puts a link from the history back into the input."""
        self.state.input_text = source_url
        self._notify(NotifyKind.INFO, f"URL Loaded from History: {source_url}")

    def clear_history(self) -> None:
        self.state.history = self.history.clear()
        self._notify(NotifyKind.SUCCESS, "History Cleared. Your download history has been removed.")
