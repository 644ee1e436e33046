"""
Clipboard inspection for suggesting a copied Spotify link.
"""

import asyncio
import logging
from collections.abc import Callable

import pyperclip

from spotifetch.exceptions import ClipboardUnavailableError

from .url_normalizer import validate

log = logging.getLogger(__name__)

# Errors that just mean the host will not let us read the clipboard.
DENIED_ERRORS = (pyperclip.PyperclipException, PermissionError)


class ClipboardWatcher:
    """
    Looks at the clipboard when the host shell reports activation and offers a
    track link found there as a suggestion. It never writes to the input itself.
    """

    def __init__(
        self,
        reader: Callable[[], str] = pyperclip.paste,
        validator: Callable[[str], bool] = validate,
    ):
        self._reader = reader
        self._validator = validator

    async def read_text(self) -> str:
        """
        Reads the clipboard without blocking the event loop.

        Raises:
            ClipboardUnavailableError: If the clipboard cannot be read.
        """
        try:
            text = await asyncio.to_thread(self._reader)
        except DENIED_ERRORS as e:
            raise ClipboardUnavailableError(f"Clipboard access denied: {e}") from e
        except Exception as e:
            raise ClipboardUnavailableError(f"Clipboard read failed: {e}") from e
        return text if isinstance(text, str) else ""

    async def check_once(self, current_input_is_empty: bool) -> str | None:
        """
        Returns the clipboard text if it is a valid track link and the input field
        is empty, otherwise None.
        """
        try:
            text = await asyncio.to_thread(self._reader)
        except DENIED_ERRORS as e:
            log.debug(f"Clipboard not readable: {e}")
            return None
        except Exception as e:
            log.warning(f"Clipboard read on activation failed: {e}")
            return None

        if not text or not isinstance(text, str):
            return None
        if not current_input_is_empty:
            return None
        if not self._validator(text):
            return None
        return text
