import asyncio
import logging

import pyperclip
import pytest

from spotifetch.core.clipboard import ClipboardWatcher
from spotifetch.exceptions import ClipboardUnavailableError

from .conftest import TRACK_URL


def _raise(error):
    def reader():
        raise error

    return reader


def test_valid_link_in_clipboard_is_suggested():
    watcher = ClipboardWatcher(reader=lambda: TRACK_URL)

    assert asyncio.run(watcher.check_once(current_input_is_empty=True)) == TRACK_URL


def test_no_suggestion_when_input_has_text():
    watcher = ClipboardWatcher(reader=lambda: TRACK_URL)

    assert asyncio.run(watcher.check_once(current_input_is_empty=False)) is None


@pytest.mark.parametrize(
    "text",
    ["", "hello world", "https://open.spotify.com/album/abc123", None],
)
def test_no_suggestion_for_non_track_text(text):
    watcher = ClipboardWatcher(reader=lambda: text)

    assert asyncio.run(watcher.check_once(current_input_is_empty=True)) is None


@pytest.mark.parametrize(
    "error",
    [pyperclip.PyperclipException("no copy/paste mechanism"), PermissionError("denied")],
)
def test_denied_clipboard_is_silent(error, caplog):
    caplog.set_level(logging.DEBUG, logger="spotifetch.core.clipboard")
    watcher = ClipboardWatcher(reader=_raise(error))

    assert asyncio.run(watcher.check_once(current_input_is_empty=True)) is None
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_unexpected_clipboard_error_is_logged_not_raised(caplog):
    caplog.set_level(logging.DEBUG, logger="spotifetch.core.clipboard")
    watcher = ClipboardWatcher(reader=_raise(RuntimeError("boom")))

    assert asyncio.run(watcher.check_once(current_input_is_empty=True)) is None
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "boom" in warnings[0].getMessage()


def test_read_text_returns_clipboard_contents():
    watcher = ClipboardWatcher(reader=lambda: "anything at all")

    assert asyncio.run(watcher.read_text()) == "anything at all"


def test_read_text_raises_when_clipboard_unavailable():
    watcher = ClipboardWatcher(reader=_raise(pyperclip.PyperclipException("nope")))

    with pytest.raises(ClipboardUnavailableError):
        asyncio.run(watcher.read_text())
