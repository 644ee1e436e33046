"""
Shared pytest fixtures for all tests.
Provides in-memory storage, fake collaborators and a local lookup server so the
suite never touches the network or the real clipboard.
"""
import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from spotifetch.api.client import LookupClient, LookupOutcome
from spotifetch.core.clipboard import ClipboardWatcher
from spotifetch.models.track import HistoryEntry, LookupResult
from spotifetch.storage.history import HistoryStore
from spotifetch.storage.kv_store import MemoryStore

TRACK_URL = "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC?si=abc123"
CANONICAL_TRACK_URL = "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"
OTHER_TRACK_URL = "https://open.spotify.com/track/7qiZfU4dY1lWllzX7mPBI3"


def make_result(title: str = "Never Gonna Give You Up", **overrides) -> LookupResult:
    fields = {
        "title": title,
        "artist": "Rick Astley",
        "thumbnail_url": "https://i.scdn.co/image/cover.jpg",
        "download_link": "https://cdn.example.com/song.mp3",
    }
    fields.update(overrides)
    return LookupResult(**fields)


def make_entry(source_url: str, title: str = "Song") -> HistoryEntry:
    return HistoryEntry(title=title, artist="Artist", source_url=source_url)


class FakeLookupClient:
    """Stands in for LookupClient and records what it was asked to resolve."""

    def __init__(self, outcome: LookupOutcome | None = None, gate: asyncio.Event | None = None):
        self.outcome = outcome or LookupOutcome(result=make_result())
        self.gate = gate
        self.requested: list[str] = []

    async def resolve(self, canonical_url: str) -> LookupOutcome:
        self.requested.append(canonical_url)
        if self.gate is not None:
            await self.gate.wait()
        return self.outcome

    async def close(self) -> None:
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def history(memory_store) -> HistoryStore:
    return HistoryStore(memory_store)


@pytest.fixture
def notifications() -> list:
    return []


@pytest.fixture
def quiet_clipboard() -> ClipboardWatcher:
    """A watcher whose clipboard is always empty."""
    return ClipboardWatcher(reader=lambda: "")


@pytest.fixture
def resolve_against():
    """
    Returns a coroutine function that serves `handler` on a local aiohttp server
    and resolves a track link against it with a real LookupClient.
    """

    async def _resolve(
        handler, canonical_url: str = CANONICAL_TRACK_URL, timeout: float = 5
    ) -> LookupOutcome:
        app = web.Application()
        app.router.add_get("/spotifydl", handler)
        async with TestServer(app) as server:
            base_url = str(server.make_url("/spotifydl"))
            async with LookupClient(base_url, timeout=timeout) as client:
                return await client.resolve(canonical_url)

    return _resolve
