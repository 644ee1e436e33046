import json

from spotifetch.storage.history import HistoryStore
from spotifetch.storage.kv_store import JsonFileStore, MemoryStore

from .conftest import make_entry, make_result


def test_load_without_stored_history_is_empty(history):
    assert history.load() == []


def test_load_with_corrupt_history_is_empty():
    for raw in ("{not json", '{"title": "x"}', '[{"title": 1}]', "null"):
        store = MemoryStore({"spotifyDlHistory": raw})
        assert HistoryStore(store).load() == []


def test_record_puts_newest_first(history):
    history.record(make_entry("https://open.spotify.com/track/a", "A"))
    updated = history.record(make_entry("https://open.spotify.com/track/b", "B"))

    assert [e.title for e in updated] == ["B", "A"]
    assert updated == history.load()


def test_six_distinct_lookups_keep_the_five_most_recent(history):
    urls = [f"https://open.spotify.com/track/{i}" for i in range(6)]
    for url in urls:
        updated = history.record(make_entry(url))

    assert len(updated) == 5
    assert [e.source_url for e in updated] == list(reversed(urls[1:]))
    assert urls[0] not in {e.source_url for e in history.load()}


def test_recording_existing_url_moves_it_to_front(history):
    urls = [f"https://open.spotify.com/track/{i}" for i in range(3)]
    for url in urls:
        history.record(make_entry(url, title=url[-1]))

    updated = history.record(make_entry(urls[0], title="again"))

    assert len(updated) == 3
    assert [e.source_url for e in updated] == [urls[0], urls[2], urls[1]]
    assert updated[0].title == "again"


def test_clear_then_load_is_empty(history):
    history.record(make_entry("https://open.spotify.com/track/a"))

    assert history.clear() == []
    assert history.load() == []


def test_persisted_format_uses_source_url_field(memory_store):
    store = HistoryStore(memory_store, key="hist")
    store.record(make_entry("https://open.spotify.com/track/a?si=1", "A"))

    persisted = json.loads(memory_store.get("hist"))
    assert persisted[0]["sourceUrl"] == "https://open.spotify.com/track/a?si=1"
    assert set(persisted[0]) == {"title", "artist", "thumbnail", "sourceUrl", "timestamp"}


def test_record_result_builds_entry_from_lookup(history):
    updated = history.record_result(
        make_result(artist=None), "https://open.spotify.com/track/a?si=1"
    )

    entry = updated[0]
    assert entry.artist == "N/A"
    assert entry.thumbnail == "https://i.scdn.co/image/cover.jpg"
    assert entry.source_url == "https://open.spotify.com/track/a?si=1"


def test_custom_cap(memory_store):
    store = HistoryStore(memory_store, max_items=2)
    for i in range(4):
        store.record(make_entry(f"https://open.spotify.com/track/{i}"))

    assert len(store.load()) == 2


def test_history_survives_restart(tmp_path):
    HistoryStore(JsonFileStore(tmp_path)).record(
        make_entry("https://open.spotify.com/track/a", "A")
    )

    reloaded = HistoryStore(JsonFileStore(tmp_path)).load()
    assert [e.title for e in reloaded] == ["A"]


def test_entries_saved_under_legacy_field_name_still_load():
    legacy = (
        '[{"title": "A", "artist": "B", "thumbnail": null,'
        ' "spotifyUrl": "https://open.spotify.com/track/a",'
        ' "timestamp": "2024-01-01T00:00:00.000Z"}]'
    )
    store = HistoryStore(MemoryStore({"spotifyDlHistory": legacy}))

    assert [e.source_url for e in store.load()] == ["https://open.spotify.com/track/a"]
