"""Tests for the meal tracker."""

import asyncio

import httpx

from nutritrack.adapters.relay_client import HttpxRelayClient
from nutritrack.domain.dashboard import Theme
from nutritrack.domain.totals import DailyTotals
from nutritrack.services.entries import EntryStore
from nutritrack.services.extraction import EXTRACTION_FAILED_MESSAGE, MealExtractor
from nutritrack.services.preferences import ThemeService
from nutritrack.services.tracker import MealTracker
from tests.conftest import (
    FakeExtractor,
    GatedExtractor,
    InMemoryStateRepository,
    make_record,
)


def _tracker(store: EntryStore, extractor: MealExtractor) -> MealTracker:
    return MealTracker(
        store=store,
        extractor=extractor,
        theme_service=ThemeService(store.repository),
    )


def test_submit_logs_entries_and_updates_totals(entry_store: EntryStore) -> None:
    extractor = FakeExtractor()
    tracker = _tracker(entry_store, extractor)

    created = asyncio.run(tracker.submit("2 boiled eggs"))
    snapshot = tracker.snapshot()

    assert extractor.calls == ["2 boiled eggs"]
    assert len(created) == 1
    assert snapshot.entries[0].raw_input == "2 boiled eggs"
    assert snapshot.entries[0].id
    assert snapshot.totals == DailyTotals(calories=140, protein=12, fat=10, carbs=1)
    assert snapshot.is_loading is False
    assert snapshot.error is None


def test_submit_blank_does_nothing(entry_store: EntryStore) -> None:
    extractor = FakeExtractor()
    tracker = _tracker(entry_store, extractor)

    assert asyncio.run(tracker.submit("   ")) == []

    snapshot = tracker.snapshot()
    assert extractor.calls == []
    assert snapshot.entries == ()
    assert snapshot.totals == DailyTotals()
    assert snapshot.error is None


def test_submit_failure_sets_generic_error(entry_store: EntryStore) -> None:
    entry_store.append([make_record("Reis", calories=200)], "Reis")
    tracker = _tracker(entry_store, FakeExtractor(fail=True))
    before = tracker.snapshot()

    asyncio.run(tracker.submit("Pizza"))
    after = tracker.snapshot()

    assert after.entries == before.entries
    assert after.totals == before.totals
    assert after.error == EXTRACTION_FAILED_MESSAGE
    assert after.is_loading is False


def test_submit_relay_http_500_leaves_collection_untouched(
    entry_store: EntryStore,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Fehler bei der Analyse"})

    relay = HttpxRelayClient(
        url="https://relay.test/api/parseMeal",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    tracker = _tracker(entry_store, relay)

    asyncio.run(tracker.submit("2 boiled eggs"))
    snapshot = tracker.snapshot()

    assert snapshot.entries == ()
    assert snapshot.totals == DailyTotals()
    assert snapshot.error == EXTRACTION_FAILED_MESSAGE
    assert snapshot.is_loading is False


def test_successful_submit_clears_previous_error(entry_store: EntryStore) -> None:
    extractor = FakeExtractor(fail=True)
    tracker = _tracker(entry_store, extractor)
    asyncio.run(tracker.submit("Pizza"))

    extractor.fail = False
    asyncio.run(tracker.submit("Ei"))

    assert tracker.error is None


def test_overlapping_submissions_apply_in_completion_order(
    entry_store: EntryStore,
) -> None:
    extractor = GatedExtractor(
        outcomes={"first": [make_record("Eins")], "second": [make_record("Zwei")]}
    )
    tracker = _tracker(entry_store, extractor)

    async def scenario() -> None:
        extractor.gates["first"] = asyncio.Event()
        extractor.gates["second"] = asyncio.Event()
        first = asyncio.create_task(tracker.submit("first"))
        second = asyncio.create_task(tracker.submit("second"))
        await asyncio.sleep(0)
        assert tracker.is_loading
        extractor.gates["second"].set()
        await second
        assert tracker.is_loading
        extractor.gates["first"].set()
        await first

    asyncio.run(scenario())

    names = [entry.item_name for entry in tracker.snapshot().entries]
    assert names == ["Eins", "Zwei"]
    assert tracker.is_loading is False


def test_superseded_failure_does_not_set_error(entry_store: EntryStore) -> None:
    extractor = GatedExtractor(outcomes={"second": [make_record("Zwei")]})
    tracker = _tracker(entry_store, extractor)

    async def scenario() -> None:
        extractor.gates["first"] = asyncio.Event()
        extractor.gates["second"] = asyncio.Event()
        first = asyncio.create_task(tracker.submit("first"))
        second = asyncio.create_task(tracker.submit("second"))
        await asyncio.sleep(0)
        extractor.gates["first"].set()
        await first
        extractor.gates["second"].set()
        await second

    asyncio.run(scenario())

    assert tracker.error is None
    assert [entry.item_name for entry in tracker.snapshot().entries] == ["Zwei"]


def test_remove_and_chart(entry_store: EntryStore) -> None:
    tracker = _tracker(entry_store, FakeExtractor())
    entry_store.append([make_record("A", protein=12, fat=10, carbs=1)], "a")
    entry_store.append([make_record("B", protein=0, fat=5, carbs=20)], "b")

    chart = {item.key: item.value for item in tracker.snapshot().chart}
    assert chart == {"protein": 12, "fat": 15, "carbs": 21}

    newest = tracker.snapshot().entries[0]
    assert tracker.remove(newest.id)
    assert tracker.remove("missing") is False
    assert tracker.snapshot().entry_count == 1


def test_theme_and_navigation_do_not_touch_entries() -> None:
    repository = InMemoryStateRepository()
    store = EntryStore(repository)
    tracker = _tracker(store, FakeExtractor())

    assert tracker.snapshot().theme is Theme.LIGHT
    assert tracker.toggle_theme() is Theme.DARK
    tracker.open_dashboard()
    assert tracker.snapshot().show_dashboard is True
    tracker.open_landing()

    snapshot = tracker.snapshot()
    assert snapshot.show_dashboard is False
    assert snapshot.theme is Theme.DARK
    assert repository.slots == {"theme": "dark"}


def test_load_restores_entries(state_repository: InMemoryStateRepository) -> None:
    first = EntryStore(state_repository)
    first.append([make_record("Ei", calories=140)], "Ei")

    tracker = _tracker(EntryStore(state_repository), FakeExtractor())
    tracker.load()

    assert tracker.snapshot().totals.calories == 140


def test_snapshot_survives_storage_outage() -> None:
    class OfflineRepository:
        def get(self, key: str) -> str | None:
            raise ConnectionError("offline")

        def set(self, key: str, value: str) -> None:
            raise ConnectionError("offline")

    store = EntryStore(OfflineRepository())
    tracker = _tracker(store, FakeExtractor())
    tracker.load()

    asyncio.run(tracker.submit("2 boiled eggs"))
    assert tracker.toggle_theme() is Theme.DARK
    snapshot = tracker.snapshot()

    assert snapshot.entry_count == 1
    assert snapshot.theme is Theme.DARK
    assert snapshot.error is None


def test_failure_message_hides_error_detail(entry_store: EntryStore) -> None:
    tracker = _tracker(entry_store, FakeExtractor(fail=True))

    asyncio.run(tracker.submit("Pizza"))

    assert tracker.error == EXTRACTION_FAILED_MESSAGE
    assert "upstream failed" not in tracker.error


def test_non_finite_relay_values_do_not_corrupt_stored_entries(
    state_repository: InMemoryStateRepository,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = (
            b'[{"itemName": "X", "calories": 1e400, "protein": 0,'
            b' "fat": 0, "carbs": 0}]'
        )
        return httpx.Response(200, content=body)

    relay = HttpxRelayClient(
        url="https://relay.test/api/parseMeal",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    store = EntryStore(state_repository)
    store.append([make_record("Reis", calories=200)], "Reis")
    tracker = _tracker(store, relay)

    asyncio.run(tracker.submit("x"))

    assert tracker.error == EXTRACTION_FAILED_MESSAGE
    reloaded = EntryStore(state_repository).load()
    assert [entry.item_name for entry in reloaded] == ["Reis"]
