"""
Unit tests for app/notifications/dismissal_store.py.
"""

import json

from app.notifications.dismissal_store import (
    DismissalStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from app.reminders.identity import SynthesizedReminderId
from app.reminders.models import ReminderType

AUTO_ID = SynthesizedReminderId(planting_id="tomato-1", kind=ReminderType.WATERING)


class TestDismissalStore:

    def test_unknown_id_is_not_dismissed(self, clock):
        store = DismissalStore(InMemoryKeyValueStore(), clock=clock)
        assert store.is_dismissed_today(AUTO_ID) is False

    def test_dismissal_lasts_just_under_a_day(self, clock):
        store = DismissalStore(InMemoryKeyValueStore(), clock=clock)
        store.mark_dismissed(AUTO_ID)

        clock.advance(hours=23, minutes=59, seconds=59)
        assert store.is_dismissed_today(AUTO_ID) is True

        clock.advance(seconds=1)
        assert store.is_dismissed_today(AUTO_ID) is False

    def test_marking_again_restarts_the_window(self, clock):
        store = DismissalStore(InMemoryKeyValueStore(), clock=clock)
        store.mark_dismissed(AUTO_ID)
        clock.advance(hours=20)
        store.mark_dismissed(AUTO_ID)

        clock.advance(hours=20)
        assert store.is_dismissed_today(AUTO_ID) is True

    def test_entries_are_namespaced_epoch_millis(self, clock):
        kv = InMemoryKeyValueStore()
        DismissalStore(kv, clock=clock).mark_dismissed(AUTO_ID)

        raw = kv.get("dismissed:auto-reminder-tomato-1-watering")
        assert raw == str(int(clock.now.timestamp() * 1000))

    def test_garbage_value_counts_as_not_dismissed(self, clock):
        kv = InMemoryKeyValueStore({"dismissed:auto-reminder-tomato-1-watering": "yesterday"})
        assert DismissalStore(kv, clock=clock).is_dismissed_today(AUTO_ID) is False


class TestJsonFileKeyValueStore:

    def test_missing_file_reads_as_empty(self, tmp_path):
        assert JsonFileKeyValueStore(tmp_path / "nope.json").get("k") is None

    def test_values_survive_a_new_instance(self, tmp_path):
        path = tmp_path / "state" / "dismissed.json"
        JsonFileKeyValueStore(path).set("k", "1")

        assert JsonFileKeyValueStore(path).get("k") == "1"
        assert json.loads(path.read_text()) == {"k": "1"}

    def test_writes_from_two_instances_are_merged(self, tmp_path):
        path = tmp_path / "dismissed.json"
        tab_a = JsonFileKeyValueStore(path)
        tab_b = JsonFileKeyValueStore(path)

        tab_a.set("a", "1")
        tab_b.set("b", "2")

        assert tab_a.get("a") == "1"
        assert tab_a.get("b") == "2"

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "dismissed.json"
        path.write_text("{not json")

        store = JsonFileKeyValueStore(path)
        assert store.get("k") is None
        store.set("k", "1")
        assert store.get("k") == "1"
