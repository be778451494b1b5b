"""
Dismissal Store

Remembers which auto reminders the user dismissed, per device. A dismissal
hides a reminder for a fixed window (24 hours by default); older entries are
treated as absent and never swept.
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol, Union

from app.core.config import get_settings
from app.reminders.identity import ReminderId

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueStore(Protocol):
    """Local persistent string store."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store, lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore:
    """
    Store kept in a single JSON object on disk.

    Every write re-reads the file so two processes sharing it lose at most
    the racing key (last write wins).
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable dismissal file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".dismissed-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise


class DismissalStore:
    """Dismissal timestamps (epoch milliseconds) keyed by reminder id."""

    NAMESPACE = "dismissed:"

    def __init__(
        self,
        store: KeyValueStore,
        window: Optional[timedelta] = None,
        clock: Clock = _utcnow,
    ):
        self.store = store
        self.window = window or timedelta(hours=get_settings().DISMISSAL_WINDOW_HOURS)
        self.clock = clock

    def _key(self, reminder_id: Union[ReminderId, str]) -> str:
        return f"{self.NAMESPACE}{reminder_id}"

    def _now_ms(self) -> int:
        return int(self.clock().timestamp() * 1000)

    def is_dismissed_today(self, reminder_id: Union[ReminderId, str]) -> bool:
        """True iff the reminder was dismissed less than one window ago."""
        raw = self.store.get(self._key(reminder_id))
        if raw is None:
            return False
        try:
            dismissed_at = int(raw)
        except ValueError:
            logger.warning(f"Bad dismissal timestamp for {reminder_id}: {raw!r}")
            return False
        window_ms = int(self.window.total_seconds() * 1000)
        return self._now_ms() - dismissed_at < window_ms

    def mark_dismissed(self, reminder_id: Union[ReminderId, str]) -> None:
        """Record a dismissal now, replacing any earlier one."""
        self.store.set(self._key(reminder_id), str(self._now_ms()))
