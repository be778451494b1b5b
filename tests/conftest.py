"""Pytest fixtures and config."""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.auth.service import AuthService
from app.core.dependencies import get_now
from app.main import app
from app.reminders.models import PlantingHistory, Reminder, ReminderType
from app.reminders.repository import ReminderRepository
from app.reminders.views import get_reminder_repository

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)


class InMemoryReminderRepository(ReminderRepository):
    """Repository fake with the same query semantics as the Mongo one."""

    def __init__(self):
        super().__init__(db=None)
        self.reminders: Dict[str, Reminder] = {}
        self.plantings: Dict[str, PlantingHistory] = {}
        self.fail = False
        self._next_id = 0

    def _check(self):
        if self.fail:
            raise ServerSelectionTimeoutError("mongo unreachable")

    def add_planting(self, planting_id: str, user_id: str, crop_name: str, is_completed: bool = False):
        self.plantings[planting_id] = PlantingHistory(
            id=planting_id, user_id=user_id, crop_name=crop_name, is_completed=is_completed
        )

    def add_reminder(
        self,
        user_id: str,
        reminder_type: ReminderType = ReminderType.OTHER,
        scheduled_date: datetime = NOW,
        created_at: datetime = NOW,
        is_completed: bool = False,
        planting_history_id: Optional[str] = None,
        message: str = "Pengingat",
    ) -> Reminder:
        self._next_id += 1
        reminder_id = f"{self._next_id:024x}"
        self.reminders[reminder_id] = Reminder(
            id=reminder_id,
            user_id=user_id,
            reminder_type=reminder_type.value,
            message=message,
            scheduled_date=scheduled_date,
            is_completed=is_completed,
            completed_at=created_at if is_completed else None,
            planting_history_id=planting_history_id,
            created_at=created_at,
        )
        return self.reminders[reminder_id]

    async def find_due(self, user_id, scheduled_before) -> List[Reminder]:
        self._check()
        return [
            r for r in self.reminders.values()
            if r.user_id == user_id and not r.is_completed and r.scheduled_date <= scheduled_before
        ]

    async def find_recent_by_type(self, user_id, reminder_type, created_after) -> List[Reminder]:
        self._check()
        return [
            r for r in self.reminders.values()
            if r.user_id == user_id
            and r.reminder_type == reminder_type.value
            and r.created_at >= created_after
        ]

    async def find_active_plantings(self, user_id) -> List[PlantingHistory]:
        self._check()
        return [p for p in self.plantings.values() if p.user_id == user_id and not p.is_completed]

    async def mark_completed(self, reminder_id, user_id, completed_at) -> bool:
        self._check()
        reminder = self.reminders.get(reminder_id)
        if reminder is None or reminder.user_id != user_id:
            return False
        self.reminders[reminder_id] = reminder.model_copy(
            update={"is_completed": True, "completed_at": completed_at}
        )
        return True


class Clock:
    """Mutable clock shared by the API and the dismissal store."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def repository():
    return InMemoryReminderRepository()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def api(repository, clock):
    app.dependency_overrides[get_reminder_repository] = lambda: repository
    app.dependency_overrides[get_now] = clock
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def http(api):
    # No context manager: skips the lifespan, so no MongoDB connection
    return TestClient(api)


@pytest.fixture
def auth_headers():
    def _headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {AuthService.create_access_token(user_id)}"}
    return _headers
