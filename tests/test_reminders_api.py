"""
Endpoint tests for /api/reminders.
"""

from datetime import timedelta

from app.reminders.models import ReminderType


def test_health_check(http):
    r = http.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


class TestUpcoming:

    def test_requires_authentication(self, http, repository):
        repository.fail = True  # must not be reached

        r = http.get("/api/reminders/upcoming")

        assert r.status_code == 401
        assert r.json() == {"error": "Unauthorized"}

    def test_invalid_token_is_unauthorized(self, http):
        r = http.get("/api/reminders/upcoming", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 401

    def test_auto_watering_reminder_for_active_planting(self, http, repository, auth_headers):
        repository.add_planting("tomato-1", "u1", "Tomat")

        r = http.get("/api/reminders/upcoming", headers=auth_headers("u1"))

        assert r.status_code == 200
        [item] = r.json()
        assert item["id"] == "auto-reminder-tomato-1-watering"
        assert item["reminderType"] == "watering"
        assert item["message"] == "Siram tanaman Tomat Anda"
        assert item["isCompleted"] is False
        assert item["cropName"] == "Tomat"
        assert item["plantingHistoryId"] == "tomato-1"
        assert item["source"] == "auto"
        assert item["scheduledDate"].startswith("2026-10-19T08:00:00")

    def test_stored_reminder_shape(self, http, repository, clock, auth_headers):
        stored = repository.add_reminder(
            "u1", ReminderType.FERTILIZING, scheduled_date=clock.now + timedelta(days=3), message="Beri pupuk"
        )

        r = http.get("/api/reminders/upcoming", headers=auth_headers("u1"))

        [item] = r.json()
        assert item["id"] == stored.id
        assert item["userId"] == "u1"
        assert item["reminderType"] == "fertilizing"
        assert item["message"] == "Beri pupuk"
        assert item["source"] == "persisted"

    def test_fetch_failure_is_500(self, http, repository, auth_headers):
        repository.fail = True

        r = http.get("/api/reminders/upcoming", headers=auth_headers("u1"))

        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch reminders"}


class TestComplete:

    def test_complete_own_reminder(self, http, repository, clock, auth_headers):
        reminder = repository.add_reminder("u1")

        r = http.post(f"/api/reminders/{reminder.id}/complete", headers=auth_headers("u1"))

        assert r.status_code == 200
        assert r.json() == {"ok": True}
        assert repository.reminders[reminder.id].completed_at == clock.now

    def test_complete_is_idempotent(self, http, repository, clock, auth_headers):
        reminder = repository.add_reminder("u1")
        http.post(f"/api/reminders/{reminder.id}/complete", headers=auth_headers("u1"))
        clock.advance(hours=1)

        r = http.post(f"/api/reminders/{reminder.id}/complete", headers=auth_headers("u1"))

        assert r.status_code == 200
        assert repository.reminders[reminder.id].completed_at == clock.now

    def test_other_users_reminder_is_404(self, http, repository, auth_headers):
        reminder = repository.add_reminder("owner")

        r = http.post(f"/api/reminders/{reminder.id}/complete", headers=auth_headers("intruder"))

        assert r.status_code == 404
        assert r.json() == {"error": "Not found"}

    def test_missing_reminder_is_404(self, http, auth_headers):
        r = http.post("/api/reminders/abc/complete", headers=auth_headers("u1"))

        assert r.status_code == 404
        assert r.json() == {"error": "Not found"}

    def test_requires_authentication(self, http, repository):
        reminder = repository.add_reminder("u1")

        r = http.post(f"/api/reminders/{reminder.id}/complete")

        assert r.status_code == 401
        assert repository.reminders[reminder.id].is_completed is False


def test_non_mongo_fetch_failure_is_json_500(http, repository, auth_headers, monkeypatch):
    async def broken_find_due(user_id, scheduled_before):
        raise KeyError("scheduled_date")

    monkeypatch.setattr(repository, "find_due", broken_find_due)

    r = http.get("/api/reminders/upcoming", headers=auth_headers("u1"))

    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch reminders"}
