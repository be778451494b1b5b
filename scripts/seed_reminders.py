#!/usr/bin/env python3
"""
Seed script for reminders and planting history.

Creates a few active plantings and stored reminders for one user so the
upcoming-reminders endpoint has something to reconcile, then prints a bearer
token for that user.
"""

import argparse
import asyncio
import os
import sys
from datetime import datetime, timedelta, timezone

import certifi
from motor.motor_asyncio import AsyncIOMotorClient

# Make app package importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.auth.service import AuthService
from app.core.config import get_settings
from app.core.logging_config import setup_logging
from app.reminders.models import ReminderCreate, ReminderType
from app.reminders.repository import ReminderRepository

CROPS = ["Tomat", "Cabai", "Jagung"]


def get_client(uri: str) -> AsyncIOMotorClient:
    """Create Mongo client with TLS if needed."""
    client_kwargs = {"tz_aware": True}
    if "mongodb+srv://" in uri or "ssl=true" in uri.lower():
        client_kwargs["tlsCAFile"] = certifi.where()
    return AsyncIOMotorClient(uri, **client_kwargs)


async def seed_reminders(user_id: str, reset: bool):
    settings = get_settings()
    client = get_client(settings.MONGO_URI)
    db = client[settings.MONGO_DB_NAME]
    repository = ReminderRepository(db)
    now = datetime.now(timezone.utc)

    try:
        if reset:
            await db[ReminderRepository.REMINDERS].delete_many({"user_id": user_id})
            await db[ReminderRepository.PLANTING_HISTORY].delete_many({"user_id": user_id})
            print(f"Cleared reminders and plantings for {user_id}")

        planting_ids = []
        for crop in CROPS:
            result = await db[ReminderRepository.PLANTING_HISTORY].insert_one({
                "user_id": user_id,
                "crop_name": crop,
                "is_completed": False,
                "planted_at": now - timedelta(days=14),
            })
            planting_ids.append(str(result.inserted_id))
        print(f"Inserted {len(planting_ids)} active plantings")

        seeds = [
            ReminderCreate(
                user_id=user_id,
                reminder_type=ReminderType.FERTILIZING,
                message=f"Beri pupuk tanaman {CROPS[0]}",
                scheduled_date=now + timedelta(days=2),
                planting_history_id=planting_ids[0],
            ),
            ReminderCreate(
                user_id=user_id,
                reminder_type=ReminderType.DISEASE_CHECK,
                message=f"Periksa daun {CROPS[1]}",
                scheduled_date=now - timedelta(days=1),
                planting_history_id=planting_ids[1],
            ),
            # Covers the first planting, so no auto watering reminder for it today
            ReminderCreate(
                user_id=user_id,
                reminder_type=ReminderType.WATERING,
                message=f"Siram tanaman {CROPS[0]} pagi ini",
                scheduled_date=now,
                planting_history_id=planting_ids[0],
            ),
            ReminderCreate(
                user_id=user_id,
                reminder_type=ReminderType.HARVEST,
                message=f"Panen {CROPS[2]}",
                scheduled_date=now + timedelta(days=30),
                planting_history_id=planting_ids[2],
            ),
        ]
        for data in seeds:
            reminder = await repository.create_reminder(data, created_at=now)
            print(f"  {reminder.reminder_type.value:<14} {reminder.id} due {reminder.scheduled_date:%Y-%m-%d}")

        print("\nBearer token:")
        print(AuthService.create_access_token(user_id))
    finally:
        client.close()


def main():
    parser = argparse.ArgumentParser(description="Seed demo reminders for a user")
    parser.add_argument("--user-id", default="demo-user", help="Owner of the seeded data")
    parser.add_argument("--reset", action="store_true", help="Delete the user's existing data first")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(seed_reminders(args.user_id, args.reset))


if __name__ == "__main__":
    main()
