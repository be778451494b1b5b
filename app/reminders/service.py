"""Reminder service - due-list reconciliation and completion."""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from pymongo.errors import PyMongoError

from app.core.config import Settings, get_settings
from app.core.exceptions import NotFoundException, TransientFetchException
from app.reminders.content import ReminderContent
from app.reminders.identity import SynthesizedReminderId
from app.reminders.models import (
    PlantingHistory,
    Reminder,
    ReminderSource,
    ReminderType,
)
from app.reminders.repository import ReminderRepository

logger = logging.getLogger(__name__)


def synthesize_watering_reminders(
    plantings: Iterable[PlantingHistory],
    recent_watering: Iterable[Reminder],
    now: datetime,
) -> List[Reminder]:
    """
    One watering reminder per active planting that has no watering reminder
    in ``recent_watering``.
    
    The id depends only on the planting, so repeated polls yield the same id.
    """
    covered = {r.planting_history_id for r in recent_watering if r.planting_history_id}
    
    reminders = []
    for planting in plantings:
        if planting.id in covered:
            continue
        reminder_id = SynthesizedReminderId(planting_id=planting.id, kind=ReminderType.WATERING)
        reminders.append(Reminder(
            id=str(reminder_id),
            reminder_type=ReminderType.WATERING,
            message=ReminderContent.auto_watering(planting.crop_name),
            scheduled_date=now,
            is_completed=False,
            crop_name=planting.crop_name,
            planting_history_id=planting.id,
            source=ReminderSource.AUTO,
        ))
    return reminders


class ReminderService:
    """Builds the due list and completes stored reminders for one user at a time."""
    
    def __init__(self, repository: ReminderRepository, settings: Optional[Settings] = None):
        self.repository = repository
        self.settings = settings or get_settings()
    
    async def get_upcoming(self, user_id: str, now: datetime) -> List[Reminder]:
        """
        Stored reminders due within the horizon followed by synthesized
        watering reminders.
        
        Any failed read fails the whole call; no partial list is returned.
        """
        horizon = now + timedelta(days=self.settings.REMINDER_HORIZON_DAYS)
        window_start = now - timedelta(hours=self.settings.AUTO_REMINDER_WINDOW_HOURS)
        
        try:
            due = await self.repository.find_due(user_id, horizon)
            plantings = await self.repository.find_active_plantings(user_id)
            recent_watering = await self.repository.find_recent_by_type(
                user_id, ReminderType.WATERING, window_start
            )
            auto = synthesize_watering_reminders(plantings, recent_watering, now)
        except PyMongoError as e:
            logger.error(f"Reminders fetch error for user {user_id}: {e}")
            raise TransientFetchException() from e
        except Exception as e:
            # Malformed stored documents fail mapping (KeyError, ValidationError)
            logger.exception(f"Reminders fetch error for user {user_id}")
            raise TransientFetchException() from e
        
        logger.debug(
            f"Due list for {user_id}: {len(due)} stored, {len(auto)} synthesized"
        )
        return due + auto
    
    async def complete(self, reminder_id: str, user_id: str, now: datetime) -> None:
        """Mark a user's reminder completed at ``now``. Raises NotFound if not theirs."""
        try:
            found = await self.repository.mark_completed(reminder_id, user_id, now)
        except PyMongoError as e:
            logger.error(f"Failed to complete reminder {reminder_id}: {e}")
            raise TransientFetchException("Failed to complete reminder") from e
        
        if not found:
            raise NotFoundException()
