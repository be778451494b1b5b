"""Reminders API routes."""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends

from app.core.database import Database
from app.core.dependencies import get_current_user, get_now
from app.reminders.models import CompleteReminderResponse, Reminder
from app.reminders.repository import ReminderRepository
from app.reminders.service import ReminderService

router = APIRouter(prefix="/reminders", tags=["Reminders"])


def get_reminder_repository() -> ReminderRepository:
    return ReminderRepository(Database.db)


def get_reminder_service(
    repository: ReminderRepository = Depends(get_reminder_repository),
) -> ReminderService:
    return ReminderService(repository)


@router.get("/upcoming", response_model=List[Reminder])
async def get_upcoming_reminders(
    current_user: dict = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
    now: datetime = Depends(get_now),
):
    """
    Get the user's due list.
    
    Open reminders scheduled within the next 7 days (overdue ones included),
    followed by an auto watering reminder for every active planting that has
    had no watering reminder in the last 24 hours.
    """
    return await service.get_upcoming(current_user["id"], now)


@router.post("/{reminder_id}/complete", response_model=CompleteReminderResponse)
async def complete_reminder(
    reminder_id: str,
    current_user: dict = Depends(get_current_user),
    service: ReminderService = Depends(get_reminder_service),
    now: datetime = Depends(get_now),
):
    """Mark one of the user's reminders as completed. Safe to repeat."""
    await service.complete(reminder_id, current_user["id"], now)
    return CompleteReminderResponse(ok=True)
