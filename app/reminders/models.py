"""Reminder models and schemas."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ReminderType(str, Enum):
    """Kinds of care reminders."""
    WATERING = "watering"
    FERTILIZING = "fertilizing"
    DISEASE_CHECK = "disease_check"
    HARVEST = "harvest"
    OTHER = "other"


class ReminderSource(str, Enum):
    """Where a reminder in the due list came from."""
    PERSISTED = "persisted"  # stored row with a repository-assigned id
    AUTO = "auto"  # synthesized on the fly from planting history


class CamelModel(BaseModel):
    """Schemas exchanged with the web client use camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Reminder(CamelModel):
    """
    A reminder in the due list.

    Persisted reminders carry user_id/created_at/completed_at from storage.
    Synthesized ones are built per request and always have is_completed=False.
    """
    id: str
    reminder_type: ReminderType
    message: str
    scheduled_date: datetime
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    user_id: Optional[str] = None
    planting_history_id: Optional[str] = None
    crop_name: Optional[str] = None
    created_at: Optional[datetime] = None
    source: ReminderSource = ReminderSource.PERSISTED


class ReminderCreate(BaseModel):
    """Schema for inserting a reminder (seed data, other write paths)."""
    user_id: str
    reminder_type: ReminderType
    message: str
    scheduled_date: datetime
    planting_history_id: Optional[str] = None


class PlantingHistory(BaseModel):
    """A crop the user has planted. Read only for reminders."""
    id: str
    user_id: str
    crop_name: str
    is_completed: bool = False


class CompleteReminderResponse(BaseModel):
    """Acknowledgement for a completed reminder."""
    ok: bool = True
