"""
Reminder identities.

A due list mixes stored reminders with synthesized ones. Synthesized reminders
have no row to update, so callers must know which kind of id they hold. The
wire ``source`` field decides it; the id string itself is never sniffed.
"""

from dataclasses import dataclass
from typing import Union

from app.reminders.models import Reminder, ReminderSource, ReminderType

AUTO_ID_PREFIX = "auto-reminder-"


@dataclass(frozen=True)
class PersistedReminderId:
    """Id assigned by the repository."""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SynthesizedReminderId:
    """Id derived from a planting record and a reminder kind."""
    planting_id: str
    kind: ReminderType

    def __str__(self) -> str:
        return f"{AUTO_ID_PREFIX}{self.planting_id}-{self.kind.value}"


ReminderId = Union[PersistedReminderId, SynthesizedReminderId]


def reminder_id_for(reminder: Reminder) -> ReminderId:
    """Build the typed id for a reminder received in a due list."""
    if reminder.source is ReminderSource.AUTO:
        return SynthesizedReminderId(
            planting_id=reminder.planting_history_id or "",
            kind=reminder.reminder_type,
        )
    return PersistedReminderId(reminder.id)
