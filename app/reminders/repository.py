"""MongoDB access for reminders and planting history."""

from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.database import Database
from app.reminders.models import (
    PlantingHistory,
    Reminder,
    ReminderCreate,
    ReminderType,
)


class ReminderRepository:
    """
    Narrow query surface over the ``reminders`` and ``planting_history``
    collections. Every query is scoped to a user.
    """
    
    REMINDERS = "reminders"
    PLANTING_HISTORY = "planting_history"
    
    def __init__(self, db: Optional[AsyncIOMotorDatabase] = None):
        self._db = db
    
    def _get_collection(self, name: str):
        if self._db is not None:
            return self._db[name]
        return Database.get_collection(name)
    
    # ==================== Queries ====================
    
    async def find_due(self, user_id: str, scheduled_before: datetime) -> List[Reminder]:
        """Open reminders scheduled at or before the given time (overdue included)."""
        cursor = self._get_collection(self.REMINDERS).find({
            "user_id": user_id,
            "is_completed": False,
            "scheduled_date": {"$lte": scheduled_before},
        })
        return [self._doc_to_reminder(doc) async for doc in cursor]
    
    async def find_recent_by_type(
        self,
        user_id: str,
        reminder_type: ReminderType,
        created_after: datetime,
    ) -> List[Reminder]:
        """Reminders of one kind created at or after the given time, completed or not."""
        cursor = self._get_collection(self.REMINDERS).find({
            "user_id": user_id,
            "reminder_type": reminder_type.value,
            "created_at": {"$gte": created_after},
        })
        return [self._doc_to_reminder(doc) async for doc in cursor]
    
    async def find_active_plantings(self, user_id: str) -> List[PlantingHistory]:
        """Planting records that are still growing."""
        cursor = self._get_collection(self.PLANTING_HISTORY).find({
            "user_id": user_id,
            "is_completed": False,
        })
        return [self._doc_to_planting(doc) async for doc in cursor]
    
    # ==================== Writes ====================
    
    async def mark_completed(self, reminder_id: str, user_id: str, completed_at: datetime) -> bool:
        """
        Complete a reminder owned by ``user_id``.
        
        Returns False when no such reminder exists for that user. Completing
        twice matches again and overwrites ``completed_at``.
        """
        if not ObjectId.is_valid(reminder_id):
            return False
        
        result = await self._get_collection(self.REMINDERS).update_one(
            {"_id": ObjectId(reminder_id), "user_id": user_id},
            {"$set": {"is_completed": True, "completed_at": completed_at}},
        )
        return result.matched_count > 0
    
    async def create_reminder(self, data: ReminderCreate, created_at: datetime) -> Reminder:
        """Insert a new open reminder."""
        doc = {
            "user_id": data.user_id,
            "reminder_type": data.reminder_type.value,
            "message": data.message,
            "scheduled_date": data.scheduled_date,
            "is_completed": False,
            "completed_at": None,
            "planting_history_id": data.planting_history_id,
            "created_at": created_at,
        }
        result = await self._get_collection(self.REMINDERS).insert_one(doc)
        doc["_id"] = result.inserted_id
        return self._doc_to_reminder(doc)
    
    # ==================== Helpers ====================
    
    @staticmethod
    def _doc_to_reminder(doc: dict) -> Reminder:
        """Convert MongoDB document to Reminder."""
        return Reminder(
            id=str(doc["_id"]),
            user_id=doc["user_id"],
            reminder_type=doc["reminder_type"],
            message=doc["message"],
            scheduled_date=doc["scheduled_date"],
            is_completed=doc.get("is_completed", False),
            completed_at=doc.get("completed_at"),
            planting_history_id=doc.get("planting_history_id"),
            created_at=doc.get("created_at"),
        )
    
    @staticmethod
    def _doc_to_planting(doc: dict) -> PlantingHistory:
        return PlantingHistory(
            id=str(doc["_id"]),
            user_id=doc["user_id"],
            crop_name=doc.get("crop_name", ""),
            is_completed=doc.get("is_completed", False),
        )
