"""
Reminder Content Templates

User-facing copy for reminders (Indonesian). Centralizing content here allows
easy modification of reminder text without changing business logic.
"""

from datetime import datetime
from typing import Optional

from app.reminders.models import ReminderType


class ReminderContent:
    """Reminder titles, messages and panel copy."""
    
    # -------------------------------------------------------------------------
    # Titles by reminder type
    # -------------------------------------------------------------------------
    
    LABELS = {
        ReminderType.WATERING: "Siram Tanaman",
        ReminderType.FERTILIZING: "Beri Pupuk",
        ReminderType.DISEASE_CHECK: "Periksa Penyakit",
        ReminderType.HARVEST: "Waktu Panen",
    }
    DEFAULT_LABEL = "Pengingat"
    
    # -------------------------------------------------------------------------
    # Panel
    # -------------------------------------------------------------------------
    
    PANEL_TITLE = "Pengingat & Notifikasi"
    LOADING = "Memuat pengingat..."
    EMPTY = "Tidak ada pengingat. Semua tugas selesai!"
    COMPLETE_FAILED = "Gagal menandai selesai. Coba lagi."
    
    @classmethod
    def label_for(cls, reminder_type: ReminderType) -> str:
        """Title shown above a reminder."""
        return cls.LABELS.get(reminder_type, cls.DEFAULT_LABEL)
    
    @staticmethod
    def auto_watering(crop_name: str) -> str:
        """Message for a synthesized watering reminder."""
        return f"Siram tanaman {crop_name} Anda"
    
    @staticmethod
    def crop_line(crop_name: Optional[str]) -> Optional[str]:
        if not crop_name:
            return None
        return f"Tanaman: {crop_name}"
    
    @staticmethod
    def date_line(scheduled: datetime) -> str:
        """Short date in the id-ID style (d/m/yyyy)."""
        return f"{scheduled.day}/{scheduled.month}/{scheduled.year}"
