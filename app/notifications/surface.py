"""
Notification Surface

Client-side view of the reminder due list, the bell badge and its panel.

Lifecycle:
- ``start()`` polls immediately, then every ``poll_interval`` seconds
- each poll drops auto reminders dismissed within the last day and anything
  already completed, then replaces the displayed list
- ``complete()`` / ``dismiss()`` act on one displayed reminder
- ``close()`` stops the ticker; responses arriving later are ignored

Ticks never wait for the previous fetch. Each fetch gets a sequence number
and a response older than the newest one already applied is dropped.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from app.core.config import get_settings
from app.notifications.client import ReminderApiClient
from app.notifications.dismissal_store import DismissalStore
from app.notifications.errors import ReminderClientError, UnauthenticatedError
from app.reminders.content import ReminderContent
from app.reminders.identity import ReminderId, SynthesizedReminderId, reminder_id_for
from app.reminders.models import Reminder

logger = logging.getLogger(__name__)


class SurfaceState(str, Enum):
    """Fetch state of the surface."""
    LOADING = "loading"
    IDLE_EMPTY = "idle_empty"
    IDLE_WITH_ITEMS = "idle_with_items"


class PanelState(str, Enum):
    """Whether the reminder panel is shown. Independent of fetch state."""
    OPEN = "open"
    CLOSED = "closed"


class DismissPolicy(str, Enum):
    REMEMBER = "remember"
    HIDE_UNTIL_NEXT_POLL = "hide_until_next_poll"


def dismiss_policy_for(reminder_id: ReminderId) -> DismissPolicy:
    """
    What dismissing a reminder means.

    Auto reminders are remembered in the dismissal store. Stored reminders are
    only hidden locally and come back on the next poll.
    """
    if isinstance(reminder_id, SynthesizedReminderId):
        return DismissPolicy.REMEMBER
    return DismissPolicy.HIDE_UNTIL_NEXT_POLL


class NotificationSurface:
    """Polls the due list and applies complete/dismiss actions."""
    
    def __init__(
        self,
        client: ReminderApiClient,
        dismissals: DismissalStore,
        poll_interval: Optional[float] = None,
        badge_ceiling: Optional[int] = None,
        on_change: Optional[Callable[["NotificationSurface"], None]] = None,
    ):
        settings = get_settings()
        self.client = client
        self.dismissals = dismissals
        self.poll_interval = poll_interval or settings.REMINDER_POLL_INTERVAL_SECONDS
        self.badge_ceiling = badge_ceiling or settings.REMINDER_BADGE_CEILING
        self.on_change = on_change
        
        self.reminders: List[Reminder] = []
        self.panel = PanelState.CLOSED
        self.errors: Dict[str, str] = {}  # reminder id -> failed completion message
        self.unauthenticated = False
        
        # stored reminder id -> newest fetch issued before it was completed here
        self._completed_locally: Dict[str, int] = {}
        self._loading = True
        self._closed = False
        self._fetch_seq = 0
        self._applied_seq = 0
        self._ticker: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()
    
    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------
    
    @property
    def state(self) -> SurfaceState:
        if self._loading:
            return SurfaceState.LOADING
        if self.reminders:
            return SurfaceState.IDLE_WITH_ITEMS
        return SurfaceState.IDLE_EMPTY
    
    @property
    def count(self) -> int:
        return len(self.reminders)
    
    @property
    def badge_text(self) -> Optional[str]:
        """Bell badge, ``None`` when there is nothing to show."""
        if not self.reminders:
            return None
        if self.count > self.badge_ceiling:
            return f"{self.badge_ceiling}+"
        return str(self.count)
    
    @property
    def closed(self) -> bool:
        return self._closed
    
    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    
    def start(self) -> None:
        """Begin polling. The first fetch is issued right away."""
        if self._closed:
            raise RuntimeError("Notification surface is closed")
        if self._ticker is None:
            self._ticker = asyncio.create_task(self._tick_forever())
    
    async def close(self) -> None:
        """Stop polling and drop any fetch still in flight."""
        self._closed = True
        tasks = [t for t in (self._ticker, *self._in_flight) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._ticker = None
        self._in_flight.clear()
    
    async def __aenter__(self) -> "NotificationSurface":
        self.start()
        return self
    
    async def __aexit__(self, *exc_info) -> None:
        await self.close()
    
    async def _tick_forever(self) -> None:
        while not self._closed:
            task = asyncio.create_task(self.refresh())
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            await asyncio.sleep(self.poll_interval)
    
    # -------------------------------------------------------------------------
    # Polling
    # -------------------------------------------------------------------------
    
    async def refresh(self) -> None:
        """Fetch the due list once. Failures keep the previous list."""
        if self._closed:
            return
        self._fetch_seq += 1
        seq = self._fetch_seq
        
        try:
            fetched = await self.client.fetch_upcoming()
        except UnauthenticatedError:
            logger.warning("Reminder poll rejected: not signed in")
            if self._is_current(seq):
                self.unauthenticated = True
                self._apply(seq, [])
            return
        except ReminderClientError as e:
            logger.error(f"Error fetching reminders: {e}")
            self._finish_loading()
            return
        except Exception:
            logger.exception("Unexpected error fetching reminders")
            self._finish_loading()
            return
        
        if not self._is_current(seq):
            logger.debug(f"Dropping stale reminder response #{seq}")
            return
        # A fetch issued after a local completion reflects it on the server
        self._completed_locally = {
            k: issued for k, issued in self._completed_locally.items() if issued >= seq
        }
        try:
            shown = self.visible(fetched)
        except Exception:
            logger.exception("Could not filter fetched reminders")
            self._finish_loading()
            return
        self.unauthenticated = False
        self._apply(seq, shown)
    
    def visible(self, reminders: List[Reminder]) -> List[Reminder]:
        """
        Drop completed reminders and auto reminders dismissed today.
        
        Stored reminders completed here stay hidden until a fetch issued after
        the completion lands.
        """
        shown = []
        for reminder in reminders:
            reminder_id = reminder_id_for(reminder)
            if isinstance(reminder_id, SynthesizedReminderId) and self.dismissals.is_dismissed_today(reminder_id):
                continue
            if reminder.is_completed or reminder.id in self._completed_locally:
                continue
            shown.append(reminder)
        return shown
    
    def _is_current(self, seq: int) -> bool:
        return not self._closed and seq > self._applied_seq
    
    def _apply(self, seq: int, reminders: List[Reminder]) -> None:
        self._applied_seq = seq
        self.reminders = reminders
        shown_ids = {r.id for r in reminders}
        self.errors = {k: v for k, v in self.errors.items() if k in shown_ids}
        self._loading = False
        self._notify()
    
    def _finish_loading(self) -> None:
        if self._loading and not self._closed:
            self._loading = False
            self._notify()
    
    # -------------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------------
    
    async def complete(self, reminder_id: str) -> bool:
        """
        Complete a displayed reminder.
        
        Auto reminders are dismissed locally (there is no row to update).
        Stored reminders are completed on the server and stay visible with an
        error if that fails. Returns True when the reminder was removed.
        """
        reminder = self._find(reminder_id)
        if reminder is None:
            return False
        typed_id = reminder_id_for(reminder)
        
        if isinstance(typed_id, SynthesizedReminderId):
            self.dismissals.mark_dismissed(typed_id)
            self._remove(reminder_id)
            return True
        
        try:
            await self.client.complete(typed_id)
        except ReminderClientError as e:
            logger.error(f"Failed to complete reminder {reminder_id}: {e}")
            if not self._closed:
                self.errors[reminder_id] = ReminderContent.COMPLETE_FAILED
                self._notify()
            return False
        
        if not self._closed:
            self._completed_locally[reminder_id] = self._fetch_seq
            self._remove(reminder_id)
        return True
    
    def dismiss(self, reminder_id: str) -> None:
        """Hide a displayed reminder. See ``dismiss_policy_for``."""
        reminder = self._find(reminder_id)
        if reminder is None:
            return
        typed_id = reminder_id_for(reminder)
        if dismiss_policy_for(typed_id) is DismissPolicy.REMEMBER:
            self.dismissals.mark_dismissed(typed_id)
        self._remove(reminder_id)
    
    def toggle_panel(self) -> None:
        self.panel = PanelState.CLOSED if self.panel is PanelState.OPEN else PanelState.OPEN
        self._notify()
    
    def open_panel(self) -> None:
        self.panel = PanelState.OPEN
        self._notify()
    
    def close_panel(self) -> None:
        self.panel = PanelState.CLOSED
        self._notify()
    
    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    
    def render(self) -> List[str]:
        """Text lines for the panel (badge line only when the panel is closed)."""
        badge = self.badge_text
        lines = [f"[{badge}] {ReminderContent.PANEL_TITLE}" if badge else ReminderContent.PANEL_TITLE]
        if self.panel is PanelState.CLOSED:
            return lines
        
        if self.state is SurfaceState.LOADING:
            lines.append(ReminderContent.LOADING)
            return lines
        if self.state is SurfaceState.IDLE_EMPTY:
            lines.append(ReminderContent.EMPTY)
            return lines
        
        for reminder in self.reminders:
            lines.append(f"- {ReminderContent.label_for(reminder.reminder_type)}: {reminder.message}")
            crop = ReminderContent.crop_line(reminder.crop_name)
            if crop:
                lines.append(f"  {crop}")
            lines.append(f"  {ReminderContent.date_line(reminder.scheduled_date)}")
            if reminder.id in self.errors:
                lines.append(f"  ! {self.errors[reminder.id]}")
        return lines
    
    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    
    def _find(self, reminder_id: str) -> Optional[Reminder]:
        return next((r for r in self.reminders if r.id == reminder_id), None)
    
    def _remove(self, reminder_id: str) -> None:
        self.reminders = [r for r in self.reminders if r.id != reminder_id]
        self.errors.pop(reminder_id, None)
        self._notify()
    
    def _notify(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(self)
        except Exception:
            logger.exception("Notification surface listener failed")
