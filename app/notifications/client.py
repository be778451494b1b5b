"""HTTP client for the reminders API, used by the notification surface."""

import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from app.core.config import get_settings
from app.notifications.errors import (
    ReminderClientError,
    ReminderNotFoundError,
    TransientFetchError,
    UnauthenticatedError,
)
from app.reminders.identity import PersistedReminderId
from app.reminders.models import Reminder

logger = logging.getLogger(__name__)

_reminder_list = TypeAdapter(List[Reminder])


class ReminderApiClient:
    """
    Thin async wrapper over ``/reminders`` endpoints.

    Every failure surfaces as a ``ReminderClientError`` subclass.
    """
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=base_url or get_settings().REMINDER_API_BASE_URL,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
    
    async def __aenter__(self) -> "ReminderApiClient":
        return self
    
    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
    
    async def aclose(self) -> None:
        await self._http.aclose()
    
    async def fetch_upcoming(self) -> List[Reminder]:
        """GET /reminders/upcoming."""
        response = await self._request("GET", "/reminders/upcoming")
        try:
            return _reminder_list.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            raise TransientFetchError(f"Unreadable reminders payload: {e}") from e
    
    async def complete(self, reminder_id: PersistedReminderId) -> None:
        """POST /reminders/{id}/complete. Only stored reminders can be completed."""
        await self._request("POST", f"/reminders/{reminder_id.value}/complete")
    
    async def _request(self, method: str, path: str) -> httpx.Response:
        try:
            response = await self._http.request(method, path)
        except httpx.HTTPError as e:
            raise TransientFetchError(f"{method} {path} failed: {e}") from e
        
        if response.status_code == 401:
            raise UnauthenticatedError("Unauthorized")
        if response.status_code == 404:
            raise ReminderNotFoundError(self._error_detail(response) or "Not found")
        if response.status_code >= 400:
            raise TransientFetchError(
                f"{method} {path} returned {response.status_code}: {self._error_detail(response)}"
            )
        return response
    
    @staticmethod
    def _error_detail(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return response.text or None
        if isinstance(body, dict):
            return body.get("error") or body.get("detail")
        return None


__all__ = ["ReminderApiClient", "ReminderClientError"]
