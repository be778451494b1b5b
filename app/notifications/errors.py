"""Errors raised by the reminders API client."""


class ReminderClientError(Exception):
    """Base class for reminder client failures."""


class UnauthenticatedError(ReminderClientError):
    """The session is missing or expired (HTTP 401)."""


class ReminderNotFoundError(ReminderClientError):
    """The reminder does not exist or belongs to someone else (HTTP 404)."""


class TransientFetchError(ReminderClientError):
    """Network failure, server error or an unreadable response. Retry later."""
