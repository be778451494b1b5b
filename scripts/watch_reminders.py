#!/usr/bin/env python3
"""
Terminal notification panel.

Polls a running reminders API and reprints the panel whenever it changes.
Dismissals are kept in a JSON file so they survive restarts.
"""

import argparse
import asyncio
import os
import sys

# Make app package importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import get_settings
from app.core.logging_config import setup_logging
from app.notifications.client import ReminderApiClient
from app.notifications.dismissal_store import DismissalStore, JsonFileKeyValueStore
from app.notifications.surface import NotificationSurface


def print_panel(surface: NotificationSurface):
    print("\n".join(surface.render()))
    print()


async def watch(base_url: str, token: str, interval: float, store_path: str, runs: int):
    dismissals = DismissalStore(JsonFileKeyValueStore(store_path))

    async with ReminderApiClient(base_url=base_url, token=token) as client:
        surface = NotificationSurface(client, dismissals, poll_interval=interval, on_change=print_panel)
        surface.open_panel()
        async with surface:
            if runs:
                await asyncio.sleep(interval * (runs - 1) + 1)
            else:
                await asyncio.Event().wait()


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Watch upcoming reminders")
    parser.add_argument("--token", required=True, help="Bearer token for the user")
    parser.add_argument("--base-url", default=settings.REMINDER_API_BASE_URL)
    parser.add_argument("--interval", type=float, default=settings.REMINDER_POLL_INTERVAL_SECONDS)
    parser.add_argument("--store", default=settings.DISMISSAL_STORE_PATH, help="Dismissal file")
    parser.add_argument("--runs", type=int, default=0, help="Stop after N polls (0 = forever)")
    args = parser.parse_args()

    setup_logging()
    try:
        asyncio.run(watch(args.base_url, args.token, args.interval, args.store, args.runs))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
