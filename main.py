#!/usr/bin/env python

"""
Week Planner - Main Entry Point

Loads the planner state (remote record first, then the local slot), prints
the week overview and flushes any pending sync before exiting.

Usage:
    python main.py                      # local state only
    python main.py EMAIL PASSWORD       # sign in and sync with the remote store
    python main.py --signup EMAIL PASSWORD

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import asyncio
import logging
import sys

from weekplanner.i18n import set_language, tr
from weekplanner.infra.auth import LocalIdentityProvider
from weekplanner.infra.config import get_settings
from weekplanner.infra.db import init_db
from weekplanner.infra.repository import LocalStateRepository, RemoteStateRepository
from weekplanner.services import ReportService, SyncService
from weekplanner.services.planner_service import reset_state


async def run(argv):
    settings = get_settings()
    prefs = settings.preferences
    set_language(prefs.language)

    await init_db(settings.get_db_url())

    identity = LocalIdentityProvider()
    signup = bool(argv) and argv[0] == "--signup"
    if signup:
        argv = argv[1:]

    if len(argv) >= 2:
        email, password = argv[0], argv[1]
        result = await (identity.sign_up(email, password) if signup else identity.sign_in(email, password))
        if not result.ok:
            print(f"Error: {result.error}")
            return 1

    sync = SyncService(
        LocalStateRepository(settings.get_state_path()),
        RemoteStateRepository(),
        identity,
        delay=prefs.sync_debounce_seconds,
        default_factory=lambda: reset_state(prefs),
    )
    state = await sync.initial_load()

    print(ReportService().render_week(state))

    saved = await sync.flush()
    if saved is not None:
        print(tr("sync.saved") if saved else tr("sync.failed"))
    return 0


def main():
    """Main entry point"""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(sys.argv[1:]))


if __name__ == "__main__":
    sys.exit(main())
