"""
Sync Service - Local persistence plus debounced remote saves.

Architecture Decision: Explicit debounce timer with an injected clock
Every state change is written to the local slot immediately. The remote save
is deferred until the state has been quiet for a short period; a newer change
replaces the pending payload and restarts the countdown, so a burst of edits
becomes one remote write. The timer reads time through an injectable clock so
tests can advance it without sleeping.

The local copy is authoritative during a session. Remote failures are
reported as False and never roll local state back.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from weekplanner.domain.models import AppState, default_state
from weekplanner.infra.auth import IdentityProvider
from weekplanner.infra.config import SYNC_DEBOUNCE_SECONDS
from weekplanner.infra.repository import (
    LocalStateRepository,
    RemoteStateRepository,
    RemoteStatus,
)

logger = logging.getLogger(__name__)


class DebounceTimer:
    """
    Holds at most one pending payload and the time it becomes due.

    Scheduling again cancels the pending payload (cancel-on-supersede).
    """

    def __init__(self, delay: float, clock: Callable[[], float] = time.monotonic):
        self.delay = delay
        self.clock = clock
        self._payload = None
        self._deadline: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def schedule(self, payload) -> None:
        self._payload = payload
        self._deadline = self.clock() + self.delay

    def cancel(self) -> None:
        self._payload = None
        self._deadline = None

    def is_due(self) -> bool:
        return self.pending and self.clock() >= self._deadline

    def pop(self):
        """Take the pending payload regardless of the deadline"""
        payload = self._payload
        self.cancel()
        return payload

    def pop_due(self):
        """Take the pending payload if its quiet period has elapsed"""
        if not self.is_due():
            return None
        return self.pop()


class SyncService:
    """
    Keeps the local slot and the remote record in step with planner state.
    """

    def __init__(self, local_repo: LocalStateRepository,
                 remote_repo: RemoteStateRepository,
                 identity: IdentityProvider,
                 delay: float = SYNC_DEBOUNCE_SECONDS,
                 clock: Callable[[], float] = time.monotonic,
                 default_factory: Callable[[], AppState] = default_state):
        self.local_repo = local_repo
        self.remote_repo = remote_repo
        self.identity = identity
        self.timer = DebounceTimer(delay, clock)
        self.default_factory = default_factory

        # Remote saves are only scheduled after the startup load finished
        self.loaded = False

    async def initial_load(self) -> AppState:
        """
        Startup read.

        Remote state wins when present and is copied to the local slot.
        Otherwise local (or default) state is used and, if it holds anything
        and the user has no remote record yet, seeds the remote store.
        """
        local = self.local_repo.load()

        status, remote = RemoteStatus.UNAVAILABLE, None
        user_id = self.identity.get_current_user_id()
        if user_id:
            status, remote = await self.remote_repo.fetch(user_id)

        if remote is not None:
            logger.info("Using remote state")
            self._save_local(remote)
            state = remote
        else:
            state = local if local is not None else self.default_factory()
            # Only an absent record is seeded; an existing one is never replaced here
            if status == RemoteStatus.MISSING and state.has_content():
                await self._save_remote(state)
            elif status == RemoteStatus.UNREADABLE:
                logger.warning(f"Remote record of {user_id} left untouched at startup")

        self.loaded = True
        return state

    def on_state_changed(self, state: AppState) -> None:
        """Persist locally now and schedule a debounced remote save"""
        self._save_local(state)
        if not self.loaded:
            return
        self.timer.schedule(state)

    async def poll(self) -> Optional[bool]:
        """
        Send the pending remote save if its quiet period has elapsed.

        Returns:
            The save result, or None if nothing was due.
        """
        state = self.timer.pop_due()
        if state is None:
            return None
        return await self._save_remote(state)

    async def flush(self) -> Optional[bool]:
        """Send any pending save immediately (e.g. on exit)"""
        if not self.timer.pending:
            return None
        return await self._save_remote(self.timer.pop())

    async def sync_now(self, state: AppState) -> bool:
        """Immediate remote save; supersedes any pending one"""
        self.timer.cancel()
        return await self._save_remote(state)

    async def run(self, stop_event: asyncio.Event, interval: float = 0.1) -> None:
        """Poll until stop_event is set, then flush"""
        while not stop_event.is_set():
            await self.poll()
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass
        await self.flush()

    def _save_local(self, state: AppState) -> None:
        try:
            self.local_repo.save(state)
        except OSError as e:
            logger.warning(f"Local save failed: {e}")

    async def _save_remote(self, state: AppState) -> bool:
        user_id = self.identity.get_current_user_id()
        if not user_id:
            return False
        ok = await self.remote_repo.upsert(user_id, state, email=self.identity.get_current_user_email())
        if ok:
            logger.info(f"Remote state saved for {user_id}")
        return ok
