"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from planner logic. Makes it easy to:
- Point the remote store at another database
- Mock data for testing
- Keep the local slot and the remote record interchangeable (same blob)

Both state repositories are best effort: failures are logged and reported as
None/False, never raised to the caller. A stored state that cannot be read is
kept as it is (the local file is moved aside, the remote row is left alone)
so a later save never silently replaces it.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from weekplanner.domain.models import AppState
from weekplanner.infra.db import AccountModel, PlannerStateModel, get_engine

logger = logging.getLogger(__name__)


class LocalStateRepository:
    """
    Handles the on-device state slot (JSON file based).

    Synchronous: read once at startup, written on every state change.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[AppState]:
        """Last saved state, or None when missing or unreadable"""
        if not self.path.exists():
            return None

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            logger.warning(f"Error loading local state {self.path}: {e}")
            return None
        except ValueError as e:
            logger.warning(f"Local state {self.path} is not valid JSON: {e}")
            self._set_aside()
            return None

        try:
            return AppState.from_blob(data)
        except ValueError as e:
            logger.warning(f"Local state {self.path} does not match the planner schema: {e}")
            self._set_aside()
            return None

    @property
    def unreadable_path(self) -> Path:
        """Where an unreadable slot is kept for manual recovery"""
        return self.path.with_name(self.path.name + ".unreadable")

    def _set_aside(self) -> None:
        try:
            self.path.replace(self.unreadable_path)
            logger.warning(f"Unreadable local state kept at {self.unreadable_path}")
        except OSError as e:
            logger.warning(f"Could not move unreadable local state aside: {e}")

    def save(self, state: AppState) -> None:
        """Replace the slot with the given state"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(state.to_blob(), f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class RemoteStatus(str, Enum):
    """Outcome of reading a user's remote record"""
    FOUND = "found"
    MISSING = "missing"          # no row for the user
    UNREADABLE = "unreadable"    # row exists but does not hold a valid state
    UNAVAILABLE = "unavailable"  # the store could not be queried


class RemoteStateRepository:
    """
    Handles the per-user state record of the remote store.

    One row per user id holding the whole serialized state; last write wins.
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        self.session = session

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = get_engine()
        return engine.get_session()

    async def fetch(self, user_id: str) -> Tuple[RemoteStatus, Optional[AppState]]:
        """
        Read a user's record and report why nothing came back.

        Returns:
            (status, state); state is set only when status is FOUND.
        """
        try:
            session = await self._get_session()
            async with session:
                result = await session.execute(
                    select(PlannerStateModel).where(PlannerStateModel.user_id == user_id)
                )
                model = result.scalar_one_or_none()
        except Exception as e:
            logger.warning(f"Remote load failed for {user_id}: {e}")
            return RemoteStatus.UNAVAILABLE, None

        if model is None:
            return RemoteStatus.MISSING, None

        try:
            return RemoteStatus.FOUND, AppState.from_blob(model.state)
        except ValueError as e:
            logger.warning(f"Remote state of {user_id} is unreadable: {e}")
            return RemoteStatus.UNREADABLE, None

    async def load(self, user_id: str) -> Optional[AppState]:
        """Stored state of a user, or None when absent or on any failure"""
        _, state = await self.fetch(user_id)
        return state

    async def upsert(self, user_id: str, state: AppState, email: Optional[str] = None) -> bool:
        """Insert or replace the user's record. Returns success."""
        try:
            session = await self._get_session()
            async with session:
                result = await session.execute(
                    select(PlannerStateModel).where(PlannerStateModel.user_id == user_id)
                )
                model = result.scalar_one_or_none()
                if model is None:
                    model = PlannerStateModel(user_id=user_id)
                    session.add(model)

                model.email = email
                model.state = state.to_blob()
                model.updated_at = datetime.now()

                await session.commit()
                return True
        except Exception as e:
            logger.warning(f"Remote save failed for {user_id}: {e}")
            return False


class AccountRepository:
    """
    Handles account rows used by the local identity provider.
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        self.session = session

    async def _get_session(self) -> AsyncSession:
        if self.session:
            return self.session
        engine = get_engine()
        return engine.get_session()

    async def get_by_email(self, email: str) -> Optional[AccountModel]:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(AccountModel).where(AccountModel.email == email.lower())
            )
            return result.scalar_one_or_none()

    async def create(self, account: AccountModel) -> AccountModel:
        """Create a new account"""
        session = await self._get_session()
        async with session:
            session.add(account)
            await session.commit()
            await session.refresh(account)
            return account
