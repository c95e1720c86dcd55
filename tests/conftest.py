"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from weekplanner.domain.models import DayKey, Task
from weekplanner.i18n import set_language
from weekplanner.infra.db import Base


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a new session for a test"""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture(autouse=True)
def english_labels():
    """Every test starts with English labels"""
    set_language("en")
    yield
    set_language("en")


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


def make_task(title="Task", day=DayKey.MON, start=None, end=None, duration=None, **extra):
    """Shorthand Task builder used across test modules"""
    return Task(title=title, day_key=day, start_time=start, end_time=end,
                duration_min=duration, **extra)
