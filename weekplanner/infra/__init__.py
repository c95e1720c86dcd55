"""Infrastructure layer - Configuration, persistence and accounts"""

from .db import DatabaseEngine, get_engine, init_db
from .repository import (
    AccountRepository,
    LocalStateRepository,
    RemoteStateRepository,
    RemoteStatus,
)

__all__ = [
    "DatabaseEngine", "get_engine", "init_db",
    "AccountRepository", "LocalStateRepository", "RemoteStateRepository", "RemoteStatus",
]
