"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations

Scheduling constants live here as named values so tests can assert on them
instead of repeating literals.
"""

import os
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Fallback length of a task that has a start time but no end/duration
DEFAULT_DURATION_MIN = 30

# Free slots shorter than this are dropped by the engine (noise floor)
MIN_FREE_SLOT_MIN = 10

# User-facing minimum durations for slot suggestions (independent of the floor)
SUGGESTION_MIN_DURATIONS: Tuple[int, ...] = (15, 30, 45, 60, 90, 120)
DEFAULT_SUGGESTION_MIN = 30
SUGGESTION_LIMIT = 16

# Quiet period after the last change before a remote save is sent
SYNC_DEBOUNCE_SECONDS = 0.9

# Pins kept per day
TOP_PIN_LIMIT = 3

# Allowed notification lead time, minutes
NOTIFY_MIN_RANGE: Tuple[int, int] = (0, 240)

# Fixed key of the local state slot
STORAGE_KEY = "ritmo_next_v1"


class PlannerPreferences(BaseModel):
    """
    Defaults applied to new planner states and to the runtime.

    Users edit these in settings.yaml instead of touching code.
    """
    day_start: str = Field(default="06:00", description="Day window start (HH:MM)")
    day_end: str = Field(default="22:00", description="Day window end (HH:MM)")
    default_notify_min: int = Field(default=10, ge=0, le=240,
                                    description="Default notification lead time in minutes")
    language: str = Field(default="en", description="Label language: 'en' or 'pt'")
    quotes: List[str] = Field(default_factory=list,
                              description="Motivational quotes (empty = built-in defaults)")
    sync_debounce_seconds: float = Field(default=SYNC_DEBOUNCE_SECONDS, ge=0)


class Settings(BaseSettings):
    """
    Application settings with multiple sources:
    1. Default values (hardcoded)
    2. YAML config file
    3. Environment variables (highest priority)
    """
    model_config = SettingsConfigDict(
        env_prefix='WEEKPLANNER_',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    # Application paths
    app_name: str = "WeekPlanner"
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None

    # Remote state store
    database_url: Optional[str] = None

    preferences: PlannerPreferences = PlannerPreferences()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()
        self._load_yaml_config()

    def _init_paths(self):
        """Initialize default paths based on OS"""
        if self.config_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.config'
            self.config_dir = base / self.app_name.lower()

        if self.data_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA'))
            else:  # Linux/Mac
                base = Path.home() / '.local' / 'share'
            self.data_dir = base / self.app_name.lower()

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _load_yaml_config(self):
        """Load preferences from YAML file"""
        # Workspace config folder first, then the user's config directory
        config_file = Path("config/settings.yaml")
        if not config_file.exists():
            config_file = self.config_dir / "settings.yaml"

        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
                if config_data:
                    self.preferences = PlannerPreferences(**config_data)

    def save_preferences(self):
        """Save current preferences to YAML file"""
        config_file = self.config_dir / "settings.yaml"
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(self.preferences.model_dump(), f, default_flow_style=False)

    def get_db_url(self) -> str:
        """Get database URL, creating default if not set"""
        if self.database_url:
            return self.database_url

        db_path = self.data_dir / 'weekplanner.db'
        return f"sqlite+aiosqlite:///{db_path}"

    def get_state_path(self) -> Path:
        """Path of the local state slot"""
        return self.data_dir / f"{STORAGE_KEY}.json"


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def clamp_notify_min(value) -> int:
    """Coerce a lead time to int and clamp it into NOTIFY_MIN_RANGE"""
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        minutes = 0
    return clamp(minutes, *NOTIFY_MIN_RANGE)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

