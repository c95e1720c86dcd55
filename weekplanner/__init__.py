"""Weekly planner: tasks on a seven-day grid with free-time and conflict logic."""

__version__ = "0.1.0"
