"""Database package."""

from .db import get_session, init_db, configure_engine
from .history import recent_workouts, completed_workout_count
from .models import Workout

__all__ = [
    "get_session",
    "init_db",
    "configure_engine",
    "recent_workouts",
    "completed_workout_count",
    "Workout",
]
