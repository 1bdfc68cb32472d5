"""Read-side queries over the workout log."""

from __future__ import annotations

from .db import get_session
from .models import Workout


def recent_workouts(limit: int = 10) -> list[Workout]:
    """Most recently started workouts first (completed or not)."""
    with get_session() as db:
        return (
            db.query(Workout)
            .order_by(Workout.start_time.desc(), Workout.id.desc())
            .limit(limit)
            .all()
        )


def completed_workout_count() -> int:
    with get_session() as db:
        return db.query(Workout).filter(Workout.completed.is_(True)).count()
