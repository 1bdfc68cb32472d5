"""SQLAlchemy ORM models for CircuitTimer."""

from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Workout(Base):
    """One started workout and how far it got."""

    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    start_time = Column(DateTime, nullable=False, default=datetime.now)
    end_time = Column(DateTime, nullable=True)

    # configuration snapshot (seconds / counts)
    work_seconds = Column(Integer, nullable=False)
    rest_seconds = Column(Integer, nullable=False)
    rest_between_sets_seconds = Column(Integer, nullable=False, default=0)
    countdown_seconds = Column(Integer, nullable=False, default=0)
    rounds = Column(Integer, nullable=False)
    sets = Column(Integer, nullable=False, default=1)
    total_seconds = Column(Integer, nullable=False, default=0)

    completed = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"<Workout id={self.id} {self.work_seconds}/{self.rest_seconds}"
            f"x{self.rounds}x{self.sets} completed={self.completed}>"
        )
