"""Workout phases and the read-only values the orchestrator publishes.

States
------
IDLE                Configured (or not) and waiting for start().
COUNTDOWN           "Get ready" pre-roll before the first work interval.
WORK                Work interval counting down.
REST                Rest between two rounds of the same set.
REST_BETWEEN_SETS   Rest after the last round of a set.
PAUSED              Frozen (remembers what it was doing before).
FINISHED            Every round of every set is done.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class WorkoutPhase(Enum):
    IDLE = "idle"
    COUNTDOWN = "countdown"
    WORK = "work"
    REST = "rest"
    REST_BETWEEN_SETS = "rest_between_sets"
    PAUSED = "paused"
    FINISHED = "finished"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_active(self) -> bool:
        """True while an interval is counting down."""
        return self in _ACTIVE_PHASES

    @property
    def can_pause(self) -> bool:
        return self in _ACTIVE_PHASES

    @property
    def can_resume(self) -> bool:
        return self == WorkoutPhase.PAUSED

    @property
    def can_reset(self) -> bool:
        return self != WorkoutPhase.IDLE


_ACTIVE_PHASES = frozenset({
    WorkoutPhase.COUNTDOWN,
    WorkoutPhase.WORK,
    WorkoutPhase.REST,
    WorkoutPhase.REST_BETWEEN_SETS,
})

_DISPLAY_NAMES: dict[WorkoutPhase, str] = {
    WorkoutPhase.IDLE: "Ready",
    WorkoutPhase.COUNTDOWN: "GET READY",
    WorkoutPhase.WORK: "WORK",
    WorkoutPhase.REST: "REST",
    WorkoutPhase.REST_BETWEEN_SETS: "REST BETWEEN SETS",
    WorkoutPhase.PAUSED: "PAUSED",
    WorkoutPhase.FINISHED: "COMPLETE",
}


@dataclass(frozen=True)
class PhaseChange:
    """Payload of ``WorkoutOrchestrator.phase_changed``."""

    phase: WorkoutPhase
    previous: WorkoutPhase
    current_round: int
    current_set: int


@dataclass(frozen=True)
class WorkoutSnapshot:
    """Everything a display needs, polled at the tick cadence."""

    phase: WorkoutPhase
    time_remaining: float
    progress: float
    current_round: int
    total_rounds: int
    current_set: int
    total_sets: int
    phase_duration: int = 0


@dataclass(frozen=True)
class Transition:
    """A phase boundary still ahead of the running workout."""

    at: datetime
    phase: WorkoutPhase
    round: int
    set: int
