"""Timer package."""

from .engine import TimerEngine
from .configuration import WorkoutConfiguration, PlannedInterval
from .phase import WorkoutPhase, PhaseChange, WorkoutSnapshot, Transition
from .orchestrator import WorkoutOrchestrator, DEFAULT_TICK_INTERVAL_MS
from .formatting import format_mmss, format_hhmmss, format_compact, format_speech

__all__ = [
    "TimerEngine",
    "WorkoutConfiguration",
    "PlannedInterval",
    "WorkoutPhase",
    "PhaseChange",
    "WorkoutSnapshot",
    "Transition",
    "WorkoutOrchestrator",
    "DEFAULT_TICK_INTERVAL_MS",
    "format_mmss",
    "format_hhmmss",
    "format_compact",
    "format_speech",
]
