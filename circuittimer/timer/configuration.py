"""Workout configuration and the interval timeline it describes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple

from .phase import WorkoutPhase


class PlannedInterval(NamedTuple):
    """One interval of a workout, positioned relative to the start."""

    phase: WorkoutPhase
    round: int
    set: int
    start_offset: int  # seconds after start() (countdown included)
    duration: int


@dataclass(frozen=True)
class WorkoutConfiguration:
    """Immutable settings for one circuit workout.  All durations in seconds.

    ``rest_duration`` and ``rest_between_sets_duration`` of 0 mean "skip that
    phase"; ``countdown_duration`` of 0 starts straight into work.
    """

    work_duration: int
    rest_duration: int
    rounds: int
    sets: int = 1
    rest_between_sets_duration: int = 0
    countdown_duration: int = 0

    # ── presets ───────────────────────────────────────────────────────

    @classmethod
    def tabata(cls) -> WorkoutConfiguration:
        """30 s work / 10 s rest, 8 rounds."""
        return cls(work_duration=30, rest_duration=10, rounds=8)

    @classmethod
    def intermediate(cls) -> WorkoutConfiguration:
        return cls(work_duration=45, rest_duration=15, rounds=10)

    @classmethod
    def endurance(cls) -> WorkoutConfiguration:
        return cls(work_duration=60, rest_duration=30, rounds=6)

    # ── derived ───────────────────────────────────────────────────────

    @property
    def is_valid(self) -> bool:
        return (
            self.work_duration > 0
            and self.rest_duration > 0
            and self.rounds > 0
            and self.sets > 0
        )

    @property
    def total_duration(self) -> int:
        """Seconds from the first work interval to the end of the workout.

        Excludes the countdown and the rest after each set's final round.
        """
        per_set = (self.work_duration + self.rest_duration) * self.rounds - self.rest_duration
        between_sets = 0
        if self.sets > 1:
            between_sets = self.rest_between_sets_duration * (self.sets - 1)
        return per_set * self.sets + between_sets

    @property
    def interval_count(self) -> int:
        """Number of intervals :meth:`timeline` yields."""
        return sum(1 for _ in self.timeline())

    def duration_for(self, phase: WorkoutPhase) -> int:
        """Configured length of *phase* (0 for phases that aren't timed)."""
        if phase == WorkoutPhase.COUNTDOWN:
            return self.countdown_duration
        if phase == WorkoutPhase.WORK:
            return self.work_duration
        if phase == WorkoutPhase.REST:
            return self.rest_duration
        if phase == WorkoutPhase.REST_BETWEEN_SETS:
            return self.rest_between_sets_duration
        return 0

    def timeline(self) -> Iterator[PlannedInterval]:
        """Yield every interval the workout runs through, in order.

        Zero-length phases are skipped, as is the rest following the last
        round of each set.
        """
        offset = 0
        if self.countdown_duration > 0:
            yield PlannedInterval(WorkoutPhase.COUNTDOWN, 1, 1, 0, self.countdown_duration)
            offset = self.countdown_duration

        for set_number in range(1, self.sets + 1):
            for round_number in range(1, self.rounds + 1):
                yield PlannedInterval(
                    WorkoutPhase.WORK, round_number, set_number,
                    offset, self.work_duration,
                )
                offset += self.work_duration
                if round_number < self.rounds and self.rest_duration > 0:
                    yield PlannedInterval(
                        WorkoutPhase.REST, round_number, set_number,
                        offset, self.rest_duration,
                    )
                    offset += self.rest_duration
            if set_number < self.sets and self.rest_between_sets_duration > 0:
                yield PlannedInterval(
                    WorkoutPhase.REST_BETWEEN_SETS, self.rounds, set_number,
                    offset, self.rest_between_sets_duration,
                )
                offset += self.rest_between_sets_duration
