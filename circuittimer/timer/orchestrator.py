"""Interval state machine for CircuitTimer.

Transitions
-----------
IDLE | FINISHED → COUNTDOWN | WORK              (start)
COUNTDOWN → WORK                               (interval ends)
WORK → REST | WORK                             (interval ends, more rounds)
REST → WORK                                    (interval ends, round += 1)
WORK | REST → REST_BETWEEN_SETS | WORK         (last round, more sets)
REST_BETWEEN_SETS → WORK                       (interval ends, set += 1)
WORK | REST → FINISHED                         (last round of last set)
{active} → PAUSED                              (pause)
PAUSED → {whatever was paused}                 (resume)
Any → IDLE                                     (reset)

A rest (or rest between sets) of 0 seconds skips that phase.  The rest
after the final round of a set is never run; the workout moves straight
on to the rest between sets, the next set, or FINISHED.

Timing lives in :class:`~circuittimer.timer.engine.TimerEngine`.  Each new
interval is chained onto the end instant of the one before it, so however
late ``observe()`` or ``synchronize_after_gap()`` runs, phase boundaries
stay where the clock says they are.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..control.commands import Command, CommandSource
from .configuration import WorkoutConfiguration
from .engine import Clock, TimerEngine
from .phase import PhaseChange, Transition, WorkoutPhase, WorkoutSnapshot


logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 100


class WorkoutOrchestrator(QObject):
    """Qt-based circuit workout driver: state machine, round/set
    bookkeeping, suspension catch-up, and DB workout logging.

    Every command returns ``True`` when it was applied and ``False`` when
    it was ignored (invalid configuration, nothing to pause, and so on).
    Ignored commands never raise.  With ``db_enabled`` (the default),
    :func:`~circuittimer.database.db.init_db` must have run before
    ``start()``.

    Signals
    -------
    phase_changed(change: PhaseChange)
        Emitted synchronously on every phase change, including pause,
        resume and reset.
    tick(snapshot: WorkoutSnapshot)
        Emitted on every ``observe()``.
    workout_completed(data: dict)
        Emitted once when the workout reaches FINISHED.  Keys:
        ``work_duration``, ``rest_duration``, ``rest_between_sets_duration``,
        ``rounds``, ``sets``, ``total_duration``, ``start_time``,
        ``end_time``, ``db_workout_id``.
    """

    phase_changed = pyqtSignal(object)
    tick = pyqtSignal(object)
    workout_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Clock | None = None,
        db_enabled: bool = True,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        command_source: CommandSource | None = None,
    ) -> None:
        super().__init__(parent)

        self._engine = TimerEngine(clock)
        self._config: WorkoutConfiguration | None = None
        self._db_enabled: bool = db_enabled
        self._command_source: CommandSource | None = command_source

        # ── state machine ─────────────────────────────────────────────
        self._phase: WorkoutPhase = WorkoutPhase.IDLE
        self._phase_before_pause: WorkoutPhase | None = None
        self._round: int = 1
        self._set: int = 1

        # ── workout log ───────────────────────────────────────────────
        self._start_time: datetime | None = None
        self._db_workout_id: int | None = None

        # ── tick driver (0 = host calls observe() itself) ─────────────
        self._qt_timer: QTimer | None = None
        if tick_interval_ms > 0:
            self._qt_timer = QTimer(self)
            self._qt_timer.setInterval(tick_interval_ms)
            self._qt_timer.timeout.connect(self.observe)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> WorkoutPhase:
        return self._phase

    @property
    def phase_before_pause(self) -> WorkoutPhase | None:
        """Phase that ``resume()`` restores (None unless PAUSED)."""
        return self._phase_before_pause

    @property
    def configuration(self) -> WorkoutConfiguration | None:
        return self._config

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def current_round(self) -> int:
        """Round within the current set (1-based)."""
        return self._round

    @property
    def current_set(self) -> int:
        return self._set

    @property
    def total_rounds(self) -> int:
        return self._config.rounds if self._config else 0

    @property
    def total_sets(self) -> int:
        return self._config.sets if self._config else 0

    @property
    def can_pause(self) -> bool:
        return self._phase.can_pause

    @property
    def can_resume(self) -> bool:
        return self._phase.can_resume

    @property
    def can_reset(self) -> bool:
        return self._phase.can_reset

    @property
    def is_ticking(self) -> bool:
        return self._qt_timer is not None and self._qt_timer.isActive()

    @property
    def phase_duration(self) -> int:
        """Configured length of the interval currently shown."""
        if self._config is None:
            return 0
        phase = self._phase
        if phase == WorkoutPhase.PAUSED and self._phase_before_pause is not None:
            phase = self._phase_before_pause
        return self._config.duration_for(phase)

    def snapshot(self) -> WorkoutSnapshot:
        if self._phase == WorkoutPhase.FINISHED:
            remaining, progress = 0.0, 1.0
        elif self._phase == WorkoutPhase.IDLE:
            remaining, progress = 0.0, 0.0
        else:
            duration = self.phase_duration
            remaining = self._engine.time_remaining()
            progress = self._engine.progress(duration)
        return WorkoutSnapshot(
            phase=self._phase,
            time_remaining=remaining,
            progress=progress,
            current_round=self._round,
            total_rounds=self.total_rounds,
            current_set=self._set,
            total_sets=self.total_sets,
            phase_duration=self.phase_duration,
        )

    def upcoming_transitions(self) -> list[Transition]:
        """Phase boundaries still ahead, ending with FINISHED.

        Lets a host schedule wake-ups at the exact instants the workout
        changes phase.  Empty unless an interval is running.
        """
        end = self._engine.interval_end
        if not self._phase.is_active or end is None or self._config is None:
            return []

        plan = list(self._config.timeline())
        position = next(
            (
                i for i, entry in enumerate(plan)
                if (entry.phase, entry.round, entry.set)
                == (self._phase, self._round, self._set)
            ),
            None,
        )
        if position is None:
            return []

        upcoming: list[Transition] = []
        at = end
        for entry in plan[position + 1:]:
            upcoming.append(Transition(at, entry.phase, entry.round, entry.set))
            at = at + timedelta(seconds=entry.duration)
        upcoming.append(
            Transition(at, WorkoutPhase.FINISHED, self._config.rounds, self._config.sets)
        )
        return upcoming

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def configure(self, config: WorkoutConfiguration) -> bool:
        """Accept *config* for the next ``start()``.

        Rejected (state unchanged) when invalid or while a workout is in
        progress.
        """
        if not config.is_valid:
            logger.info("Ignoring invalid configuration %r", config)
            return False
        if self._phase not in (WorkoutPhase.IDLE, WorkoutPhase.FINISHED):
            logger.debug("configure() ignored while %s", self._phase.value)
            return False
        self._config = config
        return True

    def start(self) -> bool:
        """Begin the workout.  Valid from IDLE or FINISHED once configured."""
        if self._config is None:
            logger.debug("start() ignored: no configuration")
            return False
        if self._phase not in (WorkoutPhase.IDLE, WorkoutPhase.FINISHED):
            logger.debug("start() ignored while %s", self._phase.value)
            return False

        self._round = 1
        self._set = 1
        self._phase_before_pause = None
        self._start_time = self._engine.now()

        if self._db_enabled:
            self._persist_start()

        first = WorkoutPhase.WORK
        if self._config.countdown_duration > 0:
            first = WorkoutPhase.COUNTDOWN
        self._engine.start_interval(self._config.duration_for(first))
        self._set_phase(first)
        self._start_ticking()
        return True

    def pause(self) -> bool:
        """Freeze the running interval."""
        # An interval that ended between ticks must not be paused with
        # nothing left on it; move to where the clock actually is first.
        # One clock read serves both the catch-up and the capture.
        now = self._engine.now()
        self._catch_up(now)
        if not self._phase.can_pause:
            logger.debug("pause() ignored while %s", self._phase.value)
            return False
        self._stop_ticking()
        self._phase_before_pause = self._phase
        self._engine.pause(now)
        self._set_phase(WorkoutPhase.PAUSED)
        return True

    def resume(self) -> bool:
        """Resume from PAUSED back to whatever was running."""
        if not self._phase.can_resume or self._phase_before_pause is None:
            logger.debug("resume() ignored while %s", self._phase.value)
            return False
        restore_to = self._phase_before_pause
        self._phase_before_pause = None
        self._engine.resume()
        if not self._engine.is_running:
            logger.warning("Nothing frozen to resume; restarting %s interval", restore_to.value)
            self._engine.start_interval(self._config.duration_for(restore_to))
        self._set_phase(restore_to)
        self._start_ticking()
        return True

    def toggle_pause(self) -> bool:
        """Pause if running, resume if paused (single-button controls)."""
        if self._phase.can_pause:
            return self.pause()
        if self._phase.can_resume:
            return self.resume()
        logger.debug("toggle_pause() ignored while %s", self._phase.value)
        return False

    def reset(self) -> bool:
        """Abandon the workout and return to IDLE (left incomplete in the log)."""
        if not self._phase.can_reset:
            return False
        self._stop_ticking()
        self._engine.reset()
        self._round = 1
        self._set = 1
        self._phase_before_pause = None
        self._start_time = None
        self._db_workout_id = None  # don't complete—user stopped
        self._set_phase(WorkoutPhase.IDLE)
        return True

    # ══════════════════════════════════════════════════════════════════
    #  OBSERVATION
    # ══════════════════════════════════════════════════════════════════

    def observe(self) -> WorkoutSnapshot:
        """Periodic tick: apply pending commands, then at most one transition."""
        self.process_commands()
        if self._phase.is_active and self._engine.has_interval_ended():
            self._advance()
        snapshot = self.snapshot()
        self.tick.emit(snapshot)
        return snapshot

    def synchronize_after_gap(self) -> int:
        """Apply every transition that elapsed while the host was suspended.

        Returns the number of transitions applied.
        """
        applied = self._catch_up()
        if applied:
            logger.info(
                "Caught up %d transition(s): now %s, round %d/%d, set %d/%d",
                applied, self._phase.value, self._round, self.total_rounds,
                self._set, self.total_sets,
            )
        return applied

    def attach_command_source(self, source: CommandSource | None) -> None:
        self._command_source = source

    def process_commands(self) -> int:
        """Drain the command source.  Returns how many commands applied."""
        if self._command_source is None:
            return 0
        applied = 0
        for command in self._command_source.poll():
            if self._dispatch(command):
                applied += 1
        return applied

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — state machine
    # ══════════════════════════════════════════════════════════════════

    def _dispatch(self, command: Command) -> bool:
        if command == Command.START:
            return self.start()
        if command == Command.PAUSE:
            return self.pause()
        if command == Command.RESUME:
            return self.resume()
        if command == Command.TOGGLE_PAUSE:
            return self.toggle_pause()
        if command == Command.STOP:
            return self.reset()
        return False

    def _catch_up(self, at: datetime | None = None) -> int:
        if self._config is None:
            return 0
        # Each step enters a later interval of the timeline, so the
        # workout's interval count bounds the loop.
        limit = self._config.interval_count
        applied = 0
        while (
            applied < limit
            and self._engine.has_interval_ended(at)
            and self._phase not in (WorkoutPhase.FINISHED, WorkoutPhase.PAUSED)
        ):
            self._advance()
            applied += 1
        return applied

    def _advance(self) -> None:
        """Apply exactly one transition out of the ended interval."""
        config = self._config
        if config is None:
            return

        if self._phase == WorkoutPhase.COUNTDOWN:
            self._enter(WorkoutPhase.WORK)
        elif self._phase == WorkoutPhase.WORK:
            if self._round < config.rounds:
                if config.rest_duration > 0:
                    self._enter(WorkoutPhase.REST)
                else:
                    self._round += 1
                    self._enter(WorkoutPhase.WORK)
            else:
                self._finish_set()
        elif self._phase == WorkoutPhase.REST:
            if self._round < config.rounds:
                self._round += 1
                self._enter(WorkoutPhase.WORK)
            else:
                self._finish_set()
        elif self._phase == WorkoutPhase.REST_BETWEEN_SETS:
            self._set += 1
            self._round = 1
            self._enter(WorkoutPhase.WORK)

    def _finish_set(self) -> None:
        config = self._config
        if self._set < config.sets:
            if config.rest_between_sets_duration > 0:
                self._enter(WorkoutPhase.REST_BETWEEN_SETS)
            else:
                self._set += 1
                self._round = 1
                self._enter(WorkoutPhase.WORK)
        else:
            self._complete_workout()

    def _enter(self, phase: WorkoutPhase) -> None:
        self._engine.continue_interval(self._config.duration_for(phase))
        self._set_phase(phase)

    def _complete_workout(self) -> None:
        self._stop_ticking()
        # The last boundary, not "now": after a long gap the workout
        # ended well before anyone noticed.
        end_time = self._engine.interval_end or self._engine.now()
        self._engine.reset()
        completed_db_id = self._db_workout_id  # capture before persist clears it

        if self._db_enabled:
            self._persist_completed(end_time)

        self._set_phase(WorkoutPhase.FINISHED)
        config = self._config
        self.workout_completed.emit({
            "work_duration": config.work_duration,
            "rest_duration": config.rest_duration,
            "rest_between_sets_duration": config.rest_between_sets_duration,
            "rounds": config.rounds,
            "sets": config.sets,
            "total_duration": config.total_duration,
            "start_time": self._start_time,
            "end_time": end_time,
            "db_workout_id": completed_db_id,
        })
        logger.info("Workout complete (%d s)", config.total_duration)

    def _set_phase(self, new_phase: WorkoutPhase) -> None:
        previous = self._phase
        self._phase = new_phase
        logger.debug(
            "%s -> %s (round %d, set %d)",
            previous.value, new_phase.value, self._round, self._set,
        )
        self.phase_changed.emit(
            PhaseChange(new_phase, previous, self._round, self._set)
        )

    def _start_ticking(self) -> None:
        if self._qt_timer is not None:
            self._qt_timer.start()

    def _stop_ticking(self) -> None:
        if self._qt_timer is not None:
            self._qt_timer.stop()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — database persistence
    # ══════════════════════════════════════════════════════════════════

    def _persist_start(self) -> None:
        from ..database.db import get_session
        from ..database.models import Workout

        config = self._config
        with get_session() as db:
            record = Workout(
                start_time=self._start_time,
                work_seconds=config.work_duration,
                rest_seconds=config.rest_duration,
                rest_between_sets_seconds=config.rest_between_sets_duration,
                countdown_seconds=config.countdown_duration,
                rounds=config.rounds,
                sets=config.sets,
                total_seconds=config.total_duration,
                completed=False,
            )
            db.add(record)
            db.flush()
            self._db_workout_id = record.id

    def _persist_completed(self, end_time: datetime) -> None:
        if self._db_workout_id is None:
            return
        from ..database.db import get_session
        from ..database.models import Workout

        with get_session() as db:
            record = db.get(Workout, self._db_workout_id)
            if record:
                record.end_time = end_time
                record.completed = True
        self._db_workout_id = None
