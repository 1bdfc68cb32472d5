"""Allow running CircuitTimer as a module: python -m circuittimer.

A headless console runner: drives the orchestrator from a Qt event loop
and prints every phase change.

    python -m circuittimer --preset tabata
    python -m circuittimer --work 40 --rest 20 --rounds 6 --sets 3 --rest-between-sets 60
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import signal
import sys
from datetime import datetime

from PyQt6.QtCore import QCoreApplication

from .audio.cues import cue_for_change
from .database.db import init_db
from .database.history import completed_workout_count
from .settings import Settings, load_settings
from .timer import (
    PhaseChange,
    WorkoutConfiguration,
    WorkoutOrchestrator,
    format_compact,
    format_mmss,
)


PRESETS = {
    "tabata": WorkoutConfiguration.tabata,
    "intermediate": WorkoutConfiguration.intermediate,
    "endurance": WorkoutConfiguration.endurance,
}

# A tick arriving this late means the process was suspended.
GAP_THRESHOLD_SECONDS = 1.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="circuittimer", description="Circuit workout interval timer")
    parser.add_argument("--preset", choices=sorted(PRESETS))
    parser.add_argument("--work", type=int, help="work interval (seconds)")
    parser.add_argument("--rest", type=int, help="rest interval (seconds)")
    parser.add_argument("--rounds", type=int, help="rounds per set")
    parser.add_argument("--sets", type=int)
    parser.add_argument("--rest-between-sets", type=int, help="seconds")
    parser.add_argument("--countdown", type=int, help="get-ready seconds before the first round")
    parser.add_argument("--no-db", action="store_true", help="don't record the workout")
    parser.add_argument("--log-level", default="WARNING")
    return parser


def configuration_from_args(args: argparse.Namespace, settings: Settings) -> WorkoutConfiguration:
    """Preset (or saved settings) with any explicit flags layered on top."""
    if args.preset:
        base = dataclasses.replace(
            PRESETS[args.preset](), countdown_duration=settings.clamped().countdown_duration
        )
    else:
        base = settings.to_configuration()

    overrides = {
        "work_duration": args.work,
        "rest_duration": args.rest,
        "rounds": args.rounds,
        "sets": args.sets,
        "rest_between_sets_duration": args.rest_between_sets,
        "countdown_duration": args.countdown,
    }
    return dataclasses.replace(base, **{k: v for k, v in overrides.items() if v is not None})


class _GapDetector:
    """Calls ``synchronize_after_gap()`` when ticks stop arriving for a while."""

    def __init__(self, orchestrator: WorkoutOrchestrator) -> None:
        self._orchestrator = orchestrator
        self._last_tick: datetime | None = None

    def on_tick(self, _snapshot) -> None:
        now = self._orchestrator.engine.now()
        last, self._last_tick = self._last_tick, now
        if last is not None and (now - last).total_seconds() > GAP_THRESHOLD_SECONDS:
            self._orchestrator.synchronize_after_gap()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    config = configuration_from_args(args, settings)
    if not args.no_db:
        init_db()

    app = QCoreApplication(sys.argv[:1])
    app.setApplicationName("CircuitTimer")

    orchestrator = WorkoutOrchestrator(
        db_enabled=not args.no_db,
        tick_interval_ms=settings.clamped().tick_interval_ms,
    )
    if not orchestrator.configure(config):
        print("Invalid workout: work, rest, rounds and sets must all be positive.", file=sys.stderr)
        return 2

    def on_phase_changed(change: PhaseChange) -> None:
        line = (
            f"{change.phase.display_name:<18} round {change.current_round}/{config.rounds}"
            f"  set {change.current_set}/{config.sets}"
        )
        cue = cue_for_change(change)
        if cue is not None and settings.sound_enabled:
            line += f"  [{cue.value}]"
        print(line, flush=True)

    gaps = _GapDetector(orchestrator)
    orchestrator.phase_changed.connect(on_phase_changed)
    orchestrator.tick.connect(gaps.on_tick)
    orchestrator.workout_completed.connect(lambda _data: app.quit())

    def on_interrupt(*_args) -> None:
        orchestrator.reset()
        app.quit()

    signal.signal(signal.SIGINT, on_interrupt)

    print(
        f"CircuitTimer ready! {config.rounds} rounds x {config.sets} sets, "
        f"{format_compact(config.total_duration)} ({format_mmss(config.total_duration)})"
    )
    orchestrator.start()
    status = app.exec()

    if not args.no_db:
        print(f"Completed workouts: {completed_workout_count()}")
    return status


if __name__ == "__main__":
    sys.exit(main())
