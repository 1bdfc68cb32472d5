"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/CircuitTimer/settings.json

Usage::

    settings = load_settings()
    settings.rounds = 10
    save_settings(settings)
    orchestrator.configure(settings.to_configuration())
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.configuration import WorkoutConfiguration


logger = logging.getLogger(__name__)

# Same app-support directory as database/db.py
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "CircuitTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

MIN_INTERVAL = 1
MAX_INTERVAL = 3600  # 1 hour
MIN_ROUNDS = 1
MAX_ROUNDS = 50


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── workout ───────────────────────────────────────────────────────
    work_duration: int = 30                # seconds
    rest_duration: int = 10
    rounds: int = 8
    sets: int = 1
    rest_between_sets_duration: int = 0
    countdown_duration: int = 10

    # ── timer ─────────────────────────────────────────────────────────
    tick_interval_ms: int = 100

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True

    def clamped(self) -> Settings:
        """Copy with every workout value pulled into its allowed range."""
        return Settings(
            work_duration=_clamp(self.work_duration, MIN_INTERVAL, MAX_INTERVAL),
            rest_duration=_clamp(self.rest_duration, MIN_INTERVAL, MAX_INTERVAL),
            rounds=_clamp(self.rounds, MIN_ROUNDS, MAX_ROUNDS),
            sets=_clamp(self.sets, MIN_ROUNDS, MAX_ROUNDS),
            rest_between_sets_duration=_clamp(self.rest_between_sets_duration, 0, MAX_INTERVAL),
            countdown_duration=_clamp(self.countdown_duration, 0, MAX_INTERVAL),
            tick_interval_ms=max(10, self.tick_interval_ms),
            sound_enabled=self.sound_enabled,
        )

    def to_configuration(self) -> WorkoutConfiguration:
        s = self.clamped()
        return WorkoutConfiguration(
            work_duration=s.work_duration,
            rest_duration=s.rest_duration,
            rounds=s.rounds,
            sets=s.sets,
            rest_between_sets_duration=s.rest_between_sets_duration,
            countdown_duration=s.countdown_duration,
        )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered).clamped()
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Unreadable settings at %s, using defaults: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
