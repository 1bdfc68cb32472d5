"""Date-anchored interval timer.

The engine never counts down.  It remembers the absolute instant at which
the running interval ends and derives everything else (remaining time,
elapsed time, progress) by comparing that instant against the clock at the
moment it is asked.  Ticks can be late, skipped, or missing entirely for
hours while the host process is suspended; the answer is still right.

States
------
idle      ``interval_end`` is None and nothing is paused.
running   ``interval_end`` is set.
paused    ``interval_end`` is None, ``paused_remaining > 0``.

Known limitation: the clock is wall-clock time.  If the system time jumps
backwards while an interval is running, ``time_remaining()`` can report
more than the interval's duration.  ``progress()`` stays clamped to
``[0, 1]``.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable


Clock = Callable[[], datetime]


class TimerEngine:
    """Drift-free measurement of the time left in the current interval.

    All durations are seconds (``int`` or ``float``).  ``clock`` returns the
    current wall-clock time and defaults to :meth:`datetime.now`; tests pass
    a fake clock they can advance.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or datetime.now
        self._interval_end: datetime | None = None
        self._paused_remaining: float = 0.0

    # ── properties ────────────────────────────────────────────────────

    @property
    def interval_end(self) -> datetime | None:
        """Absolute instant the running interval ends (None when not running)."""
        return self._interval_end

    @property
    def is_running(self) -> bool:
        return self._interval_end is not None

    @property
    def is_paused(self) -> bool:
        return self._interval_end is None and self._paused_remaining > 0

    def now(self) -> datetime:
        return self._clock()

    # ── controls ──────────────────────────────────────────────────────

    def start_interval(self, duration: float) -> None:
        """Start a new interval of *duration* seconds from now.

        Non-positive durations are ignored.
        """
        if duration <= 0:
            return
        self._interval_end = self._clock() + timedelta(seconds=duration)
        self._paused_remaining = 0.0

    def continue_interval(self, duration: float) -> None:
        """Start the next interval where the current one ends.

        Chaining onto the previous end instant instead of "now" keeps
        interval boundaries exact no matter how late the caller notices
        that an interval has ended.  Falls back to :meth:`start_interval`
        when nothing is running.
        """
        if duration <= 0:
            return
        if self._interval_end is None:
            self.start_interval(duration)
            return
        self._interval_end = self._interval_end + timedelta(seconds=duration)
        self._paused_remaining = 0.0

    def time_remaining(self) -> float:
        """Seconds left in the interval; never negative."""
        if self._interval_end is not None:
            remaining = (self._interval_end - self._clock()).total_seconds()
            return max(0.0, remaining)
        if self._paused_remaining > 0:
            return self._paused_remaining
        return 0.0

    def has_interval_ended(self, at: datetime | None = None) -> bool:
        if self._interval_end is None:
            return False
        return (at or self._clock()) >= self._interval_end

    def pause(self, at: datetime | None = None) -> None:
        """Freeze the remaining time as of *at* (default: now).

        No-op when not running.
        """
        if self._interval_end is None:
            return
        now = at or self._clock()
        remaining = (self._interval_end - now).total_seconds()
        self._paused_remaining = max(0.0, remaining)
        self._interval_end = None

    def resume(self) -> None:
        """Re-anchor the frozen remaining time to now.  No-op when not paused."""
        if self._paused_remaining <= 0:
            return
        self._interval_end = self._clock() + timedelta(seconds=self._paused_remaining)
        self._paused_remaining = 0.0

    def reset(self) -> None:
        self._interval_end = None
        self._paused_remaining = 0.0

    # ── derived values ────────────────────────────────────────────────

    def progress(self, total_duration: float) -> float:
        """0.0 → 1.0 progress through an interval of *total_duration*."""
        if total_duration <= 0:
            return 0.0
        elapsed = total_duration - self.time_remaining()
        return max(0.0, min(1.0, elapsed / total_duration))

    def elapsed_time(self, total_duration: float) -> float:
        return total_duration - self.time_remaining()

    def __repr__(self) -> str:
        if self._interval_end is not None:
            return (
                f"<TimerEngine end={self._interval_end.isoformat()} "
                f"remaining={self.time_remaining():.1f}s>"
            )
        if self._paused_remaining > 0:
            return f"<TimerEngine paused={self._paused_remaining:.1f}s>"
        return "<TimerEngine idle>"
