"""Shared test helpers for CircuitTimer."""

from datetime import datetime, timedelta


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Wall clock the test moves by hand."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 3, 14, 7, 0, 0)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)

    def rewind(self, seconds: float) -> None:
        self.current -= timedelta(seconds=seconds)


def complete_interval(orchestrator, clock) -> None:
    """Jump the clock to the end of the running interval and tick once."""
    clock.advance(orchestrator.engine.time_remaining())
    orchestrator.observe()


class SteppingClock(FakeClock):
    """FakeClock that also moves forward by *step* seconds on every read."""

    def __init__(self, start: datetime | None = None, step: float = 0.0):
        super().__init__(start)
        self.step = timedelta(seconds=step)

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now
