"""Human-readable renderings of second counts."""

from __future__ import annotations


def format_mmss(seconds: float) -> str:
    """``"02:45"``.  Fractions are truncated, minutes may exceed 59."""
    total = max(0, int(seconds))
    return f"{total // 60:02d}:{total % 60:02d}"


def format_hhmmss(seconds: float) -> str:
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    return f"{hours:02d}:{rest // 60:02d}:{rest % 60:02d}"


def format_compact(seconds: float) -> str:
    """``"45s"``, ``"2m 30s"``, ``"1h 5m"``; zero components are dropped."""
    total = max(0, int(seconds))
    if total < 60:
        return f"{total}s"
    if total < 3600:
        minutes, secs = divmod(total, 60)
        return f"{minutes}m" if secs == 0 else f"{minutes}m {secs}s"
    hours, rest = divmod(total, 3600)
    minutes = rest // 60
    return f"{hours}h" if minutes == 0 else f"{hours}h {minutes}m"


def _plural(count: int, unit: str) -> str:
    return f"1 {unit}" if count == 1 else f"{count} {unit}s"


def format_speech(seconds: float) -> str:
    """Phrasing for voice announcements: ``"2 minutes and 30 seconds"``."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    if minutes == 0:
        return _plural(secs, "second")
    if secs == 0:
        return _plural(minutes, "minute")
    return f"{_plural(minutes, 'minute')} and {_plural(secs, 'second')}"
