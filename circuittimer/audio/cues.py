"""Audio cues for phase changes: which beep to play, and the beeps themselves.

Cues are synthesised with numpy as 16-bit mono WAV files and cached to
disk; the host's audio layer plays them.  :func:`cue_for_change` maps a
``phase_changed`` event to the cue it should trigger.

Cue names
---------
- ``get_ready``        — soft tick when the countdown starts
- ``work_start``       — single high beep (800 Hz)
- ``rest_start``       — single low beep (400 Hz)
- ``workout_complete`` — three short high beeps
"""

from __future__ import annotations

import io
import wave
from enum import Enum
from pathlib import Path
from typing import Callable

import numpy as np

from ..timer.phase import PhaseChange, WorkoutPhase


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "CircuitTimer"
CUES_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100


class Cue(Enum):
    GET_READY = "get_ready"
    WORK_START = "work_start"
    REST_START = "rest_start"
    WORKOUT_COMPLETE = "workout_complete"


# ═══════════════════════════════════════════════════════════════════════════
#  CUE SELECTION
# ═══════════════════════════════════════════════════════════════════════════


def cue_for_change(change: PhaseChange) -> Cue | None:
    """The cue a phase change should trigger, or None for silent changes.

    Pausing, resuming and resetting are silent; resuming into WORK is not
    the start of a work interval.
    """
    if change.previous == WorkoutPhase.PAUSED:
        return None
    if change.phase == WorkoutPhase.COUNTDOWN:
        return Cue.GET_READY
    if change.phase == WorkoutPhase.WORK:
        return Cue.WORK_START
    if change.phase in (WorkoutPhase.REST, WorkoutPhase.REST_BETWEEN_SETS):
        return Cue.REST_START
    if change.phase == WorkoutPhase.FINISHED:
        return Cue.WORKOUT_COMPLETE
    return None


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(length: int, attack: int = 200, release: int = 800) -> np.ndarray:
    """Linear attack/release envelope (durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    r = min(release, length - a)
    if r > 0:
        env[length - r:] = np.linspace(1.0, 0.0, r)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _beep(freq: float, duration_s: float, volume: float) -> np.ndarray:
    tone = _sine(freq, duration_s) * volume
    return tone * _make_envelope(len(tone))


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  CUE GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_get_ready() -> bytes:
    return _to_wav_bytes(np.concatenate([_beep(600.0, 0.08, 0.4), _silence(0.05)]))


def _generate_work_start() -> bytes:
    return _to_wav_bytes(np.concatenate([_beep(800.0, 0.4, 0.7), _silence(0.05)]))


def _generate_rest_start() -> bytes:
    return _to_wav_bytes(np.concatenate([_beep(400.0, 0.4, 0.7), _silence(0.05)]))


def _generate_workout_complete() -> bytes:
    parts: list[np.ndarray] = []
    for _ in range(3):
        parts.append(_beep(800.0, 0.15, 0.8))
        parts.append(_silence(0.08))
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS: dict[Cue, Callable[[], bytes]] = {
    Cue.GET_READY: _generate_get_ready,
    Cue.WORK_START: _generate_work_start,
    Cue.REST_START: _generate_rest_start,
    Cue.WORKOUT_COMPLETE: _generate_workout_complete,
}


def synthesize(cue: Cue) -> bytes:
    """WAV bytes for *cue*."""
    return _GENERATORS[cue]()


def cue_path(cue: Cue, directory: Path | None = None) -> Path:
    return (directory or CUES_DIR) / f"{cue.value}.wav"


def ensure_cue_files(directory: Path | None = None) -> dict[Cue, Path]:
    """Generate any missing WAV files into *directory* and return their paths."""
    directory = directory or CUES_DIR
    directory.mkdir(parents=True, exist_ok=True)
    paths: dict[Cue, Path] = {}
    for cue in Cue:
        path = cue_path(cue, directory)
        if not path.exists():
            path.write_bytes(synthesize(cue))
        paths[cue] = path
    return paths
