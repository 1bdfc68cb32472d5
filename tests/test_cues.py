"""Tests for audio cue selection and WAV synthesis.

Covers:
- Which cue each phase change triggers
- Generated WAV format and lengths
- On-disk cue cache
- Cues fired over a complete orchestrated workout
"""

from __future__ import annotations

import io
import wave

import pytest

from circuittimer.audio.cues import (
    Cue,
    cue_for_change,
    cue_path,
    ensure_cue_files,
    synthesize,
    SAMPLE_RATE,
)
from circuittimer.timer.configuration import WorkoutConfiguration
from circuittimer.timer.phase import PhaseChange, WorkoutPhase

from helpers import complete_interval


P = WorkoutPhase


# ═══════════════════════════════════════════════════════════════════════
#  SELECTION
# ═══════════════════════════════════════════════════════════════════════


class TestCueSelection:

    @pytest.mark.parametrize("phase, previous, expected", [
        (P.COUNTDOWN, P.IDLE, Cue.GET_READY),
        (P.WORK, P.IDLE, Cue.WORK_START),
        (P.WORK, P.COUNTDOWN, Cue.WORK_START),
        (P.WORK, P.REST, Cue.WORK_START),
        (P.WORK, P.REST_BETWEEN_SETS, Cue.WORK_START),
        (P.REST, P.WORK, Cue.REST_START),
        (P.REST_BETWEEN_SETS, P.WORK, Cue.REST_START),
        (P.FINISHED, P.WORK, Cue.WORKOUT_COMPLETE),
    ])
    def test_cue_for_transition(self, phase, previous, expected):
        assert cue_for_change(PhaseChange(phase, previous, 1, 1)) == expected

    @pytest.mark.parametrize("phase, previous", [
        (P.PAUSED, P.WORK),
        (P.WORK, P.PAUSED),
        (P.REST, P.PAUSED),
        (P.IDLE, P.WORK),
        (P.IDLE, P.FINISHED),
    ])
    def test_silent_changes(self, phase, previous):
        assert cue_for_change(PhaseChange(phase, previous, 1, 1)) is None

    def test_cues_over_a_workout(self, orchestrator_no_db, clock):
        fired = []
        orchestrator_no_db.phase_changed.connect(
            lambda change: fired.append(cue_for_change(change))
        )
        orchestrator_no_db.configure(
            WorkoutConfiguration(5, 5, 2, countdown_duration=3)
        )
        orchestrator_no_db.start()
        orchestrator_no_db.pause()
        orchestrator_no_db.resume()
        while orchestrator_no_db.phase != P.FINISHED:
            complete_interval(orchestrator_no_db, clock)
        assert [c for c in fired if c is not None] == [
            Cue.GET_READY,
            Cue.WORK_START,
            Cue.REST_START,
            Cue.WORK_START,
            Cue.WORKOUT_COMPLETE,
        ]


# ═══════════════════════════════════════════════════════════════════════
#  SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════


def _read_wav(data: bytes):
    with wave.open(io.BytesIO(data), "rb") as wf:
        return wf.getnchannels(), wf.getsampwidth(), wf.getframerate(), wf.getnframes()


class TestSynthesis:

    @pytest.mark.parametrize("cue", list(Cue))
    def test_valid_mono_16bit_wav(self, cue):
        channels, width, rate, frames = _read_wav(synthesize(cue))
        assert channels == 1
        assert width == 2
        assert rate == SAMPLE_RATE
        assert frames > 0

    def test_beeps_are_short(self):
        for cue in (Cue.WORK_START, Cue.REST_START):
            frames = _read_wav(synthesize(cue))[3]
            assert 0.3 <= frames / SAMPLE_RATE <= 0.5

    def test_complete_is_longest(self):
        lengths = {cue: _read_wav(synthesize(cue))[3] for cue in Cue}
        assert max(lengths, key=lengths.get) == Cue.WORKOUT_COMPLETE

    def test_work_and_rest_differ(self):
        assert synthesize(Cue.WORK_START) != synthesize(Cue.REST_START)


class TestCueCache:

    def test_generates_all_files(self, tmp_path):
        paths = ensure_cue_files(tmp_path / "sounds")
        assert set(paths) == set(Cue)
        for cue, path in paths.items():
            assert path == cue_path(cue, tmp_path / "sounds")
            assert path.exists()
            assert path.read_bytes().startswith(b"RIFF")

    def test_existing_files_are_kept(self, tmp_path):
        existing = cue_path(Cue.WORK_START, tmp_path)
        existing.write_bytes(b"custom")
        ensure_cue_files(tmp_path)
        assert existing.read_bytes() == b"custom"
