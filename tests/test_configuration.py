"""Tests for WorkoutConfiguration: validity, total duration, presets,
per-phase durations, and the interval timeline."""

import pytest
from dataclasses import FrozenInstanceError

from circuittimer.timer.configuration import WorkoutConfiguration
from circuittimer.timer.phase import WorkoutPhase


class TestValidity:

    def test_valid(self):
        assert WorkoutConfiguration(30, 10, 8).is_valid

    @pytest.mark.parametrize("kwargs", [
        {"work_duration": 0},
        {"work_duration": -5},
        {"rest_duration": 0},
        {"rounds": 0},
        {"sets": 0},
        {"sets": -1},
    ])
    def test_invalid(self, kwargs):
        base = {"work_duration": 30, "rest_duration": 10, "rounds": 8, "sets": 1}
        base.update(kwargs)
        assert not WorkoutConfiguration(**base).is_valid

    def test_zero_rest_between_sets_and_countdown_allowed(self):
        cfg = WorkoutConfiguration(30, 10, 8, sets=2, rest_between_sets_duration=0,
                                   countdown_duration=0)
        assert cfg.is_valid

    def test_frozen(self):
        cfg = WorkoutConfiguration.tabata()
        with pytest.raises(FrozenInstanceError):
            cfg.rounds = 3


class TestTotalDuration:

    def test_single_set(self):
        cfg = WorkoutConfiguration(work_duration=30, rest_duration=10, rounds=8, sets=1)
        assert cfg.total_duration == 8 * (30 + 10) - 10 == 310

    def test_multiple_sets_with_rest_between(self):
        cfg = WorkoutConfiguration(work_duration=30, rest_duration=10, rounds=4, sets=2,
                                   rest_between_sets_duration=60)
        assert cfg.total_duration == 360

    def test_single_set_ignores_rest_between_sets(self):
        cfg = WorkoutConfiguration(30, 10, 8, sets=1, rest_between_sets_duration=120)
        assert cfg.total_duration == 310

    def test_countdown_not_included(self):
        cfg = WorkoutConfiguration(30, 10, 8, countdown_duration=10)
        assert cfg.total_duration == 310

    @pytest.mark.parametrize("cfg", [
        WorkoutConfiguration(30, 10, 8),
        WorkoutConfiguration(20, 5, 3, sets=4, rest_between_sets_duration=45),
        WorkoutConfiguration(20, 5, 3, sets=4, rest_between_sets_duration=0),
        WorkoutConfiguration(60, 30, 1, sets=2, rest_between_sets_duration=90),
    ])
    def test_matches_timeline(self, cfg):
        timed = [i for i in cfg.timeline() if i.phase != WorkoutPhase.COUNTDOWN]
        assert sum(i.duration for i in timed) == cfg.total_duration


class TestPresets:

    def test_tabata(self):
        cfg = WorkoutConfiguration.tabata()
        assert (cfg.work_duration, cfg.rest_duration, cfg.rounds, cfg.sets) == (30, 10, 8, 1)

    def test_intermediate(self):
        cfg = WorkoutConfiguration.intermediate()
        assert (cfg.work_duration, cfg.rest_duration, cfg.rounds) == (45, 15, 10)
        assert cfg.total_duration == 585

    def test_endurance(self):
        cfg = WorkoutConfiguration.endurance()
        assert (cfg.work_duration, cfg.rest_duration, cfg.rounds) == (60, 30, 6)
        assert cfg.is_valid


class TestDurationFor:

    def test_timed_phases(self):
        cfg = WorkoutConfiguration(40, 20, 5, sets=2, rest_between_sets_duration=90,
                                   countdown_duration=10)
        assert cfg.duration_for(WorkoutPhase.COUNTDOWN) == 10
        assert cfg.duration_for(WorkoutPhase.WORK) == 40
        assert cfg.duration_for(WorkoutPhase.REST) == 20
        assert cfg.duration_for(WorkoutPhase.REST_BETWEEN_SETS) == 90

    @pytest.mark.parametrize("phase", [
        WorkoutPhase.IDLE, WorkoutPhase.PAUSED, WorkoutPhase.FINISHED,
    ])
    def test_untimed_phases(self, phase):
        assert WorkoutConfiguration.tabata().duration_for(phase) == 0


class TestTimeline:

    def test_two_rounds_one_set(self):
        cfg = WorkoutConfiguration(1, 1, 2)
        plan = [(i.phase, i.round, i.set, i.start_offset) for i in cfg.timeline()]
        assert plan == [
            (WorkoutPhase.WORK, 1, 1, 0),
            (WorkoutPhase.REST, 1, 1, 1),
            (WorkoutPhase.WORK, 2, 1, 2),
        ]

    def test_countdown_comes_first(self):
        cfg = WorkoutConfiguration(30, 10, 2, countdown_duration=5)
        first, second = list(cfg.timeline())[:2]
        assert (first.phase, first.start_offset, first.duration) == (WorkoutPhase.COUNTDOWN, 0, 5)
        assert (second.phase, second.start_offset) == (WorkoutPhase.WORK, 5)

    def test_rest_between_sets_placement(self):
        cfg = WorkoutConfiguration(10, 5, 2, sets=2, rest_between_sets_duration=30)
        phases = [(i.phase, i.round, i.set) for i in cfg.timeline()]
        assert phases == [
            (WorkoutPhase.WORK, 1, 1),
            (WorkoutPhase.REST, 1, 1),
            (WorkoutPhase.WORK, 2, 1),
            (WorkoutPhase.REST_BETWEEN_SETS, 2, 1),
            (WorkoutPhase.WORK, 1, 2),
            (WorkoutPhase.REST, 1, 2),
            (WorkoutPhase.WORK, 2, 2),
        ]

    def test_interval_count(self):
        cfg = WorkoutConfiguration(10, 5, 3, sets=2, rest_between_sets_duration=30,
                                   countdown_duration=3)
        # countdown + 2 × (3 work + 2 rest) + 1 rest between sets
        assert cfg.interval_count == 1 + 2 * 5 + 1
