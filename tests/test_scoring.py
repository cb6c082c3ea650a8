import math

import pytest

from clickshot.services.records import ClickRecord, RunSummary
from clickshot.services.scoring import (
    accuracy,
    average_time_per_hit_ms,
    determine_badges,
    next_radius,
    performance_score,
    round_half_up,
    score_run,
    speed_score,
    weight,
)


def _hit(a, t=1000):
    return ClickRecord(t, 100, 100, 100, 100, 20, 0, True, a, 1.0, a)


def _miss(t=2000):
    return ClickRecord(t, 0, 0, 100, 100, 20, 141.4, False)


def _summary(**overrides):
    values = dict(
        total_hits=10, avg_accuracy=0.75, best_accuracy=0.85, final_radius=15, duration_ms=20000
    )
    values.update(overrides)
    return RunSummary(**values)


class TestAccuracy:
    def test_bullseye_is_perfect(self):
        assert accuracy(0.5, 10) == 1.0
        assert accuracy(0, 10) == 1.0

    def test_linear_outside_bullseye(self):
        assert accuracy(5, 10) == pytest.approx(0.5)
        assert accuracy(10, 10) == 0.0

    def test_never_negative(self):
        assert accuracy(12, 10) == 0.0


class TestWeight:
    def test_smaller_radius_weighs_more(self):
        assert weight(40, 10) == pytest.approx(8.0)
        assert weight(40, 20) < weight(40, 10)

    def test_start_radius_weighs_one(self):
        assert weight(30, 30) == 1.0

    def test_rejects_zero_radius(self):
        with pytest.raises(ValueError):
            weight(30, 0)


def test_next_radius_floors_at_one():
    assert next_radius(10, 3) == 7
    assert next_radius(2, 5) == 1


class TestSpeedScore:
    def test_zero_hits(self):
        assert speed_score(10000, 0) == 0

    def test_slower_scores_lower(self):
        assert speed_score(15000, 10) > speed_score(60000, 10)
        assert speed_score(60000, 10) < 30

    def test_ceiling(self):
        assert speed_score(1000, 10) == 100
        assert speed_score(500, 10) == 100

    def test_non_increasing_past_ceiling(self):
        scores = [speed_score(ms, 10) for ms in range(1100, 60000, 1300)]
        assert scores == sorted(scores, reverse=True)

    def test_one_second_per_hit(self):
        expected = math.floor(100 * math.exp(-1 / 3.5) * 10 + 0.5) / 10
        assert speed_score(2000, 2) == expected == 75.1


class TestPerformanceScore:
    def test_zero_hits(self):
        assert performance_score(0.85, 0) == 0

    def test_scales_with_hits(self):
        assert performance_score(0.8, 5) == 20.0
        assert performance_score(0.8, 10) == 40.0
        assert performance_score(0.8, 20) == 80.0

    def test_multiplier_saturates(self):
        assert performance_score(0.9, 20) == performance_score(0.9, 40) == 90.0

    def test_short_run(self):
        assert performance_score(0.85, 2) == 8.5


def test_round_half_up_matches_js_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(0.25, 1) == 0.3


def test_average_time_per_hit():
    assert average_time_per_hit_ms(20000, 0) == 0
    assert average_time_per_hit_ms(20000, 3) == 6667


class TestBadges:
    def test_sharpshooter(self):
        assert "sharpshooter" in determine_badges(_summary(avg_accuracy=0.92), 50, 50, [])
        assert "sharpshooter" not in determine_badges(_summary(avg_accuracy=0.9), 50, 50, [])

    def test_circus_shot(self):
        assert "circus_shot" in determine_badges(_summary(best_accuracy=0.995), 50, 50, [])

    def test_score_badges(self):
        badges = determine_badges(_summary(), 86, 91, [])
        assert "speed_demon" in badges
        assert "perfectionist" in badges
        assert determine_badges(_summary(), 85, 90, []) == ()

    def test_marathon_runner(self):
        assert "marathon_runner" in determine_badges(_summary(total_hits=25), 50, 50, [])
        assert "marathon_runner" not in determine_badges(_summary(total_hits=24), 50, 50, [])

    def test_consistency_needs_more_than_five_hits(self):
        six = [_hit(0.8) for _ in range(6)]
        assert "consistency" in determine_badges(_summary(), 50, 50, six)
        assert "consistency" not in determine_badges(_summary(), 50, 50, six[:5])
        assert "consistency" not in determine_badges(_summary(), 50, 50, six + [_hit(0.79)])

    def test_bullseye_master(self):
        logs = [_hit(1.0) for _ in range(5)] + [_hit(0.5)]
        assert "bullseye_master" in determine_badges(_summary(), 50, 50, logs)
        assert "bullseye_master" not in determine_badges(_summary(), 50, 50, logs[1:])

    def test_steady_hands(self):
        logs = [_hit(0.5) for _ in range(15)]
        assert "steady_hands" in determine_badges(_summary(), 50, 50, logs)
        assert "steady_hands" not in determine_badges(_summary(), 50, 50, logs + [_miss()])

    def test_table_order(self):
        logs = [_hit(1.0) for _ in range(30)]
        badges = determine_badges(
            _summary(total_hits=30, avg_accuracy=1.0, best_accuracy=1.0), 90, 100, logs
        )
        assert badges == (
            "sharpshooter",
            "circus_shot",
            "speed_demon",
            "perfectionist",
            "marathon_runner",
            "consistency",
            "bullseye_master",
            "steady_hands",
        )


class TestScoreRun:
    def test_end_to_end_example(self):
        summary = RunSummary(2, 0.85, 0.95, 18, 2000)
        scores = score_run(summary, [_hit(0.86, 1000), _hit(0.84, 2000)])
        assert scores.speed_score == 75.1
        assert scores.performance_score == 8.5
        assert scores.badges == ()
        assert scores.avg_time_per_hit_ms == 1000

    def test_ignores_claimed_accuracy(self):
        summary = RunSummary(2, 0.99, 0.99, 18, 2000)
        scores = score_run(summary, [_hit(0.5, 1000), _hit(0.5, 2000)])
        assert scores.performance_score == 5.0
        assert "sharpshooter" not in scores.badges
        assert "circus_shot" not in scores.badges
        assert scores.avg_accuracy == 0.5
        assert scores.best_accuracy == 0.5

    def test_is_deterministic(self):
        summary = RunSummary(6, 0.9, 1.0, 5, 9000)
        logs = [_hit(0.9, 1500 * (i + 1)) for i in range(6)]
        assert score_run(summary, logs) == score_run(summary, logs)
