import random

from bigsmall.analytics.stats import RunningStats
from bigsmall.analytics.trend import TrendTracker


def test_streaks_are_exclusive():
    rnd = random.Random(7)
    s = RunningStats()
    for _ in range(500):
        s.record(rnd.random() < 0.5)
        assert not (s.current_correct_streak and s.current_incorrect_streak)
    assert s.total == 500

def test_max_streaks():
    s = RunningStats()
    for ok in [True, True, True, False, False, True]:
        s.record(ok)
    assert s.max_correct_streak == 3 and s.max_incorrect_streak == 2
    assert s.current_correct_streak == 1 and s.current_incorrect_streak == 0
    assert s.correct_count == 4 and s.incorrect_count == 2

def test_windows_are_bounded():
    t = TrendTracker()
    for i in range(1000):
        t.record_neural(i % 10)
        t.record_outcome(i % 10, (i * 3) % 10)
    assert len(t.stats.neural_big_bias) == 10
    assert len(t.stats.rolling_correctness) == 32

def test_bias_proxy():
    t = TrendTracker()
    assert t.neural_accuracy_proxy() == 0.0
    for v in [9, 9, 9, 9, 9, 9, 1, 1, 1, 1]:
        t.record_neural(v)
    assert t.neural_accuracy_proxy() == 0.6

def test_rolling_accuracy_compares_bigness():
    t = TrendTracker()
    assert t.record_outcome(5, 9) is True
    assert t.record_outcome(0, 4) is True
    assert t.record_outcome(4, 5) is False
    assert abs(t.rolling_accuracy() - 2 / 3) < 1e-9

def test_recent_big_count():
    assert TrendTracker.recent_big_count([9, 9, 9, 1, 5, 6, 7, 2]) == 3
    assert TrendTracker.recent_big_count([7, 8]) == 2
    assert TrendTracker.recent_big_count([]) == 0

def test_stats_round_trip():
    s = RunningStats()
    for ok in [True, False, False]:
        s.record(ok)
        s.rolling_correctness.append(1 if ok else 0)
    s.neural_big_bias.extend([1, 0, 1])
    back = RunningStats.from_dict(s.to_dict())
    assert back.to_dict() == s.to_dict()
    assert list(back.neural_big_bias) == [1, 0, 1]
    assert back.rolling_correctness.maxlen == 32
