from typing import Sequence

from bigsmall.analytics.stats import RunningStats
from bigsmall.core.digits import is_big

TREND_K = 5


class TrendTracker:
    """Rolling signals over a RunningStats instance.

    neural_accuracy_proxy() is the share of recent raw model predictions that
    leaned Big. It is a bias ratio used as a confidence heuristic, not a
    measure of how often the model was right.
    """

    def __init__(self, stats: RunningStats | None = None):
        self.stats = stats or RunningStats()

    def record_neural(self, neural: int):
        self.stats.neural_big_bias.append(1 if is_big(neural) else 0)

    def neural_accuracy_proxy(self) -> float:
        w = self.stats.neural_big_bias
        return sum(w) / len(w) if w else 0.0

    def record_outcome(self, predicted: int, actual: int) -> bool:
        correct = is_big(predicted) == is_big(actual)
        self.stats.record(correct)
        self.stats.rolling_correctness.append(1 if correct else 0)
        return correct

    def rolling_accuracy(self) -> float:
        w = self.stats.rolling_correctness
        return sum(w) / len(w) if w else 0.0

    @staticmethod
    def recent_big_count(values: Sequence[int], k: int = TREND_K) -> int:
        if k <= 0:
            return 0
        return sum(1 for v in list(values)[-k:] if is_big(v))
