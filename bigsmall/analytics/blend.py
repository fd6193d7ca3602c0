from bigsmall.analytics.trend import TrendTracker
from bigsmall.core.digits import clamp_digit


class HybridBlender:
    """Arbitrates between the Markov fallback and the regression model.

    Policy, first match wins:
      1. no Markov answer, or the model's Big-bias ratio >= CONFIDENT_BIAS: use the model
      2. both agree: use the shared value
      3. otherwise average them, nudge by recent Big momentum, clamp and round

    The momentum thresholds are asymmetric (>= 4 Big of the last 5 nudges up,
    <= 1 nudges down).
    """

    CONFIDENT_BIAS = 0.6
    BIG_MOMENTUM = 4
    SMALL_MOMENTUM = 1
    NUDGE = 0.5

    def __init__(self, tracker: TrendTracker):
        self.tracker = tracker

    def blend_with_reason(self, markov: int | None, neural: int, big_count: int) -> tuple[int, str]:
        if markov is None or self.tracker.neural_accuracy_proxy() >= self.CONFIDENT_BIAS:
            return neural, 'neural'
        if markov == neural:
            return markov, 'agree'
        weighted = (markov + neural) / 2
        if big_count >= self.BIG_MOMENTUM:
            weighted += self.NUDGE
        elif big_count <= self.SMALL_MOMENTUM:
            weighted -= self.NUDGE
        return clamp_digit(weighted), 'weighted'

    def blend(self, markov: int | None, neural: int, big_count: int) -> int:
        return self.blend_with_reason(markov, neural, big_count)[0]
