import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from bigsmall.analytics.blend import HybridBlender
from bigsmall.analytics.markov import MarkovPredictor
from bigsmall.analytics.stats import RunningStats
from bigsmall.analytics.trend import TrendTracker
from bigsmall.core.digits import is_big, label
from bigsmall.core.features import make_example
from bigsmall.core.ledger import Outcome, OutcomeLedger
from bigsmall.db.store import Store
from bigsmall.model.regressor import RegressionModel

logger = logging.getLogger(__name__)

TRAIN_MIN_HISTORY = 4
PREDICT_MIN_HISTORY = 3


@dataclass
class CycleResult:
    outcome: Outcome
    correct: Optional[bool]
    prediction: Optional[int]
    markov: Optional[int] = None
    neural: Optional[int] = None
    reason: Optional[str] = None
    retrained: bool = False


@dataclass
class PredictorSession:
    """Everything one stream needs between cycles. Built once per process."""
    ledger: OutcomeLedger
    model: RegressionModel
    stats: RunningStats
    store: Optional[Store] = None
    markov: MarkovPredictor = field(default_factory=MarkovPredictor)
    prediction: Optional[int] = None
    last_reason: Optional[str] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self):
        self.tracker = TrendTracker(self.stats)
        self.blender = HybridBlender(self.tracker)


def open_session(store: Optional[Store]) -> PredictorSession:
    if store is None:
        return PredictorSession(OutcomeLedger(), RegressionModel(), RunningStats())
    ledger = OutcomeLedger.from_outcomes(store.load_outcomes() or [])
    stats = store.load_counters() or RunningStats()
    model = RegressionModel.from_snapshot(store.load_model_snapshot(), sink=store)
    session = PredictorSession(ledger, model, stats, store)
    logger.info("Session opened: %d outcomes, %d graded predictions", len(ledger), stats.total)
    return session


def close_session(session: PredictorSession):
    with session.lock:
        if session.store is None:
            return
        session.store.save_counters(session.stats)
        if session.model.is_fitted:
            session.store.save_model_snapshot(session.model.snapshot())


def _next_prediction(session: PredictorSession, result: CycleResult):
    values = session.ledger.values()
    # window ends at the newest outcome: this forecasts the draw after it
    n1, n2, n3 = values[-3:]
    markov = session.markov.predict(values)
    neural = session.model.predict_clamped(n1, n2, n3)
    session.tracker.record_neural(neural)
    big_count = session.tracker.recent_big_count(values)
    final, reason = session.blender.blend_with_reason(markov, neural, big_count)
    session.prediction = final
    session.last_reason = reason
    result.prediction, result.markov, result.neural, result.reason = final, markov, neural, reason


def process_outcome(session: PredictorSession, value: int, issue: str) -> Optional[CycleResult]:
    """Run one full cycle for a new outcome. Returns None for an already-seen issue."""
    with session.lock:
        if issue in session.ledger:
            logger.debug("Duplicate issue %s ignored", issue)
            return None
        prior = session.prediction
        outcome = Outcome(value=value, issue=issue, predicted=prior)
        session.ledger.append(outcome)
        if session.store is not None:
            session.store.append_outcome(outcome)

        result = CycleResult(outcome=outcome, correct=None, prediction=prior)
        values = session.ledger.values()
        if len(values) >= TRAIN_MIN_HISTORY:
            n1, n2, n3 = values[-4:-1]
            session.model.enqueue(make_example(n1, n2, n3, value))
            result.retrained = session.model.retrain_if_due()

        if prior is not None:
            result.correct = session.tracker.record_outcome(prior, value)

        if len(values) >= PREDICT_MIN_HISTORY:
            _next_prediction(session, result)

        if session.store is not None and (prior is not None or result.neural is not None):
            session.store.save_counters(session.stats)

        logger.info("Issue %s -> %d (%s); prior=%s correct=%s next=%s via %s",
                    issue, value, label(value), prior, result.correct,
                    result.prediction, result.reason)
        return result


def snapshot(session: PredictorSession, limit: int = 100) -> dict:
    with session.lock:
        s = session.stats
        return {
            'prediction': session.prediction,
            'label': label(session.prediction),
            'reason': session.last_reason,
            'total_outcomes': len(session.ledger),
            'stats': {
                'correct': s.correct_count,
                'incorrect': s.incorrect_count,
                'accuracy': s.accuracy(),
                'current_correct_streak': s.current_correct_streak,
                'current_incorrect_streak': s.current_incorrect_streak,
                'max_correct_streak': s.max_correct_streak,
                'max_incorrect_streak': s.max_incorrect_streak,
            },
            'rolling_accuracy': session.tracker.rolling_accuracy(),
            'neural_bias': session.tracker.neural_accuracy_proxy(),
            'big_share': big_share(session, limit),
            'model': {
                'fitted': session.model.is_fitted,
                'training': session.model.is_training,
                'retrain_count': session.model.retrain_count,
                'buffered': len(session.model.buffer),
            },
            'history': session.ledger.tail_view(limit),
        }


def big_share(session: PredictorSession, k: int = 100) -> float:
    values = [o.value for o in session.ledger.last(k)]
    return sum(1 for v in values if is_big(v)) / len(values) if values else 0.0
