import logging
import threading
import time
from collections import deque
from typing import Protocol, Sequence

import numpy as np
from sklearn.neural_network import MLPRegressor

from bigsmall.core.digits import clamp_digit
from bigsmall.core.features import N_FEATURES, TrainingExample, extract_features

logger = logging.getLogger(__name__)

HIDDEN_LAYERS = (64, 32)
BATCH_SIZE = 16
EPOCHS = 20
RETRAIN_EVERY = 5
BUFFER_SIZE = 200


class SnapshotSink(Protocol):
    def save_model_snapshot(self, snapshot: dict) -> bool: ...


def build_estimator() -> MLPRegressor:
    return MLPRegressor(
        hidden_layer_sizes=HIDDEN_LAYERS,
        activation="relu",
        solver="adam",
        batch_size=BATCH_SIZE,
        shuffle=True,
    )


class RegressionModel:
    """Small feed-forward regressor trained online in short bursts.

    Examples are queued with enqueue(); every RETRAIN_EVERY new examples
    retrain_if_due() runs EPOCHS passes over the most recent BUFFER_SIZE of
    them. Only one retrain runs at a time; a request that arrives while one is
    in flight is dropped.
    """

    def __init__(self, estimator: MLPRegressor | None = None, sink: SnapshotSink | None = None,
                 retrain_count: int = 0):
        self.estimator = estimator if estimator is not None else build_estimator()
        self.sink = sink
        self.retrain_count = retrain_count
        self.buffer: deque[TrainingExample] = deque(maxlen=BUFFER_SIZE)
        self.pending = 0
        self._training = threading.Lock()

    @classmethod
    def from_snapshot(cls, snapshot: dict | None, sink: SnapshotSink | None = None) -> "RegressionModel":
        if snapshot is not None:
            estimator = snapshot.get("estimator")
            if isinstance(estimator, MLPRegressor) and estimator.hidden_layer_sizes == HIDDEN_LAYERS:
                logger.info("Loaded model snapshot (%d retrains)", snapshot.get("retrain_count", 0))
                return cls(estimator, sink, int(snapshot.get("retrain_count", 0)))
            logger.warning("Ignoring incompatible model snapshot; starting fresh")
        else:
            logger.info("No model snapshot; starting fresh")
        return cls(sink=sink)

    def snapshot(self) -> dict:
        return {"estimator": self.estimator, "retrain_count": self.retrain_count}

    @property
    def is_fitted(self) -> bool:
        return hasattr(self.estimator, "coefs_")

    @property
    def is_training(self) -> bool:
        return self._training.locked()

    def predict(self, features: Sequence[float]) -> float:
        # an untrained network answers 0.0 until its first retrain
        if not self.is_fitted:
            return 0.0
        x = np.asarray([features], dtype=np.float64).reshape(1, N_FEATURES)
        try:
            return float(self.estimator.predict(x)[0])
        finally:
            del x

    def predict_clamped(self, n1: int, n2: int, n3: int) -> int:
        return clamp_digit(self.predict(extract_features(n1, n2, n3)))

    def enqueue(self, example: TrainingExample):
        self.buffer.append(example)
        self.pending += 1

    def retrain_if_due(self) -> bool:
        if self.pending < RETRAIN_EVERY:
            return False
        self.pending = 0
        return self.retrain()

    def retrain(self) -> bool:
        if not self._training.acquire(blocking=False):
            logger.debug("Retrain already running; request dropped")
            return False
        try:
            data = list(self.buffer)[-BUFFER_SIZE:]
            if not data:
                return False
            X = np.asarray([ex.features for ex in data], dtype=np.float64)
            y = np.asarray([ex.label for ex in data], dtype=np.float64)
            try:
                t0 = time.perf_counter()
                self.estimator.set_params(batch_size=min(BATCH_SIZE, len(data)))
                for _ in range(EPOCHS):
                    self.estimator.partial_fit(X, y)
                self.retrain_count += 1
                logger.info("Retrained on %d examples in %.2fs (loss=%.4f)",
                            len(data), time.perf_counter() - t0, self.estimator.loss_)
            except (ValueError, FloatingPointError) as e:
                logger.error("Training error: %s", e)
                return False
            finally:
                del X, y
        finally:
            self._training.release()
        self._persist()
        return True

    def _persist(self):
        if self.sink is None:
            return
        if not self.sink.save_model_snapshot(self.snapshot()):
            logger.warning("Model snapshot not saved; continuing with in-memory parameters")
