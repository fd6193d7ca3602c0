import logging
import os
import pickle

import joblib
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from bigsmall.analytics.stats import RunningStats
from bigsmall.core.ledger import Outcome
from bigsmall.db import crud

logger = logging.getLogger(__name__)


class Store:
    """Best-effort persistence for the ledger, counters and model snapshot.

    Every method logs and swallows its own I/O failures: loads return None,
    saves return False. Nothing here may stop a prediction cycle.
    """

    def __init__(self, engine: Engine, model_path: str | None):
        self.engine = engine
        self.model_path = model_path

    # -------- model snapshot (joblib file) --------
    def load_model_snapshot(self) -> dict | None:
        if not self.model_path or not os.path.exists(self.model_path):
            return None
        try:
            snap = joblib.load(self.model_path)
        except Exception as e:
            logger.warning("Could not load model snapshot %s: %s", self.model_path, e)
            return None
        if not isinstance(snap, dict):
            logger.warning("Model snapshot %s has unexpected type %s", self.model_path, type(snap).__name__)
            return None
        return snap

    def save_model_snapshot(self, snapshot: dict) -> bool:
        if not self.model_path:
            return False
        tmp = f"{self.model_path}.tmp"
        try:
            os.makedirs(os.path.dirname(os.path.abspath(self.model_path)), exist_ok=True)
            joblib.dump(snapshot, tmp)
            os.replace(tmp, self.model_path)
        except (OSError, pickle.PicklingError) as e:
            logger.error("Failed to save model snapshot: %s", e)
            return False
        return True

    # -------- counters --------
    def load_counters(self) -> RunningStats | None:
        try:
            with Session(self.engine) as session:
                row = crud.get_counters(session)
                data = row.model_dump() if row else None
        except SQLAlchemyError as e:
            logger.warning("Could not load counters: %s", e)
            return None
        return RunningStats.from_dict(data) if data else None

    def save_counters(self, stats: RunningStats) -> bool:
        try:
            with Session(self.engine) as session:
                crud.upsert_counters(session, stats.to_dict())
        except SQLAlchemyError as e:
            logger.error("Failed to save counters: %s", e)
            return False
        return True

    # -------- ledger --------
    def load_outcomes(self) -> list[Outcome] | None:
        try:
            with Session(self.engine) as session:
                rows = crud.all_outcomes(session)
                return [Outcome(r.value, r.issue, r.predicted) for r in rows]
        except SQLAlchemyError as e:
            logger.warning("Could not load outcome history: %s", e)
            return None

    def append_outcome(self, outcome: Outcome) -> bool:
        try:
            with Session(self.engine) as session:
                crud.insert_outcome(session, outcome.issue, outcome.value, outcome.predicted)
        except SQLAlchemyError as e:
            logger.error("Failed to persist outcome %s: %s", outcome.issue, e)
            return False
        return True
