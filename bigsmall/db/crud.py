from typing import Optional
from sqlmodel import Session, select
from bigsmall.db.models import OutcomeRow, CounterRow
from datetime import datetime, timezone

COUNTER_ROW_ID = 1


def insert_outcome(session: Session, issue: str, value: int, predicted: Optional[int]) -> OutcomeRow:
    row = OutcomeRow(issue=issue, value=value, predicted=predicted)
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


def all_outcomes(session: Session) -> list[OutcomeRow]:
    return session.exec(select(OutcomeRow).order_by(OutcomeRow.id)).all()


def get_counters(session: Session) -> Optional[CounterRow]:
    return session.get(CounterRow, COUNTER_ROW_ID)


def upsert_counters(session: Session, values: dict) -> CounterRow:
    row = get_counters(session) or CounterRow(id=COUNTER_ROW_ID)
    for k, v in values.items():
        setattr(row, k, v)
    row.updated_ts = datetime.now(timezone.utc)
    session.add(row)
    session.commit()
    session.refresh(row)
    return row
