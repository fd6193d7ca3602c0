from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


class OutcomeRow(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    issue: str = Field(index=True, unique=True)
    value: int
    predicted: int | None = None  # prediction published before this outcome
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)


class CounterRow(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    correct_count: int = 0
    incorrect_count: int = 0
    current_correct_streak: int = 0
    current_incorrect_streak: int = 0
    max_correct_streak: int = 0
    max_incorrect_streak: int = 0
    rolling_correctness: str = ""  # '0'/'1' per cycle, oldest first
    neural_big_bias: str = ""
    updated_ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
