from pydantic import BaseModel, Field
from typing import Optional


class IngestIn(BaseModel):
    value: int = Field(ge=0, le=9, strict=True)
    issue: str


class IngestOut(BaseModel):
    accepted: bool
    correct: Optional[bool] = None
    prediction: Optional[int] = None
    label: Optional[str] = None
    reason: Optional[str] = None
    retrained: bool = False


class PredictionOut(BaseModel):
    prediction: Optional[int]
    label: Optional[str]
    reason: Optional[str]
    total_outcomes: int


class StatsOut(BaseModel):
    correct: int
    incorrect: int
    accuracy: float
    current_correct_streak: int
    current_incorrect_streak: int
    max_correct_streak: int
    max_incorrect_streak: int
    rolling_accuracy: float
    neural_bias: float
    big_share: float
    total_outcomes: int


class HistoryItem(BaseModel):
    issue: str
    value: int
    predicted: Optional[int]
    predicted_big: Optional[bool]
    actual_big: bool
    correct: Optional[bool]


class HistoryOut(BaseModel):
    items: list[HistoryItem]
