from dataclasses import dataclass
from typing import Iterable, Optional

from bigsmall.core.digits import is_big


@dataclass(frozen=True)
class Outcome:
    value: int
    issue: str  # feed sequence id, the dedup key
    predicted: Optional[int] = None  # prediction published before this outcome arrived


class OutcomeLedger:
    """Append-only, arrival-ordered history of outcomes.

    An issue id is accepted once; later deliveries of the same id are dropped.
    """

    def __init__(self):
        self._items: list[Outcome] = []
        self._seen: set[str] = set()

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[Outcome]) -> "OutcomeLedger":
        ledger = cls()
        for o in outcomes:
            ledger.append(o)
        return ledger

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, issue: str) -> bool:
        return issue in self._seen

    def __iter__(self):
        return iter(self._items)

    def append(self, outcome: Outcome) -> bool:
        if outcome.issue in self._seen:
            return False
        self._seen.add(outcome.issue)
        self._items.append(outcome)
        return True

    def values(self) -> list[int]:
        return [o.value for o in self._items]

    def last(self, k: int) -> list[Outcome]:
        if k <= 0:
            return []
        return self._items[-k:]

    def tail_view(self, k: int = 100) -> list[dict]:
        """Newest-first rows for display: value, issue and predicted/actual bigness."""
        rows = []
        for o in reversed(self.last(k)):
            predicted_big = None if o.predicted is None else is_big(o.predicted)
            actual_big = is_big(o.value)
            rows.append({
                'issue': o.issue,
                'value': o.value,
                'predicted': o.predicted,
                'predicted_big': predicted_big,
                'actual_big': actual_big,
                'correct': None if predicted_big is None else predicted_big == actual_big,
            })
        return rows
