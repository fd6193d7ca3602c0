from collections import defaultdict
from typing import Sequence

from bigsmall.core.digits import round_half_up

MIN_HISTORY = 3


class MarkovPredictor:
    """Second-order frequency table over digit pairs.

    The table is rebuilt from the full history on every call; nothing is cached.
    """

    @staticmethod
    def key(a: int, b: int) -> str:
        return f"{a}{b}"

    def transitions(self, values: Sequence[int]) -> dict[str, list[int]]:
        table: dict[str, list[int]] = defaultdict(list)
        for i in range(2, len(values)):
            table[self.key(values[i-2], values[i-1])].append(values[i])
        return dict(table)

    def predict(self, values: Sequence[int]) -> int | None:
        if len(values) < MIN_HISTORY:
            return None
        successors = self.transitions(values).get(self.key(values[-2], values[-1]))
        if not successors:
            return None
        return round_half_up(sum(successors) / len(successors))
