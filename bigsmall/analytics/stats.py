from collections import deque
from dataclasses import dataclass, field

ROLLING_WINDOW = 32
BIAS_WINDOW = 10


def _bits(values) -> str:
    return ''.join('1' if v else '0' for v in values)


def _unbits(s: str | None) -> list[int]:
    return [1 if c == '1' else 0 for c in (s or '') if c in '01']


@dataclass
class RunningStats:
    correct_count: int = 0
    incorrect_count: int = 0
    current_correct_streak: int = 0
    current_incorrect_streak: int = 0
    max_correct_streak: int = 0
    max_incorrect_streak: int = 0
    rolling_correctness: deque = field(default_factory=lambda: deque(maxlen=ROLLING_WINDOW))
    neural_big_bias: deque = field(default_factory=lambda: deque(maxlen=BIAS_WINDOW))

    def record(self, correct: bool):
        # only one of the current streaks may be nonzero
        if correct:
            self.correct_count += 1
            self.current_correct_streak += 1
            self.current_incorrect_streak = 0
            self.max_correct_streak = max(self.max_correct_streak, self.current_correct_streak)
        else:
            self.incorrect_count += 1
            self.current_incorrect_streak += 1
            self.current_correct_streak = 0
            self.max_incorrect_streak = max(self.max_incorrect_streak, self.current_incorrect_streak)

    @property
    def total(self) -> int:
        return self.correct_count + self.incorrect_count

    def accuracy(self) -> float:
        return self.correct_count / self.total if self.total else 0.0

    def to_dict(self) -> dict:
        return {
            'correct_count': self.correct_count,
            'incorrect_count': self.incorrect_count,
            'current_correct_streak': self.current_correct_streak,
            'current_incorrect_streak': self.current_incorrect_streak,
            'max_correct_streak': self.max_correct_streak,
            'max_incorrect_streak': self.max_incorrect_streak,
            'rolling_correctness': _bits(self.rolling_correctness),
            'neural_big_bias': _bits(self.neural_big_bias),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "RunningStats":
        s = cls(
            correct_count=int(d.get('correct_count', 0)),
            incorrect_count=int(d.get('incorrect_count', 0)),
            current_correct_streak=int(d.get('current_correct_streak', 0)),
            current_incorrect_streak=int(d.get('current_incorrect_streak', 0)),
            max_correct_streak=int(d.get('max_correct_streak', 0)),
            max_incorrect_streak=int(d.get('max_incorrect_streak', 0)),
        )
        # a stored row with both streaks set is repaired rather than trusted
        if s.current_correct_streak and s.current_incorrect_streak:
            s.current_incorrect_streak = 0
        s.rolling_correctness.extend(_unbits(d.get('rolling_correctness')))
        s.neural_big_bias.extend(_unbits(d.get('neural_big_bias')))
        return s
