from dataclasses import dataclass

# Fixed-size numeric view of a 3-digit window (no meaning beyond structure).
N_FEATURES = 8


def extract_features(n1: int, n2: int, n3: int) -> list[float]:
    return [
        n1 / 9,
        n2 / 9,
        n3 / 9,
        abs(n2 - n1) / 9,
        abs(n3 - n2) / 9,
        float(n1 % 2),
        float(n2 % 2),
        float(n3 % 2),
    ]


@dataclass(frozen=True)
class TrainingExample:
    features: tuple[float, ...]
    label: float


def make_example(n1: int, n2: int, n3: int, label: int) -> TrainingExample:
    return TrainingExample(tuple(extract_features(n1, n2, n3)), float(label))
