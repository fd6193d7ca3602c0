import math

BIG_THRESHOLD = 5


def is_big(value: float) -> bool:
    return value >= BIG_THRESHOLD


def label(value: int | None) -> str | None:
    if value is None:
        return None
    return 'BIG' if is_big(value) else 'SMALL'


def round_half_up(x: float) -> int:
    # halves go toward +inf: 5.5 -> 6, 4.5 -> 5
    return int(math.floor(x + 0.5))


def clamp_digit(x: float) -> int:
    return round_half_up(max(0.0, min(9.0, x)))
