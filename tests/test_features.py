from bigsmall.core.features import extract_features, make_example
from bigsmall.core.digits import clamp_digit, round_half_up, is_big, label


def test_zero_window():
    assert extract_features(0, 0, 0) == [0.0] * 8

def test_vector_layout():
    f = extract_features(9, 0, 3)
    assert f == [1.0, 0.0, 3 / 9, 1.0, 3 / 9, 1.0, 0.0, 1.0]

def test_deterministic():
    assert extract_features(2, 7, 5) == extract_features(2, 7, 5)

def test_make_example():
    ex = make_example(1, 2, 3, 8)
    assert ex.label == 8.0 and len(ex.features) == 8

def test_rounding_convention():
    assert round_half_up(5.5) == 6
    assert round_half_up(4.5) == 5
    assert round_half_up(4.49) == 4
    assert clamp_digit(-3.2) == 0 and clamp_digit(12) == 9 and clamp_digit(8.6) == 9

def test_bigness():
    assert is_big(5) and not is_big(4)
    assert label(5) == 'BIG' and label(0) == 'SMALL' and label(None) is None
