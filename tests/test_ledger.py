from bigsmall.core.ledger import Outcome, OutcomeLedger


def test_duplicate_issue_rejected():
    led = OutcomeLedger()
    assert led.append(Outcome(3, "a"))
    assert not led.append(Outcome(8, "a"))
    assert len(led) == 1 and led.values() == [3]
    assert "a" in led and "b" not in led

def test_order_is_arrival_order():
    led = OutcomeLedger.from_outcomes([Outcome(v, str(i)) for i, v in enumerate([5, 1, 9, 1])])
    assert led.values() == [5, 1, 9, 1]
    assert [o.issue for o in led.last(2)] == ["2", "3"]
    assert led.last(0) == []

def test_from_outcomes_drops_duplicates():
    led = OutcomeLedger.from_outcomes([Outcome(1, "x"), Outcome(2, "x"), Outcome(3, "y")])
    assert led.values() == [1, 3]

def test_tail_view_newest_first():
    led = OutcomeLedger.from_outcomes([Outcome(2, "a"), Outcome(7, "b", predicted=8), Outcome(1, "c", predicted=6)])
    rows = led.tail_view(2)
    assert [r["issue"] for r in rows] == ["c", "b"]
    assert rows[0]["correct"] is False and rows[1]["correct"] is True
    assert led.tail_view(5)[-1]["predicted_big"] is None
