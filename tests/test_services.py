from bigsmall.services import open_session, process_outcome, snapshot, close_session


def test_duplicate_delivery_is_idempotent(session):
    assert process_outcome(session, 4, "A1") is not None
    assert process_outcome(session, 9, "A1") is None
    assert session.ledger.values() == [4]
    assert session.model.pending == 0

def test_no_prediction_until_three_outcomes(session, push):
    r1, r2, r3 = push(session, [1, 4, 1])
    assert r1.prediction is None and r2.prediction is None
    # "41" unseen and the fresh model answers 0
    assert r3.markov is None and r3.neural == 0 and r3.prediction == 0
    assert session.prediction == 0
    assert list(session.stats.neural_big_bias) == [0]

def test_prior_prediction_is_graded(session, push):
    push(session, [1, 4, 1])
    r = push(session, [6], start=4)[0]
    assert r.outcome.predicted == 0
    assert r.correct is False
    assert session.stats.incorrect_count == 1 and session.stats.current_incorrect_streak == 1
    assert list(session.stats.rolling_correctness) == [0]
    assert session.model.pending == 1

def test_retrain_triggered_every_five_examples(session, push, store):
    results = push(session, [3, 8, 1, 7, 2, 9, 4, 6])
    assert [r.retrained for r in results] == [False] * 7 + [True]
    assert session.model.is_fitted
    assert store.load_model_snapshot() is not None

def test_state_survives_reopen(session, push, store):
    push(session, [3, 8, 1, 7, 2, 9, 4, 6, 5])
    stats = session.stats.to_dict()
    close_session(session)
    again = open_session(store)
    assert again.ledger.values() == [3, 8, 1, 7, 2, 9, 4, 6, 5]
    assert again.stats.to_dict() == stats
    assert again.model.is_fitted
    assert process_outcome(again, 1, "I00009") is None

def test_snapshot_view(session, push):
    push(session, [9, 9, 1, 2, 7])
    snap = snapshot(session, limit=3)
    assert snap['total_outcomes'] == 5
    assert [h['value'] for h in snap['history']] == [7, 2, 1]
    assert snap['label'] in ('BIG', 'SMALL')
    assert snap['stats']['correct'] + snap['stats']['incorrect'] == 2

def test_runs_without_store(push):
    s = open_session(None)
    push(s, [5, 5, 5, 5, 5, 5])
    assert len(s.ledger) == 6
    close_session(s)

def test_store_writes_succeed(store):
    from bigsmall.analytics.stats import RunningStats
    from bigsmall.core.ledger import Outcome
    assert store.append_outcome(Outcome(7, "w1", predicted=2))
    assert store.save_counters(RunningStats(correct_count=3, current_correct_streak=3))
    assert store.save_counters(RunningStats(correct_count=4, current_correct_streak=4))
    assert [o.value for o in store.load_outcomes()] == [7]
    assert store.load_counters().correct_count == 4

def test_broken_database_keeps_cycles_running(session, push, engine, caplog):
    from sqlmodel import SQLModel
    push(session, [3])
    SQLModel.metadata.drop_all(engine)
    results = push(session, [8, 1, 7, 2, 9, 4], start=2)
    assert all(r is not None for r in results)
    assert len(session.ledger) == 7
    assert results[-1].prediction is not None
    assert "Failed to persist outcome" in caplog.text
