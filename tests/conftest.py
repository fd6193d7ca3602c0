import pytest

from bigsmall.db.base import make_engine, init_db
from bigsmall.db.store import Store
from bigsmall.services import open_session, process_outcome


@pytest.fixture
def engine():
    e = make_engine("sqlite://")
    init_db(e)
    return e


@pytest.fixture
def store(engine, tmp_path):
    return Store(engine, str(tmp_path / "model.joblib"))


@pytest.fixture
def session(store):
    return open_session(store)


@pytest.fixture
def push():
    """Run full cycles for a list of values, issuing sequential ids."""
    def _push(session, values, start=1):
        return [process_outcome(session, v, f"I{start + i:05d}") for i, v in enumerate(values)]
    return _push
