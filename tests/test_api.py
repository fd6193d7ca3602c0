import pytest
from fastapi.testclient import TestClient

from bigsmall.api.main import create_app


@pytest.fixture
def client(session):
    with TestClient(create_app(predictor=session, poll=False)) as c:
        yield c

def test_ingest_and_read(client):
    for i, v in enumerate([2, 8, 6, 1]):
        r = client.post("/ingest", json={"value": v, "issue": f"n{i}"})
        assert r.status_code == 200 and r.json()["accepted"] is True
    dup = client.post("/ingest", json={"value": 5, "issue": "n3"}).json()
    assert dup["accepted"] is False

    p = client.get("/prediction").json()
    assert p["total_outcomes"] == 4 and 0 <= p["prediction"] <= 9

    s = client.get("/stats").json()
    assert s["correct"] + s["incorrect"] == 1
    assert 0.0 <= s["rolling_accuracy"] <= 1.0

    h = client.get("/history", params={"limit": 2}).json()["items"]
    assert [x["value"] for x in h] == [1, 6]

def test_ingest_validation(client):
    assert client.post("/ingest", json={"value": 10, "issue": "a"}).status_code == 422
    assert client.post("/ingest", json={"value": 1, "issue": "bad issue!"}).status_code == 400

def test_dashboard(client):
    r = client.get("/dashboard")
    assert r.status_code == 200 and "Prediction Tracker" in r.text

def test_ingest_rejects_bool_value(client):
    assert client.post("/ingest", json={"value": True, "issue": "z"}).status_code == 422
    assert client.get("/prediction").json()["total_outcomes"] == 0
