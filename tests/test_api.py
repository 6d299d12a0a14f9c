from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from factories import make_question
from trending.main import EMPTY_MESSAGE, create_app


@pytest.fixture
def client(db):
    return TestClient(create_app())


def recent():
    return datetime.utcnow() - timedelta(minutes=5)


def test_empty_state(client, trending_env):
    resp = client.get("/trending")

    assert resp.status_code == 200
    body = resp.json()
    assert body["empty"] is True
    assert body["message"] == EMPTY_MESSAGE
    assert body["items"] == []


def test_lists_trending_questions(client, db, trending_env):
    make_question(db, "This is a trending question!", answered_at=recent(), likes=2, answer="Yes")
    make_question(db, "quiet one", answered_at=recent())
    db.commit()

    resp = client.get("/trending", params={"per_page": 5})

    assert resp.status_code == 200
    body = resp.json()
    assert body["empty"] is False
    assert body["message"] is None
    assert body["total"] == 2
    assert body["per_page"] == 5
    first = body["items"][0]
    assert first["content"] == "This is a trending question!"
    assert first["answer"] == "Yes"
    assert first["likes_count"] == 2
    assert first["comments_count"] == 0
    assert first["score"] > body["items"][1]["score"]


def test_paging(client, db, trending_env):
    for i in range(3):
        make_question(db, f"q{i}", answered_at=recent() - timedelta(minutes=i))
    db.commit()

    body = client.get("/trending", params={"page": 1, "per_page": 2}).json()

    assert [it["content"] for it in body["items"]] == ["q2"]
    assert body["has_more"] is False


@pytest.mark.parametrize("params", [{"page": -1}, {"per_page": 0}, {"per_page": 51}])
def test_invalid_arguments(client, trending_env, params):
    resp = client.get("/trending", params=params)
    assert resp.status_code == 422


def test_missing_configuration_is_a_hard_failure(client, trending_env, monkeypatch):
    monkeypatch.delenv("TRENDING_TIME_BIAS")

    resp = client.get("/trending")

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "configuration_error"
    assert body["key"] == "TRENDING_TIME_BIAS"
