import os
from datetime import datetime

os.environ["TRENDING_DB_URL"] = "sqlite://"

import pytest

from trending.config import Biases
from trending.db import Base, SessionLocal, engine
from trending import models  # noqa: F401 - register tables


FROZEN_NOW = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def now():
    return FROZEN_NOW


@pytest.fixture
def biases():
    return Biases(likes_bias=1, comments_bias=1, time_bias=86400, max_days_since_posted=7)


@pytest.fixture
def trending_env(monkeypatch):
    monkeypatch.setenv("TRENDING_LIKES_BIAS", "1")
    monkeypatch.setenv("TRENDING_COMMENTS_BIAS", "1")
    monkeypatch.setenv("TRENDING_TIME_BIAS", "86400")
    monkeypatch.setenv("TRENDING_MAX_DAYS_SINCE_POSTED", "7")


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
