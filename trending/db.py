import os
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


DB_URL = os.getenv("TRENDING_DB_URL", "sqlite:///./trending.db")
connect_args = {"check_same_thread": False} if DB_URL.startswith("sqlite") else {}
engine_kwargs = {}
if DB_URL in ("sqlite://", "sqlite:///:memory:"):
    # in-memory sqlite lives in a single connection; share it
    engine_kwargs["poolclass"] = StaticPool
engine = create_engine(DB_URL, connect_args=connect_args, future=True, **engine_kwargs)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

Base = declarative_base()


def init_db() -> None:
    from . import models  # noqa: F401 - ensure models are imported
    Base.metadata.create_all(bind=engine)


def get_session() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
