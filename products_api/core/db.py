from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict, Generator

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from products_api.core.config import get_settings


class Base(DeclarativeBase):
    """Declarative base for the SQLAlchemy models."""


def _database_url() -> str:
    # 1) Environment (tests, CI, docker)
    env_url = os.getenv("DATABASE_URL")
    if env_url:
        return env_url

    # 2) Settings (.env, DB_* pieces)
    return get_settings().database_url_resolved


def _engine_options(url: str) -> Dict[str, Any]:
    if url.startswith("sqlite"):
        options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        # An in-memory database only lives as long as its single connection.
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            options["poolclass"] = StaticPool
        return options

    # pool_pre_ping drops connections the server closed behind our back
    return {"pool_pre_ping": True}


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    url = _database_url()
    return create_engine(url, **_engine_options(url))


@lru_cache(maxsize=1)
def get_sessionmaker() -> sessionmaker[Session]:
    return sessionmaker(
        bind=get_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        class_=Session,
    )


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency: one session per request, closed afterwards.
    """
    SessionLocal = get_sessionmaker()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    # Imported here so the model is registered on Base.metadata.
    from products_api import models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
