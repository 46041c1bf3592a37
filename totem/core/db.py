"""Database session/engine helpers."""
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from .config import get_settings


def build_engine(database_url: str) -> Engine:
    """Create an engine for the given URL, with SQLite's thread check disabled."""

    kwargs: dict[str, Any] = {"future": True, "pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, class_=Session)


@lru_cache
def get_engine() -> Engine:
    """Engine for the environment's DATABASE_URL, shared by the scripts."""

    return build_engine(get_settings().database_url)


def init_db(bind: Engine) -> None:
    """Create missing tables for all registered models."""

    from totem.models import Base

    Base.metadata.create_all(bind)


def get_session(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency that yields a session from the app's own engine."""

    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def session_scope(bind: Engine | None = None) -> Generator[Session, None, None]:
    """Provide a transactional scope for scripts."""

    session = build_session_factory(bind or get_engine())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
