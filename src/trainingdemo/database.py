"""
Database configuration and session management.

Small and test-friendly:
- Defaults to SQLite for local dev
- Any SQLAlchemy URL works through DATABASE_URL
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from trainingdemo.config import get_settings
from trainingdemo.models.base import Base


def create_db_engine(database_url: Optional[str] = None, *, echo: bool = False) -> Engine:
    url = database_url or get_settings().DATABASE_URL

    connect_args: dict = {}
    if "sqlite" in url:
        connect_args["check_same_thread"] = False

    if url.startswith("sqlite:///:memory:") or url == "sqlite://":
        from sqlalchemy.pool import StaticPool

        return create_engine(
            url,
            echo=echo,
            connect_args=connect_args,
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    # Registers the mapped tables on Base.metadata before create_all.
    import trainingdemo.content_management.store  # noqa: F401
    import trainingdemo.person.indexes  # noqa: F401

    Base.metadata.create_all(bind=engine)

