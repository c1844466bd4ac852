from __future__ import annotations

import pytest

from trainingdemo.config import Settings
from trainingdemo.database import create_db_engine, create_session_factory, init_db


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL="sqlite:///:memory:",
        FEATURES_ENABLED="graphql",
        _env_file=None,
    )


@pytest.fixture
def engine():
    eng = create_db_engine("sqlite:///:memory:")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def shell(settings):
    from trainingdemo.api.app import build_shell

    return build_shell(settings)


@pytest.fixture
def store(shell, db):
    return shell.store(db)
