from __future__ import annotations

import logging
from typing import Optional, Sequence

from fastapi import FastAPI

from trainingdemo import __version__
from trainingdemo.config import Settings, get_settings
from trainingdemo.content_management.placement import PlacementRules
from trainingdemo.content_management.shell import Shell, StartupBase
from trainingdemo.database import create_db_engine, create_session_factory, init_db
from trainingdemo.exceptions import TrainingDemoException
from trainingdemo.exceptions.handlers import trainingdemo_exception_handler
from trainingdemo.person.router import person_list_router
from trainingdemo.person.startup import STARTUPS

logger = logging.getLogger(__name__)


def build_shell(settings: Settings, startups: Sequence[StartupBase] = STARTUPS) -> Shell:
    shell = Shell(
        placement=PlacementRules.from_file(settings.placement_path),
        enabled_features=settings.enabled_features,
    )
    return shell.run_startups(startups)


def create_app(
    settings: Optional[Settings] = None,
    session_factory=None,
) -> FastAPI:
    settings = settings or get_settings()
    shell = build_shell(settings)

    if session_factory is None:
        engine = create_db_engine(settings.DATABASE_URL)
        if settings.ENVIRONMENT == "dev":
            # Dev convenience: production databases are expected to be provisioned.
            init_db(engine)
        session_factory = create_session_factory(engine)

    app = FastAPI(title="TrainingDemo", version=__version__)
    app.state.settings = settings
    app.state.shell = shell
    app.state.session_factory = session_factory
    app.add_exception_handler(TrainingDemoException, trainingdemo_exception_handler)
    app.include_router(person_list_router, prefix="/api/v1")

    if shell.is_enabled("graphql"):
        from trainingdemo.graphql import create_graphql_router

        schema = shell.registrar.build_schema()
        app.include_router(
            create_graphql_router(schema, session_factory, shell.store),
            prefix=settings.GRAPHQL_PATH,
        )
    else:
        logger.info("GraphQL feature disabled; schema not built")

    return app
