from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from trainingdemo import __version__
from trainingdemo.config import get_settings

app = typer.Typer(add_completion=False, help="TrainingDemo CLI")


@app.command()
def start(
    host: Optional[str] = typer.Option(None, help="Bind host"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
    reload: bool = typer.Option(False, help="Auto-reload on changes (dev)"),
) -> None:
    settings = get_settings()
    uvicorn.run(
        "trainingdemo.api.app:create_app",
        factory=True,
        host=host or settings.HOST,
        port=port or settings.PORT,
        reload=reload,
        log_level=settings.LOG_LEVEL,
    )


@app.command()
def version() -> None:
    typer.echo(__version__)


@app.command("init-db")
def init_db_command(
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Override DATABASE_URL"),
) -> None:
    """Create the content item and index tables."""
    from trainingdemo.database import create_db_engine, init_db

    engine = create_db_engine(database_url)
    init_db(engine)
    typer.echo(f"Initialized {engine.url.render_as_string(hide_password=True)}")


@app.command("print-schema")
def print_schema() -> None:
    """Print the GraphQL SDL assembled from the registered parts."""
    from trainingdemo.api.app import build_shell

    shell = build_shell(get_settings())
    if not shell.is_enabled("graphql"):
        typer.echo("GraphQL feature is not enabled (TRAININGDEMO_FEATURES_ENABLED)", err=True)
        raise typer.Exit(code=1)
    typer.echo(shell.registrar.build_schema().as_str())


if __name__ == "__main__":  # pragma: no cover
    app()
