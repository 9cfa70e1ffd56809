"""Main entry point for the pay API using Typer and Pydantic Settings."""

import typer
import uvicorn
from loguru import logger

from pay_api.logging import setup_logging
from pay_api.settings import get_settings

app = typer.Typer()


HOST_OPTION = typer.Option(
    None,
    help="Host to bind the server to (overrides PAY_API_HOST)",
    metavar="<server>",
)  # fmt: skip
PORT_OPTION = typer.Option(
    None,
    help="Port to bind the server to (overrides PAY_API_PORT)",
    metavar="<port>",
)  # fmt: skip
RELOAD_OPTION = typer.Option(
    None,
    help="Enable/disable auto-reload (overrides PAY_API_RELOAD)",
)  # fmt: skip
LOG_LEVEL_OPTION = typer.Option(
    None,
    help="Log level (overrides PAY_API_LOG_LEVEL)",
    metavar="<level>",
    case_sensitive=False,
)  # fmt: skip
SQL_LOG_OPTION = typer.Option(
    None,
    help="Enable/disable SQL query logging (overrides PAY_API_SQL_LOG)",
)  # fmt: skip
DATABASE_URL_OPTION = typer.Option(
    None,
    help="Database URL (overrides PAY_API_DATABASE_URL)",
    metavar="<dsn>",
)  # fmt: skip


def _update_settings(
    host: str | None = None,
    port: int | None = None,
    log_level: str | None = None,
    reload: bool | None = None,
    sql_log: bool | None = None,
    database_url: str | None = None,
) -> None:
    """Update the cached settings with CLI overrides.

    Only options that were given on the command line replace the values read
    from the environment.
    """
    settings = get_settings()

    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if log_level is not None:
        settings.log_level = log_level.upper()
    if reload is not None:
        settings.reload = reload
    if sql_log is not None:
        settings.sql_log = sql_log
    if database_url is not None:
        settings.database_url = database_url


@app.command()
def run(
    host: str = HOST_OPTION,
    port: int = PORT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
    reload: bool = RELOAD_OPTION,
    sql_log: bool = SQL_LOG_OPTION,
    database_url: str = DATABASE_URL_OPTION,
) -> None:
    """Run the API server."""
    _update_settings(host, port, log_level, reload, sql_log, database_url)

    settings = get_settings()
    setup_logging(settings.log_level, json_logs=settings.log_json)

    logger.info(f"Starting pay API on {settings.host}:{settings.port}")
    logger.info(f"Reload: {settings.reload}")

    # Reload mode needs an import string
    if settings.reload:
        uvicorn.run(
            "pay_api.app:app",
            host=settings.host,
            port=settings.port,
            reload=True,
            log_level=settings.log_level.lower(),
        )
    else:
        from pay_api.app import app as fastapi_app

        uvicorn.run(
            fastapi_app,
            host=settings.host,
            port=settings.port,
            reload=False,
            log_level=settings.log_level.lower(),
        )


@app.command()
def migrate(
    target: str = typer.Argument("head", help="Alembic revision to upgrade to"),
    log_level: str = LOG_LEVEL_OPTION,
    database_url: str = DATABASE_URL_OPTION,
) -> None:
    """Upgrade the database schema."""
    _update_settings(log_level=log_level, database_url=database_url)

    settings = get_settings()
    setup_logging(settings.log_level, json_logs=settings.log_json)

    from pay_api.database.migrations import upgrade_database

    if not upgrade_database(target):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
