import os
import sys
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from loguru import logger
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel

load_dotenv()

LOG_LEVEL = os.getenv("PAY_API_LOG_LEVEL", "INFO").upper()
logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)

# Echo SQL only when query logging is requested
SQL_ECHO = os.getenv("PAY_API_SQL_LOG", "false").lower() in ("1", "true", "yes")
logger.info(f"SQL echo is {'enabled' if SQL_ECHO else 'disabled'}")

from pay_api.logging import route_stdlib_logging  # noqa: E402

# Import all models to ensure they're registered with SQLModel metadata
from pay_api.models import db_model  # noqa: F401, E402
from pay_api.settings import get_settings  # noqa: E402

config = context.config

# The application's database URL wins over the one in alembic.ini
database_url = get_settings().database_url
if database_url:
    config.set_main_option("sqlalchemy.url", database_url)

# Interpret the config file for Python logging, but redirect everything through loguru
if config.config_file_name is not None:
    fileConfig(config.config_file_name)
    route_stdlib_logging()

target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Only a URL is configured, no Engine, so calls to context.execute()
    emit the given SQL to the script output.
    """
    url = config.get_main_option("sqlalchemy.url")
    logger.info("Running offline migrations")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()
        logger.success("Offline migration completed successfully")


def run_migrations_online() -> None:
    """Run migrations in 'online' mode against a live connection."""
    logger.info("Setting up database connection for online migrations")

    engine_config = config.get_section(config.config_ini_section, {})
    engine_config["sqlalchemy.echo"] = str(SQL_ECHO).lower()

    connectable = engine_from_config(
        engine_config,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        logger.info("Database connection established")
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # SQLite needs batch mode for ALTER TABLE
            render_as_batch=True,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()
            logger.success("Online migration completed successfully")


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
