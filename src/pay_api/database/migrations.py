"""Alembic helpers for applying schema migrations."""

import os

import alembic.command
import alembic.config
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError


def load_alembic_config() -> alembic.config.Config | None:
    """Load alembic configuration.

    Searches for alembic.ini in the current working directory first, then in
    the project root (three levels up from this file: database/ -> pay_api/ ->
    src/ -> root). The script location is made absolute so migrations run from
    any directory.

    Returns:
        The alembic Config, or None if no alembic.ini was found
    """
    project_root = os.getcwd()
    alembic_ini_path = os.path.join(project_root, "alembic.ini")

    if not os.path.exists(alembic_ini_path):
        project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
        alembic_ini_path = os.path.join(project_root, "alembic.ini")

    if not os.path.exists(alembic_ini_path):
        logger.error("Alembic configuration file not found in cwd or project root")
        return None

    logger.trace(f"Loading alembic configuration from: {alembic_ini_path}")
    alembic_cfg = alembic.config.Config(alembic_ini_path)

    migrations_path = os.path.join(project_root, "migrations")
    if os.path.exists(migrations_path):
        alembic_cfg.set_main_option("script_location", migrations_path)
    return alembic_cfg


def upgrade_database(target: str = "head") -> bool:
    """Execute database migration to specified target.

    Args:
        target: Migration target (default: "head")

    Returns:
        True if migration successful, False otherwise
    """
    alembic_cfg = load_alembic_config()
    if alembic_cfg is None:
        return False

    try:
        logger.info(f"Starting database migration to '{target}'")
        alembic.command.upgrade(alembic_cfg, target)
        logger.info(f"Database migration to '{target}' completed successfully")
        return True
    except (OSError, ValueError, RuntimeError, SQLAlchemyError) as e:
        logger.error(f"Migration failed: {e}")
        return False
