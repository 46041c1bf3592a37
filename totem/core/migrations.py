"""Alembic upgrade helper shared by the migration script and the tests."""
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"


def alembic_config(database_url: str) -> Config:
    """Build an Alembic config pointed at ``database_url``.

    Raises:
        FileNotFoundError: If alembic.ini is not next to the package
    """
    if not ALEMBIC_INI.exists():
        raise FileNotFoundError(f"Alembic config not found at {ALEMBIC_INI}")

    cfg = Config(str(ALEMBIC_INI))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def upgrade_to_head(database_url: str) -> None:
    """Apply every pending revision to the database at ``database_url``."""
    logger.info("Running Alembic migrations to 'head'...")
    command.upgrade(alembic_config(database_url), "head")
    logger.info("Migrations completed successfully")
