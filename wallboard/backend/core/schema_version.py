"""
Schema Version Check.

The application expects the database to be at the Alembic head revision.
Startup compares the two and refuses to serve against a schema it was not
written for, instead of guessing at missing tables or columns at request
time.
"""

from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.ext.asyncio import AsyncEngine

from wallboard.backend.core.exceptions import SchemaVersionError
from wallboard.backend.core.logging import get_logger

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def alembic_config(database_url: str | None = None) -> Config:
    """Alembic config pointing at the bundled migrations, without alembic.ini."""
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    if database_url:
        config.set_main_option("sqlalchemy.url", database_url)
    return config


def migration_head() -> str | None:
    return ScriptDirectory.from_config(alembic_config()).get_current_head()


async def current_revision(engine: AsyncEngine) -> str | None:
    async with engine.connect() as connection:
        return await connection.run_sync(
            lambda sync_connection: MigrationContext.configure(sync_connection).get_current_revision()
        )


async def verify_schema_version(engine: AsyncEngine) -> str | None:
    """
    Raise unless the database is at the migration head.

    Returns:
        The verified revision

    Raises:
        SchemaVersionError: database revision differs from the head
    """
    head = migration_head()
    current = await current_revision(engine)
    if current != head:
        logger.error(
            "Database schema version mismatch",
            extra={"current": current, "expected": head},
        )
        raise SchemaVersionError(
            f"Database schema is at {current or 'no revision'}, expected {head}. "
            "Run: python cli.py --service migrate"
        )
    logger.info("Database schema verified", extra={"revision": current})
    return current
