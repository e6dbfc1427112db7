"""Alembic environment for the document catalog schema.

URL resolution order: ``-x database_url=...`` on the command line, then the
DATABASE_URL setting. Async drivers are swapped for sync ones because
migrations run on sync SQLAlchemy.
"""

from logging.config import fileConfig

from alembic import context

from backend.circuit_flow.config import get_settings
from backend.circuit_flow.db.engine import create_engine_from_url, sync_database_url
from backend.circuit_flow.db.models import Base

config = context.config

# Programmatic callers keep their own logging setup
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def resolve_database_url() -> str:
    """Pick the migration target URL."""
    override = context.get_x_argument(as_dictionary=True).get("database_url")
    return sync_database_url(override or get_settings().database_url)


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout without connecting."""
    context.configure(
        url=resolve_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a live connection."""
    engine = create_engine_from_url(resolve_database_url())
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, target_metadata=target_metadata)

            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
