"""Seed loader - apply ordered .sql files to the document store.

Run with: circuit-flow-seed [--seeds-dir DIR] [--database-url URL]

Files are applied in filename order, one transaction per file. The first
failure aborts the run; files already applied stay applied. Not safe to run
concurrently with itself.
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from sqlalchemy import Connection, Engine, select
from sqlalchemy.exc import SQLAlchemyError

from backend.circuit_flow.config import get_settings
from backend.circuit_flow.db.engine import create_engine_from_url
from backend.circuit_flow.db.models import Document
from backend.circuit_flow.utils.logging import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_SEEDS_DIR = Path(__file__).parent / "seeds"


class SeedError(Exception):
    """A seed file could not be applied."""

    def __init__(self, seed_file: Path, reason: str) -> None:
        super().__init__(f"{seed_file.name}: {reason}")
        self.seed_file = seed_file


def discover_seed_files(seeds_dir: Path) -> list[Path]:
    """List .sql files in the directory, sorted by filename.

    Raises:
        FileNotFoundError: If the directory does not exist.
    """
    if not seeds_dir.is_dir():
        raise FileNotFoundError(f"Seeds directory not found: {seeds_dir}")
    return sorted((p for p in seeds_dir.iterdir() if p.suffix == ".sql"), key=lambda p: p.name)


def _execute_script(connection: Connection, sql: str) -> None:
    """Execute a multi-statement batch on the raw driver connection."""
    driver_connection = connection.connection.driver_connection
    if hasattr(driver_connection, "executescript"):
        # sqlite3 refuses multiple statements in execute()
        driver_connection.executescript(sql)
        return

    cursor = driver_connection.cursor()
    try:
        cursor.execute(sql)
    finally:
        cursor.close()


def apply_seed_file(engine: Engine, seed_file: Path) -> None:
    """Apply one seed file as a single statement batch.

    Raises:
        SeedError: If the file cannot be read or the batch fails.
    """
    try:
        sql = seed_file.read_text(encoding="utf-8")
    except OSError as e:
        raise SeedError(seed_file, f"unreadable ({e})") from e

    driver_error = engine.dialect.loaded_dbapi.Error
    try:
        with engine.begin() as connection:
            _execute_script(connection, sql)
    except (SQLAlchemyError, driver_error) as e:
        raise SeedError(seed_file, str(e)) from e


def apply_seed_files(engine: Engine, seed_files: Sequence[Path]) -> list[Path]:
    """Apply seed files in order, stopping at the first failure.

    Returns:
        Files applied (all of them on success)

    Raises:
        SeedError: On the first file that fails; later files are not applied.
    """
    applied: list[Path] = []
    for seed_file in seed_files:
        logger.info("Running seed: %s", seed_file.name)
        apply_seed_file(engine, seed_file)
        logger.info("Completed: %s", seed_file.name)
        applied.append(seed_file)
    return applied


def read_back_documents(engine: Engine) -> list[tuple[str, str, str]]:
    """Read the catalog back in API order as (id, title, type) tuples."""
    query = select(Document.id, Document.title, Document.type).order_by(
        Document.created_at.asc(), Document.id.asc()
    )
    with engine.connect() as connection:
        return [(row.id, row.title, row.type) for row in connection.execute(query)]


def run_seed(database_url: str, seeds_dir: Path) -> list[tuple[str, str, str]]:
    """Apply every seed file in the directory and verify the result.

    Returns:
        Documents present after seeding

    Raises:
        SeedError: If any seed file fails.
        FileNotFoundError: If the seeds directory is missing.
    """
    engine = create_engine_from_url(database_url)
    try:
        seed_files = discover_seed_files(seeds_dir)
        if not seed_files:
            logger.warning("No .sql files found in %s", seeds_dir)
        apply_seed_files(engine, seed_files)
        return read_back_documents(engine)
    finally:
        engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(description="Apply ordered SQL seed files.")
    parser.add_argument(
        "--seeds-dir",
        type=Path,
        default=DEFAULT_SEEDS_DIR,
        help="Directory containing .sql seed files (default: packaged seeds)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Connection string (default: DATABASE_URL setting)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point; returns the process exit status."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    database_url = args.database_url or settings.database_url
    logger.info("Seeding database from %s", args.seeds_dir)

    try:
        documents = run_seed(database_url, args.seeds_dir)
    except SeedError as e:
        logger.error("Seeding failed at %s: %s", e.seed_file.name, e)
        return 1
    except (FileNotFoundError, SQLAlchemyError) as e:
        logger.error("Seeding failed: %s", e)
        return 1

    logger.info("Database seeded successfully; %d document(s) present", len(documents))
    for document_id, title, doc_type in documents:
        logger.info("  - %s: %s (%s)", document_id, title, doc_type)
    return 0


if __name__ == "__main__":
    sys.exit(main())
