"""Database migration handling with automatic upgrade on startup"""

import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from ..config import PROJECT_DIR, get_database_url, get_project_config, save_project_config
from ..logging import get_logger
from .database import build_engine

logger = get_logger("issuetrac.migrations")


def get_migration_config() -> Config:
    """Get Alembic configuration"""
    # This file is in issuetrac/storage/; alembic.ini and migrations/ sit in issuetrac/
    package_root = Path(__file__).parent.parent

    alembic_ini = package_root / "alembic.ini"
    migrations_dir = package_root / "migrations"

    if not alembic_ini.exists():
        raise FileNotFoundError(
            f"alembic.ini not found at {alembic_ini}. "
            "This indicates an incomplete installation. "
            "Please reinstall issuetrac."
        )

    if not migrations_dir.exists():
        raise FileNotFoundError(
            f"migrations directory not found at {migrations_dir}. "
            "This indicates an incomplete installation. "
            "Please reinstall issuetrac."
        )

    alembic_cfg = Config(str(alembic_ini))
    alembic_cfg.set_main_option("script_location", str(migrations_dir))
    alembic_cfg.set_main_option("sqlalchemy.url", get_database_url())
    return alembic_cfg


def get_sqlite_path() -> Optional[Path]:
    """Path of the SQLite database file, or None for other backends"""
    url = make_url(get_database_url())
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


def needs_migration() -> bool:
    """Check if database needs migration"""
    db_path = get_sqlite_path()
    if db_path is not None and not db_path.exists():
        return True  # New database needs initial migration

    engine = build_engine()
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn)
            current_rev = context.get_current_revision()

        script_dir = ScriptDirectory.from_config(get_migration_config())
        head_rev = script_dir.get_current_head()
        return current_rev != head_rev
    except SQLAlchemyError as e:
        logger.warning("migration_status_unknown", error=str(e))
        return True  # Assume migration needed if we can't check
    finally:
        engine.dispose()


def backup_database() -> Optional[Path]:
    """Create backup of a SQLite database before migration"""
    db_path = get_sqlite_path()
    if db_path is None or not db_path.exists():
        return None
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.name}.backup.{timestamp}")
    try:
        shutil.copy2(db_path, backup_path)
    except OSError as e:
        logger.warning("database_backup_failed", path=str(db_path), error=str(e))
        return None
    return backup_path


def run_migrations() -> None:
    """Run any pending migrations"""
    command.upgrade(get_migration_config(), "head")


def initialize_database() -> None:
    """Initialize database on first run or run migrations on upgrade"""
    PROJECT_DIR.mkdir(exist_ok=True)

    # Ensure config exists
    save_project_config(get_project_config())

    db_path = get_sqlite_path()
    if db_path is not None:
        db_path.parent.mkdir(parents=True, exist_ok=True)

    if db_path is not None and not db_path.exists():
        # Fresh installation - create latest schema
        logger.info("database_initializing", path=str(db_path))
        run_migrations()
        logger.info("database_initialized")
    elif needs_migration():
        logger.info("database_migration_required")
        backup_path = backup_database()
        try:
            run_migrations()
        except Exception as e:
            logger.error(
                "database_migration_failed",
                error=str(e),
                backup=str(backup_path) if backup_path else None,
            )
            raise
        logger.info("database_migrated", backup=str(backup_path) if backup_path else None)
    else:
        logger.info("database_up_to_date")


async def initialize_database_async() -> None:
    """Async wrapper for database initialization"""
    initialize_database()
