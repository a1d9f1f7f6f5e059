"""Database migration handling with automatic upgrade on startup"""

import logging
import shutil
from pathlib import Path
from datetime import datetime
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url

from ..config import get_database_url, get_project_config, save_project_config

logger = logging.getLogger(__name__)

def get_database_path() -> Optional[Path]:
    """Filesystem path of the SQLite database, None for in-memory or non-SQLite URLs"""
    url = make_url(get_database_url())
    if not url.drivername.startswith("sqlite") or not url.database or url.database == ":memory:":
        return None
    return Path(url.database)

def get_migration_config() -> Config:
    """Get Alembic configuration"""
    # This file is in issuetrack/storage/, so we go up one level to get to issuetrack/
    package_root = Path(__file__).parent.parent

    alembic_ini = package_root / "alembic.ini"
    migrations_dir = package_root / "migrations"

    if not alembic_ini.exists():
        raise FileNotFoundError(
            f"alembic.ini not found at {alembic_ini}. "
            "This indicates an incomplete installation. "
            "Please reinstall issuetrack."
        )

    if not migrations_dir.exists():
        raise FileNotFoundError(
            f"migrations directory not found at {migrations_dir}. "
            "This indicates an incomplete installation. "
            "Please reinstall issuetrack."
        )

    alembic_cfg = Config(str(alembic_ini))
    alembic_cfg.set_main_option("script_location", str(migrations_dir))
    alembic_cfg.set_main_option("sqlalchemy.url", get_database_url())
    return alembic_cfg

def needs_migration() -> bool:
    """Check if database needs migration"""
    db_path = get_database_path()
    if db_path is not None and not db_path.exists():
        return True  # New database needs initial migration
    
    engine = create_engine(get_database_url())
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn)
            current_rev = context.get_current_revision()
        
        script_dir = ScriptDirectory.from_config(get_migration_config())
        head_rev = script_dir.get_current_head()
        
        return current_rev != head_rev
    finally:
        engine.dispose()

def backup_database() -> Optional[Path]:
    """Create backup before migration"""
    db_path = get_database_path()
    if db_path is None or not db_path.exists():
        return None
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.name}.backup.{timestamp}")
    try:
        shutil.copy2(db_path, backup_path)
    except OSError as e:
        logger.warning("Could not create backup of %s: %s", db_path, e)
        return None
    return backup_path

def run_migrations():
    """Run any pending migrations"""
    alembic_cfg = get_migration_config()
    command.upgrade(alembic_cfg, "head")

def initialize_database():
    """Initialize database on first run or run migrations on upgrade"""
    # Ensure config exists
    config = get_project_config()
    save_project_config(config)
    
    db_path = get_database_path()
    if db_path is not None:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    
    if db_path is not None and not db_path.exists():
        # Fresh installation - create latest schema
        logger.info("Initializing new issuetrack database at %s", db_path)
        run_migrations()
        logger.info("Database initialized successfully")
    elif needs_migration():
        logger.info("Database migration required")
        backup_path = backup_database()
        try:
            run_migrations()
        except Exception:
            logger.exception("Migration failed")
            if backup_path:
                logger.error("Database backup available at: %s", backup_path)
            raise
        if backup_path:
            logger.info("Migration successful, backup created at: %s", backup_path)
        else:
            logger.info("Migration successful")
    else:
        logger.info("Database is up to date")
