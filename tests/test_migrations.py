"""Test database migration and configuration functionality"""

import json

import pytest
from sqlalchemy import create_engine, inspect, text

from issuetrack.config import (
    get_database_url,
    get_log_level,
    get_project_config,
    get_storage_backend,
    save_project_config,
)
from issuetrack.storage.migrations import (
    backup_database,
    get_database_path,
    get_migration_config,
    initialize_database,
    needs_migration,
)


class TestProjectConfig:
    """Test .issuetrack/config.json handling"""

    def test_project_config_defaults(self, temp_dir):
        """Test default project configuration"""
        config = get_project_config()
        assert config["storage"] == "memory"
        assert config["database_url"] == "sqlite:///.issuetrack/database.db"
        assert config["log_level"] == "INFO"

    def test_project_config_save_load(self, temp_dir):
        """Test saving and loading project configuration"""
        save_project_config({"storage": "sqlite", "log_level": "debug"})

        config = get_project_config()
        assert config["storage"] == "sqlite"
        assert get_storage_backend() == "sqlite"
        assert get_log_level() == "DEBUG"
        # Missing keys fall back to defaults
        assert config["database_url"] == "sqlite:///.issuetrack/database.db"

    def test_unreadable_config_uses_defaults(self, temp_dir):
        """Test corrupt config file falls back to defaults"""
        (temp_dir / ".issuetrack").mkdir()
        (temp_dir / ".issuetrack" / "config.json").write_text("{broken")

        assert get_project_config()["storage"] == "memory"

    def test_environment_overrides(self, temp_dir, monkeypatch):
        """Test environment variables win over the config file"""
        save_project_config({"storage": "memory"})
        monkeypatch.setenv("ISSUETRACK_STORAGE", "sqlite")
        monkeypatch.setenv("ISSUETRACK_DATABASE_URL", "sqlite:///other.db")
        monkeypatch.setenv("ISSUETRACK_LOG_LEVEL", "warning")

        assert get_storage_backend() == "sqlite"
        assert get_database_url() == "sqlite:///other.db"
        assert get_log_level() == "WARNING"

    def test_unknown_storage_backend(self, temp_dir, monkeypatch):
        """Test unknown backend is rejected"""
        monkeypatch.setenv("ISSUETRACK_STORAGE", "postgres")
        with pytest.raises(ValueError, match="Unknown storage backend"):
            get_storage_backend()


class TestMigrationSystem:
    """Test the automatic migration system"""

    def test_database_path(self, temp_dir, monkeypatch):
        """Test database path derived from the URL"""
        assert str(get_database_path()) == ".issuetrack/database.db"

        monkeypatch.setenv("ISSUETRACK_DATABASE_URL", "sqlite://")
        assert get_database_path() is None

    def test_migration_config(self, temp_dir):
        """Test alembic config points at the packaged migrations"""
        config = get_migration_config()
        assert config.get_main_option("script_location").endswith("migrations")
        assert config.get_main_option("sqlalchemy.url") == get_database_url()

    def test_needs_migration_no_database(self, temp_dir):
        """Test migration needed when no database exists"""
        assert needs_migration() == True

    def test_backup_database_nonexistent(self, temp_dir):
        """Test backup when database doesn't exist"""
        assert backup_database() is None

    def test_initialize_database(self, sqlite_db):
        """Test fresh initialization creates schema and seeds users"""
        assert sqlite_db.exists()
        assert needs_migration() == False

        engine = create_engine(get_database_url())
        try:
            tables = set(inspect(engine).get_table_names())
            assert {"users", "issues", "alembic_version"} <= tables

            with engine.connect() as conn:
                users = conn.execute(text("SELECT id, name FROM users ORDER BY id")).all()
            assert [tuple(u) for u in users] == [(1, "김개발"), (2, "이디자인"), (3, "박기획")]
        finally:
            engine.dispose()

        config = json.loads((sqlite_db.parent / "config.json").read_text())
        assert config["database_url"] == "sqlite:///.issuetrack/database.db"

    def test_initialize_database_is_repeatable(self, sqlite_db):
        """Test running initialization twice keeps data and makes no backup"""
        initialize_database()

        assert needs_migration() == False
        assert list(sqlite_db.parent.glob("database.db.backup.*")) == []

    def test_backup_database_exists(self, sqlite_db):
        """Test backup when database exists"""
        backup_path = backup_database()

        assert backup_path is not None
        assert backup_path.exists()
        assert "backup" in backup_path.name
        assert backup_path.read_bytes() == sqlite_db.read_bytes()
