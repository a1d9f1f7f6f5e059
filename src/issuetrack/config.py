"""Project configuration stored in .issuetrack/config.json"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(".issuetrack")
CONFIG_FILE = CONFIG_DIR / "config.json"

STORAGE_BACKENDS = ("memory", "sqlite")

DEFAULT_CONFIG = {
    "storage": "memory",
    "database_url": "sqlite:///.issuetrack/database.db",
    "log_level": "INFO",
}

def get_project_config() -> dict:
    """Get project configuration, falling back to defaults for missing keys"""
    config = dict(DEFAULT_CONFIG)
    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE, "r") as f:
                config.update(json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read config %s: %s", CONFIG_FILE, e)
    return config

def save_project_config(config: dict):
    """Save project configuration to .issuetrack/config.json"""
    CONFIG_DIR.mkdir(exist_ok=True)
    
    with open(CONFIG_FILE, "w") as f:
        json.dump(config, f, indent=2)

def get_storage_backend() -> str:
    """Storage backend name; ISSUETRACK_STORAGE overrides the config file"""
    backend = os.getenv("ISSUETRACK_STORAGE") or get_project_config()["storage"]
    if backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown storage backend {backend!r}, expected one of {', '.join(STORAGE_BACKENDS)}"
        )
    return backend

def get_database_url() -> str:
    """Database URL for the sqlite backend"""
    return os.getenv("ISSUETRACK_DATABASE_URL") or get_project_config()["database_url"]

def get_log_level() -> str:
    return (os.getenv("ISSUETRACK_LOG_LEVEL") or get_project_config()["log_level"]).upper()
