"""Project configuration stored in .issuetrac/config.json"""

import json
import os
from pathlib import Path
from typing import Any, Dict

import structlog

PROJECT_DIR = Path(".issuetrac")
CONFIG_FILE = PROJECT_DIR / "config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "database_url": "sqlite:///.issuetrac/database.db",
    "log_level": "INFO",
    "default_label_color": "#000000",
}


def get_project_config() -> Dict[str, Any]:
    """Get project configuration, falling back to defaults for missing keys"""
    config = dict(DEFAULT_CONFIG)
    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE, "r") as f:
                config.update(json.load(f))
        except (OSError, ValueError) as e:
            # Plain structlog logger: configuring logging reads this file
            structlog.get_logger("issuetrac.config").warning(
                "config_unreadable", path=str(CONFIG_FILE), error=str(e)
            )
    return config


def save_project_config(config: Dict[str, Any]) -> None:
    """Save project configuration to .issuetrac/config.json"""
    CONFIG_FILE.parent.mkdir(exist_ok=True)
    with open(CONFIG_FILE, "w") as f:
        json.dump(config, f, indent=2)


def get_database_url() -> str:
    """Database URL; ISSUETRAC_DATABASE_URL wins over the config file"""
    return os.getenv("ISSUETRAC_DATABASE_URL") or get_project_config()["database_url"]


def get_log_level() -> str:
    return os.getenv("ISSUETRAC_LOG_LEVEL") or get_project_config()["log_level"]


def get_default_label_color() -> str:
    return get_project_config()["default_label_color"]


def is_development() -> bool:
    return os.getenv("ISSUETRAC_ENV", "production") == "development"
