"""Configuration from environment."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


def get_host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip()


def get_port() -> int:
    try:
        return int(os.environ.get("PORT", "8000"))
    except ValueError:
        return 8000


def get_log_level() -> str:
    """Root log level. Default: INFO."""
    return os.environ.get("BASELINE_BUDDY_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def get_default_config_path() -> str:
    """Config file used when a request names none. Empty means discovery."""
    return os.environ.get("BASELINE_BUDDY_CONFIG", "").strip()


def get_workspace_root() -> str:
    """Directory searched for baseline.config.json and friends. Empty means cwd."""
    return os.environ.get("BASELINE_BUDDY_ROOT", "").strip()


def configure_logging() -> None:
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
