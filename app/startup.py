"""Startup validation and configuration checks."""

import logging
from pathlib import Path

from .config import get_default_config_path, get_workspace_root

logger = logging.getLogger(__name__)


def validate_config() -> None:
    """Warn if the configured config file or workspace root does not exist."""
    config_path = get_default_config_path()
    if config_path and not Path(config_path).is_file():
        logger.warning("BASELINE_BUDDY_CONFIG points to a missing file: %s", config_path)
    root = get_workspace_root()
    if root and not Path(root).is_dir():
        logger.warning("BASELINE_BUDDY_ROOT is not a directory: %s", root)
