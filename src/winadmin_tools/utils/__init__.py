"""Utility modules for winadmin-tools."""

from winadmin_tools.utils.logging import get_logger, setup_logging
from winadmin_tools.utils.storage import StorageManager

__all__ = ["get_logger", "setup_logging", "StorageManager"]
