"""Timestamped backups of a folder tree before it is modified."""

import logging
import shutil
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


class BackupError(Exception):
    """Raised when a backup copy could not be completed."""


def backup_directory(
    source: Path,
    backup_root: Path,
    label: str = "PolicyDefinitions",
    now: datetime | None = None,
) -> Path | None:
    """Copy the whole source tree into a new timestamped folder under backup_root.

    Args:
        source: Folder to back up.
        backup_root: Folder that holds all backups.
        label: Prefix of the backup folder name.
        now: Timestamp to use for the folder name. Defaults to the current time.

    Returns:
        Path of the created backup, or None if source does not exist.

    Raises:
        BackupError: If the copy fails.
    """
    if not source.exists():
        logger.warning(f"Nothing to back up, {source} does not exist")
        return None

    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    target = backup_root / f"{label}_{stamp}"
    counter = 1
    while target.exists():
        target = backup_root / f"{label}_{stamp}_{counter}"
        counter += 1

    logger.info(f"Backing up {source} to {target}")
    try:
        backup_root.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, target)
    except (OSError, shutil.Error) as e:
        raise BackupError(f"Backup of {source} to {target} failed: {e}") from e

    logger.info(f"Backup complete: {target}")
    return target
