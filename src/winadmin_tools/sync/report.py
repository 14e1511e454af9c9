"""Textual report of a sync run."""

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from winadmin_tools.sync.models import SyncResult, SyncStatus

logger = logging.getLogger(__name__)


def build_report(result: SyncResult) -> list[str]:
    """One line per file followed by a count summary."""
    lines: list[str] = []
    for name, outcome in result.outcomes.items():
        if outcome.status == SyncStatus.UPDATED:
            lines.append(f"Updated: {name}")
        elif outcome.status == SyncStatus.SKIPPED:
            lines.append(f"Skipped (already current): {name}")
        else:
            lines.append(f"Failed: {name} - {outcome.reason}")
    lines.append(str(result))
    return lines


def write_report(lines: Sequence[str], log_dir: Path, now: datetime | None = None) -> Path:
    """Persist report lines to a timestamped file and echo them to the log.

    Args:
        lines: Report lines.
        log_dir: Folder for report files. Created if missing.
        now: Timestamp for the file name. Defaults to the current time.

    Returns:
        Path of the written report.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    report_file = log_dir / f"template-sync_{stamp}.log"

    with open(report_file, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
            logger.info(line)

    return report_file
