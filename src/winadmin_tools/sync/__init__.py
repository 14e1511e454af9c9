"""Selective file sync and the policy template updater."""

from winadmin_tools.sync.backup import BackupError, backup_directory
from winadmin_tools.sync.engine import SyncEngine, SyncError
from winadmin_tools.sync.models import FailureKind, FileEntry, FileOutcome, SyncResult, SyncStatus
from winadmin_tools.sync.report import build_report, write_report
from winadmin_tools.sync.updater import TemplateUpdater, UpdateRun

__all__ = [
    "BackupError",
    "FailureKind",
    "FileEntry",
    "FileOutcome",
    "SyncEngine",
    "SyncError",
    "SyncResult",
    "SyncStatus",
    "TemplateUpdater",
    "UpdateRun",
    "backup_directory",
    "build_report",
    "write_report",
]
