"""Models for selective file sync."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class SyncStatus(str, Enum):
    """Outcome of syncing one file."""

    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Category of a per-file failure."""

    PERMISSION_DENIED = "permission_denied"
    IO_FAILURE = "io_failure"

    @classmethod
    def from_exception(cls, error: BaseException) -> "FailureKind":
        if isinstance(error, PermissionError):
            return cls.PERMISSION_DENIED
        return cls.IO_FAILURE


class FileEntry(BaseModel):
    """A source file found during enumeration."""

    name: str
    path: Path
    modified: int  # st_mtime_ns

    @property
    def modified_at(self) -> datetime:
        return datetime.fromtimestamp(self.modified / 1_000_000_000)

    @classmethod
    def from_path(cls, path: Path) -> "FileEntry":
        return cls(name=path.name, path=path.absolute(), modified=path.stat().st_mtime_ns)


@dataclass(frozen=True)
class FileOutcome:
    """Recorded result for one file."""

    status: SyncStatus
    reason: str | None = None
    kind: FailureKind | None = None


class SyncResult:
    """Per-file outcomes of a sync run, in enumeration order."""

    def __init__(self) -> None:
        """Initialize sync result."""
        self.outcomes: dict[str, FileOutcome] = {}

    def add_updated(self, name: str) -> None:
        """Record a copied file."""
        self.outcomes[name] = FileOutcome(SyncStatus.UPDATED)

    def add_skip(self, name: str) -> None:
        """Record a file that was already current."""
        self.outcomes[name] = FileOutcome(SyncStatus.SKIPPED)

    def add_failure(self, name: str, error: BaseException | str) -> None:
        """Record a failed file with the underlying error text."""
        if isinstance(error, BaseException):
            outcome = FileOutcome(SyncStatus.FAILED, str(error), FailureKind.from_exception(error))
        else:
            outcome = FileOutcome(SyncStatus.FAILED, error, FailureKind.IO_FAILURE)
        self.outcomes[name] = outcome

    def merge(self, other: "SyncResult", prefix: str = "") -> None:
        """Append another result's outcomes, optionally under a folder prefix."""
        for name, outcome in other.outcomes.items():
            key = f"{prefix}/{name}" if prefix else name
            self.outcomes[key] = outcome

    def names_with(self, status: SyncStatus) -> list[str]:
        """Names of the files recorded with the given status, in enumeration order."""
        return [name for name, outcome in self.outcomes.items() if outcome.status == status]

    @property
    def files_updated(self) -> int:
        return len(self.names_with(SyncStatus.UPDATED))

    @property
    def files_skipped(self) -> int:
        return len(self.names_with(SyncStatus.SKIPPED))

    @property
    def files_failed(self) -> int:
        return len(self.names_with(SyncStatus.FAILED))

    @property
    def errors(self) -> list[str]:
        """Failure messages as "name: reason"."""
        return [
            f"{name}: {outcome.reason}"
            for name, outcome in self.outcomes.items()
            if outcome.status == SyncStatus.FAILED
        ]

    def __len__(self) -> int:
        return len(self.outcomes)

    def __str__(self) -> str:
        """String representation of results."""
        return (
            f"Updated: {self.files_updated}, "
            f"Skipped: {self.files_skipped}, "
            f"Failed: {self.files_failed}"
        )
