"""Selective sync engine: copy source files that are newer than their destination copy."""

import fnmatch
import logging
import shutil
import stat
from collections.abc import Iterable
from pathlib import Path

from winadmin_tools.sync.models import FileEntry, SyncResult

logger = logging.getLogger(__name__)


class SyncError(Exception):
    """Raised when a sync cannot start at all."""


def _matches(name: str, patterns: Iterable[str]) -> bool:
    # Windows file names are case-insensitive, so are the filters
    lowered = name.lower()
    return any(fnmatch.fnmatchcase(lowered, pattern.lower()) for pattern in patterns)


class SyncEngine:
    """Copies new and newer files from a source folder into a destination folder."""

    def list_source_files(self, source_dir: Path, patterns: Iterable[str] = ("*",)) -> list[Path]:
        """List files directly inside source_dir that match any pattern.

        Args:
            source_dir: Folder to enumerate. Subfolders are not descended into.
            patterns: Glob patterns such as "*.admx".

        Returns:
            Matching file paths sorted by name.

        Raises:
            SyncError: If the folder cannot be read.
        """
        patterns = tuple(patterns)
        try:
            children = [p for p in source_dir.iterdir() if p.is_file() and _matches(p.name, patterns)]
        except OSError as e:
            raise SyncError(f"Cannot read source folder {source_dir}: {e}") from e
        return sorted(children, key=lambda p: p.name.lower())

    def sync(
        self,
        source_dir: Path,
        dest_dir: Path,
        patterns: Iterable[str] = ("*",),
        dry_run: bool = False,
    ) -> SyncResult:
        """Copy every matching source file that is missing or older at the destination.

        A file is copied only when the destination copy is absent or the source
        modification time is strictly greater. Equal timestamps are skipped. A
        failure on one file is recorded and the remaining files are still
        processed.

        Args:
            source_dir: Folder to copy from.
            dest_dir: Folder to copy into. Must already exist.
            patterns: Glob patterns selecting which files take part.
            dry_run: If True, record what would be copied without copying.

        Returns:
            Per-file outcomes in enumeration order.

        Raises:
            SyncError: If the source folder cannot be enumerated.
        """
        result = SyncResult()
        source_files = self.list_source_files(Path(source_dir), patterns)
        logger.info(f"Found {len(source_files)} file(s) in {source_dir}")

        for source_path in source_files:
            try:
                self._sync_file(source_path, Path(dest_dir), result, dry_run=dry_run)
            except Exception as e:
                logger.error(f"Failed to sync {source_path.name}: {e}")
                result.add_failure(source_path.name, e)

        logger.info(f"Sync of {source_dir} complete: {result}")
        return result

    def _sync_file(
        self,
        source_path: Path,
        dest_dir: Path,
        result: SyncResult,
        dry_run: bool = False,
    ) -> None:
        entry = FileEntry.from_path(source_path)
        dest_path = dest_dir / entry.name

        try:
            dest_stat = dest_path.stat()
        except FileNotFoundError:
            dest_modified: int | None = None
        else:
            if not stat.S_ISREG(dest_stat.st_mode):
                raise IsADirectoryError(f"Destination {dest_path} is not a regular file")
            dest_modified = dest_stat.st_mtime_ns

        if dest_modified is not None and entry.modified <= dest_modified:
            logger.debug(f"Already current: {entry.name}")
            result.add_skip(entry.name)
            return

        reason = "missing at destination" if dest_modified is None else "newer at source"
        if dry_run:
            logger.info(f"[DRY RUN] Would copy {entry.name} ({reason})")
        else:
            shutil.copy2(entry.path, dest_path)
            logger.info(f"Copied {entry.name} ({reason}, modified {entry.modified_at:%Y-%m-%d %H:%M:%S})")
        result.add_updated(entry.name)
