"""Group Policy template updater for the domain Central Store."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from winadmin_tools.config import Config
from winadmin_tools.sync.backup import backup_directory
from winadmin_tools.sync.engine import SyncEngine
from winadmin_tools.sync.models import SyncResult

logger = logging.getLogger(__name__)

ADMX_PATTERNS = ("*.admx",)
ADML_PATTERNS = ("*.adml",)


@dataclass
class UpdateRun:
    """Outcome of one template update."""

    result: SyncResult
    backup_path: Path | None = None


class TemplateUpdater:
    """Backs up the Central Store and copies newer ADMX/ADML templates into it."""

    def __init__(
        self,
        config: Config,
        engine: SyncEngine | None = None,
        source_dir: Path | None = None,
        central_store: Path | None = None,
    ) -> None:
        """Initialize template updater.

        Args:
            config: Application configuration.
            engine: Sync engine. A default engine is created if omitted.
            source_dir: Overrides the configured template source.
            central_store: Overrides the configured Central Store.

        Raises:
            ValueError: If no Central Store is configured or detected.
        """
        self.config = config
        self.engine = engine or SyncEngine()
        self.source_dir = Path(source_dir or config.source_dir)
        store = central_store or config.central_store
        if store is None:
            raise ValueError(
                "Central Store path is not configured and no domain was detected. "
                "Run 'winadmin-tools configure' or pass --dest."
            )
        self.central_store = Path(store)

    def backup(self) -> Path | None:
        """Back up the current Central Store contents."""
        return backup_directory(self.central_store, self.config.backup_dir)

    def run(self, dry_run: bool = False, backup: bool = True) -> UpdateRun:
        """Run the full update.

        Args:
            dry_run: If True, report what would change without writing.
            backup: If False, skip the pre-sync backup.

        Returns:
            Merged results for ADMX files and every language folder.

        Raises:
            BackupError: If the backup fails. Nothing is synced in that case.
            SyncError: If the source folder cannot be read.
        """
        logger.info(f"Updating templates from {self.source_dir} to {self.central_store}")
        run = UpdateRun(result=SyncResult())

        if backup and not dry_run:
            run.backup_path = self.backup()
            if run.backup_path:
                self.config.storage.set_last_backup(run.backup_path)

        if not dry_run:
            try:
                self.central_store.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                # Each file then fails on its own and lands in the report
                logger.error(f"Cannot create Central Store {self.central_store}: {e}")
        run.result.merge(
            self.engine.sync(self.source_dir, self.central_store, ADMX_PATTERNS, dry_run=dry_run)
        )

        for language in self.config.languages:
            source_lang = self.source_dir / language
            if not source_lang.is_dir():
                logger.warning(f"Language folder {source_lang} not found, skipping")
                continue

            dest_lang = self.central_store / language
            if not dry_run:
                try:
                    dest_lang.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    logger.error(f"Cannot create language folder {dest_lang}: {e}")
                    run.result.add_failure(f"{language}/", e)
                    continue
            run.result.merge(
                self.engine.sync(source_lang, dest_lang, ADML_PATTERNS, dry_run=dry_run),
                prefix=language,
            )

        if not dry_run:
            self.config.storage.set_last_sync_date(datetime.now())

        logger.info(f"Template update complete: {run.result}")
        return run
