"""Settings and state storage for winadmin-tools."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml


class StorageManager:
    """Manages settings and run state on disk."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize storage manager.

        Args:
            config_dir: Directory to store configuration. Defaults to ~/.winadmin-tools/
        """
        self.config_dir = config_dir or Path.home() / ".winadmin-tools"
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.settings_file = self.config_dir / "settings.yaml"
        self.state_file = self.config_dir / "state.json"

    def load_settings(self) -> dict[str, Any]:
        """Load user settings.

        Returns:
            Settings dictionary, empty if no settings file exists.

        Raises:
            ValueError: If the settings file is not valid YAML or not a mapping.
        """
        if not self.settings_file.exists():
            return {}

        with open(self.settings_file, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid settings file {self.settings_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {self.settings_file} must contain a mapping")
        return data

    def save_settings(self, settings: dict[str, Any]) -> None:
        """Save user settings.

        Args:
            settings: Settings to save.
        """
        with open(self.settings_file, "w", encoding="utf-8") as f:
            yaml.dump(settings, f, default_flow_style=False, sort_keys=False)

    def load_state(self) -> dict[str, Any]:
        """Load run state.

        Returns:
            State dictionary with last sync timestamp, etc.
        """
        if self.state_file.exists():
            with open(self.state_file, encoding="utf-8") as f:
                return json.load(f)
        return {}

    def save_state(self, state: dict[str, Any]) -> None:
        """Save run state.

        Args:
            state: State dictionary to save.
        """
        with open(self.state_file, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2)

    def get_last_sync_date(self) -> datetime | None:
        """Get the date of the last completed template sync.

        Returns:
            Last sync datetime or None if never synced.
        """
        state = self.load_state()
        if "last_sync_date" in state:
            return datetime.fromisoformat(state["last_sync_date"])
        return None

    def set_last_sync_date(self, date: datetime) -> None:
        """Set the last completed template sync date.

        Args:
            date: The synchronization datetime.
        """
        state = self.load_state()
        state["last_sync_date"] = date.isoformat()
        self.save_state(state)

    def get_last_backup(self) -> Path | None:
        """Get the path of the most recent Central Store backup."""
        state = self.load_state()
        if state.get("last_backup"):
            return Path(state["last_backup"])
        return None

    def set_last_backup(self, path: Path) -> None:
        """Record the path of the most recent Central Store backup."""
        state = self.load_state()
        state["last_backup"] = str(path)
        self.save_state(state)
