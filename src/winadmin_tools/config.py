"""Configuration management for winadmin-tools."""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from winadmin_tools.utils.storage import StorageManager


def default_source_dir() -> Path:
    """Local PolicyDefinitions folder of this machine."""
    system_root = os.environ.get("SystemRoot", r"C:\Windows")
    return Path(system_root) / "PolicyDefinitions"


def default_central_store() -> Path | None:
    """Central Store path for the current user's DNS domain, if joined to one."""
    domain = os.environ.get("USERDNSDOMAIN")
    if not domain:
        return None
    return Path(f"\\\\{domain}\\SYSVOL\\{domain}\\Policies\\PolicyDefinitions")


class TemplateSyncSettings(BaseModel):
    """Settings for the policy template updater."""

    model_config = ConfigDict(extra="ignore")

    source_dir: Path = Field(default_factory=default_source_dir)
    central_store: Path | None = Field(default_factory=default_central_store)
    languages: list[str] = Field(default_factory=lambda: ["en-US"])
    backup_dir: Path | None = None
    log_dir: Path | None = None

    @field_validator("languages")
    @classmethod
    def validate_languages(cls, v: list[str]) -> list[str]:
        cleaned = [lang.strip() for lang in v if lang and lang.strip()]
        for lang in cleaned:
            if "/" in lang or "\\" in lang:
                raise ValueError(f"Language folder must be a plain name, got {lang!r}")
        return cleaned


class Config:
    """Manages application settings."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize configuration.

        Args:
            config_dir: Directory for storing configuration.

        Raises:
            ValueError: If the stored settings are invalid.
        """
        self.storage = StorageManager(config_dir)
        self.settings = self._load()

    def _load(self) -> TemplateSyncSettings:
        data = self.storage.load_settings()
        try:
            return TemplateSyncSettings.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid settings in {self.storage.settings_file}: {e}") from e

    @property
    def source_dir(self) -> Path:
        return self.settings.source_dir

    @property
    def central_store(self) -> Path | None:
        return self.settings.central_store

    @property
    def languages(self) -> list[str]:
        return self.settings.languages

    @property
    def backup_dir(self) -> Path:
        """Root folder for Central Store backups."""
        return self.settings.backup_dir or self.storage.config_dir / "backups"

    @property
    def log_dir(self) -> Path:
        """Folder for per-run sync reports."""
        return self.settings.log_dir or self.storage.config_dir / "logs"

    def update_settings(self, **changes: Any) -> None:
        """Validate and persist setting overrides.

        Args:
            **changes: Setting names and their new values.

        Raises:
            ValueError: If a change produces invalid settings.
        """
        data = self.storage.load_settings()
        data.update(
            {key: str(value) if isinstance(value, Path) else value for key, value in changes.items()}
        )
        try:
            self.settings = TemplateSyncSettings.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid settings: {e}") from e
        self.storage.save_settings(data)
