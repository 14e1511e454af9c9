"""Models for Windows capabilities reported by PowerShell."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Capability(BaseModel):
    """A Windows on-demand capability."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    state: str = Field(default="Unknown", alias="State")
    display_name: str = Field(default="", alias="DisplayName")

    @field_validator("display_name", mode="before")
    @classmethod
    def empty_display_name(cls, v: str | None) -> str:
        return v or ""

    @property
    def is_installed(self) -> bool:
        return self.state == "Installed"

    @property
    def label(self) -> str:
        """Display name when known, otherwise the capability name."""
        return self.display_name or self.name


@dataclass
class InstallResult:
    """Outcome of installing a set of capabilities."""

    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"Installed: {len(self.succeeded)}, Failed: {len(self.failed)}"
