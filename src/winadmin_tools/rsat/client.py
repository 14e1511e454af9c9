"""PowerShell client for Windows capabilities."""

import json
import logging

from winadmin_tools.rsat.models import Capability
from winadmin_tools.utils.confirmation import CommandRunner, run_command

logger = logging.getLogger(__name__)


class CapabilityError(RuntimeError):
    """Raised when a capability command fails."""


def _quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class CapabilityClient:
    """Lists and installs capabilities via Get/Add-WindowsCapability."""

    POWERSHELL = ("powershell.exe", "-NoProfile", "-NonInteractive", "-Command")

    def __init__(self, runner: CommandRunner | None = None) -> None:
        """Initialize capability client.

        Args:
            runner: Executes PowerShell commands. Defaults to a plain subprocess runner.
        """
        self.runner = runner or run_command

    def _run(self, script: str) -> str:
        completed = self.runner([*self.POWERSHELL, script])
        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            raise CapabilityError(stderr or f"PowerShell exited with code {completed.returncode}")
        return completed.stdout or ""

    def list_capabilities(self, pattern: str = "Rsat*") -> list[Capability]:
        """List capabilities whose name matches pattern.

        Args:
            pattern: Wildcard name filter.

        Returns:
            Capabilities sorted by name.

        Raises:
            CapabilityError: If PowerShell fails or prints invalid JSON.
        """
        script = (
            f"Get-WindowsCapability -Online -Name {_quote(pattern)} | "
            "Select-Object Name, @{Name='State';Expression={$_.State.ToString()}}, DisplayName | "
            "ConvertTo-Json -Compress"
        )
        output = self._run(script).strip()
        if not output:
            return []

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise CapabilityError(f"Unexpected PowerShell output: {e}") from e

        # ConvertTo-Json emits a bare object for a single result
        if isinstance(data, dict):
            data = [data]

        capabilities = [Capability.model_validate(item) for item in data]
        logger.info(f"Found {len(capabilities)} capabilities matching {pattern}")
        return sorted(capabilities, key=lambda c: c.name)

    def install(self, name: str) -> None:
        """Install one capability.

        Raises:
            CapabilityError: If the install command fails.
        """
        logger.info(f"Installing capability {name}")
        self._run(f"Add-WindowsCapability -Online -Name {_quote(name)} | Out-Null")
