"""Read-only access to the Windows registry."""

import logging
import sys
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class RegistryUnavailableError(RuntimeError):
    """Raised when the Windows registry cannot be used on this platform."""


class RegistryReader(Protocol):
    """Minimal read interface used by the audit."""

    def key_exists(self, path: str) -> bool: ...

    def get_value(self, path: str, name: str) -> Any | None: ...


class WindowsRegistry:
    """RegistryReader over HKEY_LOCAL_MACHINE using winreg."""

    def __init__(self) -> None:
        if sys.platform != "win32":
            raise RegistryUnavailableError("The Windows registry is only available on Windows")

        import winreg

        self._winreg = winreg
        self._hive = winreg.HKEY_LOCAL_MACHINE

    def key_exists(self, path: str) -> bool:
        try:
            with self._winreg.OpenKey(self._hive, path):
                return True
        except FileNotFoundError:
            return False

    def get_value(self, path: str, name: str) -> Any | None:
        """Return a value's data, or None when the key or value is missing."""
        try:
            with self._winreg.OpenKey(self._hive, path) as key:
                value, _ = self._winreg.QueryValueEx(key, name)
                return value
        except FileNotFoundError:
            return None
