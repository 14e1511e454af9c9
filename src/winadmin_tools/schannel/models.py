"""Models for SCHANNEL protocol audit results."""

from enum import Enum

from pydantic import BaseModel


class ProtocolState(str, Enum):
    """Configured state of one protocol role."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    UNDEFINED = "undefined"
    KEY_ABSENT = "key_absent"

    @property
    def label(self) -> str:
        return {
            ProtocolState.ENABLED: "Enabled",
            ProtocolState.DISABLED: "Disabled",
            ProtocolState.UNDEFINED: "Not set (OS default)",
            ProtocolState.KEY_ABSENT: "Key not present",
        }[self]


class ProtocolStatus(BaseModel):
    """Audit result for one (protocol, role) pair."""

    protocol: str
    role: str
    state: ProtocolState | None = None
    enabled_value: int | None = None
    disabled_by_default: bool | None = None
    error: str | None = None
