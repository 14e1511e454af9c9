"""SCHANNEL protocol audit."""

from winadmin_tools.schannel.audit import PROTOCOLS, ROLES, audit_protocols, read_protocol_status
from winadmin_tools.schannel.models import ProtocolState, ProtocolStatus
from winadmin_tools.schannel.registry import RegistryReader, RegistryUnavailableError, WindowsRegistry

__all__ = [
    "PROTOCOLS",
    "ROLES",
    "ProtocolState",
    "ProtocolStatus",
    "RegistryReader",
    "RegistryUnavailableError",
    "WindowsRegistry",
    "audit_protocols",
    "read_protocol_status",
]
