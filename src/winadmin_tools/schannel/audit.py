"""SCHANNEL TLS/SSL protocol enablement audit."""

import logging
from collections.abc import Sequence

from winadmin_tools.schannel.models import ProtocolState, ProtocolStatus
from winadmin_tools.schannel.registry import RegistryReader

logger = logging.getLogger(__name__)

PROTOCOLS_KEY = r"SYSTEM\CurrentControlSet\Control\SecurityProviders\SCHANNEL\Protocols"
PROTOCOLS = ("SSL 2.0", "SSL 3.0", "TLS 1.0", "TLS 1.1", "TLS 1.2", "TLS 1.3")
ROLES = ("Client", "Server")


def protocol_key(protocol: str, role: str) -> str:
    return f"{PROTOCOLS_KEY}\\{protocol}\\{role}"


def read_protocol_status(reader: RegistryReader, protocol: str, role: str) -> ProtocolStatus:
    """Read the Enabled and DisabledByDefault values of one protocol role.

    Args:
        reader: Registry access.
        protocol: Protocol folder name, e.g. "TLS 1.2".
        role: "Client" or "Server".

    Returns:
        Status of the pair. The state is KEY_ABSENT if the role key is
        missing, UNDEFINED if it has no Enabled value.
    """
    path = protocol_key(protocol, role)
    status = ProtocolStatus(protocol=protocol, role=role)

    if not reader.key_exists(path):
        status.state = ProtocolState.KEY_ABSENT
        return status

    enabled = reader.get_value(path, "Enabled")
    if enabled is None:
        status.state = ProtocolState.UNDEFINED
    else:
        status.enabled_value = int(enabled)
        status.state = ProtocolState.ENABLED if status.enabled_value != 0 else ProtocolState.DISABLED

    disabled_by_default = reader.get_value(path, "DisabledByDefault")
    if disabled_by_default is not None:
        status.disabled_by_default = int(disabled_by_default) != 0

    return status


def audit_protocols(
    reader: RegistryReader,
    protocols: Sequence[str] = PROTOCOLS,
    roles: Sequence[str] = ROLES,
) -> list[ProtocolStatus]:
    """Report the state of every (protocol, role) pair in list order.

    A read error on one pair is recorded on that pair and the walk continues.
    """
    results: list[ProtocolStatus] = []
    for protocol in protocols:
        for role in roles:
            try:
                status = read_protocol_status(reader, protocol, role)
            except Exception as e:
                logger.error(f"Failed to read {protocol} {role}: {e}")
                status = ProtocolStatus(protocol=protocol, role=role, error=str(e))
            else:
                logger.debug(f"{protocol} {role}: {status.state.value}")
            results.append(status)
    return results
