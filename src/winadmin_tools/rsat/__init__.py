"""RSAT capability installer."""

from winadmin_tools.rsat.client import CapabilityClient, CapabilityError
from winadmin_tools.rsat.installer import install_capabilities, is_elevated, parse_selection
from winadmin_tools.rsat.models import Capability, InstallResult

__all__ = [
    "Capability",
    "CapabilityClient",
    "CapabilityError",
    "InstallResult",
    "install_capabilities",
    "is_elevated",
    "parse_selection",
]
