"""Selection parsing and install loop for RSAT capabilities."""

import ctypes
import logging
import os
import sys
from collections.abc import Sequence

from winadmin_tools.rsat.client import CapabilityClient
from winadmin_tools.rsat.models import Capability, InstallResult
from winadmin_tools.utils.confirmation import CommandCancelledError

logger = logging.getLogger(__name__)


def is_elevated() -> bool:
    """Check whether the process has administrator rights."""
    if sys.platform == "win32":
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except OSError:
            return False
    return os.geteuid() == 0


def parse_selection(text: str, count: int) -> list[int]:
    """Parse a user selection into zero-based indices.

    Accepts "all", or 1-based numbers and ranges separated by commas or
    spaces, e.g. "1, 3 5-7". Duplicates are dropped, order is kept.

    Args:
        text: Raw user input.
        count: Number of selectable items.

    Returns:
        Zero-based indices in the order given.

    Raises:
        ValueError: If the input is empty, malformed or out of range.
    """
    cleaned = text.strip().lower()
    if not cleaned:
        raise ValueError("No selection entered")
    if cleaned == "all":
        return list(range(count))

    indices: list[int] = []
    for token in cleaned.replace(",", " ").split():
        if "-" in token:
            start_text, _, end_text = token.partition("-")
            if not start_text.isdigit() or not end_text.isdigit():
                raise ValueError(f"Invalid range: {token}")
            start, end = int(start_text), int(end_text)
            if start > end:
                raise ValueError(f"Invalid range: {token}")
            numbers = range(start, end + 1)
        elif token.isdigit():
            numbers = range(int(token), int(token) + 1)
        else:
            raise ValueError(f"Invalid selection: {token}")

        for number in numbers:
            if number < 1 or number > count:
                raise ValueError(f"Selection {number} is out of range (1-{count})")
            if number - 1 not in indices:
                indices.append(number - 1)

    return indices


def install_capabilities(client: CapabilityClient, capabilities: Sequence[Capability]) -> InstallResult:
    """Install each capability in turn, collecting successes and failures.

    A cancelled confirmation is recorded as a failure for that capability.
    """
    result = InstallResult()
    for capability in capabilities:
        try:
            client.install(capability.name)
        except CommandCancelledError as e:
            logger.warning(f"Skipped {capability.name}: {e}")
            result.failed[capability.name] = str(e)
        except Exception as e:
            logger.error(f"Failed to install {capability.name}: {e}")
            result.failed[capability.name] = str(e)
        else:
            logger.info(f"Installed {capability.name}")
            result.succeeded.append(capability.name)

    logger.info(f"Capability install complete: {result}")
    return result
