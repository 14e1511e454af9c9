"""Pytest configuration and fixtures."""

import os
import tempfile
from pathlib import Path

import pytest

from winadmin_tools.config import Config
from winadmin_tools.utils import StorageManager

BASE_NS = 1_700_000_000 * 1_000_000_000
HOUR_NS = 3600 * 1_000_000_000


def write_file(path: Path, content: str, mtime_ns: int) -> Path:
    """Write content to path and set its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


@pytest.fixture
def temp_config_dir() -> Path:
    """Create a temporary configuration directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage_manager(temp_config_dir: Path) -> StorageManager:
    """Create a storage manager with temporary directory."""
    return StorageManager(temp_config_dir)


@pytest.fixture
def config(temp_config_dir: Path) -> Config:
    """Create a config instance with temporary directory."""
    return Config(temp_config_dir)


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Create an empty source folder."""
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Create an empty destination folder."""
    path = tmp_path / "dest"
    path.mkdir()
    return path


@pytest.fixture
def policy_tree(source_dir: Path, dest_dir: Path) -> tuple[Path, Path]:
    """Source and destination folders for the newer / older / missing example.

    a.admx is newer at the source, b.admx is older at the source than the
    destination copy, c.admx does not exist at the destination.
    """
    write_file(source_dir / "a.admx", "a-new", BASE_NS + HOUR_NS)
    write_file(dest_dir / "a.admx", "a-old", BASE_NS)

    write_file(source_dir / "b.admx", "b-old", BASE_NS)
    write_file(dest_dir / "b.admx", "b-current", BASE_NS + HOUR_NS)

    write_file(source_dir / "c.admx", "c-new", BASE_NS)
    return source_dir, dest_dir
