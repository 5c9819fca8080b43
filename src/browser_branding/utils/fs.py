"""
Filesystem helpers shared by the pipeline stages.
"""

import logging
import shutil
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)


def windows_path_to_unix(path: Union[str, Path]) -> str:
    """Return ``path`` as a string with forward slashes only."""
    return str(path).replace("\\", "/")


def walk_directory(root: Union[str, Path]) -> Iterator[Path]:
    """
    Lazily yield every file below ``root``.

    Directories are visited depth-first with entries sorted by name, so the
    order is stable across runs and platforms.

    Args:
        root: Directory to walk

    Yields:
        Absolute paths of regular files
    """
    root = Path(root)
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            yield from walk_directory(entry)
        elif entry.is_file():
            yield entry.absolute()


def ensure_empty(path: Union[str, Path]) -> Path:
    """Delete ``path`` if it exists and recreate it as an empty directory."""
    path = Path(path)
    if path.exists():
        logger.debug(f"Removing existing directory: {path}")
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path
