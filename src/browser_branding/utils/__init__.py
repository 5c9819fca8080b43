"""
Generic helpers used across the pipeline.
"""

from .fs import ensure_empty, walk_directory, windows_path_to_unix

__all__ = [
    "ensure_empty",
    "walk_directory",
    "windows_path_to_unix"
]
