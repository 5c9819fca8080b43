"""
Service layer for the external collaborators of the pipeline.

Contains abstractions for:
- Content-hash caching (local JSON file)
"""

from .hash_cache import ContentHashCache, LocalHashCache, NullHashCache, file_digest

__all__ = [
    "ContentHashCache",
    "LocalHashCache",
    "NullHashCache",
    "file_digest"
]
