"""
Content-hash cache used by the incremental build layer.
Provides an interface so the pipeline can register inputs without knowing how staleness is decided.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union
import hashlib
import json
import logging
import threading

logger = logging.getLogger(__name__)

class ContentHashCache(ABC):
    """Abstract content-hash cache"""

    @abstractmethod
    def register(self, path: Union[str, Path]) -> str:
        """Record the current content hash of path and return it"""
        pass

    @abstractmethod
    def get(self, path: Union[str, Path]) -> Optional[str]:
        """Return the last registered hash for path, if any"""
        pass


def file_digest(path: Union[str, Path]) -> str:
    """SHA-256 hex digest of a file's bytes."""
    digest = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(65536), b''):
            digest.update(chunk)
    return digest.hexdigest()


class NullHashCache(ContentHashCache):
    """Cache that hashes but remembers nothing"""

    def register(self, path: Union[str, Path]) -> str:
        return file_digest(path)

    def get(self, path: Union[str, Path]) -> Optional[str]:
        return None


class LocalHashCache(ContentHashCache):
    """JSON file backed cache keyed by absolute path"""

    def __init__(self, cache_file: Path):
        self.cache_file = Path(cache_file)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not self.cache_file.exists():
            return {}
        with open(self.cache_file, 'r', encoding='utf-8') as f:
            return json.load(f)

    def register(self, path: Union[str, Path]) -> str:
        """Hash path and persist the digest"""
        key = str(Path(path).absolute())
        digest = file_digest(path)

        with self._lock:
            entries = self._load()
            entries[key] = digest
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.cache_file, 'w', encoding='utf-8') as f:
                json.dump(entries, f, indent=2, sort_keys=True)

        logger.debug(f"Registered content hash for {key}: {digest[:12]}")
        return digest

    def get(self, path: Union[str, Path]) -> Optional[str]:
        """Look up the stored digest for path"""
        with self._lock:
            return self._load().get(str(Path(path).absolute()))
