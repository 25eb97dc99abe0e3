"""
Disk-backed key-value storage.

Provides a DiskStorage mapping that keeps string values on disk using the
diskcache library, so the session survives a restart of the development
server. It behaves like the browser's localStorage: string keys, string
values, clear() wipes everything.
"""

from collections.abc import Iterator, MutableMapping
from pathlib import Path

import diskcache


class DiskStorage(MutableMapping[str, str]):
    """
    Disk-based string mapping.

    Thread-safe and process-safe through diskcache.

    Attributes:
        cache_dir: Path to the storage directory.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        """
        Initialize the storage.

        Args:
            cache_dir: Directory path for storing entries.
                       Created if it doesn't exist.
        """
        self.cache_dir = Path(cache_dir)
        self._cache = diskcache.Cache(str(self.cache_dir))

    def __getitem__(self, key: str) -> str:
        return self._cache[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._cache.set(key, value)

    def __delitem__(self, key: str) -> None:
        del self._cache[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cache)

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        """Remove every entry."""
        self._cache.clear()

    def close(self) -> None:
        """Close the underlying cache handle."""
        self._cache.close()
