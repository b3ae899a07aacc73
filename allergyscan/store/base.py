"""Base store class for diskcache-backed persistence."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

from diskcache import Cache

from allergyscan.exceptions import TermStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseStore(ABC, Generic[T]):
    """Abstract base class for stores kept in a DiskCache directory."""

    def __init__(self, data_dir: Path, store_subdir: str) -> None:
        """Initialize store.

        Args:
            data_dir: Root directory for all allergyscan data
            store_subdir: Subdirectory holding this store's cache

        Raises:
            TermStoreError: If the cache directory cannot be created
        """
        cache_path = data_dir / store_subdir
        try:
            cache_path.mkdir(parents=True, exist_ok=True)
            self.cache = Cache(str(cache_path))
        except OSError as e:
            raise TermStoreError(f"Cannot open store at {cache_path}: {e}", {"path": str(cache_path)}) from e
        self.cache_path = cache_path

        logger.debug(f"Initialized store at {cache_path}")

    def close(self) -> None:
        """Close the underlying cache."""
        self.cache.close()

    def __enter__(self) -> "BaseStore[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @abstractmethod
    def save(self, data: T) -> None:
        """Persist data.

        Args:
            data: Data to store
        """

    @abstractmethod
    def load(self) -> T:
        """Load persisted data.

        Returns:
            Stored data, or the store's default when nothing was saved
        """
