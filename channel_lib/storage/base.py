"""Content storage interface definitions.

Defines the ContentStorage abstract class used by the application to
persist uploaded payloads and hand them back later. Items are addressed by
a reference relative to the storage root; choosing a unique name is the
caller's job (see `channel_lib.storage.paths.generate_filename`).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional


class ContentStorage(ABC):
    """Abstract content storage.

    Implementations keep no mutable state besides their configuration and
    must be safe to call from several threads at once.
    """

    @abstractmethod
    def store(self, content: BinaryIO, suggested_name: str) -> str:
        """Persist all of `content` under `suggested_name`.

        Returns the relative reference of the stored item. Must raise
        `AlreadyExistsError` rather than overwrite an existing item, and
        must close `content` before returning.
        """

    @abstractmethod
    def retrieve(self, relative_path: str) -> Optional[BinaryIO]:
        """Open the stored item for reading.

        Returns None if nothing is stored under `relative_path`. The caller
        owns (and must close) the returned stream.
        """

    @abstractmethod
    def dispose(self, relative_path: str) -> bool:
        """Delete the stored item. Return False if it did not exist."""

    @abstractmethod
    def exists(self, relative_path: str) -> bool:
        """Return True if an item is stored under `relative_path`."""
