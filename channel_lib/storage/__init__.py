"""Content storage package for Channel."""
from __future__ import annotations
import os
from typing import Optional, Union

from .base import ContentStorage
from .errors import AlreadyExistsError, InvalidPathError, RootNotFoundError, StorageError
from .file_backend import FileSystemStorage
from .interfaces import ContentStorageProtocol
from .paths import generate_filename, relativize


def create_storage(
    backend: str = "file",
    root: Optional[Union[str, os.PathLike]] = None,
    **options,
) -> ContentStorage:
    """Build a content storage from configuration values.

    Only the local filesystem backend ("file") exists; `options` are passed
    through to its constructor (copier/opener overrides).
    """
    if backend != "file":
        raise ValueError(f"Unknown storage backend: {backend}")
    if root is None:
        raise ValueError("A storage root directory is required")
    return FileSystemStorage(root, **options)


__all__ = [
    "ContentStorage",
    "ContentStorageProtocol",
    "FileSystemStorage",
    "StorageError",
    "InvalidPathError",
    "RootNotFoundError",
    "AlreadyExistsError",
    "create_storage",
    "generate_filename",
    "relativize",
]
