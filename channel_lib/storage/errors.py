"""Errors raised by the content storage layer.

Each error also derives from the closest builtin so callers that only know
about `ValueError`/`FileNotFoundError`/`FileExistsError` still catch them.
Any other filesystem failure propagates as a plain `OSError`.
"""


class StorageError(Exception):
    """Base class for errors raised by content storage."""


class InvalidPathError(StorageError, ValueError):
    """A path is not nested under the storage root."""


class RootNotFoundError(StorageError, FileNotFoundError):
    """The configured storage root directory does not exist."""

    def __init__(self, root) -> None:
        super().__init__(f"storage root does not exist: {root}")
        self.root = root


class AlreadyExistsError(StorageError, FileExistsError):
    """A file is already stored under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"file already exists: {name}")
        self.name = name
