from pathlib import Path
from typing import Any, BinaryIO, Optional, Protocol, runtime_checkable


@runtime_checkable
class ContentStorageProtocol(Protocol):
    """Content storage protocol mirroring `channel_lib.storage.ContentStorage`.

    Implementations should follow the semantics documented on the abstract
    base class in `channel_lib.storage.base` (None/False for missing items,
    AlreadyExistsError instead of overwriting, etc.).
    """

    def store(self, content: BinaryIO, suggested_name: str) -> str: ...

    def retrieve(self, relative_path: str) -> Optional[BinaryIO]: ...

    def dispose(self, relative_path: str) -> bool: ...

    def exists(self, relative_path: str) -> bool: ...


class StreamCopier(Protocol):
    """Copy everything readable from `src` into `dst`."""

    def __call__(self, src: BinaryIO, dst: BinaryIO) -> Any: ...


class StreamOpener(Protocol):
    """Open `path` for binary reading. Must raise FileNotFoundError if absent."""

    def __call__(self, path: Path) -> BinaryIO: ...
