"""Filesystem-backed content storage.

Stores each item as a plain file under a fixed root directory. The root is
never created here; every operation checks that it is still present and
fails with RootNotFoundError otherwise.
"""
from __future__ import annotations
import logging
import os
import shutil
from contextlib import closing
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .base import ContentStorage
from .errors import AlreadyExistsError, InvalidPathError, RootNotFoundError
from .interfaces import StreamCopier, StreamOpener
from .paths import relativize

logger = logging.getLogger(__name__)


def _open_binary(path: Path) -> BinaryIO:
    return open(path, "rb")


class FileSystemStorage(ContentStorage):
    def __init__(
        self,
        root: Union[str, os.PathLike],
        copier: Optional[StreamCopier] = None,
        opener: Optional[StreamOpener] = None,
    ) -> None:
        self._root = Path(os.path.abspath(root))
        self._copier = copier or shutil.copyfileobj
        self._opener = opener or _open_binary

    @property
    def root(self) -> Path:
        return self._root

    def _check_root(self) -> None:
        if not self._root.is_dir():
            raise RootNotFoundError(self._root)

    def _reference(self, path: Union[str, os.PathLike]) -> str:
        """Normalize `path` to a reference relative to the root.

        Absolute paths must point below the root and come back with dot
        segments collapsed. References that would escape the root are
        rejected.
        """
        ref = os.fspath(path)
        if os.path.isabs(ref):
            ref = os.path.normpath(relativize(self._root, ref))
        parts = Path(ref).parts
        if not parts or ".." in parts or os.path.isabs(ref):
            raise InvalidPathError(f"invalid storage reference: {ref!r}")
        root = os.fspath(self._root)
        target = os.path.normpath(os.path.join(root, ref))
        if target == root or os.path.commonpath([root, target]) != root:
            raise InvalidPathError(f"storage reference escapes root: {ref!r}")
        return ref

    def path_for(self, relative_path: Union[str, os.PathLike]) -> Path:
        """Return the absolute filesystem path for a stored item reference."""
        self._check_root()
        return self._root / self._reference(relative_path)

    def store(self, content: BinaryIO, suggested_name: str) -> str:
        with closing(content):
            self._check_root()
            name = self._reference(suggested_name)
            target = self._root / name
            if target.exists():
                raise AlreadyExistsError(name)
            target.parent.mkdir(parents=True, exist_ok=True)
            # exclusive create: a concurrent writer with the same name loses here
            try:
                out = open(target, "xb")
            except FileExistsError:
                raise AlreadyExistsError(name) from None
            try:
                with out:
                    self._copier(content, out)
                    out.flush()
                    os.fsync(out.fileno())
            except BaseException:
                target.unlink(missing_ok=True)
                raise
        logger.debug("Stored %s under %s", name, self._root)
        return name

    def retrieve(self, relative_path: str) -> Optional[BinaryIO]:
        target = self.path_for(relative_path)
        try:
            return self._opener(target)
        except FileNotFoundError:
            logger.debug("Nothing stored at %s", target)
            return None

    def dispose(self, relative_path: str) -> bool:
        target = self.path_for(relative_path)
        try:
            target.unlink()
        except FileNotFoundError:
            logger.debug("Nothing to dispose at %s", target)
            return False
        logger.debug("Disposed %s", target)
        return True

    def exists(self, relative_path: str) -> bool:
        return self.path_for(relative_path).is_file()
