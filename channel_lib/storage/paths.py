"""Path helpers for stored content.

Pure functions: no filesystem access and no shared state.
"""
from __future__ import annotations
import os
import secrets
from typing import Union

from .errors import InvalidPathError


def relativize(root: Union[str, os.PathLike], path: Union[str, os.PathLike]) -> str:
    """Return `path` with the leading `root` directory removed.

    A trailing separator on `root` is ignored, so `relativize("root/", "root/a.mp3")`
    and `relativize("root", "root/a.mp3")` both return "a.mp3". Nested
    segments after the root are kept as-is ("a/b/c.mp3").

    Raises InvalidPathError when `path` is not nested under `root`, including
    when the remainder would itself start with a separator ("root//a.mp3").
    """
    root_s = os.fspath(root)
    path_s = os.fspath(path)
    prefix = root_s.rstrip(os.sep) + os.sep
    rest = path_s[len(prefix):] if path_s.startswith(prefix) else ""
    if not rest or rest.startswith(os.sep):
        raise InvalidPathError(f"path is not nested under root: {path_s!r} (root {root_s!r})")
    return rest


def generate_filename(original_name: Union[str, os.PathLike]) -> str:
    """Return a fresh unique filename keeping the extension of `original_name`.

    Only the last dot-separated segment of the base name counts as the
    extension ("live.2019.mp3" -> "<token>.mp3"); a name without one yields
    a bare token.
    """
    base = os.path.basename(os.fspath(original_name))
    token = secrets.token_hex(16)
    _, dot, ext = base.rpartition(".")
    if dot and ext:
        return f"{token}.{ext}"
    return token
