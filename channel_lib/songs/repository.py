"""Song record repository.

Records are held in memory and, when a file path is configured, written
back to a YAML document after every change. Writes go to a temporary file
which then replaces the target, so a crash never leaves a half-written file.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from threading import RLock
from typing import Dict, List, Optional, Union

import yaml

from .models import Song

logger = logging.getLogger(__name__)


class SongRepository:
    def __init__(self, file_path: Optional[Union[str, Path]] = None) -> None:
        self._lock = RLock()
        self._songs: Dict[str, Song] = {}
        self.file_path = Path(file_path) if file_path else None
        self._load()

    def _load(self) -> None:
        if self.file_path is None or not self.file_path.exists():
            return
        with open(self.file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"invalid songs file {self.file_path}: expected mapping")
        songs = data.get("songs") or {}
        for song_id, raw in songs.items():
            self._songs[str(song_id)] = Song.model_validate(raw)
        logger.debug("Loaded %d songs from %s", len(self._songs), self.file_path)

    def _persist(self) -> None:
        if self.file_path is None:
            return
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"songs": {sid: s.model_dump() for sid, s in self._songs.items()}}
        tmp = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            yaml.safe_dump(payload, f, sort_keys=False)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(self.file_path)

    def add(self, song: Song) -> None:
        with self._lock:
            if song.id in self._songs:
                raise ValueError(f"song {song.id} already exists")
            self._songs[song.id] = song
            try:
                self._persist()
            except Exception:
                del self._songs[song.id]
                raise

    def get(self, song_id: str) -> Optional[Song]:
        with self._lock:
            return self._songs.get(song_id)

    def list_songs(self) -> List[Song]:
        with self._lock:
            songs = list(self._songs.values())
        return sorted(songs, key=Song.sort_key)

    def delete(self, song_id: str) -> bool:
        with self._lock:
            song = self._songs.pop(song_id, None)
            if song is None:
                return False
            try:
                self._persist()
            except Exception:
                self._songs[song_id] = song
                raise
            return True
