"""SongService: uploads, listing, playback and removal of songs."""
from __future__ import annotations
import logging
import uuid
from typing import BinaryIO, List, Optional

from channel_lib.storage import AlreadyExistsError, ContentStorageProtocol, generate_filename

from .models import Song, SongMetadata
from .repository import SongRepository

logger = logging.getLogger(__name__)


class UploadTooLargeError(ValueError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"upload exceeds the limit of {limit} bytes")
        self.limit = limit


class _UploadReader:
    """Read-only view over an upload stream handed to storage.

    Closing the view leaves the upload open so another attempt can use it;
    reading past `limit` bytes (when set) raises UploadTooLargeError.
    """

    def __init__(self, stream: BinaryIO, limit: int = 0) -> None:
        self._stream = stream
        self._limit = limit
        self._count = 0

    def read(self, size: int = -1) -> bytes:
        chunk = self._stream.read(size)
        self._count += len(chunk)
        if self._limit and self._count > self._limit:
            raise UploadTooLargeError(self._limit)
        return chunk

    def close(self) -> None:
        return


class SongService:
    def __init__(
        self,
        storage: ContentStorageProtocol,
        repository: SongRepository,
        max_store_attempts: int = 3,
        max_upload_bytes: int = 0,
    ) -> None:
        self._storage = storage
        self._repository = repository
        self._max_store_attempts = max(1, max_store_attempts)
        self._max_upload_bytes = max_upload_bytes

    def list_songs(self) -> List[Song]:
        return self._repository.list_songs()

    def get_song(self, song_id: str) -> Song:
        song = self._repository.get(song_id)
        if song is None:
            raise KeyError(song_id)
        return song

    def _store_upload(self, content: BinaryIO, filename: str) -> str:
        # Generated names are effectively unique; a collision just means
        # drawing a new name.
        attempt = 1
        while True:
            name = generate_filename(filename)
            try:
                return self._storage.store(_UploadReader(content, self._max_upload_bytes), name)
            except AlreadyExistsError:
                logger.warning("Name collision storing %s (attempt %d/%d)", name, attempt, self._max_store_attempts)
                if attempt >= self._max_store_attempts:
                    raise
                attempt += 1

    def upload(self, content: BinaryIO, filename: str, metadata: SongMetadata) -> Song:
        """Store the audio in `content` and record it with `metadata`.

        `content` is closed before returning. If the record cannot be saved
        the stored file is disposed again.
        """
        try:
            reference = self._store_upload(content, filename)
        finally:
            content.close()

        song = Song(id=uuid.uuid4().hex, file=reference, **metadata.model_dump())
        try:
            self._repository.add(song)
        except Exception:
            logger.exception("Failed to record song for %s; removing stored file", reference)
            self._storage.dispose(reference)
            raise
        logger.info("Uploaded song %s (%s) as %s", song.id, song.title, reference)
        return song

    def open_file(self, reference: str) -> Optional[BinaryIO]:
        return self._storage.retrieve(reference)

    def delete_song(self, song_id: str) -> Song:
        """Remove the song's record, then dispose its audio.

        The record goes first so a failed delete never leaves a record
        pointing at a disposed file; at worst an unreferenced file remains.
        A file that is already gone is not an error.
        """
        song = self.get_song(song_id)
        self._repository.delete(song_id)
        if not self._storage.dispose(song.file):
            logger.warning("Stored file %s for song %s was already missing", song.file, song_id)
        logger.info("Deleted song %s", song_id)
        return song
