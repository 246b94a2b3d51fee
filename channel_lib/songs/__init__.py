"""Song metadata records and the service tying them to stored audio."""
from .models import Song, SongMetadata
from .repository import SongRepository
from .service import SongService, UploadTooLargeError

__all__ = [
    "Song",
    "SongMetadata",
    "SongRepository",
    "SongService",
    "UploadTooLargeError",
]
