from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SongMetadata(BaseModel):
    title: str
    artist: str = ""
    album: str = ""
    track: Optional[int] = Field(default=None, ge=0)


class Song(SongMetadata):
    """A song record. `file` is the storage reference of the audio payload."""
    id: str
    file: str
    created_at: str = Field(default_factory=_utc_now)

    def sort_key(self) -> tuple:
        # same ordering the song list uses: artist, album, then track number
        return (self.artist, self.album, self.track if self.track is not None else 0, self.title)
