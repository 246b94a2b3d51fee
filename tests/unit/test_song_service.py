import io

import pytest

from channel_lib.songs import SongMetadata, SongRepository, SongService, UploadTooLargeError
from channel_lib.storage import AlreadyExistsError, FileSystemStorage


class CollidingStorage:
    """Storage stub reporting a name collision for the first `collisions` stores."""

    def __init__(self, collisions):
        self.collisions = collisions
        self.names = []
        self.stored = {}
        self.disposed = []

    def store(self, content, suggested_name):
        self.names.append(suggested_name)
        if len(self.names) <= self.collisions:
            content.close()
            raise AlreadyExistsError(suggested_name)
        self.stored[suggested_name] = content.read()
        content.close()
        return suggested_name

    def retrieve(self, relative_path):
        data = self.stored.get(relative_path)
        return io.BytesIO(data) if data is not None else None

    def dispose(self, relative_path):
        self.disposed.append(relative_path)
        return self.stored.pop(relative_path, None) is not None

    def exists(self, relative_path):
        return relative_path in self.stored


class FailingRepository(SongRepository):
    def add(self, song):
        raise OSError("read-only database")


@pytest.fixture
def storage(tmp_path):
    return FileSystemStorage(tmp_path)


def test_upload_stores_file_and_records_song(storage):
    svc = SongService(storage, SongRepository())
    content = io.BytesIO(b"RIFF....WAVE")
    song = svc.upload(content, "take 1.wav", SongMetadata(title="Take", artist="Me", track=1))

    assert content.closed
    assert song.file.endswith(".wav")
    assert song.file != "take 1.wav"
    assert (storage.root / song.file).read_bytes() == b"RIFF....WAVE"
    assert svc.get_song(song.id) == song
    assert svc.list_songs() == [song]


def test_open_file_returns_stored_bytes(storage):
    svc = SongService(storage, SongRepository())
    song = svc.upload(io.BytesIO(b"abc"), "a.mp3", SongMetadata(title="A"))
    with svc.open_file(song.file) as stream:
        assert stream.read() == b"abc"
    assert svc.open_file("missing.mp3") is None


def test_upload_retries_with_new_name_after_collision():
    stub = CollidingStorage(collisions=2)
    svc = SongService(stub, SongRepository(), max_store_attempts=3)
    content = io.BytesIO(b"data")
    song = svc.upload(content, "x.ogg", SongMetadata(title="X"))

    assert len(stub.names) == 3
    assert len(set(stub.names)) == 3
    assert song.file == stub.names[-1]
    assert stub.stored[song.file] == b"data"
    assert content.closed


def test_upload_gives_up_after_max_attempts():
    stub = CollidingStorage(collisions=5)
    repo = SongRepository()
    svc = SongService(stub, repo, max_store_attempts=2)
    with pytest.raises(AlreadyExistsError):
        svc.upload(io.BytesIO(b"data"), "x.ogg", SongMetadata(title="X"))
    assert len(stub.names) == 2
    assert repo.list_songs() == []


def test_upload_too_large_leaves_nothing(storage):
    repo = SongRepository()
    svc = SongService(storage, repo, max_upload_bytes=4)
    with pytest.raises(UploadTooLargeError):
        svc.upload(io.BytesIO(b"0123456789"), "big.mp3", SongMetadata(title="Big"))
    assert list(storage.root.iterdir()) == []
    assert repo.list_songs() == []


def test_upload_disposes_file_when_record_fails(storage):
    svc = SongService(storage, FailingRepository())
    with pytest.raises(OSError, match="read-only"):
        svc.upload(io.BytesIO(b"abc"), "a.mp3", SongMetadata(title="A"))
    assert list(storage.root.iterdir()) == []


def test_delete_song_disposes_file(storage):
    svc = SongService(storage, SongRepository())
    song = svc.upload(io.BytesIO(b"abc"), "a.mp3", SongMetadata(title="A"))
    assert svc.delete_song(song.id) == song
    assert not (storage.root / song.file).exists()
    with pytest.raises(KeyError):
        svc.get_song(song.id)


def test_delete_song_with_missing_file_still_removes_record(storage):
    svc = SongService(storage, SongRepository())
    song = svc.upload(io.BytesIO(b"abc"), "a.mp3", SongMetadata(title="A"))
    (storage.root / song.file).unlink()
    svc.delete_song(song.id)
    assert svc.list_songs() == []


def test_delete_unknown_song_raises_key_error(storage):
    svc = SongService(storage, SongRepository())
    with pytest.raises(KeyError):
        svc.delete_song("nope")


class ReadOnlyDeleteRepository(SongRepository):
    def delete(self, song_id):
        raise OSError("read-only database")


def test_delete_song_keeps_file_when_record_delete_fails(storage):
    svc = SongService(storage, ReadOnlyDeleteRepository())
    song = svc.upload(io.BytesIO(b"abc"), "a.mp3", SongMetadata(title="A"))
    with pytest.raises(OSError, match="read-only"):
        svc.delete_song(song.id)
    assert (storage.root / song.file).read_bytes() == b"abc"
    assert svc.get_song(song.id) == song
