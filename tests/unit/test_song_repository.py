import pytest

from channel_lib.songs import Song, SongRepository


def _song(song_id, **kw):
    base = {"title": f"Song {song_id}", "artist": "", "album": "", "track": None, "file": f"{song_id}.mp3"}
    base.update(kw)
    return Song(id=song_id, **base)


def test_add_get_delete_in_memory():
    repo = SongRepository()
    repo.add(_song("a"))
    assert repo.get("a").title == "Song a"
    assert repo.delete("a") is True
    assert repo.get("a") is None
    assert repo.delete("a") is False


def test_add_duplicate_id_rejected():
    repo = SongRepository()
    repo.add(_song("a"))
    with pytest.raises(ValueError):
        repo.add(_song("a"))


def test_list_sorted_by_artist_album_track():
    repo = SongRepository()
    repo.add(_song("3", artist="Beta", album="One", track=1))
    repo.add(_song("2", artist="Alpha", album="Two", track=1))
    repo.add(_song("1", artist="Alpha", album="One", track=2))
    repo.add(_song("0", artist="Alpha", album="One", track=1))
    assert [s.id for s in repo.list_songs()] == ["0", "1", "2", "3"]


def test_persists_records_across_instances(tmp_path):
    path = tmp_path / "db" / "songs.yml"
    repo = SongRepository(path)
    repo.add(_song("a", artist="Artist", track=4))
    repo.add(_song("b"))
    repo.delete("b")

    reloaded = SongRepository(path)
    songs = reloaded.list_songs()
    assert [s.id for s in songs] == ["a"]
    assert songs[0].artist == "Artist"
    assert songs[0].track == 4
    assert not path.with_suffix(".yml.tmp").exists()


def test_invalid_songs_file_raises(tmp_path):
    path = tmp_path / "songs.yml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        SongRepository(path)
