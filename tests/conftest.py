import pytest

from models.track import Track
from services.audio_player import PlaybackRejected
from services.music_library import DirectoryEntry, MusicLibrary
from services.player import PlayerController


class FakeTransport:
    """In-memory stand-in for the pygame transport."""

    def __init__(self, duration: float = 180.0):
        self.loaded: list[str] = []
        self.position = 0.0
        self.duration = duration
        self.playing = False
        self.reject_play = False
        self.ended = False

    def load(self, path: str) -> None:
        self.loaded.append(path)
        self.position = 0.0
        self.playing = False

    def play(self) -> None:
        if self.reject_play:
            raise PlaybackRejected("blocked by policy")
        self.playing = True

    def pause(self) -> None:
        self.playing = False

    def track_ended_naturally(self) -> bool:
        if self.ended:
            self.ended = False
            self.playing = False
            return True
        return False


def make_enumerator(tree: dict[str, list[DirectoryEntry]]):
    """Build a directory enumerator over an in-memory tree."""
    async def enumerate_directory(path: str) -> list[DirectoryEntry]:
        if path not in tree:
            raise OSError(f"No such directory: {path}")
        return tree[path]
    return enumerate_directory


def audio(name: str) -> DirectoryEntry:
    return DirectoryEntry(name, is_file=True)


def folder(name: str) -> DirectoryEntry:
    return DirectoryEntry(name, is_dir=True)


@pytest.fixture
def music_dir(tmp_path):
    """Create a music folder with loose files, playlists and junk."""
    root = tmp_path / "music"
    root.mkdir()

    (root / "a.mp3").touch()
    (root / "notes.txt").touch()

    (root / "Rock").mkdir()
    (root / "Rock" / "b.mp3").touch()
    (root / "Rock" / "Live").mkdir()
    (root / "Rock" / "Live" / "c.FLAC").touch()

    (root / "jazz").mkdir()
    (root / "jazz" / "Solo.ogg").touch()
    (root / "jazz" / "cover.jpg").touch()

    (root / "Empty").mkdir()

    return root


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def sample_tracks():
    """Seven tracks across three playlists, already in library order."""
    return [
        Track("/m/intro.mp3", "intro.mp3", "(root)"),
        Track("/m/Jazz/blue.mp3", "blue.mp3", "Jazz"),
        Track("/m/Jazz/night.mp3", "night.mp3", "Jazz"),
        Track("/m/Jazz/sax solo.mp3", "sax solo.mp3", "Jazz"),
        Track("/m/Jazz/train.mp3", "train.mp3", "Jazz"),
        Track("/m/Jazz/walk.mp3", "walk.mp3", "Jazz"),
        Track("/m/Rock/anthem.mp3", "anthem.mp3", "Rock"),
    ]


@pytest.fixture
def controller(transport, sample_tracks):
    """Controller whose library already holds sample_tracks."""
    player = PlayerController(transport, MusicLibrary(make_enumerator({})))
    player.session.replace_library("/m", sample_tracks)
    return player
