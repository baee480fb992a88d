import asyncio
import os

import pytest

from conftest import audio, folder, make_enumerator
from models.track import track_sort_key
from services.music_library import DirectoryEntry, MusicLibrary, ScanError, list_directory


def scan(root, library=None, progress_callback=None):
    library = library or MusicLibrary()
    return asyncio.run(library.scan(str(root), progress_callback))


class TestScanFilesystem:
    """Tests for MusicLibrary.scan() against a real directory tree."""

    def test_finds_audio_files_recursively(self, music_dir):
        """Test that nested audio files are found."""
        names = {track.name for track in scan(music_dir)}

        assert names == {"a.mp3", "b.mp3", "c.FLAC", "Solo.ogg"}

    def test_filters_non_audio_files(self, music_dir):
        """Test that non-audio files are skipped."""
        names = {track.name for track in scan(music_dir)}

        assert "notes.txt" not in names
        assert "cover.jpg" not in names

    def test_playlists_from_top_level_folders(self, music_dir):
        """Test playlist labels for loose, nested and deep files."""
        playlists = {track.name: track.playlist for track in scan(music_dir)}

        assert playlists["a.mp3"] == "(root)"
        assert playlists["b.mp3"] == "Rock"
        assert playlists["c.FLAC"] == "Rock"
        assert playlists["Solo.ogg"] == "jazz"

    def test_paths_are_absolute_and_unique(self, music_dir):
        """Test that every path is absolute and appears once."""
        tracks = scan(music_dir)
        paths = [track.path for track in tracks]

        assert len(paths) == len(set(paths))
        assert all(os.path.isabs(path) for path in paths)
        assert str(music_dir / "Rock" / "Live" / "c.FLAC") in paths

    def test_sorted_by_playlist_then_name(self, music_dir):
        """Test canonical order, ignoring case."""
        tracks = scan(music_dir)

        assert [track.name for track in tracks] == ["a.mp3", "Solo.ogg", "b.mp3", "c.FLAC"]

    def test_sort_is_idempotent(self, music_dir):
        """Test that re-sorting the result changes nothing."""
        tracks = scan(music_dir)

        assert sorted(tracks, key=track_sort_key) == tracks

    def test_same_tree_gives_same_result(self, music_dir):
        """Test that scanning twice yields identical tracks."""
        assert scan(music_dir) == scan(music_dir)

    def test_empty_directory(self, tmp_path):
        """Test scanning an empty directory."""
        assert scan(tmp_path) == []

    def test_missing_directory_raises(self, tmp_path):
        """Test that an unreadable root aborts the scan."""
        with pytest.raises(ScanError):
            scan(tmp_path / "missing")

    def test_symlinks_skipped(self, music_dir, tmp_path):
        """Test that symlinked files and folders are not followed."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "linked.mp3").touch()
        os.symlink(outside, music_dir / "Linked")
        os.symlink(music_dir / "a.mp3", music_dir / "alias.mp3")

        names = {track.name for track in scan(music_dir)}

        assert "linked.mp3" not in names
        assert "alias.mp3" not in names


class TestListDirectory:
    """Tests for the default directory enumerator."""

    def test_classifies_entries(self, music_dir):
        """Test that files and folders are told apart."""
        entries = {entry.name: entry for entry in asyncio.run(list_directory(str(music_dir)))}

        assert entries["Rock"].is_dir and not entries["Rock"].is_file
        assert entries["a.mp3"].is_file and not entries["a.mp3"].is_dir

    def test_missing_directory(self, tmp_path):
        """Test that errors propagate as OSError."""
        with pytest.raises(OSError):
            asyncio.run(list_directory(str(tmp_path / "missing")))


class TestScanWithEnumerator:
    """Tests for MusicLibrary.scan() with an injected enumerator."""

    def test_scenario_root_and_playlist(self):
        """Test a loose file and a playlist folder."""
        library = MusicLibrary(make_enumerator({
            "/music": [audio("a.mp3"), folder("Rock")],
            "/music/Rock": [audio("b.mp3")],
        }))

        tracks = scan("/music", library)

        assert [(t.path, t.playlist) for t in tracks] == [
            ("/music/a.mp3", "(root)"),
            ("/music/Rock/b.mp3", "Rock"),
        ]

    def test_other_entries_skipped(self):
        """Test that entries that are neither file nor folder are ignored."""
        library = MusicLibrary(make_enumerator({
            "/music": [DirectoryEntry("link.mp3"), audio("real.mp3")],
        }))

        assert [t.name for t in scan("/music", library)] == ["real.mp3"]

    def test_nameless_entries_skipped(self):
        """Test that entries without a name are ignored."""
        library = MusicLibrary(make_enumerator({
            "/music": [audio(""), audio("x.wav")],
        }))

        assert [t.name for t in scan("/music", library)] == ["x.wav"]

    def test_windows_root(self):
        """Test that Windows roots produce Windows paths."""
        library = MusicLibrary(make_enumerator({
            "C:\\Music": [folder("Jazz")],
            "C:\\Music\\Jazz": [audio("take five.m4a")],
        }))

        tracks = scan("C:\\Music", library)

        assert tracks[0].path == "C:\\Music\\Jazz\\take five.m4a"
        assert tracks[0].playlist == "Jazz"

    def test_failure_discards_partial_results(self):
        """Test that an unreadable subfolder aborts the whole scan."""
        library = MusicLibrary(make_enumerator({
            "/music": [audio("a.mp3"), folder("Broken"), audio("z.mp3")],
        }))

        with pytest.raises(ScanError, match="Broken"):
            scan("/music", library)

    def test_depth_first_discovery_order(self):
        """Test that a folder is read before its later siblings."""
        visited = []

        async def enumerate_directory(path):
            visited.append(path)
            return {
                "/m": [folder("A"), folder("B")],
                "/m/A": [folder("Deep")],
                "/m/A/Deep": [],
                "/m/B": [],
            }[path]

        scan("/m", MusicLibrary(enumerate_directory))

        assert visited == ["/m", "/m/A", "/m/A/Deep", "/m/B"]

    def test_deep_tree_does_not_hit_recursion_limit(self):
        """Test a tree deeper than the interpreter's recursion limit."""
        depth = 1500
        tree = {}
        path = "/m"
        for _ in range(depth):
            tree[path] = [folder("d")]
            path += "/d"
        tree[path] = [audio("bottom.mp3")]

        tracks = scan("/m", MusicLibrary(make_enumerator(tree)))

        assert len(tracks) == 1
        assert tracks[0].playlist == "d"

    def test_progress_callback(self):
        """Test that progress is reported once per folder."""
        calls = []
        library = MusicLibrary(make_enumerator({
            "/music": [audio("a.mp3"), folder("Rock")],
            "/music/Rock": [audio("b.mp3")],
        }))

        scan("/music", library, lambda dirs, tracks: calls.append((dirs, tracks)))

        assert calls == [(1, 0), (2, 1)]

    def test_sorting_ignores_case_and_accents(self):
        """Test locale-style ordering of names and playlists."""
        library = MusicLibrary(make_enumerator({
            "/m": [folder("beta"), folder("Alpha"), audio("Zed.mp3"), audio("apple.mp3")],
            "/m/beta": [audio("b.mp3")],
            "/m/Alpha": [audio("élan.mp3"), audio("Echo.mp3"), audio("eve.mp3")],
        }))

        tracks = scan("/m", library)

        assert [(t.playlist, t.name) for t in tracks] == [
            ("(root)", "apple.mp3"),
            ("(root)", "Zed.mp3"),
            ("Alpha", "Echo.mp3"),
            ("Alpha", "élan.mp3"),
            ("Alpha", "eve.mp3"),
            ("beta", "b.mp3"),
        ]
