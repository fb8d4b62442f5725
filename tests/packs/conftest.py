"""Shared fixtures for sound pack tests."""

import zipfile

import pytest


@pytest.fixture
def pack_tree(tmp_path):
    """Create an extracted tree shaped like the bundled archive.

    sound_packs/
        groupA_packs/x/a.wav
        y/b.wav, y/c.wav, y/notes.txt
    """
    root = tmp_path / "sound_packs"
    (root / "groupA_packs" / "x").mkdir(parents=True)
    (root / "groupA_packs" / "x" / "a.wav").write_bytes(b"RIFF")
    (root / "y").mkdir()
    (root / "y" / "b.wav").write_bytes(b"RIFF")
    (root / "y" / "c.wav").write_bytes(b"RIFF")
    (root / "y" / "notes.txt").write_text("not a clip")
    return root


@pytest.fixture
def sound_archive(tmp_path):
    """Create a zip archive holding a sound_packs/ tree."""
    archive_path = tmp_path / "source" / "sound_packs.zip"
    archive_path.parent.mkdir()

    with zipfile.ZipFile(archive_path, "w") as archive:
        archive.writestr("sound_packs/", "")
        archive.writestr("sound_packs/drum_packs/", "")
        archive.writestr("sound_packs/drum_packs/kick/", "")
        archive.writestr("sound_packs/drum_packs/kick/1.wav", b"RIFF0001")
        archive.writestr("sound_packs/drum_packs/kick/2.wav", b"RIFF0002")
        archive.writestr("sound_packs/voice/hello.wav", b"RIFF0003")

    return archive_path
