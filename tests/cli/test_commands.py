"""Tests for the trellis-sounds command line interface."""

import subprocess
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from trellis_sounds.cli import build_parser, main
from trellis_sounds.exceptions import FetchError
from trellis_sounds.packs.models import Pack
from trellis_sounds.packs.provisioner import CacheProvisioner
from trellis_sounds.packs.registry import PackRegistry


@pytest.fixture
def packs(tmp_path):
    return [
        Pack(name="kick", base=tmp_path / "kick", sounds=(Path("1.wav"),), key="drum_packs/kick"),
        Pack(name="voice", base=tmp_path / "voice", sounds=(Path("hi.wav"),), key="voice"),
    ]


@pytest.fixture
def registry(tmp_path, packs):
    """Registry backed by a mocked provisioner and a fixed scan result."""
    provisioner = Mock(spec=CacheProvisioner)
    provisioner.ensure.return_value = tmp_path / "sound_packs"
    provisioner.extracted_root.return_value = tmp_path / "sound_packs"
    with patch("trellis_sounds.packs.registry.discover_packs", return_value=packs):
        yield PackRegistry(tmp_path, provisioner=provisioner)


@pytest.fixture
def sequencer():
    """Replace the audio sink and sequencer, yield the sequencer instance."""
    with patch("trellis_sounds.cli.SoundDeviceSink"), patch(
        "trellis_sounds.cli.PlaybackSequencer"
    ) as sequencer_cls:
        yield sequencer_cls.return_value


class TestParser:
    """Test argument parsing."""

    def test_play_defaults_to_all(self):
        """Test play without a name targets every pack."""
        args = build_parser().parse_args(["play"])
        assert args.name == "all"
        assert args.raw is False

    def test_global_options(self, tmp_path):
        """Test cache dir and verbosity options."""
        args = build_parser().parse_args(["-v", "--cache-dir", str(tmp_path), "list"])
        assert args.verbose is True
        assert args.cache_dir == tmp_path

    def test_command_required(self):
        """Test running without a command is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2


class TestListCommand:
    """Test the list command."""

    def test_prints_names_one_per_line(self, registry, capsys):
        """Test every pack name is printed in discovery order."""
        with patch("trellis_sounds.cli.PackRegistry", return_value=registry), patch(
            "trellis_sounds.cli.SoundDeviceSink"
        ) as sink_cls:
            main(["list"])

        assert capsys.readouterr().out == "kick\nvoice\n"
        sink_cls.assert_not_called()

    def test_cache_dir_option(self, registry, tmp_path):
        """Test --cache-dir is passed to the registry."""
        with patch("trellis_sounds.cli.PackRegistry", return_value=registry) as registry_cls:
            main(["--cache-dir", str(tmp_path / "cache"), "list"])

        assert registry_cls.call_args.args[0] == tmp_path / "cache"

    def test_error_exits_non_zero(self, capsys, tmp_path):
        """Test fatal errors are reported on stderr with exit status 1."""
        failing = Mock()
        failing.load.side_effect = FetchError("Failed to download: 404")

        with patch("trellis_sounds.cli.PackRegistry", return_value=failing):
            with pytest.raises(SystemExit) as exc_info:
                main(["--cache-dir", str(tmp_path), "list"])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "Error: Failed to download: 404" in captured.err
        assert captured.out == ""


class TestPlayCommand:
    """Test the play command."""

    def test_play_all(self, registry, sequencer, packs):
        """Test "all" plays every pack."""
        with patch("trellis_sounds.cli.PackRegistry", return_value=registry):
            main(["play"])

        sequencer.play_all.assert_called_once_with(packs)

    def test_play_named_pack(self, registry, sequencer, packs):
        """Test a name plays only that pack."""
        with patch("trellis_sounds.cli.PackRegistry", return_value=registry):
            main(["play", "voice"])

        sequencer.play_all.assert_called_once_with([packs[1]])

    def test_play_unknown_name_plays_nothing(self, registry, sequencer):
        """Test an unmatched name is a silent no-op."""
        with patch("trellis_sounds.cli.PackRegistry", return_value=registry):
            main(["play", "nope"])

        sequencer.play_all.assert_called_once_with([])

    def test_play_raw(self, registry, sequencer, tmp_path):
        """Test --raw walks the extracted root."""
        clips = [tmp_path / "a.wav"]
        with patch("trellis_sounds.cli.PackRegistry", return_value=registry), patch(
            "trellis_sounds.cli.iter_clips", return_value=iter(clips)
        ) as walk:
            main(["play", "--raw"])

        walk.assert_called_once_with(tmp_path / "sound_packs")
        sequencer.play_files.assert_called_once()
        sequencer.play_all.assert_not_called()


class TestModuleEntryPoint:
    """Test python -m trellis_sounds."""

    def test_help(self):
        """Test the module runs and prints usage."""
        result = subprocess.run(
            [sys.executable, "-m", "trellis_sounds", "--help"],
            capture_output=True,
            text=True,
            cwd=Path(__file__).resolve().parents[2],
        )

        assert result.returncode == 0
        assert "list" in result.stdout
        assert "play" in result.stdout


class TestCommandErrors:
    """Test usage and configuration errors."""

    def test_malformed_config_exits_non_zero(self, tmp_path, capsys):
        """Test a broken YAML config is reported instead of raising."""
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("cache_dir: [unclosed\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(config_path), "--cache-dir", str(tmp_path), "list"])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "Error: Invalid config file" in captured.err
        assert captured.out == ""

    def test_raw_with_pack_name_rejected(self, capsys):
        """Test play --raw refuses a pack name it would ignore."""
        with patch("trellis_sounds.cli.PackRegistry") as registry_cls:
            with pytest.raises(SystemExit) as exc_info:
                main(["play", "voice", "--raw"])

        assert exc_info.value.code == 2
        assert "does not take a pack name" in capsys.readouterr().err
        registry_cls.assert_not_called()

    def test_raw_with_all_accepted(self):
        """Test play all --raw parses like play --raw."""
        args = build_parser().parse_args(["play", "all", "--raw"])

        assert args.raw is True
        assert args.name == "all"
