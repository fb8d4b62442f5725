"""Sequential playback of sound pack clips.

Clips are decoded with soundfile and played on the default output device
through sounddevice, strictly one at a time.
"""

import logging
import sys
from collections.abc import Callable, Iterable
from typing import Any, Protocol, TextIO

import soundfile as sf

from trellis_sounds.exceptions import PlaybackError
from trellis_sounds.packs.models import Pack

logger = logging.getLogger(__name__)


class AudioSink(Protocol):
    """Audio output that clips are submitted to."""

    def submit(self, data: Any, samplerate: int) -> None:
        """Start playing decoded audio."""

    def wait(self) -> None:
        """Block until the submitted audio has finished playing."""


class SoundDeviceSink:
    """AudioSink on the default sounddevice output device."""

    def __init__(self, device: int | str | None = None):
        # Imported here so listing packs works without PortAudio installed
        try:
            import sounddevice as sd
        except OSError as e:
            raise PlaybackError(f"No audio output available: {e}") from e

        self._sd = sd
        self.device = device

    def submit(self, data: Any, samplerate: int) -> None:
        try:
            self._sd.play(data, samplerate, device=self.device)
        except self._sd.PortAudioError as e:
            raise PlaybackError(f"Audio output failed: {e}") from e

    def wait(self) -> None:
        self._sd.wait()


def decode_clip(path) -> tuple[Any, int]:
    """Decode an audio file into float32 samples and its sample rate."""
    data, samplerate = sf.read(path, dtype="float32")
    return data, samplerate


class PlaybackSequencer:
    """Plays packs clip by clip on a shared sink.

    Attributes:
        sink: Audio output
        decoder: Callable turning a clip path into (samples, samplerate)
        stream: Text stream receiving progress lines
    """

    def __init__(
        self,
        sink: AudioSink,
        decoder: Callable[..., tuple[Any, int]] = decode_clip,
        stream: TextIO | None = None,
    ):
        self.sink = sink
        self.decoder = decoder
        self.stream = stream

    def _print(self, line: str) -> None:
        print(line, file=self.stream or sys.stdout)

    def _play_clip(self, path) -> None:
        try:
            data, samplerate = self.decoder(path)
        except (OSError, RuntimeError, ValueError) as e:
            raise PlaybackError(f"Cannot decode {path}: {e}") from e

        self.sink.submit(data, samplerate)
        self.sink.wait()

    def play(self, pack: Pack) -> None:
        """Play every clip of pack in stored order.

        Raises:
            PlaybackError: If a clip cannot be opened or decoded, the
                           remaining clips are not played
        """
        self._print(f"Playing: {pack.name}")
        for sound, path in zip(pack.sounds, pack.clip_paths()):
            self._print(f"\t{sound}")
            self._play_clip(path)

    def play_all(self, packs: Iterable[Pack]) -> None:
        """Play packs one after the other."""
        for pack in packs:
            self.play(pack)

    def play_files(self, paths: Iterable) -> None:
        """Play loose clip files in the given order."""
        for path in paths:
            self._print(f"Playing {path.name}")
            self._play_clip(path)
