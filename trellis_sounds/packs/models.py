"""Sound pack data models.

This module provides the Pack model produced by pack discovery and consumed
by the registry and the playback sequencer.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Pack:
    """A named, ordered collection of audio clips drawn from one directory.

    Attributes:
        name: Leaf directory name (e.g., "drums"), used for display and lookup
        base: Absolute path to the pack directory
        sounds: Clip paths relative to base, in filesystem enumeration order
        key: POSIX path of base relative to the scanned root, unique per scan
    """

    name: str
    base: Path
    sounds: tuple[Path, ...] = ()
    key: str = ""

    def __post_init__(self):
        """Validate base is absolute."""
        if not self.base.is_absolute():
            raise ValueError(f"Pack base must be absolute: {self.base}")

    def clip_paths(self) -> list[Path]:
        """Return absolute clip paths in stored order."""
        return [self.base / sound for sound in self.sounds]
