"""Pack discovery.

This module walks an extracted sound pack tree and classifies every
directory either as a pack (its own .wav files become the clip list) or as
a container (only traversed for the packs beneath it).
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from trellis_sounds.exceptions import DiscoveryError
from trellis_sounds.packs.models import Pack

logger = logging.getLogger(__name__)

CLIP_SUFFIX = ".wav"
CONTAINER_MARKER = "packs"


def is_container_dir(directory: Path, marker: str = CONTAINER_MARKER) -> bool:
    """Check if directory is a container of packs rather than a pack.

    Naming convention: a collection of packs has "packs" somewhere in its
    name (e.g., "sound_packs", "drum_packs"). The match is a case-sensitive
    substring test on the directory's own name.

    Args:
        directory: Directory to classify
        marker: Substring identifying container directories

    Returns:
        True if directory only groups other packs, False otherwise
    """
    return marker in directory.name


def _is_clip(path: Path) -> bool:
    return path.suffix == CLIP_SUFFIX


def _list_entries(directory: Path) -> list[Path]:
    try:
        return list(directory.iterdir())
    except OSError as e:
        raise DiscoveryError(f"Cannot read directory {directory}: {e}") from e


def _scan(
    directory: Path,
    root: Path,
    is_container: Callable[[Path], bool],
) -> list[Pack]:
    packs: list[Pack] = []
    sounds: list[Path] = []

    for entry in _list_entries(directory):
        try:
            entry_is_dir = entry.is_dir()
            entry_is_file = not entry_is_dir and entry.is_file()
        except OSError:
            # Unreadable entry, skip it
            continue

        if entry_is_dir:
            packs.extend(_scan(entry, root, is_container))
            continue

        if entry_is_file and _is_clip(entry):
            sounds.append(Path(entry.name))

    if is_container(directory):
        logger.debug(f"Skipping container directory: {directory}")
        return packs

    packs.append(
        Pack(
            name=directory.name,
            base=directory,
            sounds=tuple(sounds),
            key=directory.relative_to(root).as_posix(),
        )
    )
    return packs


def discover_packs(
    directory: Path,
    is_container: Callable[[Path], bool] = is_container_dir,
) -> list[Pack]:
    """Discover all sound packs below a directory.

    Walks the tree depth-first. Child directories are scanned before the
    directory containing them, so a pack's descendants always precede it.
    Within a directory, entries are visited in filesystem enumeration order,
    which is not sorted.

    Args:
        directory: Root of the extracted sound pack tree
        is_container: Predicate telling container directories apart from packs

    Returns:
        List of Pack objects, one per non-container directory visited
        (including directories without any clips)

    Raises:
        DiscoveryError: If a directory in the tree cannot be opened
    """
    root = directory.absolute()
    packs = _scan(root, root, is_container)
    logger.debug(f"Discovered {len(packs)} packs in {root}")
    return packs


def iter_clips(directory: Path) -> Iterator[Path]:
    """Yield every .wav file below directory, ignoring pack classification.

    Raises:
        DiscoveryError: If a directory in the tree cannot be opened
    """
    for entry in _list_entries(directory):
        logger.debug(f"Processing {entry}")
        try:
            entry_is_dir = entry.is_dir()
        except OSError:
            continue
        if entry_is_dir:
            yield from iter_clips(entry)
        elif _is_clip(entry):
            yield entry
