"""
trellis-sounds CLI - Manage sound packs for the Adafruit NeoTrellis M4.

Usage:
    trellis-sounds list
        Prints the name of every sound pack, one per line.

    trellis-sounds play [NAME]
        Plays every pack (NAME defaults to "all") or the pack called NAME.

    trellis-sounds play --raw
        Plays every .wav file in the cache, ignoring pack boundaries.

The sound pack archive is downloaded to ~/.trellis_sounds and extracted on
first use.
"""

import argparse
import logging
import sys
from pathlib import Path

from trellis_sounds.config import get_settings, resolve_cache_dir
from trellis_sounds.exceptions import TrellisSoundsError
from trellis_sounds.packs.discovery import iter_clips
from trellis_sounds.packs.registry import ALL_PACKS, PackRegistry
from trellis_sounds.playback import PlaybackSequencer, SoundDeviceSink

logger = logging.getLogger(__name__)


def _build_registry(args: argparse.Namespace) -> PackRegistry:
    settings = get_settings(args.config)
    if args.cache_dir is not None:
        settings.cache_dir = args.cache_dir
    return PackRegistry(resolve_cache_dir(settings), settings=settings)


def cmd_list(args: argparse.Namespace) -> None:
    """Print every discovered pack name."""
    registry = _build_registry(args)
    for pack in registry.load():
        print(pack.name)


def cmd_play(args: argparse.Namespace) -> None:
    """Play the selected packs on the default output device."""
    registry = _build_registry(args)
    registry.load()

    sequencer = PlaybackSequencer(SoundDeviceSink())
    if args.raw:
        extracted_root = registry.provisioner.extracted_root(registry.cache_dir)
        sequencer.play_files(iter_clips(extracted_root))
        return

    # An unknown name selects nothing and plays nothing
    sequencer.play_all(registry.select(args.name))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trellis-sounds",
        description="Utility to manage sound packs for the Adafruit M4 Trellis.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help="Cache directory (default: ~/.trellis_sounds)",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # list
    list_parser = subparsers.add_parser("list", help="List all sound packs")
    list_parser.set_defaults(func=cmd_list)

    # play
    play_parser = subparsers.add_parser("play", help="Play a sound pack")
    play_parser.add_argument(
        "name",
        nargs="?",
        default=ALL_PACKS,
        help='Pack name, or "all" to play every pack (default: all)',
    )
    play_parser.add_argument(
        "--raw",
        action="store_true",
        help="Play every .wav file in the cache, ignoring pack boundaries",
    )
    play_parser.set_defaults(func=cmd_play)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "raw", False) and args.name != ALL_PACKS:
        parser.error("play --raw plays every clip and does not take a pack name")

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        args.func(args)
    except (TrellisSoundsError, OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
