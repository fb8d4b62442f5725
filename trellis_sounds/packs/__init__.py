"""Sound pack system for trellis-sounds.

This module provides the core pipeline: provisioning the local archive
cache, discovering packs in the extracted tree, and looking packs up.
"""

from trellis_sounds.packs.discovery import discover_packs, is_container_dir, iter_clips
from trellis_sounds.packs.extractor import ArchiveExtractor
from trellis_sounds.packs.fetcher import ArchiveFetcher
from trellis_sounds.packs.models import Pack
from trellis_sounds.packs.provisioner import CacheProvisioner
from trellis_sounds.packs.registry import ALL_PACKS, PackRegistry

__all__ = [
    # Models
    "Pack",
    # Discovery
    "discover_packs",
    "is_container_dir",
    "iter_clips",
    # Provisioning
    "ArchiveFetcher",
    "ArchiveExtractor",
    "CacheProvisioner",
    # Registry
    "ALL_PACKS",
    "PackRegistry",
]
