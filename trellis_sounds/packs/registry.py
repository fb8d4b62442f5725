"""Pack registry for accessing the cached sound packs.

This module provides the PackRegistry class, which provisions the local
cache, discovers the packs in it and answers lookups by name.
"""

import logging
from collections import Counter
from functools import partial
from pathlib import Path

from trellis_sounds.config import Settings
from trellis_sounds.packs.discovery import discover_packs, is_container_dir
from trellis_sounds.packs.models import Pack
from trellis_sounds.packs.provisioner import CacheProvisioner

logger = logging.getLogger(__name__)

ALL_PACKS = "all"


class PackRegistry:
    """Registry of the sound packs found in the local cache.

    Pack order is discovery order. Packs are identified uniquely by
    Pack.key; lookups by name return the first pack with that leaf name.

    Attributes:
        cache_dir: Cache root holding the archive and its extracted tree
        settings: Cache layout and container naming settings
        provisioner: Makes sure the extracted tree exists
    """

    def __init__(
        self,
        cache_dir: Path,
        provisioner: CacheProvisioner | None = None,
        settings: Settings | None = None,
    ):
        """Initialize pack registry.

        Args:
            cache_dir: Cache root (e.g., ~/.trellis_sounds)
            provisioner: Optional provisioner (default: built from settings)
            settings: Optional settings (default: Settings())
        """
        self.cache_dir = cache_dir
        self.settings = settings or Settings()
        self.provisioner = provisioner or CacheProvisioner(self.settings)
        self._packs: list[Pack] | None = None

    def load(self) -> list[Pack]:
        """Provision the cache and scan it for packs.

        Returns:
            Packs in discovery order

        Raises:
            TrellisSoundsError: If provisioning or discovery fails
        """
        extracted_root = self.provisioner.ensure(self.cache_dir)
        is_container = partial(is_container_dir, marker=self.settings.container_marker)
        packs = discover_packs(extracted_root, is_container=is_container)

        duplicates = [name for name, n in Counter(p.name for p in packs).items() if n > 1]
        for name in duplicates:
            keys = [p.key for p in packs if p.name == name]
            logger.warning(f"Pack name {name!r} is ambiguous, lookups use {keys[0]!r} of {keys}")

        logger.debug(f"Loaded {len(packs)} packs from {extracted_root}")
        self._packs = packs
        return packs

    @property
    def packs(self) -> list[Pack]:
        if self._packs is None:
            raise RuntimeError("PackRegistry.load() has not been called")
        return self._packs

    def list_packs(self) -> list[Pack]:
        """List all packs in discovery order."""
        return list(self.packs)

    def find_by_name(self, name: str) -> Pack | None:
        """Get the first pack with the given name, None if there is none."""
        for pack in self.packs:
            if pack.name == name:
                return pack
        return None

    def get_by_key(self, key: str) -> Pack | None:
        """Get pack by its path relative to the extracted root."""
        for pack in self.packs:
            if pack.key == key:
                return pack
        return None

    def has_pack(self, name: str) -> bool:
        return self.find_by_name(name) is not None

    def count(self) -> int:
        return len(self.packs)

    def select(self, target: str = ALL_PACKS) -> list[Pack]:
        """Resolve a play target to the packs it names.

        Args:
            target: "all" or an exact pack name

        Returns:
            Every pack for "all", otherwise the matching pack, or an empty
            list when no pack has that name
        """
        if target == ALL_PACKS:
            return self.list_packs()

        pack = self.find_by_name(target)
        if pack is None:
            logger.debug(f"No pack named {target!r}")
            return []
        return [pack]
