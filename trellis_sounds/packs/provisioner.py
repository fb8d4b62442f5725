"""Cache provisioning for the sound pack archive.

This module provides the CacheProvisioner class, which makes sure the cache
root exists, the archive has been downloaded and the archive has been
extracted. Each step is skipped when its output is already present.
"""

import logging
from pathlib import Path

from trellis_sounds.config import Settings
from trellis_sounds.exceptions import CacheSetupError, ExtractionError
from trellis_sounds.packs.extractor import ArchiveExtractor
from trellis_sounds.packs.fetcher import ArchiveFetcher

logger = logging.getLogger(__name__)


class CacheProvisioner:
    """Idempotent download-then-extract bootstrap of the local cache.

    Cache layout:
        <cache_root>/sound_packs.zip   downloaded archive
        <cache_root>/sound_packs/      extracted tree

    The presence of each path is the only completion marker. No checksum or
    freshness check is made, and nothing is retried.

    Attributes:
        settings: Archive URL and cache layout names
        fetcher: Downloads the archive
        extractor: Unpacks the archive
    """

    def __init__(
        self,
        settings: Settings | None = None,
        fetcher: ArchiveFetcher | None = None,
        extractor: ArchiveExtractor | None = None,
    ):
        self.settings = settings or Settings()
        self.fetcher = fetcher or ArchiveFetcher(
            timeout=self.settings.request_timeout,
            chunk_size=self.settings.chunk_size,
        )
        self.extractor = extractor or ArchiveExtractor()

    def archive_path(self, cache_root: Path) -> Path:
        return cache_root / self.settings.archive_name

    def extracted_root(self, cache_root: Path) -> Path:
        return cache_root / self.settings.extracted_name

    def ensure(self, cache_root: Path) -> Path:
        """Ensure the cache root holds an extracted sound pack tree.

        Args:
            cache_root: Cache directory (e.g., ~/.trellis_sounds)

        Returns:
            Path to the extracted tree (cache_root/sound_packs)

        Raises:
            CacheSetupError: If cache_root cannot be created
            FetchError: If the archive download fails
            ExtractionError: If the archive cannot be extracted or does not
                             contain the expected tree
        """
        self._ensure_cache_root(cache_root)

        archive = self.archive_path(cache_root)
        if not archive.exists():
            logger.info(f"Downloading {archive}")
            self.fetcher.fetch(self.settings.archive_url, archive)
        else:
            logger.debug(f"Archive already present: {archive}")

        extracted = self.extracted_root(cache_root)
        if not extracted.exists():
            logger.info(f"Extracting {archive}")
            self.extractor.extract(archive, cache_root)
            if not extracted.exists():
                raise ExtractionError(
                    f"Archive {archive} does not contain {self.settings.extracted_name}/"
                )
        else:
            logger.debug(f"Archive already extracted: {extracted}")

        return extracted

    def _ensure_cache_root(self, cache_root: Path) -> None:
        if cache_root.exists():
            return

        logger.info(f"Cache dir does not exist, creating {cache_root}")
        try:
            # Single level only, parents must already exist
            cache_root.mkdir()
        except OSError as e:
            raise CacheSetupError(f"Cannot create cache dir {cache_root}: {e}") from e
