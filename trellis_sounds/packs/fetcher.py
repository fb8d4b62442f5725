"""Archive fetcher for downloading the sound pack archive.

This module provides the ArchiveFetcher class, which streams a remote
resource into a local file.
"""

import logging
import os
import tempfile
from pathlib import Path

import requests

from trellis_sounds.exceptions import FetchError
from trellis_sounds.packs._url_validation import validate_archive_url

logger = logging.getLogger(__name__)


class ArchiveFetcher:
    """Downloads a remote archive into a local file.

    The body is streamed into a temporary file next to the destination and
    renamed into place once complete, so the destination only ever exists
    as a fully written file.

    Attributes:
        timeout: HTTP request timeout in seconds
        chunk_size: Bytes per streamed chunk
        session: requests session used for the GET request, None for a
                 short-lived session per fetch
    """

    def __init__(
        self,
        timeout: float = 60.0,
        chunk_size: int = 64 * 1024,
        session: requests.Session | None = None,
    ):
        """Initialize archive fetcher.

        Args:
            timeout: HTTP request timeout (default: 60s)
            chunk_size: Bytes per streamed chunk (default: 64 KiB)
            session: Optional requests session (default: a new session per fetch)
        """
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.session = session

    def fetch(self, url: str, destination: Path) -> Path:
        """Download url into destination.

        Args:
            url: HTTP(S) URL of the archive
            destination: Local file to create

        Returns:
            Path to the downloaded file

        Raises:
            ValueError: If url is not an HTTP(S) URL
            FetchError: If the request fails, the server answers with a
                        non-success status, or the file cannot be written
        """
        validate_archive_url(url)

        # Download to temporary file in the destination directory
        try:
            with tempfile.NamedTemporaryFile(
                dir=destination.parent, prefix=f".{destination.name}.", suffix=".part", delete=False
            ) as tmp_file:
                tmp_path = Path(tmp_file.name)
        except OSError as e:
            raise FetchError(f"Cannot write to {destination.parent}: {e}") from e

        try:
            total = self._download(url, tmp_path)
            os.replace(tmp_path, destination)
        except requests.RequestException as e:
            raise FetchError(f"Failed to download {url}: {e}") from e
        except OSError as e:
            raise FetchError(f"Failed to write {destination}: {e}") from e
        finally:
            # Cleanup temporary file
            if tmp_path.exists():
                tmp_path.unlink()

        logger.info(f"Downloaded {total} bytes to {destination}")
        return destination

    def _download(self, url: str, path: Path) -> int:
        if self.session is not None:
            return self._stream(self.session, url, path)
        with requests.Session() as session:
            return self._stream(session, url, path)

    def _stream(self, session: requests.Session, url: str, path: Path) -> int:
        total = 0
        with session.get(url, stream=True, timeout=self.timeout) as response:
            response.raise_for_status()
            with open(path, "wb") as f:
                for chunk in response.iter_content(chunk_size=self.chunk_size):
                    f.write(chunk)
                    total += len(chunk)
        return total
