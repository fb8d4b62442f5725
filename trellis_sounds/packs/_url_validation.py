"""URL validation for archive downloads."""

from urllib.parse import urlparse


def validate_archive_url(url: str) -> None:
    """Validate URL before download.

    Args:
        url: The URL to validate.

    Raises:
        ValueError: If the URL scheme is not HTTP(S) or has no hostname.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Only HTTP(S) URLs allowed for downloads, got: {parsed.scheme!r}")
    if not parsed.hostname:
        raise ValueError("URL must have a hostname")
