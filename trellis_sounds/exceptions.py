"""Exception hierarchy for trellis-sounds.

Every failure the tool can report derives from TrellisSoundsError so the
CLI can turn it into a single error line and a non-zero exit status.
"""


class TrellisSoundsError(Exception):
    """Base exception for trellis-sounds."""


class CacheSetupError(TrellisSoundsError):
    """Home directory or cache root cannot be resolved or created."""


class AcquisitionError(TrellisSoundsError):
    """Base for failures while obtaining the sound pack archive."""


class FetchError(AcquisitionError):
    """Downloading the archive failed."""


class ExtractionError(AcquisitionError):
    """Unpacking the archive failed."""


class DiscoveryError(TrellisSoundsError):
    """A directory being scanned for packs cannot be opened."""


class PlaybackError(TrellisSoundsError):
    """A clip cannot be opened or decoded."""
