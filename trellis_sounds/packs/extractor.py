"""Archive extraction for the sound pack cache.

This module provides the ArchiveExtractor class, which unpacks a zip archive
into a directory tree while preserving Unix permissions.
"""

import logging
import os
import shutil
import tempfile
import zipfile
from pathlib import Path, PurePosixPath

from trellis_sounds.exceptions import ExtractionError

logger = logging.getLogger(__name__)


def _check_member_name(name: str) -> None:
    """Reject absolute member paths and parent references."""
    member_path = PurePosixPath(name.replace("\\", "/"))
    if member_path.is_absolute() or ".." in member_path.parts:
        raise ExtractionError(f"Invalid archive member path: {name}")


def _apply_permissions(path: Path, info: zipfile.ZipInfo) -> None:
    if os.name != "posix":
        return
    mode = (info.external_attr >> 16) & 0o7777
    if mode:
        os.chmod(path, mode)


class ArchiveExtractor:
    """Unpacks zip archives beneath a target directory.

    Members are extracted into a staging directory inside the target first.
    Top-level entries are moved into the target only after every member was
    written, so an interrupted extraction never leaves a partial tree at its
    final location.
    """

    def extract(self, archive_path: Path, target_dir: Path) -> list[Path]:
        """Extract archive_path into target_dir.

        Args:
            archive_path: Path to .zip archive
            target_dir: Directory receiving the archive's file tree

        Returns:
            Top-level paths created in target_dir

        Raises:
            FileNotFoundError: If archive doesn't exist
            ExtractionError: If the archive is corrupt, contains unsafe member
                             paths, or cannot be written out
        """
        if not archive_path.exists():
            raise FileNotFoundError(f"Archive not found: {archive_path}")

        target_dir.mkdir(parents=True, exist_ok=True)

        try:
            with tempfile.TemporaryDirectory(dir=target_dir, prefix=".extract-") as temp_dir:
                staging = Path(temp_dir)
                directories = self._extract_members(archive_path, staging)
                created = self._move_into_place(staging, target_dir)

            # Directory modes last and at the final location, a read-only
            # directory blocks both its children and its own move
            for name, info in reversed(directories):
                _apply_permissions(target_dir / name, info)
            return created
        except zipfile.BadZipFile as e:
            raise ExtractionError(f"Corrupt archive {archive_path}: {e}") from e
        except OSError as e:
            raise ExtractionError(f"Failed to extract {archive_path}: {e}") from e

    def _extract_members(
        self, archive_path: Path, staging: Path
    ) -> list[tuple[str, zipfile.ZipInfo]]:
        with zipfile.ZipFile(archive_path) as archive:
            infos = archive.infolist()

            # Security check before anything is written
            for info in infos:
                _check_member_name(info.filename)

            directories = []
            for index, info in enumerate(infos):
                if info.comment:
                    logger.info(f"File {index} comment: {info.comment.decode(errors='replace')}")

                outpath = staging / info.filename
                if info.is_dir():
                    logger.debug(f'File {index} extracted to "{outpath}"')
                    outpath.mkdir(parents=True, exist_ok=True)
                    directories.append((info.filename, info))
                    continue

                logger.debug(f'File {index} extracted to "{outpath}" ({info.file_size} bytes)')
                outpath.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(info) as source, open(outpath, "wb") as target:
                    shutil.copyfileobj(source, target)
                _apply_permissions(outpath, info)

        return directories

    def _move_into_place(self, staging: Path, target_dir: Path) -> list[Path]:
        created = []
        for item in staging.iterdir():
            final_path = target_dir / item.name

            # Replace stale entries left behind by an earlier run
            if final_path.is_dir() and not final_path.is_symlink():
                shutil.rmtree(final_path)
            elif final_path.exists() or final_path.is_symlink():
                final_path.unlink()

            os.replace(item, final_path)
            created.append(final_path)
        return created
