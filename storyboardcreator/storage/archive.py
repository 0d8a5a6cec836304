# storyboardcreator/storage/archive.py
from __future__ import annotations

import logging
import os
import zipfile
import zlib
from pathlib import Path

from storyboardcreator.core.errors import StoryboardFormatError, StoryboardIOError

logger = logging.getLogger(__name__)

# raised by zipfile for a readable container whose members cannot be decoded
_CORRUPT_MEMBER_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    NotImplementedError,
    RuntimeError,
    EOFError,
)


class ArchiveService:
    def extract(self, archive_path: Path, target_dir: Path) -> None:
        raise NotImplementedError

    def create(self, source_dir: Path, archive_path: Path) -> None:
        raise NotImplementedError


class ZipArchiveService(ArchiveService):
    """
    Packs a directory tree into a zip file and back.

    Member names are relative to the packed directory, directories get their
    own entries so empty folders (e.g. an empty image cache) survive.
    """

    def __init__(self, compress: bool = True):
        self.compression = zipfile.ZIP_DEFLATED if compress else zipfile.ZIP_STORED

    def extract(self, archive_path: Path, target_dir: Path) -> None:
        archive_path = Path(archive_path)
        if not archive_path.is_file():
            raise StoryboardIOError(f"{archive_path} not found")
        try:
            with zipfile.ZipFile(archive_path) as zf:
                zf.extractall(target_dir)
        except _CORRUPT_MEMBER_ERRORS as exc:
            raise StoryboardFormatError(f"{archive_path} is not a valid project archive: {exc}") from exc
        except OSError as exc:
            raise StoryboardIOError(f"cannot extract {archive_path}: {exc}") from exc

    def create(self, source_dir: Path, archive_path: Path) -> None:
        """
        Write source_dir into a fresh archive at archive_path, replacing any
        existing file only once the new archive is complete.
        """
        source_dir, archive_path = Path(source_dir), Path(archive_path)
        tmp = archive_path.with_name(archive_path.name + ".tmp")
        try:
            archive_path.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(tmp, "w", compression=self.compression) as zf:
                for dirpath, dirnames, filenames in os.walk(source_dir):
                    dirnames.sort()
                    filenames.sort()
                    current = Path(dirpath)
                    relative_dir = current.relative_to(source_dir)
                    if relative_dir != Path("."):
                        zf.write(current, relative_dir.as_posix() + "/")
                    for name in filenames:
                        file_path = current / name
                        zf.write(file_path, file_path.relative_to(source_dir).as_posix())
            tmp.replace(archive_path)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise StoryboardIOError(f"cannot write archive {archive_path}: {exc}") from exc
        logger.debug("packed %s into %s", source_dir, archive_path)
