# storyboardcreator/storage/image_cache.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from storyboardcreator.storage.allocator import parse_id, scan_max_id
from storyboardcreator.storage.filesystem import LocalFileSystem

logger = logging.getLogger(__name__)


def _make_image_filename(image_id: int, ext: str) -> str:
    return f"{image_id}{ext}"


class ImageCache:
    """
    Copies of a project's images, stored as <id><original extension>.

    Ids grow by one per added image and are never reused while the cache is
    open. Nothing is ever deleted from the cache; a shot dropping its image
    leaves the file in place.
    """

    def __init__(
        self,
        root_dir: Path,
        last_id: int = -1,
        *,
        fs: Optional[LocalFileSystem] = None,
    ):
        self.root_dir = Path(root_dir)
        self.last_id = last_id
        self.fs = fs or LocalFileSystem()

    @classmethod
    def open(
        cls,
        root_dir: Path,
        *,
        fs: Optional[LocalFileSystem] = None,
        strict: bool = False,
    ) -> "ImageCache":
        """
        Open (creating if missing) the cache at root_dir and resume numbering
        after the largest id found there.
        """
        fs = fs or LocalFileSystem()
        root_dir = Path(root_dir)
        fs.ensure_dir(root_dir)
        last_id = scan_max_id(fs.list_dir(root_dir), strip_extension=True, strict=strict)
        logger.debug("opened image cache %s (last id %d)", root_dir, last_id)
        return cls(root_dir, last_id, fs=fs)

    def add_image(self, source_path: Path) -> str:
        """
        Copy source_path into the cache and return the new file name.
        """
        source_path = Path(source_path)
        file_name = _make_image_filename(self.last_id + 1, source_path.suffix)
        self.fs.copy_file(source_path, self.root_dir / file_name)
        self.last_id += 1
        logger.debug("cached %s as %s", source_path, file_name)
        return file_name

    def path_of(self, file_name: str) -> Path:
        return self.root_dir / file_name

    def list_images(self) -> List[str]:
        """Cached file names in id order."""
        names = [
            n for n in self.fs.list_dir(self.root_dir)
            if parse_id(n, strip_extension=True) is not None
        ]
        return sorted(names, key=lambda n: parse_id(n, strip_extension=True))

    def unreferenced(self, referenced: Iterable[Optional[str]]) -> List[str]:
        """Cached files that no name in referenced points at. Reported, never deleted."""
        keep = {n for n in referenced if n}
        return [n for n in self.list_images() if n not in keep]
