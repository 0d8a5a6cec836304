# storyboardcreator/storage/filesystem.py
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

from storyboardcreator.core.errors import ImageCollisionError, StoryboardIOError

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """
    Filesystem primitives used by the storyboard core.

    Every OSError is re-raised as StoryboardIOError (original error chained),
    except a copy onto an existing file which becomes ImageCollisionError.
    """

    def ensure_dir(self, p: Path) -> None:
        try:
            Path(p).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoryboardIOError(f"cannot create directory {p}: {exc}") from exc

    def list_dir(self, p: Path) -> List[str]:
        """Names of the direct entries of p, sorted."""
        try:
            return sorted(child.name for child in Path(p).iterdir())
        except OSError as exc:
            raise StoryboardIOError(f"cannot list directory {p}: {exc}") from exc

    def is_empty(self, p: Path) -> bool:
        return not self.list_dir(p)

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy src to dst. Never overwrites dst."""
        src, dst = Path(src), Path(dst)
        if not src.is_file():
            raise StoryboardIOError(f"{src} not found or not a file")
        created = False
        try:
            with src.open("rb") as fsrc:
                # exclusive create: an existing dst is never truncated
                with dst.open("xb") as fdst:
                    created = True
                    shutil.copyfileobj(fsrc, fdst)
        except FileExistsError as exc:
            raise ImageCollisionError(f"{dst} already exists") from exc
        except OSError as exc:
            if created:
                dst.unlink(missing_ok=True)
            raise StoryboardIOError(f"cannot copy {src} to {dst}: {exc}") from exc
        try:
            shutil.copystat(src, dst)
        except OSError as exc:
            raise StoryboardIOError(f"cannot copy {src} to {dst}: {exc}") from exc

    def read_bytes(self, p: Path) -> bytes:
        try:
            return Path(p).read_bytes()
        except OSError as exc:
            raise StoryboardIOError(f"cannot read {p}: {exc}") from exc

    def write_bytes(self, p: Path, data: bytes) -> None:
        """
        Atomically write data to p. Write to temporary then replace.
        """
        p = Path(p)
        tmp = p.with_suffix(p.suffix + ".tmp")
        try:
            tmp.write_bytes(data)
            tmp.replace(p)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise StoryboardIOError(f"cannot write {p}: {exc}") from exc

    def delete_tree(self, p: Path) -> None:
        try:
            shutil.rmtree(p)
        except OSError as exc:
            raise StoryboardIOError(f"cannot delete {p}: {exc}") from exc

    def remove_dir_if_empty(self, p: Path) -> bool:
        """Remove p when it exists and holds nothing. Returns True if removed."""
        p = Path(p)
        if not p.is_dir() or not self.is_empty(p):
            return False
        try:
            p.rmdir()
        except OSError as exc:
            raise StoryboardIOError(f"cannot remove {p}: {exc}") from exc
        logger.debug("removed empty directory %s", p)
        return True
