# storyboardcreator/core/storyboard.py
"""
Storyboard aggregate root.

A Storyboard is one open editing session: the persisted metadata (title,
author, ordered shots) plus the session's staging directory and image cache.

Lifecycle:
  Storyboard.new()      -> fresh staging dir + empty Images cache
  Storyboard.load(path) -> fresh staging dir, archive extracted into it
  sb.save(path)         -> metadata written into staging, staging packed to path
  sb.close()            -> staging dir removed (and the temp root if now empty)
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from storyboardcreator.core.errors import (
    StoryboardClosedError,
    StoryboardFormatError,
    StoryboardIOError,
)
from storyboardcreator.core.models import APPEND, Shot, ShotList
from storyboardcreator.storage.backend import StorageBackend
from storyboardcreator.storage.codec import StoryboardRecord
from storyboardcreator.storage.image_cache import ImageCache

logger = logging.getLogger(__name__)


class Storyboard:
    def __init__(
        self,
        staging_path: Path,
        image_cache: ImageCache,
        backend: StorageBackend,
        *,
        title: str = "",
        author: str = "",
        shots: Optional[List[Shot]] = None,
    ):
        """
        Low-level constructor; use Storyboard.new() or Storyboard.load().
        """
        self.title = title
        self.author = author
        self._shots = ShotList(shots)
        self._image_cache = image_cache
        self._staging_path = Path(staging_path)
        self._backend = backend
        self._closed = False

    # -------------------------
    # Session lifecycle
    # -------------------------
    @classmethod
    def new(
        cls,
        backend: Optional[StorageBackend] = None,
        *,
        title: str = "",
        author: str = "",
    ) -> "Storyboard":
        backend = backend or StorageBackend.default()
        cfg = backend.config
        staging = backend.allocator.reserve(cfg.temp_root)
        cache = ImageCache.open(
            staging / cfg.images_dirname, fs=backend.fs, strict=cfg.strict_id_scan
        )
        logger.info("new storyboard session in %s", staging)
        return cls(staging, cache, backend, title=title, author=author)

    @classmethod
    def load(cls, path: Path, backend: Optional[StorageBackend] = None) -> "Storyboard":
        """
        Open the project archive at path in a fresh staging directory.
        The staging directory is removed again if anything fails.
        """
        backend = backend or StorageBackend.default()
        cfg = backend.config
        path = Path(path)
        staging = backend.allocator.reserve(cfg.temp_root)
        try:
            backend.archive.extract(path, staging)
            meta_path = staging / cfg.metadata_filename
            if not meta_path.is_file():
                raise StoryboardFormatError(
                    f"{path} has no {cfg.metadata_filename} metadata record"
                )
            record = backend.codec.decode(backend.fs.read_bytes(meta_path))
            cache = ImageCache.open(
                staging / cfg.images_dirname, fs=backend.fs, strict=cfg.strict_id_scan
            )
        except Exception:
            _discard_staging(backend, staging)
            raise
        logger.info("loaded %s into %s (%d shots)", path, staging, len(record.shots))
        return cls(
            staging,
            cache,
            backend,
            title=record.title,
            author=record.author,
            shots=record.shots,
        )

    def save(self, path: Path) -> None:
        """
        Write the metadata record into the staging directory and pack the
        whole staging tree into a new archive at path. The session stays open.
        """
        self._ensure_open()
        path = Path(path)
        cfg = self._backend.config
        payload = self._backend.codec.encode(self.to_record())
        self._backend.fs.write_bytes(self._staging_path / cfg.metadata_filename, payload)
        self._backend.archive.create(self._staging_path, path)
        logger.info("saved storyboard %r to %s", self.title, path)

    def close(self) -> None:
        """
        Delete the staging directory, then the shared temp root if it is now
        empty. Failing to remove the temp root is logged and ignored.
        """
        if self._closed:
            return
        fs = self._backend.fs
        if self._staging_path.exists():
            fs.delete_tree(self._staging_path)
        self._closed = True
        parent = self._staging_path.parent
        try:
            fs.remove_dir_if_empty(parent)
        except StoryboardIOError as exc:
            logger.warning("could not remove temp root %s: %s", parent, exc)
        logger.info("closed storyboard session %s", self._staging_path)

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoryboardClosedError(f"storyboard session {self._staging_path} is closed")

    def __enter__(self) -> "Storyboard":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------
    # Accessors
    # -------------------------
    @property
    def staging_path(self) -> Path:
        return self._staging_path

    @property
    def image_cache(self) -> ImageCache:
        return self._image_cache

    @property
    def shots(self) -> Tuple[Shot, ...]:
        return self._shots.view()

    @property
    def shot_count(self) -> int:
        return len(self._shots)

    def get_shot(self, index: int) -> Shot:
        return self._shots.get(index)

    def image_path(self, index: int) -> Optional[Path]:
        """Cached image file of the shot at index, None if it has no image."""
        shot = self._shots.get(index)
        if shot.image_file_name is None:
            return None
        return self._image_cache.path_of(shot.image_file_name)

    def unreferenced_images(self) -> List[str]:
        return self._image_cache.unreferenced(s.image_file_name for s in self._shots)

    def to_record(self) -> StoryboardRecord:
        return StoryboardRecord(
            title=self.title,
            author=self.author,
            shots=[Shot(**s.to_dict()) for s in self._shots],
        )

    # -------------------------
    # Shot mutation
    # -------------------------
    def add_shot(
        self,
        index: int = APPEND,
        shot: Optional[Shot] = None,
        image_path: Optional[Path] = None,
    ) -> int:
        """
        Insert shot (an empty one if omitted) at index; -1 or an index past the
        end appends. With image_path the image is cached and attached to the
        placed shot. Returns the shot's final index.
        """
        if image_path is not None:
            self._ensure_open()
        placed = self._shots.insert(index, shot if shot is not None else Shot())
        if image_path is not None:
            self.add_image_to_shot(image_path, placed)
        return placed

    def add_image_to_shot(self, image_path: Path, index: int) -> str:
        self._ensure_open()
        shot = self._shots.get(index)
        shot.image_file_name = self._image_cache.add_image(image_path)
        return shot.image_file_name

    def switch_shots(self, i: int, j: int) -> None:
        self._shots.swap(i, j)

    def move_shot(self, old_index: int, new_index: int) -> None:
        self._shots.move(old_index, new_index)

    def remove_shot(self, index: int) -> Shot:
        """Drop the shot at index. Its cached image file stays in the cache."""
        return self._shots.remove(index)

    def __repr__(self) -> str:
        return (
            f"Storyboard(title={self.title!r}, author={self.author!r}, "
            f"shots={len(self._shots)}, staging={str(self._staging_path)!r})"
        )


def _discard_staging(backend: StorageBackend, staging: Path) -> None:
    try:
        if staging.exists():
            backend.fs.delete_tree(staging)
        backend.fs.remove_dir_if_empty(staging.parent)
    except StoryboardIOError as exc:
        logger.warning("could not clean up staging dir %s: %s", staging, exc)


# -----------------------
# Factory helpers
# -----------------------
def new_storyboard(
    title: str = "",
    author: str = "",
    backend: Optional[StorageBackend] = None,
) -> Storyboard:
    return Storyboard.new(backend, title=title, author=author)


def load_storyboard(path: Path, backend: Optional[StorageBackend] = None) -> Storyboard:
    return Storyboard.load(path, backend)
