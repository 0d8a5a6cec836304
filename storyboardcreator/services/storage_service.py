# storyboardcreator/services/storage_service.py
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from storyboardcreator.core.config import StoryboardConfig
from storyboardcreator.core.errors import StoryboardFormatError, StoryboardIOError
from storyboardcreator.core.models import APPEND, Shot
from storyboardcreator.core.storyboard import Storyboard
from storyboardcreator.storage.backend import StorageBackend

DEFAULT_THUMBNAIL_SIZE = (400, 400)


class StoryboardService:
    """
    Thin service wrapper around Storyboard sessions for UI consumption.
    Keeps one backend (temp root, codec, archive format) for every session it opens.
    """

    def __init__(
        self,
        backend: Optional[StorageBackend] = None,
        config: Optional[StoryboardConfig] = None,
    ):
        self.backend = backend or StorageBackend.default(config)

    @property
    def temp_root(self) -> Path:
        return self.backend.config.temp_root

    def new_project(self, title: str = "", author: str = "") -> Storyboard:
        return Storyboard.new(self.backend, title=title, author=author)

    def open_project(self, path: str | Path) -> Storyboard:
        return Storyboard.load(Path(path), self.backend)

    def save_project(self, storyboard: Storyboard, path: str | Path) -> Path:
        path = Path(path)
        storyboard.save(path)
        return path

    def close_project(self, storyboard: Storyboard) -> None:
        storyboard.close()

    def add_shot(
        self,
        storyboard: Storyboard,
        index: int = APPEND,
        title: str = "",
        body: str = "",
        image_path: str | Path | None = None,
    ) -> int:
        """
        Wrapper around Storyboard.add_shot taking plain field values.
        Returns the index the shot was placed at.
        """
        return storyboard.add_shot(
            index,
            Shot(title=title, body=body),
            Path(image_path) if image_path is not None else None,
        )

    def attach_image(
        self, storyboard: Storyboard, index: int, image_path: str | Path
    ) -> str:
        return storyboard.add_image_to_shot(Path(image_path), index)

    def make_thumbnail(
        self,
        storyboard: Storyboard,
        index: int,
        size: Tuple[int, int] = DEFAULT_THUMBNAIL_SIZE,
    ) -> Optional[Image.Image]:
        """
        In-memory thumbnail of the image attached to shot index, None when the
        shot has no image. Nothing is written to the staging directory.
        """
        image_path = storyboard.image_path(index)
        if image_path is None:
            return None
        try:
            with Image.open(image_path) as im:
                im.thumbnail(size)
                return im.convert("RGB")
        except UnidentifiedImageError as exc:
            raise StoryboardFormatError(f"{image_path} is not a readable image") from exc
        except OSError as exc:
            raise StoryboardIOError(f"cannot read {image_path}: {exc}") from exc
