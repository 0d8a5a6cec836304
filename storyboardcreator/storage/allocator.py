# storyboardcreator/storage/allocator.py
"""
Integer-named directory allocation.

Staging directories live side by side under one shared temp root and are
named 0, 1, 2, ... The next name is one greater than the largest integer name
currently present. The same scan is used by the image cache for file stems.

StagingAllocator.allocate() only computes the path; reserve() computes and
creates it. Neither is safe against a second process scanning the same root
at the same time. LockedStagingAllocator serializes reservations inside one
process and relies on exclusive mkdir to detect losers across processes.
"""
from __future__ import annotations

import logging
import re
import threading
from pathlib import Path
from typing import Callable, Iterable, Optional

from storyboardcreator.core.errors import StoryboardFormatError, StoryboardIOError
from storyboardcreator.storage.filesystem import LocalFileSystem

logger = logging.getLogger(__name__)

ID_REGEX = re.compile(r"^\d+$", re.ASCII)

Lister = Callable[[Path], Iterable[str]]


def parse_id(name: str, *, strip_extension: bool = False) -> Optional[int]:
    """
    Return the integer an entry name stands for, or None if it is not one.
    With strip_extension the last suffix is ignored ("12.png" -> 12).
    """
    text = Path(name).stem if strip_extension else name
    if ID_REGEX.match(text):
        return int(text)
    return None


def scan_max_id(
    names: Iterable[str], *, strip_extension: bool = False, strict: bool = False
) -> int:
    """
    Largest integer name among names, -1 if there is none.
    strict: raise StoryboardFormatError on the first non-numeric name instead
    of skipping it.
    """
    best = -1
    for name in names:
        value = parse_id(name, strip_extension=strip_extension)
        if value is None:
            if strict:
                raise StoryboardFormatError(f"non-numeric entry {name!r} in id scan")
            logger.debug("skipping non-numeric entry %r", name)
            continue
        best = max(best, value)
    return best


class StagingAllocator:
    """
    Hands out fresh, integer-named working directories under a temp root.

    lister: optional callable returning the entry names of a directory. When
    given, the allocator does not touch the filesystem in allocate().
    """

    def __init__(
        self,
        fs: Optional[LocalFileSystem] = None,
        lister: Optional[Lister] = None,
        *,
        strict: bool = False,
    ):
        self.fs = fs or LocalFileSystem()
        self._lister = lister
        self.strict = strict

    def _names(self, temp_root: Path) -> Iterable[str]:
        if self._lister is not None:
            return self._lister(temp_root)
        self.fs.ensure_dir(temp_root)
        return self.fs.list_dir(temp_root)

    def next_id(self, temp_root: Path) -> int:
        return scan_max_id(self._names(temp_root), strict=self.strict) + 1

    def allocate(self, temp_root: Path) -> Path:
        """Path of the next staging directory. Nothing is created for it."""
        temp_root = Path(temp_root)
        path = temp_root / str(self.next_id(temp_root))
        logger.debug("allocated staging path %s", path)
        return path

    def reserve(self, temp_root: Path) -> Path:
        """allocate() followed by creating the directory."""
        path = self.allocate(temp_root)
        self.fs.ensure_dir(path)
        return path


class LockedStagingAllocator(StagingAllocator):
    """
    StagingAllocator whose reserve() runs scan, compute and create as one unit.
    """

    def __init__(
        self,
        fs: Optional[LocalFileSystem] = None,
        lister: Optional[Lister] = None,
        *,
        strict: bool = False,
        max_attempts: int = 16,
    ):
        super().__init__(fs=fs, lister=lister, strict=strict)
        self.max_attempts = max_attempts
        self._lock = threading.Lock()

    def reserve(self, temp_root: Path) -> Path:
        temp_root = Path(temp_root)
        with self._lock:
            for _ in range(self.max_attempts):
                path = self.allocate(temp_root)
                try:
                    path.mkdir(parents=True, exist_ok=False)
                except FileExistsError:
                    # another process got there first; rescan
                    logger.debug("staging path %s taken, rescanning", path)
                    continue
                except OSError as exc:
                    raise StoryboardIOError(f"cannot create {path}: {exc}") from exc
                return path
        raise StoryboardIOError(
            f"could not reserve a staging directory under {temp_root} "
            f"after {self.max_attempts} attempts"
        )
