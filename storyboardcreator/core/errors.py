# storyboardcreator/core/errors.py
"""
Exception types raised by the storyboard core.

Every error derives from StoryboardError and from the closest built-in
exception, so callers may catch either ``ShotIndexError`` or plain ``IndexError``.
"""
from __future__ import annotations


class StoryboardError(Exception):
    """Base class for all storyboard errors."""


class ShotIndexError(StoryboardError, IndexError):
    """A shot index lies outside the valid range of the shot list."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"shot index {index} out of range for {length} shot(s)")


class StoryboardIOError(StoryboardError, OSError):
    """Filesystem or archive operation failed."""


class StoryboardFormatError(StoryboardError, ValueError):
    """Archive, metadata record or id-named directory entry is malformed."""


class ImageCollisionError(StoryboardIOError, FileExistsError):
    """The image cache tried to create a file that already exists."""


class StoryboardClosedError(StoryboardError):
    """Operation attempted on a storyboard whose session has been closed."""
