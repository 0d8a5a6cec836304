# storyboardcreator/storage/codec.py
"""
Metadata record schema and its encoders.

The record is the only persisted part of a storyboard:

    {
      "format_version": 1,
      "title": str,
      "author": str,
      "shots": [{"title": str, "body": str, "image_file_name": str | null}, ...]
    }

The image cache and the staging path are session state and never appear here.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from storyboardcreator.core.errors import StoryboardFormatError
from storyboardcreator.core.models import Shot

FORMAT_VERSION = 1


def _require_str(data: Dict[str, Any], key: str, where: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise StoryboardFormatError(f"{where}.{key} must be a string, got {type(value).__name__}")
    return value


def _shot_from_dict(data: Any, position: int) -> Shot:
    where = f"shots[{position}]"
    if not isinstance(data, dict):
        raise StoryboardFormatError(f"{where} must be an object")
    image = data.get("image_file_name")
    if image is not None and not isinstance(image, str):
        raise StoryboardFormatError(f"{where}.image_file_name must be a string or null")
    return Shot(
        title=_require_str(data, "title", where),
        body=_require_str(data, "body", where),
        image_file_name=image,
    )


@dataclass
class StoryboardRecord:
    title: str = ""
    author: str = ""
    shots: List[Shot] = field(default_factory=list)
    format_version: int = FORMAT_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format_version": self.format_version,
            "title": self.title,
            "author": self.author,
            "shots": [s.to_dict() for s in self.shots],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "StoryboardRecord":
        if not isinstance(data, dict):
            raise StoryboardFormatError("metadata record must be an object")
        version = data.get("format_version", FORMAT_VERSION)
        if not isinstance(version, int) or isinstance(version, bool):
            raise StoryboardFormatError("format_version must be an integer")
        if version > FORMAT_VERSION:
            raise StoryboardFormatError(
                f"metadata format_version {version} is newer than supported {FORMAT_VERSION}"
            )
        shots = data.get("shots", [])
        if not isinstance(shots, list):
            raise StoryboardFormatError("shots must be a list")
        return cls(
            title=_require_str(data, "title", "record"),
            author=_require_str(data, "author", "record"),
            shots=[_shot_from_dict(x, i) for i, x in enumerate(shots)],
            format_version=version,
        )


class MetadataCodec:
    def encode(self, record: StoryboardRecord) -> bytes:
        raise NotImplementedError

    def decode(self, payload: bytes) -> StoryboardRecord:
        """
        Parse payload into a record. Raises StoryboardFormatError on anything
        that is not a well-formed record.
        """
        raise NotImplementedError


class JsonMetadataCodec(MetadataCodec):
    """UTF-8 JSON encoding of StoryboardRecord."""

    def __init__(self, indent: int | None = 2):
        self.indent = indent

    def encode(self, record: StoryboardRecord) -> bytes:
        return json.dumps(record.to_dict(), ensure_ascii=False, indent=self.indent).encode("utf-8")

    def decode(self, payload: bytes) -> StoryboardRecord:
        try:
            data = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StoryboardFormatError(f"metadata record is not valid JSON: {exc}") from exc
        return StoryboardRecord.from_dict(data)
