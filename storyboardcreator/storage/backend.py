# storyboardcreator/storage/backend.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from storyboardcreator.core.config import StoryboardConfig
from storyboardcreator.storage.allocator import StagingAllocator
from storyboardcreator.storage.archive import ArchiveService, ZipArchiveService
from storyboardcreator.storage.codec import JsonMetadataCodec, MetadataCodec
from storyboardcreator.storage.filesystem import LocalFileSystem


@dataclass
class StorageBackend:
    """The collaborators a Storyboard session works through."""

    config: StoryboardConfig
    fs: LocalFileSystem
    allocator: StagingAllocator
    archive: ArchiveService
    codec: MetadataCodec

    @classmethod
    def default(cls, config: Optional[StoryboardConfig] = None) -> "StorageBackend":
        config = config or StoryboardConfig.from_env()
        fs = LocalFileSystem()
        return cls(
            config=config,
            fs=fs,
            allocator=StagingAllocator(fs=fs, strict=config.strict_id_scan),
            archive=ZipArchiveService(compress=config.compression),
            codec=JsonMetadataCodec(),
        )
