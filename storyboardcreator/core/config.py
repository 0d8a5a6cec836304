# storyboardcreator/core/config.py
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

# constants
APP_DIRNAME = "StoryboardCreator"
META_FILENAME = "core.json"
IMAGES_DIRNAME = "Images"

ENV_TEMP_ROOT = "STORYBOARD_TEMP_ROOT"
ENV_STRICT_ID_SCAN = "STORYBOARD_STRICT_ID_SCAN"

_TRUTHY = {"1", "true", "yes", "on"}


def default_temp_root() -> Path:
    return Path(tempfile.gettempdir()) / APP_DIRNAME


@dataclass
class StoryboardConfig:
    """
    Where and how a storyboard session keeps its working copy.

    - temp_root: shared parent of every staging directory
    - metadata_filename: name of the metadata record inside a staging dir / archive
    - images_dirname: image cache folder inside a staging dir / archive
    - strict_id_scan: raise on non-numeric entries while scanning for the next
      id instead of skipping them
    - compression: deflate archive members (stored otherwise)
    """

    temp_root: Path = field(default_factory=default_temp_root)
    metadata_filename: str = META_FILENAME
    images_dirname: str = IMAGES_DIRNAME
    strict_id_scan: bool = False
    compression: bool = True

    def __post_init__(self):
        self.temp_root = Path(self.temp_root)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "temp_root": str(self.temp_root),
            "metadata_filename": self.metadata_filename,
            "images_dirname": self.images_dirname,
            "strict_id_scan": self.strict_id_scan,
            "compression": self.compression,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoryboardConfig":
        return cls(
            temp_root=Path(data["temp_root"]) if data.get("temp_root") else default_temp_root(),
            metadata_filename=data.get("metadata_filename", META_FILENAME),
            images_dirname=data.get("images_dirname", IMAGES_DIRNAME),
            strict_id_scan=bool(data.get("strict_id_scan", False)),
            compression=bool(data.get("compression", True)),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StoryboardConfig":
        env = os.environ if environ is None else environ
        cfg = cls()
        if env.get(ENV_TEMP_ROOT):
            cfg.temp_root = Path(env[ENV_TEMP_ROOT])
        if env.get(ENV_STRICT_ID_SCAN):
            cfg.strict_id_scan = env[ENV_STRICT_ID_SCAN].strip().lower() in _TRUTHY
        return cfg
