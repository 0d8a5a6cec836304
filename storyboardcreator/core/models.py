# storyboardcreator/core/models.py
"""
Core data models for StoryboardCreator.

This file contains:
 - Shot: one storyboard entry (title, body text, optional cached image name)
 - ShotList: ordered sequence of shots with the index-based mutators used by
   the Storyboard aggregate (insert / remove / move / swap)
 - Factory helpers (new_shot)

Index rules shared by every ShotList mutator:
  - valid positions are 0..len-1; anything else raises ShotIndexError
  - insert() additionally accepts -1 or any index >= len, meaning "append"
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from storyboardcreator.core.errors import ShotIndexError

APPEND = -1


@dataclass
class Shot:
    title: str = ""
    body: str = ""
    image_file_name: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return self.image_file_name is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "body": self.body,
            "image_file_name": self.image_file_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Shot":
        return cls(
            title=data.get("title", ""),
            body=data.get("body", ""),
            image_file_name=data.get("image_file_name"),
        )


class ShotList:
    """
    In-memory ordered sequence of shots.

    The list itself is never handed out; callers get a tuple view or single
    Shot objects, so ordering changes only happen through the methods below.
    """

    def __init__(self, shots: Optional[List[Shot]] = None):
        self._shots: List[Shot] = list(shots or [])

    def __len__(self) -> int:
        return len(self._shots)

    def __iter__(self) -> Iterator[Shot]:
        return iter(tuple(self._shots))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ShotList):
            return self._shots == other._shots
        return NotImplemented

    def __repr__(self) -> str:
        return f"ShotList({self._shots!r})"

    def view(self) -> Tuple[Shot, ...]:
        return tuple(self._shots)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._shots):
            raise ShotIndexError(index, len(self._shots))

    def get(self, index: int) -> Shot:
        self._check_index(index)
        return self._shots[index]

    def insert(self, index: int, shot: Shot) -> int:
        """
        Place shot at index and return the position it ended up at.
        index == -1 or index >= len appends.
        """
        if index == APPEND or index >= len(self._shots):
            self._shots.append(shot)
            return len(self._shots) - 1
        if index < 0:
            raise ShotIndexError(index, len(self._shots))
        self._shots.insert(index, shot)
        return index

    def remove(self, index: int) -> Shot:
        self._check_index(index)
        return self._shots.pop(index)

    def move(self, old_index: int, new_index: int) -> None:
        """
        Take the shot out of old_index and reinsert it so that it sits at
        new_index in the resulting list.
        """
        self._check_index(old_index)
        self._check_index(new_index)
        shot = self._shots.pop(old_index)
        self._shots.insert(new_index, shot)

    def swap(self, i: int, j: int) -> None:
        self._check_index(i)
        self._check_index(j)
        if i == j:
            return
        self._shots[i], self._shots[j] = self._shots[j], self._shots[i]

    def to_list(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self._shots]


# -----------------------
# Factory helpers
# -----------------------
def new_shot(
    title: str = "",
    body: str = "",
    image_file_name: Optional[str] = None,
) -> Shot:
    return Shot(title=title, body=body, image_file_name=image_file_name)
