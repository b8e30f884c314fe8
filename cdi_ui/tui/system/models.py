from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PickItem:
    """One row of a picker; ``payload`` is handed back to the caller on Enter."""

    id: str
    title: str
    tags: tuple[str, ...] = ()
    description: str = ""
    search_blob: str = ""
    payload: Any = None

    @property
    def match_text(self) -> str:
        """Text the picker search is matched against."""
        return self.search_blob or self.title
