"""Typed containers shared by the curriculum modules.

Kept separate so `store`, `resolver` and `formatting` can import them without
circular dependencies.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Tuple

CurriculumRow = Mapping[str, Any]


@dataclass(frozen=True)
class CurriculumContext:
    """Resolved teaching content for one unit of one level."""

    level: str
    unit: int
    theme: str
    goals: str
    vocabulary: Tuple[str, ...]
    sentences: Tuple[str, ...]
    phonics: Tuple[str, ...]
    lesson_info: str = ""
    standard: str = ""

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        for key in ("vocabulary", "sentences", "phonics"):
            payload[key] = list(payload[key])
        return payload


__all__ = ["CurriculumContext", "CurriculumRow"]
