"""Level labels, level-to-file mapping and input normalisation helpers."""

from __future__ import annotations

import re
from typing import Any

# Canonical level label -> data file name. Several labels may share one file.
LEVEL_FILE_MAP: dict[str, str] = {
    "Level 0": "curriculum-data-L0.json",
    "Level 1": "curriculum-data-L1.json",
    "Level 2": "curriculum-data-L2.json",
    "Level 3": "curriculum-data-L3.json",
    "Level 4": "curriculum-data-L4.json",
    "Level 5": "curriculum-data-L5.json",
    "Level 6": "curriculum-data-L6.json",
    "Level 7": "curriculum-data-L7_9.json",
    "Level 8": "curriculum-data-L7_9.json",
    "Level 9": "curriculum-data-L7_9.json",
    "Level S": "curriculum-data-LS_K.json",
    "Level K": "curriculum-data-LS_K.json",
    "启蒙": "curriculum-data-starter.json",
}

_LEVEL_ALIAS_PATTERN = re.compile(r"^(?:level|l)\s*([0-9]|s|k)$", re.IGNORECASE)
_UNIT_PATTERN = re.compile(r"^(?:unit|u)?\s*(\d+)(?![\d.])", re.IGNORECASE)


def normalize_level(level: str) -> str:
    """Map user supplied level spellings onto the canonical ``Level N`` label.

    ``"L3"``, ``"l 3"``, ``"level 3"`` and ``"LEVEL3"`` all become ``"Level 3"``.
    Labels that do not look like a level alias are returned trimmed.
    """

    normalized = (level or "").strip()
    match = _LEVEL_ALIAS_PATTERN.match(normalized)
    if match:
        return f"Level {match.group(1).upper()}"
    return normalized


def parse_unit(unit: Any) -> int | None:
    """Parse a unit identifier such as ``5``, ``"5"`` or ``"Unit 5"``.

    Strings may carry a ``Unit``/``U`` prefix and trailing text after the
    number (``"5 (review)"``). Signed or fractional numbers (``"Unit -5"``,
    ``"5.5"``) and other prefixes are rejected. Returns ``None`` when no
    integer can be recovered.
    """

    if isinstance(unit, bool):
        return None
    if isinstance(unit, int):
        return unit
    if isinstance(unit, float):
        return int(unit) if unit.is_integer() else None
    if not isinstance(unit, str):
        return None

    match = _UNIT_PATTERN.match(unit.strip())
    if not match:
        return None
    return int(match.group(1))


__all__ = ["LEVEL_FILE_MAP", "normalize_level", "parse_unit"]
