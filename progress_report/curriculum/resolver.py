"""Resolve a (level, unit) pair to a :class:`CurriculumContext`."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from .extraction import (
    extract_phonics,
    extract_sentences,
    extract_vocabulary,
    read_text_field,
)
from .levels import normalize_level, parse_unit
from .store import CurriculumStore, row_unit
from .types import CurriculumContext, CurriculumRow

logger = logging.getLogger(__name__)

THEME_FIELD = "单元主题"
GOALS_FIELD = "单元知识目标"
LESSON_INFO_FIELD = "课程内容"
STANDARD_FIELD = "匹配新课标"
CONTENT_FIELD = "__EMPTY"


def build_context(
    level: str,
    unit: int,
    rows: Sequence[CurriculumRow],
) -> CurriculumContext:
    """Assemble the context from the rows of one unit.

    Descriptive columns come from the first row; the free-text content of every
    row is joined before extraction.
    """

    first_row = rows[0]
    content = "\n".join(read_text_field(row, CONTENT_FIELD) for row in rows)

    return CurriculumContext(
        level=level,
        unit=unit,
        theme=read_text_field(first_row, THEME_FIELD),
        goals=read_text_field(first_row, GOALS_FIELD),
        vocabulary=tuple(extract_vocabulary(content)),
        sentences=tuple(extract_sentences(content)),
        phonics=tuple(extract_phonics(content)),
        lesson_info=read_text_field(first_row, LESSON_INFO_FIELD),
        standard=read_text_field(first_row, STANDARD_FIELD),
    )


def resolve_context(
    store: CurriculumStore,
    level: str,
    unit: Any,
) -> CurriculumContext | None:
    """Look up the curriculum context for ``level``/``unit``.

    Returns ``None`` when the level is unknown, the unit cannot be parsed, or
    no row carries that unit. Callers treat all three the same way.
    """

    canonical_level = normalize_level(level)
    unit_number = parse_unit(unit)
    if unit_number is None:
        logger.warning("Invalid curriculum unit value: %r", unit)
        return None

    level_rows = store.rows_for_level(canonical_level)
    if not level_rows:
        logger.warning("No curriculum data for level %r", canonical_level)
        return None

    unit_rows = [row for row in level_rows if row_unit(row) == unit_number]
    if not unit_rows:
        logger.warning("%s has no Unit %d", canonical_level, unit_number)
        return None

    context = build_context(canonical_level, unit_number, unit_rows)
    logger.info(
        "Resolved curriculum %s Unit %d - %s",
        canonical_level,
        unit_number,
        context.theme,
    )
    return context


__all__ = ["resolve_context", "build_context"]
