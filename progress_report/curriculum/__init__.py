"""Curriculum knowledge base.

Modules follow the order in which a lookup flows through them:

1. `levels` – canonical level labels, level-to-file map, input normalisation.
2. `store` – load the per-level JSON files once into memory.
3. `extraction` – read loosely-named columns and pull vocabulary, sentence
   and phonics lists out of the free-text content.
4. `resolver` – turn a (level, unit) pair into a `CurriculumContext`.
5. `formatting` – render a context as prompt-ready text.
"""

from .extraction import extract_phonics, extract_sentences, extract_vocabulary
from .formatting import format_compact, format_for_improvement_suggestions
from .levels import LEVEL_FILE_MAP, normalize_level, parse_unit
from .resolver import resolve_context
from .store import CurriculumStore
from .types import CurriculumContext

__all__ = [
    "LEVEL_FILE_MAP",
    "CurriculumContext",
    "CurriculumStore",
    "extract_phonics",
    "extract_sentences",
    "extract_vocabulary",
    "format_compact",
    "format_for_improvement_suggestions",
    "normalize_level",
    "parse_unit",
    "resolve_context",
]
