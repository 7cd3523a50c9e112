"""Field access and labeled-section extraction over curriculum rows.

Curriculum files are spreadsheet exports, so the same logical column can show
up as ``"Unit"``, ``"Unit\\n"`` or with stray spaces, and the teaching content
lives in one free-text blob with sections introduced by Chinese headers::

    词汇：mom, dad, sister, brother 等
    句式：
    Who is she?
    She is my mom.
    拼读：a, e, i

Each extractor captures the text after its header up to a blank line, the next
known header, or the end of the blob. A missing header yields an empty list.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

SENTENCE_MARKER = "—"

_VOCABULARY_SECTION = re.compile(
    r"词汇[：:]([\s\S]*?)(?=\n\n|句式|句子|拼读|绘本|\Z)"
)
_SENTENCE_SECTION = re.compile(r"(?:句式|句子)[：:]([\s\S]*?)(?=\n\n|拼读|绘本|\Z)")
_PHONICS_SECTION = re.compile(r"拼读[：:]([\s\S]*?)(?=\n\n|绘本|\Z)")
_MARKED_SENTENCE = re.compile(r"—[^—\n]+")

_TOKEN_DELIMITERS = re.compile(r"[,，、\s]+")
_COUNTER_TOKEN = re.compile(r"^\d+个$")
_FILLER_TOKENS = frozenset({"等"})


def read_field(row: Mapping[str, Any], name: str) -> Any:
    """Return a row value for ``name`` regardless of trailing newlines or spaces."""

    for key in (name, f"{name}\n"):
        value = row.get(key)
        if value is not None:
            return value
    for key, value in row.items():
        if isinstance(key, str) and key.strip() == name and value is not None:
            return value
    return None


def read_text_field(row: Mapping[str, Any], name: str) -> str:
    """Like :func:`read_field` but always returns a stripped string."""

    value = read_field(row, name)
    if value is None:
        return ""
    return str(value).strip()


def _split_tokens(text: str) -> list[str]:
    return [token for token in _TOKEN_DELIMITERS.split(text) if token.strip()]


def extract_vocabulary(text: str) -> list[str]:
    """Extract the vocabulary words listed after ``词汇：``."""

    match = _VOCABULARY_SECTION.search(text or "")
    if not match:
        return []

    return [
        word
        for word in _split_tokens(match.group(1))
        if word not in _FILLER_TOKENS and not _COUNTER_TOKEN.match(word)
    ]


def extract_sentences(text: str) -> list[str]:
    """Extract sentence patterns.

    Lines of the ``句式：``/``句子：`` section come first, followed by every
    line item introduced by the ``—`` marker anywhere in the blob.
    """

    text = text or ""
    sentences: list[str] = []

    match = _SENTENCE_SECTION.search(text)
    if match:
        for line in match.group(1).split("\n"):
            line = line.strip()
            if line and not line.startswith(SENTENCE_MARKER):
                sentences.append(line)

    for marked in _MARKED_SENTENCE.findall(text):
        sentence = marked[len(SENTENCE_MARKER):].strip()
        if sentence:
            sentences.append(sentence)

    return sentences


def extract_phonics(text: str) -> list[str]:
    """Extract phonics items listed after ``拼读：``."""

    match = _PHONICS_SECTION.search(text or "")
    if not match:
        return []

    return [
        item
        for item in _split_tokens(match.group(1))
        if not _COUNTER_TOKEN.match(item)
    ]


__all__ = [
    "read_field",
    "read_text_field",
    "extract_vocabulary",
    "extract_sentences",
    "extract_phonics",
]
