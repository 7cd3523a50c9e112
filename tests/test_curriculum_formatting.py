"""Compact and detailed rendering of curriculum contexts."""

from __future__ import annotations

from progress_report.curriculum import (
    CurriculumContext,
    format_compact,
    format_for_improvement_suggestions,
)


def _context(**overrides) -> CurriculumContext:
    values = dict(
        level="Level 3",
        unit=5,
        theme="Family",
        goals="Introduce family members",
        vocabulary=("mom", "dad"),
        sentences=("Who is she?", "She is my mom."),
        phonics=("a", "e"),
    )
    values.update(overrides)
    return CurriculumContext(**values)


def test_compact_summary():
    assert format_compact(_context()) == "当前学习单元: Level 3 Unit 5 - Family"


def test_detailed_block_sections():
    text = format_for_improvement_suggestions(_context())
    lines = text.split("\n")

    assert lines[0] == "## 课程大纲参考 (Level 3 Unit 5)"
    assert "**单元主题**: Family" in lines
    assert "**学习目标**: Introduce family members" in lines
    assert "【核心词汇】: mom, dad" in lines
    assert "  1. Who is she?" in lines
    assert "  2. She is my mom." in lines
    assert "【拼读内容】: a, e" in lines
    assert "**重要使用说明**:" in lines


def test_detailed_block_truncates_previews():
    vocabulary = tuple(f"w{i}" for i in range(20))
    sentences = tuple(f"Sentence {i}." for i in range(10))
    text = format_for_improvement_suggestions(
        _context(vocabulary=vocabulary, sentences=sentences)
    )

    assert f"【核心词汇】: {', '.join(vocabulary[:15])}, ..." in text
    assert "w15" not in text
    assert "  8. Sentence 7." in text
    assert "Sentence 8." not in text
    assert "\n  ...\n" in text


def test_detailed_block_omits_empty_sections():
    text = format_for_improvement_suggestions(
        _context(theme="", goals="", vocabulary=(), sentences=(), phonics=())
    )

    assert "单元主题" not in text
    assert "学习目标" not in text
    assert "【核心词汇】:" not in text
    assert "【核心句式】:" not in text
    assert "【拼读内容】" not in text
    assert text.startswith("## 课程大纲参考 (Level 3 Unit 5)")


def test_formatting_is_pure():
    context = _context()

    assert format_for_improvement_suggestions(context) == format_for_improvement_suggestions(context)
    assert context == _context()
