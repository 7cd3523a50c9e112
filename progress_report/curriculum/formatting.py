"""Render a curriculum context as prompt-ready text."""

from __future__ import annotations

from .types import CurriculumContext

VOCABULARY_PREVIEW_LIMIT = 15
SENTENCE_PREVIEW_LIMIT = 8

# Fixed guidance appended to the detailed block; tells the model how to cite
# curriculum words and sentences in the improvement suggestions.
_SUGGESTION_INSTRUCTIONS: tuple[str, ...] = (
    "---",
    "**重要使用说明**:",
    "",
    '在生成"提升建议"(suggestions)时，你**必须**：',
    "1. **强制引用**上述课程内容中的具体词汇和句式",
    "2. 从【核心词汇】中选择2-3个单词作为练习例子",
    "3. 从【核心句式】中选择1-2个句子作为练习例子",
    "4. 说明具体的练习方法和步骤",
    "5. 确保两个建议标题和内容有明显差异（一个聚焦单词，一个聚焦句子）",
    "6. **关键要求**：在同一份报告的所有建议中（pronunciation、grammar、intonation），"
    "**必须使用不同的单词和句子**，避免重复引用相同的课程内容",
    "",
    "【示例格式】：",
    '"建议进行单词跟读练习。从本单元的核心词汇中，可以选择以下单词进行重点练习：',
    "",
    "1) family /ˈfæməli/ - 注意 a 的发音",
    "2) brother /ˈbrʌðər/ - 注意 th 的发音",
    "",
    '练习建议：每天跟读5-10遍，注意模仿正确发音。"',
    "",
    "重要：在生成建议时，请直接引用单词和句子，不要使用任何 markdown 格式符号（如 ** 或 - 等），保持纯文本格式。",
    "",
    "【单词和句子分配建议】（确保不重复）：",
    "• 发音维度：选择包含特定音标的单词（如含th/r/l的单词）和基础句式",
    "• 语法维度：选择体现语法规则的单词（如动词、名词）和包含目标语法的句式",
    "• 语调维度：选择多音节单词和较长的表达性句式",
    "",
)


def format_compact(context: CurriculumContext) -> str:
    """One-line summary used at the top of a prompt."""

    return f"当前学习单元: {context.level} Unit {context.unit} - {context.theme}"


def format_for_improvement_suggestions(context: CurriculumContext) -> str:
    """Detailed multi-section block for the suggestions part of the report."""

    sections: list[str] = [
        f"## 课程大纲参考 ({context.level} Unit {context.unit})",
        "",
    ]

    if context.theme:
        sections.extend([f"**单元主题**: {context.theme}", ""])

    if context.goals:
        sections.extend([f"**学习目标**: {context.goals}", ""])

    if context.vocabulary:
        preview = ", ".join(context.vocabulary[:VOCABULARY_PREVIEW_LIMIT])
        more = ", ..." if len(context.vocabulary) > VOCABULARY_PREVIEW_LIMIT else ""
        sections.extend([f"【核心词汇】: {preview}{more}", ""])

    if context.sentences:
        sections.append("【核心句式】:")
        for index, sentence in enumerate(context.sentences[:SENTENCE_PREVIEW_LIMIT], start=1):
            sections.append(f"  {index}. {sentence}")
        if len(context.sentences) > SENTENCE_PREVIEW_LIMIT:
            sections.append("  ...")
        sections.append("")

    if context.phonics:
        sections.extend([f"【拼读内容】: {', '.join(context.phonics)}", ""])

    sections.extend(_SUGGESTION_INSTRUCTIONS)
    return "\n".join(sections)


__all__ = [
    "format_compact",
    "format_for_improvement_suggestions",
    "VOCABULARY_PREVIEW_LIMIT",
    "SENTENCE_PREVIEW_LIMIT",
]
