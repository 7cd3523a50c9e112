"""Helpers to construct system/user prompts for the learning-progress report.

Given two lesson transcripts and the (optional) curriculum context, we emit:
* A system prompt describing the teaching-expert persona and strict JSON contract.
* A user prompt containing the curriculum reference, both transcripts and guardrails.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from progress_report.curriculum import (
    CurriculumContext,
    format_compact,
    format_for_improvement_suggestions,
)

SYSTEM_PROMPT = (
    "你是一位专业的英语教学专家，擅长分析1对1教学场景中学生的英语学习表现。"
    "你会收到同一名学生两节课的语音转录文本（包含老师和学生的对话），"
    "请对比两节课，评估学生的学习进步，重点关注学生的发言而非老师的教学内容。"
    "请根据对话内容推断老师和学生的角色：提问、引导、纠错的通常是老师，回答、跟读的通常是学生。"
)

JSON_CONTRACT = (
    " 仅以合法 JSON 格式回答，结构如下："
    " {\n"
    '  "summary": string,\n'
    '  "strengths": string[],\n'
    '  "suggestions": [{"dimension": "pronunciation" | "grammar" | "intonation" | "fluency" | "vocabulary",'
    ' "title": string, "description": string}],\n'
    '  "scores": {"pronunciation": number, "grammar": number, "intonation": number, "fluency": number},\n'
    '  "curriculumReference": string | null\n'
    " }.\n"
    "scores 中每一项为 0 到 100 的数字。不要在 JSON 前后输出任何其他文字。"
)

NO_CURRICULUM_NOTE = (
    "【课程大纲参考】: 暂无该单元的课程内容。"
    "请仅根据转录文本生成提升建议，并将 curriculumReference 设为 null。"
)


@dataclass(frozen=True)
class TranscriptInput:
    label: str
    text: str


@dataclass(frozen=True)
class PromptBundle:
    system_prompt: str
    user_prompt: str


def _format_transcripts(transcripts: Sequence[TranscriptInput]) -> str:
    blocks: list[str] = []
    for index, transcript in enumerate(transcripts, start=1):
        label = transcript.label.strip() or f"视频{index}"
        blocks.append(f"【{label} 转录文本】\n{transcript.text.strip()}")
    return "\n\n".join(blocks)


def build_report_prompt(
    *,
    student_name: str,
    transcripts: Sequence[TranscriptInput],
    curriculum: CurriculumContext | None,
) -> PromptBundle:
    """Compose system/user prompts for one student's progress report."""

    if not transcripts:
        raise ValueError("At least one transcript is required")
    for transcript in transcripts:
        if not transcript.text or not transcript.text.strip():
            raise ValueError(f"Transcript {transcript.label!r} is empty")

    student = student_name.strip() or "学生"
    sections: list[str] = []

    if curriculum is not None:
        sections.append(format_compact(curriculum))
    sections.append(f"学生姓名: {student}")
    sections.append(_format_transcripts(transcripts))

    if curriculum is not None:
        sections.append(format_for_improvement_suggestions(curriculum))
    else:
        sections.append(NO_CURRICULUM_NOTE)

    sections.append(
        f"请对比以上转录文本，生成 {student} 的学习进步报告。"
        "suggestions 至少包含 pronunciation、grammar、intonation 三个维度，"
        "每条建议都要给出具体的练习方法。"
    )

    return PromptBundle(
        system_prompt=SYSTEM_PROMPT + JSON_CONTRACT,
        user_prompt="\n\n".join(sections),
    )


__all__ = [
    "PromptBundle",
    "TranscriptInput",
    "build_report_prompt",
    "NO_CURRICULUM_NOTE",
]
