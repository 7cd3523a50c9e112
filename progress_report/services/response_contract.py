"""Pydantic models for validating the report JSON returned by the LLM."""

from __future__ import annotations

import json
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, ValidationError, field_validator


class SuggestionDimension(str, Enum):
    PRONUNCIATION = "pronunciation"
    GRAMMAR = "grammar"
    INTONATION = "intonation"
    FLUENCY = "fluency"
    VOCABULARY = "vocabulary"


class ImprovementSuggestion(BaseModel):
    dimension: SuggestionDimension
    title: str
    description: str

    @field_validator("dimension", mode="before")
    @classmethod
    def lower_dimension(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class LearningReport(BaseModel):
    """Structured learning-progress report produced from two lesson transcripts."""

    summary: str
    strengths: List[str] = Field(default_factory=list)
    suggestions: List[ImprovementSuggestion] = Field(default_factory=list)
    scores: Dict[str, float] = Field(default_factory=dict)
    curriculum_reference: str | None = Field(default=None, alias="curriculumReference")

    model_config = {"populate_by_name": True, "extra": "allow"}

    @field_validator("scores")
    @classmethod
    def clamp_scores(cls, scores: Dict[str, float]) -> Dict[str, float]:
        return {name: max(0.0, min(100.0, float(value))) for name, value in scores.items()}

    @field_validator("strengths")
    @classmethod
    def drop_blank_strengths(cls, strengths: List[str]) -> List[str]:
        return [item.strip() for item in strengths if item and item.strip()]

    @classmethod
    def from_json(cls, payload: str) -> "LearningReport":
        cleaned = _clean_json_payload(payload)
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ValidationError.from_exception_data(
                "LearningReport",
                line_errors=[
                    {
                        "type": "json_invalid",
                        "loc": ("__root__",),
                        "input": payload,
                        "ctx": {"error": str(exc)},
                    }
                ],
            )
        return cls.model_validate(data)


class ResponseContractError(RuntimeError):
    """Raised when the LLM response contract cannot be validated."""


def _clean_json_payload(payload: str) -> str:
    """Strip Markdown code blocks and find the first/last brace to extract JSON."""
    if not payload:
        return ""

    cleaned = payload.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]

    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]

    cleaned = cleaned.strip()

    start = cleaned.find("{")
    end = cleaned.rfind("}")

    if start != -1 and end != -1 and end > start:
        cleaned = cleaned[start : end + 1]

    return cleaned


__all__ = [
    "ImprovementSuggestion",
    "LearningReport",
    "ResponseContractError",
    "SuggestionDimension",
]
