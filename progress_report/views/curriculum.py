"""Pydantic schemas for the curriculum endpoints."""

from typing import List

from pydantic import BaseModel, Field


class LevelSummary(BaseModel):
    """A loaded level and the units it contains."""

    level: str = Field(..., description="Canonical level label, e.g. 'Level 3'")
    units: List[int] = Field(default_factory=list, description="Sorted unit numbers")


class LevelsResponse(BaseModel):
    levels: List[LevelSummary]
    warnings: List[str] = Field(
        default_factory=list,
        description="Files that were missing or unreadable at startup",
    )


class UnitsResponse(BaseModel):
    level: str
    units: List[int]


class CurriculumContextResponse(BaseModel):
    """Resolved teaching content for one unit."""

    level: str
    unit: int
    theme: str
    goals: str
    vocabulary: List[str]
    sentences: List[str]
    phonics: List[str]
    lessonInfo: str = Field("", alias="lessonInfo")
    standard: str = ""

    class Config:
        populate_by_name = True


class FormattedContextResponse(BaseModel):
    level: str
    unit: int
    compact: str = Field(..., description="One-line summary")
    detailed: str = Field(..., description="Prompt-ready block for improvement suggestions")
