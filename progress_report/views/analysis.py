"""Pydantic schemas for the report analysis endpoints."""

from typing import List, Optional, Union
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator

from progress_report.services.response_contract import LearningReport

_MEDIA_URL_SCHEMES = ("http", "https", "s3")


class TranscriptPayload(BaseModel):
    """One lesson, given either as transcript text or as a recording URL."""

    label: str = Field("", description="Display label, e.g. 'Lesson 1'")
    text: Optional[str] = Field(
        None, min_length=1, description="Transcript of one lesson recording"
    )
    mediaUrl: Optional[str] = Field(
        None, description="http(s) or s3:// URL of the lesson recording to transcribe"
    )

    @field_validator("mediaUrl")
    @classmethod
    def validate_media_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        parsed = urlparse(value)
        if parsed.scheme.lower() not in _MEDIA_URL_SCHEMES or not parsed.netloc:
            raise ValueError("mediaUrl must be an http(s) or s3:// URL")
        return value

    @model_validator(mode="after")
    def validate_single_source(self) -> "TranscriptPayload":
        if (self.text is None) == (self.mediaUrl is None):
            raise ValueError("Provide exactly one of text or mediaUrl")
        return self


class AnalysisRequest(BaseModel):
    """Two lessons for one student plus the curriculum position."""

    studentName: str = Field(..., min_length=1, alias="studentName")
    level: Optional[str] = Field(None, description="Curriculum level, e.g. 'L3'")
    unit: Optional[Union[int, str]] = Field(None, description="Unit number or 'Unit 5'")
    transcripts: List[TranscriptPayload] = Field(..., min_length=2, max_length=2)

    class Config:
        populate_by_name = True


class PromptPreviewResponse(BaseModel):
    systemPrompt: str = Field(..., alias="systemPrompt")
    userPrompt: str = Field(..., alias="userPrompt")
    curriculumFound: bool = Field(..., alias="curriculumFound")

    class Config:
        populate_by_name = True


class ReportResponse(BaseModel):
    studentName: str = Field(..., alias="studentName")
    curriculumFound: bool = Field(..., alias="curriculumFound")
    curriculumSummary: Optional[str] = Field(None, alias="curriculumSummary")
    report: LearningReport

    class Config:
        populate_by_name = True
