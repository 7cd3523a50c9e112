"""Pydantic schemas used as views in the MVC architecture."""

from .analysis import (
    AnalysisRequest,
    PromptPreviewResponse,
    ReportResponse,
    TranscriptPayload,
)
from .common import ErrorResponse
from .curriculum import (
    CurriculumContextResponse,
    FormattedContextResponse,
    LevelsResponse,
    LevelSummary,
    UnitsResponse,
)

__all__ = [
    "AnalysisRequest",
    "PromptPreviewResponse",
    "ReportResponse",
    "TranscriptPayload",
    "ErrorResponse",
    "CurriculumContextResponse",
    "FormattedContextResponse",
    "LevelsResponse",
    "LevelSummary",
    "UnitsResponse",
]
