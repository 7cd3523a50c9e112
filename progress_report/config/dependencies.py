"""FastAPI dependencies exposing the curriculum store, transcription and report services."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from progress_report.curriculum import CurriculumStore
from progress_report.services.llm_client import get_llm_client
from progress_report.services.report_generator import LlmClient, ReportGenerator
from progress_report.services.transcription import (
    TranscriptionService,
    get_transcription_service,
)

from .settings import settings


def build_curriculum_store() -> CurriculumStore:
    """Create and load the store from configuration. Called once at startup."""

    store = CurriculumStore(
        settings.curriculum.data_dir,
        settings.curriculum.level_files,
    )
    store.load()
    return store


def get_curriculum_store(request: Request) -> CurriculumStore:
    """Return the store created during application startup."""

    store = getattr(request.app.state, "curriculum_store", None)
    if store is None:
        store = build_curriculum_store()
        request.app.state.curriculum_store = store
    return store


CurriculumStoreDep = Annotated[CurriculumStore, Depends(get_curriculum_store)]
LlmClientDep = Annotated[LlmClient, Depends(get_llm_client)]
TranscriptionServiceDep = Annotated[
    TranscriptionService, Depends(get_transcription_service)
]


def get_report_generator(
    store: CurriculumStoreDep,
    llm_client: LlmClientDep,
) -> ReportGenerator:
    return ReportGenerator(store, llm_client)


ReportGeneratorDep = Annotated[ReportGenerator, Depends(get_report_generator)]


__all__ = [
    "build_curriculum_store",
    "get_curriculum_store",
    "get_report_generator",
    "CurriculumStoreDep",
    "LlmClientDep",
    "TranscriptionServiceDep",
    "ReportGeneratorDep",
]
