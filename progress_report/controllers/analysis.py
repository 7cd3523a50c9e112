"""Learning-progress report endpoints.

`POST /analysis/report` runs these stages:

0. Transcription of any lesson given as a recording URL instead of text
   (`progress_report.services.transcription`).
1. Curriculum lookup for the submitted level/unit (misses degrade gracefully).
2. Prompt construction from both lesson transcripts.
3. LLM call and validation of the returned report JSON.

Stages 1-3 are documented in `progress_report.services.report_generator`.
`POST /analysis/prompt` stops after stage 2 so staff can inspect the prompt.
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, status

from progress_report.config.dependencies import ReportGeneratorDep, TranscriptionServiceDep
from progress_report.curriculum import format_compact
from progress_report.services.llm_client import LlmInvocationError
from progress_report.services.prompt_builder import TranscriptInput
from progress_report.services.report_generator import ReportRequest
from progress_report.services.response_contract import ResponseContractError
from progress_report.services.transcription import (
    TranscriptionError,
    TranscriptionService,
    TranscriptionUnavailableError,
)
from progress_report.views.analysis import (
    AnalysisRequest,
    PromptPreviewResponse,
    ReportResponse,
    TranscriptPayload,
)
from progress_report.views.common import ErrorResponse

router = APIRouter(prefix="/analysis", tags=["analysis"])

logger = logging.getLogger(__name__)

_TRANSCRIPTION_ERRORS = {
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


async def _transcript_for(
    index: int,
    item: TranscriptPayload,
    transcriber: TranscriptionService,
) -> TranscriptInput:
    label = item.label or f"Lesson {index}"
    if item.text is not None:
        return TranscriptInput(label=label, text=item.text)

    result = await transcriber.transcribe_url(item.mediaUrl)
    return TranscriptInput(label=label, text=result.transcript)


async def _to_report_request(
    payload: AnalysisRequest,
    transcriber: TranscriptionService,
) -> ReportRequest:
    try:
        transcripts = await asyncio.gather(
            *(
                _transcript_for(index, item, transcriber)
                for index, item in enumerate(payload.transcripts, start=1)
            )
        )
    except TranscriptionUnavailableError as exc:
        logger.error("Transcription unavailable student=%s: %s", payload.studentName, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Transcription service unavailable",
        ) from exc
    except TranscriptionError as exc:
        logger.error("Transcription failed student=%s: %s", payload.studentName, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Transcription failed: {exc}",
        ) from exc

    return ReportRequest(
        student_name=payload.studentName,
        level=payload.level,
        unit=payload.unit,
        transcripts=list(transcripts),
    )


@router.post("/prompt", response_model=PromptPreviewResponse, responses=_TRANSCRIPTION_ERRORS)
async def preview_prompt(
    payload: AnalysisRequest,
    generator: ReportGeneratorDep,
    transcriber: TranscriptionServiceDep,
) -> PromptPreviewResponse:
    """Build the report prompt without calling the LLM."""

    request = await _to_report_request(payload, transcriber)
    try:
        prepared = generator.build_prompt(request)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    return PromptPreviewResponse(
        systemPrompt=prepared.prompt.system_prompt,
        userPrompt=prepared.prompt.user_prompt,
        curriculumFound=prepared.curriculum is not None,
    )


@router.post("/report", response_model=ReportResponse, responses=_TRANSCRIPTION_ERRORS)
async def generate_report(
    payload: AnalysisRequest,
    generator: ReportGeneratorDep,
    transcriber: TranscriptionServiceDep,
) -> ReportResponse:
    """Generate a learning-progress report from two lessons."""

    request = await _to_report_request(payload, transcriber)
    try:
        outcome = await generator.generate(request)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except LlmInvocationError as exc:
        logger.error("Report LLM invocation failed student=%s: %s", payload.studentName, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Report service unavailable",
        ) from exc
    except ResponseContractError as exc:
        logger.error("Report contract violated student=%s: %s", payload.studentName, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Report service returned an invalid response",
        ) from exc

    return ReportResponse(
        studentName=payload.studentName,
        curriculumFound=outcome.curriculum is not None,
        curriculumSummary=(
            format_compact(outcome.curriculum) if outcome.curriculum is not None else None
        ),
        report=outcome.report,
    )
