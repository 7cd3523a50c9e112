"""Learning-progress report generation.

Stages run sequentially for each request:

1. Resolve the curriculum context for the student's level/unit (a miss is not
   an error; the prompt simply omits curriculum content).
2. Build the system/user prompts from both transcripts.
3. Invoke the LLM and validate its JSON against `LearningReport`, re-trying
   when the model returns malformed JSON.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from pydantic import ValidationError

from progress_report.curriculum import CurriculumContext, CurriculumStore, resolve_context
from progress_report.services.prompt_builder import (
    PromptBundle,
    TranscriptInput,
    build_report_prompt,
)
from progress_report.services.response_contract import LearningReport, ResponseContractError

logger = logging.getLogger(__name__)

_MAX_JSON_RETRIES = 2  # Extra attempts when the LLM returns invalid JSON.


class LlmClient(Protocol):
    async def invoke(self, *, system_prompt: str, user_prompt: str) -> str | None: ...


@dataclass(frozen=True)
class ReportRequest:
    student_name: str
    level: str | None
    unit: Any
    transcripts: Sequence[TranscriptInput]


@dataclass(frozen=True)
class PreparedPrompt:
    prompt: PromptBundle
    curriculum: CurriculumContext | None


@dataclass(frozen=True)
class ReportOutcome:
    report: LearningReport
    raw_response: str
    curriculum: CurriculumContext | None


def _truncate(value: str, max_length: int = 500) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


class ReportGenerator:
    """Turn lesson transcripts into a validated `LearningReport`."""

    def __init__(self, store: CurriculumStore, llm_client: LlmClient) -> None:
        self._store = store
        self._llm_client = llm_client

    def build_prompt(self, request: ReportRequest) -> PreparedPrompt:
        curriculum = None
        if request.level and request.unit is not None:
            curriculum = resolve_context(self._store, request.level, request.unit)
        if curriculum is None:
            logger.info(
                "No curriculum context for level=%r unit=%r; prompt without curriculum",
                request.level,
                request.unit,
            )

        prompt = build_report_prompt(
            student_name=request.student_name,
            transcripts=request.transcripts,
            curriculum=curriculum,
        )
        return PreparedPrompt(prompt=prompt, curriculum=curriculum)

    async def generate(self, request: ReportRequest) -> ReportOutcome:
        prepared = self.build_prompt(request)

        last_error: ValidationError | None = None
        for attempt in range(_MAX_JSON_RETRIES + 1):
            raw_response = await self._llm_client.invoke(
                system_prompt=prepared.prompt.system_prompt,
                user_prompt=prepared.prompt.user_prompt,
            )
            if not raw_response:
                raise ResponseContractError("LLM returned an empty response.")

            logger.info(
                "Raw LLM report student=%s attempt=%s: %s",
                request.student_name,
                attempt + 1,
                _truncate(raw_response),
            )

            try:
                report = LearningReport.from_json(raw_response)
            except ValidationError as exc:
                last_error = exc
                logger.warning(
                    "LLM produced invalid report JSON student=%s attempt=%s: %s",
                    request.student_name,
                    attempt + 1,
                    exc,
                )
                continue

            return ReportOutcome(
                report=report,
                raw_response=raw_response,
                curriculum=prepared.curriculum,
            )

        raise ResponseContractError(
            "LLM returned invalid JSON even after retrying."
        ) from last_error


__all__ = [
    "LlmClient",
    "PreparedPrompt",
    "ReportGenerator",
    "ReportOutcome",
    "ReportRequest",
]
