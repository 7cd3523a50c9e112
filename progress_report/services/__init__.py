"""Service layer: transcription, report generation and their AWS integrations."""

from .llm_client import BedrockLlmClient, LlmInvocationError, get_llm_client
from .prompt_builder import PromptBundle, TranscriptInput, build_report_prompt
from .report_generator import ReportGenerator, ReportOutcome, ReportRequest
from .response_contract import LearningReport, ResponseContractError
from .transcription import (
    TranscriptionError,
    TranscriptionResult,
    TranscriptionService,
    TranscriptionUnavailableError,
    get_transcription_service,
)

__all__ = [
    "BedrockLlmClient",
    "LlmInvocationError",
    "get_llm_client",
    "PromptBundle",
    "TranscriptInput",
    "build_report_prompt",
    "ReportGenerator",
    "ReportOutcome",
    "ReportRequest",
    "LearningReport",
    "ResponseContractError",
    "TranscriptionError",
    "TranscriptionResult",
    "TranscriptionService",
    "TranscriptionUnavailableError",
    "get_transcription_service",
]
