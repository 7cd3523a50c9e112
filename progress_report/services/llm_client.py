"""Bedrock ``converse`` client used to write learning-progress reports."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from progress_report.config.settings import BedrockConfig, settings
from progress_report.services.aws import create_boto3_client

logger = logging.getLogger(__name__)


class LlmInvocationError(RuntimeError):
    """Raised when the report model cannot be reached or rejects the call."""


def _decode_bedrock_api_key(secret_value: Optional[str]) -> tuple[str, str] | None:
    """Split a base64 ``ACCESS:SECRET`` Bedrock key; plain text is accepted too."""

    if not secret_value:
        return None

    try:
        raw = base64.b64decode(secret_value.strip(), validate=True)
    except (binascii.Error, ValueError):
        raw = secret_value.encode("utf-8", "ignore")

    printable = "".join(chr(b) for b in raw if 31 < b < 127)
    access_key, sep, secret_key = printable.partition(":")
    if not sep or not access_key or not secret_key:
        return None
    return access_key, secret_key


def _output_text(response: dict[str, Any]) -> str:
    blocks = response.get("output", {}).get("message", {}).get("content", [])
    return "\n".join(block["text"] for block in blocks if block.get("text")).strip()


class BedrockLlmClient:
    """Send the report prompt pair to a Bedrock model and return its text."""

    def __init__(self, config: BedrockConfig | None = None) -> None:
        self._config = config or settings.bedrock
        self._client: Any = None

        if not self._config.model_id:
            logger.warning("BEDROCK_MODEL_ID is empty; report generation disabled")
            return

        credentials = None
        if self._config.api_key:
            credentials = _decode_bedrock_api_key(self._config.api_key.get_secret_value())
            if credentials is None:
                logger.warning("BEDROCK_API_KEY is not an ACCESS:SECRET pair; ignoring it")

        try:
            self._client = create_boto3_client(
                "bedrock-runtime",
                region_name=self._config.region,
                credentials=credentials,
            )
        except BotoCoreError as exc:
            logger.warning("Could not create Bedrock runtime client: %s", exc)

    @property
    def model_id(self) -> str:
        return self._config.model_id

    @property
    def is_configured(self) -> bool:
        return self._client is not None and bool(self._config.model_id)

    async def invoke(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str | None:
        """Return the model's text answer, or ``None`` when it answered nothing.

        Raises ``LlmInvocationError`` when the client is not configured or the
        Bedrock call fails.
        """

        if not self.is_configured:
            raise LlmInvocationError("Bedrock client not configured")

        request = {
            "modelId": self._config.model_id,
            "system": [{"text": system_prompt}],
            "messages": [{"role": "user", "content": [{"text": user_prompt}]}],
            "inferenceConfig": {
                "maxTokens": max_tokens or self._config.max_tokens,
                "temperature": (
                    self._config.temperature if temperature is None else temperature
                ),
                "topP": self._config.top_p,
            },
        }

        try:
            response = await run_in_threadpool(self._client.converse, **request)
        except (BotoCoreError, ClientError) as exc:
            logger.error("Bedrock converse failed model=%s: %s", self._config.model_id, exc)
            raise LlmInvocationError(str(exc)) from exc

        usage = response.get("usage") or {}
        logger.debug(
            "Bedrock report call model=%s input_tokens=%s output_tokens=%s",
            self._config.model_id,
            usage.get("inputTokens"),
            usage.get("outputTokens"),
        )
        return _output_text(response) or None


def get_llm_client() -> BedrockLlmClient:
    """Return the default Bedrock client, created on first use."""

    global _DEFAULT_CLIENT
    if _DEFAULT_CLIENT is None:
        _DEFAULT_CLIENT = BedrockLlmClient()
    return _DEFAULT_CLIENT


_DEFAULT_CLIENT: BedrockLlmClient | None = None


__all__ = ["BedrockLlmClient", "LlmInvocationError", "get_llm_client"]
