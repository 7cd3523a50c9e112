"""Bedrock client behaviour with a stubbed boto3 runtime."""

from __future__ import annotations

import asyncio
import base64

import pytest
from botocore.exceptions import ClientError

from progress_report.config.settings import BedrockConfig
from progress_report.services import llm_client
from progress_report.services.llm_client import (
    BedrockLlmClient,
    LlmInvocationError,
    _decode_bedrock_api_key,
)


class StubRuntime:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def converse(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def runtime(monkeypatch):
    stub = StubRuntime(
        response={
            "output": {"message": {"content": [{"text": '{"summary": "ok"'}, {"text": "}"}]}},
            "usage": {"inputTokens": 10, "outputTokens": 3},
        }
    )
    created = []

    def fake_factory(service_name, **kwargs):
        created.append((service_name, kwargs))
        return stub

    monkeypatch.setattr(llm_client, "create_boto3_client", fake_factory)
    stub.created = created
    return stub


def _invoke(client: BedrockLlmClient):
    return asyncio.run(client.invoke(system_prompt="system", user_prompt="user"))


def test_unconfigured_client_raises_invocation_error(monkeypatch):
    monkeypatch.setenv("BEDROCK_MODEL_ID", "")
    client = BedrockLlmClient(BedrockConfig())

    assert client.is_configured is False
    with pytest.raises(LlmInvocationError, match="not configured"):
        _invoke(client)


def test_invoke_joins_text_blocks(runtime):
    client = BedrockLlmClient(BedrockConfig())

    assert _invoke(client) == '{"summary": "ok"\n}'
    request = runtime.requests[0]
    assert request["modelId"] == "amazon.nova-lite-v1:0"
    assert request["system"] == [{"text": "system"}]
    assert request["inferenceConfig"]["maxTokens"] == 2048
    assert runtime.created[0][0] == "bedrock-runtime"


def test_empty_answer_is_none(runtime):
    runtime.response = {"output": {"message": {"content": []}}}

    assert _invoke(BedrockLlmClient(BedrockConfig())) is None


def test_client_error_becomes_invocation_error(runtime):
    runtime.error = ClientError(
        {"Error": {"Code": "ThrottlingException", "Message": "slow down"}},
        "Converse",
    )

    with pytest.raises(LlmInvocationError, match="ThrottlingException"):
        _invoke(BedrockLlmClient(BedrockConfig()))


def test_api_key_credentials_are_passed_to_boto3(monkeypatch, runtime):
    monkeypatch.setenv("BEDROCK_API_KEY", base64.b64encode(b"AKIA:secret").decode())

    BedrockLlmClient(BedrockConfig())

    assert runtime.created[0][1]["credentials"] == ("AKIA", "secret")


@pytest.mark.parametrize("value", [None, "", "no-separator", ":secret"])
def test_decode_api_key_rejects_malformed_values(value):
    assert _decode_bedrock_api_key(value) is None
