"""boto3 client construction shared by the Bedrock, Transcribe and S3 services."""

from __future__ import annotations

from typing import Any

import boto3

from progress_report.config.settings import AwsConfig, settings


def boto3_client_kwargs(
    aws: AwsConfig,
    *,
    region_name: str | None = None,
    credentials: tuple[str, str] | None = None,
) -> dict[str, Any]:
    """Keyword arguments for ``boto3.client``.

    Explicit ``credentials`` win over the configured key pair; with neither,
    boto3 falls back to its own provider chain (env, profile, instance role).
    """

    kwargs: dict[str, Any] = {"region_name": region_name or aws.region}
    if aws.endpoint_url:
        kwargs["endpoint_url"] = aws.endpoint_url

    if credentials is not None:
        kwargs["aws_access_key_id"], kwargs["aws_secret_access_key"] = credentials
    elif aws.access_key and aws.secret_key:
        kwargs["aws_access_key_id"] = aws.access_key
        kwargs["aws_secret_access_key"] = aws.secret_key
        if aws.session_token:
            kwargs["aws_session_token"] = aws.session_token
    return kwargs


def create_boto3_client(
    service_name: str,
    *,
    region_name: str | None = None,
    credentials: tuple[str, str] | None = None,
) -> Any:
    return boto3.client(
        service_name,
        **boto3_client_kwargs(
            settings.aws,
            region_name=region_name,
            credentials=credentials,
        ),
    )


__all__ = ["boto3_client_kwargs", "create_boto3_client"]
