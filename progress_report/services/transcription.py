"""Lesson-recording transcription through Amazon Transcribe batch jobs.

Each media URL goes through these stages:

1. Stage the media in S3. ``s3://`` URLs are used in place; ``http(s)`` URLs
   are downloaded and uploaded under ``<prefix>/media/``.
2. Start a Transcribe job with speaker labels (teacher and student) that
   writes its JSON output under ``<prefix>/transcripts/``.
3. Poll the job until it completes, fails or times out.
4. Read the output and render one ``Speaker N: ...`` line per speaker turn.

Staged objects are removed afterwards whatever the outcome.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import urlparse
from uuid import uuid4

import httpx
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from progress_report.config.settings import TranscribeConfig, settings
from progress_report.services.aws import create_boto3_client
from progress_report.services.media_storage import (
    MediaStorage,
    MediaStorageError,
    parse_s3_uri,
)

logger = logging.getLogger(__name__)

MEDIA_FORMATS = frozenset({"amr", "flac", "m4a", "mp3", "mp4", "ogg", "wav", "webm"})


@dataclass(frozen=True)
class TranscriptionResult:
    """Structured transcription outcome returned to controllers."""

    transcript: str
    job_name: str
    language_code: str | None = None


class TranscriptionError(RuntimeError):
    """Raised when a recording cannot be fetched or transcribed."""


class TranscriptionUnavailableError(TranscriptionError):
    """Raised when no output bucket is configured for Transcribe."""


def media_format_for(path: str) -> str | None:
    suffix = PurePosixPath(path).suffix.lower().lstrip(".")
    return suffix if suffix in MEDIA_FORMATS else None


def _speaker_name(label: str | None) -> str:
    if not label:
        return ""
    prefix, _, number = label.rpartition("_")
    if prefix and number.isdigit():
        return f"Speaker {int(number) + 1}"
    return label


def format_transcript(payload: dict[str, Any]) -> str:
    """Render Transcribe output JSON as plain text.

    With speaker labels, consecutive segments of one speaker are merged into a
    single ``Speaker N: ...`` line. Otherwise the flat transcript is returned.
    """

    results = payload.get("results") or {}

    turns: list[list[str]] = []
    for segment in results.get("audio_segments") or []:
        text = (segment.get("transcript") or "").strip()
        if not text:
            continue
        speaker = _speaker_name(segment.get("speaker_label"))
        if turns and turns[-1][0] == speaker:
            turns[-1][1] = f"{turns[-1][1]} {text}"
        else:
            turns.append([speaker, text])

    if turns:
        return "\n".join(f"{speaker}: {text}" if speaker else text for speaker, text in turns)

    pieces = [
        (item.get("transcript") or "").strip() for item in results.get("transcripts") or []
    ]
    return " ".join(piece for piece in pieces if piece)


class TranscriptionService:
    """Turn a lesson recording URL into transcript text."""

    def __init__(
        self,
        transcribe_client: Any,
        storage: MediaStorage | None,
        config: TranscribeConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._transcribe = transcribe_client
        self._storage = storage
        self._config = config
        self._http_client = http_client

    @property
    def is_configured(self) -> bool:
        return self._transcribe is not None and self._storage is not None

    async def transcribe_url(self, media_url: str) -> TranscriptionResult:
        if not self.is_configured:
            raise TranscriptionUnavailableError("Transcription bucket not configured")

        prefix = self._config.key_prefix.strip("/")
        job_name = f"{prefix.replace('/', '-')}-{uuid4().hex}"
        output_key = f"{prefix}/transcripts/{job_name}.json"
        staged_keys = [output_key]

        try:
            s3_location = parse_s3_uri(media_url)
            if s3_location is not None:
                media_uri, media_path = media_url, s3_location[1]
            else:
                media_path = urlparse(media_url).path
                data, content_type = await self._download(media_url)
                media_key = f"{prefix}/media/{job_name}{PurePosixPath(media_path).suffix}"
                staged_keys.append(media_key)
                media_uri = await run_in_threadpool(
                    self._storage.upload_bytes, media_key, data, content_type
                )

            await self._start_job(job_name, media_uri, media_format_for(media_path), output_key)
            job = await self._wait_for_job(job_name)
            raw_output = await run_in_threadpool(self._storage.read_text, output_key)
        except MediaStorageError as exc:
            raise TranscriptionError(str(exc)) from exc
        finally:
            for key in staged_keys:
                await run_in_threadpool(self._storage.delete, key)

        try:
            transcript = format_transcript(json.loads(raw_output))
        except (ValueError, AttributeError) as exc:
            raise TranscriptionError(f"Unreadable Transcribe output for {job_name}: {exc}") from exc

        if not transcript:
            raise TranscriptionError(f"No speech recognised in {media_url}")

        logger.info("Transcription complete job=%s length=%s", job_name, len(transcript))
        return TranscriptionResult(
            transcript=transcript,
            job_name=job_name,
            language_code=job.get("LanguageCode"),
        )

    async def _download(self, url: str) -> tuple[bytes, str | None]:
        if self._http_client is not None:
            return await self._fetch(self._http_client, url)
        async with httpx.AsyncClient(
            timeout=self._config.download_timeout_seconds,
            follow_redirects=True,
        ) as client:
            return await self._fetch(client, url)

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> tuple[bytes, str | None]:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TranscriptionError(
                f"Media download failed with HTTP {exc.response.status_code}: {url}"
            ) from exc
        except httpx.RequestError as exc:
            raise TranscriptionError(f"Unable to download media {url}: {exc}") from exc

        data = response.content
        if not data:
            raise TranscriptionError(f"Media file is empty: {url}")
        if len(data) > self._config.max_media_bytes:
            raise TranscriptionError(
                f"Media file exceeds {self._config.max_media_bytes} bytes: {url}"
            )
        return data, response.headers.get("content-type")

    async def _start_job(
        self,
        job_name: str,
        media_uri: str,
        media_format: str | None,
        output_key: str,
    ) -> None:
        request: dict[str, Any] = {
            "TranscriptionJobName": job_name,
            "LanguageCode": self._config.language_code,
            "Media": {"MediaFileUri": media_uri},
            "OutputBucketName": self._storage.bucket,
            "OutputKey": output_key,
            "Settings": {
                "ShowSpeakerLabels": True,
                "MaxSpeakerLabels": self._config.max_speakers,
            },
        }
        if media_format:
            request["MediaFormat"] = media_format

        try:
            await run_in_threadpool(self._transcribe.start_transcription_job, **request)
        except (BotoCoreError, ClientError) as exc:
            raise TranscriptionError(f"Could not start Transcribe job {job_name}: {exc}") from exc
        logger.info("Started Transcribe job=%s media=%s", job_name, media_uri)

    async def _wait_for_job(self, job_name: str) -> dict[str, Any]:
        deadline = time.monotonic() + self._config.timeout_seconds
        while True:
            try:
                response = await run_in_threadpool(
                    self._transcribe.get_transcription_job,
                    TranscriptionJobName=job_name,
                )
            except (BotoCoreError, ClientError) as exc:
                raise TranscriptionError(f"Could not poll Transcribe job {job_name}: {exc}") from exc

            job = response.get("TranscriptionJob") or {}
            job_status = job.get("TranscriptionJobStatus")
            if job_status == "COMPLETED":
                return job
            if job_status == "FAILED":
                reason = job.get("FailureReason") or "unknown reason"
                raise TranscriptionError(f"Transcribe job {job_name} failed: {reason}")
            if time.monotonic() >= deadline:
                raise TranscriptionError(
                    f"Transcribe job {job_name} did not finish within "
                    f"{self._config.timeout_seconds:g}s"
                )
            await asyncio.sleep(self._config.poll_interval_seconds)


def build_transcription_service(config: TranscribeConfig | None = None) -> TranscriptionService:
    config = config or settings.transcribe
    if not config.bucket_name:
        logger.warning("TRANSCRIBE_BUCKET_NAME is not set; media URLs cannot be transcribed")
        return TranscriptionService(None, None, config)

    region = config.region or settings.aws.region
    return TranscriptionService(
        create_boto3_client("transcribe", region_name=region),
        MediaStorage(create_boto3_client("s3", region_name=region), config.bucket_name),
        config,
    )


def get_transcription_service() -> TranscriptionService:
    """Return the default transcription service, created on first use."""

    global _DEFAULT_SERVICE
    if _DEFAULT_SERVICE is None:
        _DEFAULT_SERVICE = build_transcription_service()
    return _DEFAULT_SERVICE


_DEFAULT_SERVICE: TranscriptionService | None = None


__all__ = [
    "TranscriptionError",
    "TranscriptionResult",
    "TranscriptionService",
    "TranscriptionUnavailableError",
    "build_transcription_service",
    "format_transcript",
    "get_transcription_service",
    "media_format_for",
]
