"""Environment-driven curriculum configuration and store bootstrap."""

from __future__ import annotations

import json

from progress_report.config import dependencies
from progress_report.config.settings import CurriculumConfig, TranscribeConfig, settings
from progress_report.curriculum import LEVEL_FILE_MAP
from progress_report.services.transcription import build_transcription_service


def test_curriculum_config_defaults():
    config = CurriculumConfig()

    assert config.level_files == LEVEL_FILE_MAP
    assert config.data_dir.name == "curriculum"


def test_curriculum_config_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CURRICULUM_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CURRICULUM_LEVEL_FILES", json.dumps({"Level 2": "two.json"}))

    config = CurriculumConfig()

    assert config.data_dir == tmp_path
    assert config.level_files == {"Level 2": "two.json"}


def test_build_curriculum_store_uses_settings(monkeypatch, tmp_path, write_level_file):
    write_level_file("two.json", [{"Unit": 3, "单元主题": "Animals"}])
    monkeypatch.setattr(
        settings,
        "curriculum",
        CurriculumConfig(data_dir=tmp_path, level_files={"Level 2": "two.json"}),
    )

    store = dependencies.build_curriculum_store()

    assert store.is_loaded
    assert store.loaded_levels() == ["Level 2"]
    assert store.units_for_level("L2") == [3]


def test_transcribe_config_reads_environment(monkeypatch):
    monkeypatch.setenv("TRANSCRIBE_BUCKET_NAME", "lesson-media")
    monkeypatch.setenv("TRANSCRIBE_LANGUAGE_CODE", "en-GB")
    monkeypatch.setenv("TRANSCRIBE_TIMEOUT_SECONDS", "120")

    config = TranscribeConfig()

    assert config.bucket_name == "lesson-media"
    assert config.language_code == "en-GB"
    assert config.timeout_seconds == 120.0
    assert config.max_speakers == 2


def test_transcription_service_without_bucket_is_unconfigured(monkeypatch):
    monkeypatch.delenv("TRANSCRIBE_BUCKET_NAME", raising=False)

    service = build_transcription_service(TranscribeConfig())

    assert service.is_configured is False
