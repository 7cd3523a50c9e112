"""Shared fixtures: isolated curriculum directories and stores."""

from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Any, Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from progress_report.curriculum import CurriculumStore  # noqa: E402

LEVEL_FILES = {
    "Level 1": "level1.json",
    "Level 3": "level3.json",
    "Level 7": "level7_9.json",
    "Level 8": "level7_9.json",
    "Level 9": "level7_9.json",
}


def _level3_rows() -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = [
        {
            "Unit": 1,
            "单元主题": "Family",
            "单元知识目标": "Introduce family members",
            "课程内容": "Lesson 1, 3",
            "__EMPTY": "词汇：mom, dad, sister",
            "匹配新课标": "Standard A",
        }
    ]
    for unit in range(2, 11):
        rows.append(
            {
                "Unit\n": unit,
                "单元主题\n": f"Theme {unit}",
                "__EMPTY\n": f"词汇：word{unit}a，word{unit}b\n句式：\nSentence {unit}.",
            }
        )
    return rows


@pytest.fixture
def write_level_file(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write a JSON (or raw text) curriculum file into the temp data dir."""

    def _write(file_name: str, payload: Any) -> Path:
        target = tmp_path / file_name
        if isinstance(payload, str):
            target.write_text(payload, encoding="utf-8")
        else:
            target.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return target

    return _write


@pytest.fixture
def curriculum_dir(tmp_path: Path, write_level_file) -> Path:
    """Level 3 (units 1-10) and a shared Level 7-9 file; Level 1 is missing."""

    write_level_file("level3.json", _level3_rows())
    write_level_file(
        "level7_9.json",
        [
            {"Unit": 1, "单元主题": "Advanced One", "__EMPTY": "拼读：th, sh"},
            {"Unit": "2", "单元主题": "Advanced Two", "__EMPTY": ""},
        ],
    )
    return tmp_path


@pytest.fixture
def store(curriculum_dir: Path) -> CurriculumStore:
    curriculum_store = CurriculumStore(curriculum_dir, LEVEL_FILES)
    curriculum_store.load()
    return curriculum_store
