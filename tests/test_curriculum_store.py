"""Loading behaviour of the in-memory curriculum store."""

from __future__ import annotations

import logging

import pytest

from progress_report.curriculum import CurriculumStore

from conftest import LEVEL_FILES


def test_load_populates_levels_in_file_map_order(store):
    assert store.is_loaded
    assert store.loaded_levels() == ["Level 3", "Level 7", "Level 8", "Level 9"]


def test_missing_file_is_skipped_with_recorded_warning(store):
    assert "Level 1" not in store.loaded_levels()
    assert store.warnings == ["Curriculum file not found: level1.json"]


def test_load_is_idempotent(curriculum_dir):
    once = CurriculumStore(curriculum_dir, LEVEL_FILES)
    once.load()

    twice = CurriculumStore(curriculum_dir, LEVEL_FILES)
    twice.load()
    twice.load()

    assert twice.loaded_levels() == once.loaded_levels()
    for level in once.loaded_levels():
        assert len(twice.rows_for_level(level)) == len(once.rows_for_level(level))
        assert twice.units_for_level(level) == once.units_for_level(level)
    assert twice.warnings == once.warnings


def test_second_load_does_not_reread_files(curriculum_dir, caplog):
    curriculum_store = CurriculumStore(curriculum_dir, LEVEL_FILES)
    curriculum_store.load()
    (curriculum_dir / "level3.json").unlink()

    with caplog.at_level(logging.DEBUG, logger="progress_report.curriculum.store"):
        curriculum_store.load()

    assert "Level 3" in curriculum_store.loaded_levels()
    assert "already loaded" in caplog.text


def test_malformed_json_leaves_level_absent(write_level_file, tmp_path):
    write_level_file("broken.json", "[{\"Unit\": 1,")
    write_level_file("object.json", {"Unit": 1})
    write_level_file("good.json", [{"Unit": 1}])

    curriculum_store = CurriculumStore(
        tmp_path,
        {"Level 1": "broken.json", "Level 2": "object.json", "Level 3": "good.json"},
    )
    curriculum_store.load()

    assert curriculum_store.loaded_levels() == ["Level 3"]
    assert len(curriculum_store.warnings) == 2
    assert all("Failed to load" in warning for warning in curriculum_store.warnings)


def test_empty_directory_loads_nothing_without_raising(tmp_path):
    curriculum_store = CurriculumStore(tmp_path / "missing", LEVEL_FILES)
    curriculum_store.load()

    assert curriculum_store.is_loaded
    assert curriculum_store.loaded_levels() == []


def test_units_for_level_sorted_and_distinct(store):
    assert store.units_for_level("Level 3") == list(range(1, 11))
    assert store.units_for_level("L3") == list(range(1, 11))
    assert store.units_for_level("level 8") == [1, 2]


def test_units_for_unknown_level_is_empty(store):
    assert store.units_for_level("Level 42") == []
    assert store.units_for_level("Level 1") == []


def test_shared_file_rows_are_shared_between_levels(store):
    assert store.rows_for_level("Level 7") is store.rows_for_level("Level 9")


def test_rows_are_read_only(store):
    row = store.rows_for_level("Level 3")[0]
    with pytest.raises(TypeError):
        row["Unit"] = 99  # type: ignore[index]
