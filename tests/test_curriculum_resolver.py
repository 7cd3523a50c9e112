"""Resolving (level, unit) pairs to curriculum contexts."""

from __future__ import annotations

import pytest

from progress_report.curriculum import CurriculumStore, resolve_context


def test_family_scenario(store):
    context = resolve_context(store, "Level 3", 1)

    assert context is not None
    assert context.theme == "Family"
    assert context.vocabulary == ("mom", "dad", "sister")
    assert context.goals == "Introduce family members"
    assert context.lesson_info == "Lesson 1, 3"
    assert context.standard == "Standard A"
    assert context.level == "Level 3"
    assert context.unit == 1


@pytest.mark.parametrize("alias", ["Level 3", "level 3", "L3", "L 3", "l3"])
@pytest.mark.parametrize("unit", [1, 4, 10])
def test_aliases_resolve_to_identical_context(store, alias, unit):
    assert resolve_context(store, alias, unit) == resolve_context(store, "Level 3", unit)


def test_unit_string_forms_match_number(store):
    expected = resolve_context(store, "Level 3", 5)

    assert expected is not None
    assert resolve_context(store, "Level 3", "Unit 5") == expected
    assert resolve_context(store, "Level 3", "5") == expected


def test_unknown_unit_is_not_found(store):
    assert resolve_context(store, "Level 3", "999") is None
    assert resolve_context(store, "Level 3", 0) is None


def test_unknown_level_is_not_found(store):
    assert resolve_context(store, "Level 99", 1) is None
    assert resolve_context(store, "", 1) is None
    # Level 1 is configured but its file is missing.
    assert resolve_context(store, "Level 1", 1) is None


def test_unparseable_unit_is_not_found(store):
    assert resolve_context(store, "Level 3", "abc") is None
    assert resolve_context(store, "Level 3", None) is None


def test_newline_keyed_rows_resolve(store):
    context = resolve_context(store, "L3", 4)

    assert context is not None
    assert context.theme == "Theme 4"
    assert context.vocabulary == ("word4a", "word4b")
    assert context.sentences == ("Sentence 4.",)
    assert context.goals == ""
    assert context.phonics == ()


def test_string_unit_in_row_and_shared_level_file(store):
    context = resolve_context(store, "Level 8", 2)

    assert context is not None
    assert context.theme == "Advanced Two"
    assert resolve_context(store, "L9", 1).phonics == ("th", "sh")


def test_multiple_rows_for_one_unit_are_combined(write_level_file, tmp_path):
    write_level_file(
        "level.json",
        [
            {"Unit": 2, "单元主题": "Colors", "__EMPTY": "词汇：red, blue\n\n—It is red."},
            {"Unit": 1, "单元主题": "Other", "__EMPTY": "词汇：cat"},
            {"Unit": 2, "单元主题": "Ignored", "__EMPTY": "拼读：r, b"},
        ],
    )
    curriculum_store = CurriculumStore(tmp_path, {"Level 2": "level.json"})
    curriculum_store.load()

    context = resolve_context(curriculum_store, "L2", 2)

    assert context is not None
    assert context.theme == "Colors"
    assert context.vocabulary == ("red", "blue")
    assert context.phonics == ("r", "b")
    assert context.sentences == ("It is red.",)


def test_unloaded_store_resolves_nothing(curriculum_dir):
    curriculum_store = CurriculumStore(curriculum_dir)

    assert resolve_context(curriculum_store, "Level 3", 1) is None


def test_lookup_does_not_mutate_store(store):
    before = {level: store.rows_for_level(level) for level in store.loaded_levels()}

    resolve_context(store, "Level 3", 1)
    resolve_context(store, "Level 3", "nope")

    after = {level: store.rows_for_level(level) for level in store.loaded_levels()}
    assert after == before


def test_context_to_dict_uses_lists(store):
    payload = resolve_context(store, "Level 3", 1).to_dict()

    assert payload["vocabulary"] == ["mom", "dad", "sister"]
    assert payload["sentences"] == []
    assert payload["lesson_info"] == "Lesson 1, 3"
