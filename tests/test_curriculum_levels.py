"""Level label normalisation and unit parsing."""

from __future__ import annotations

import pytest

from progress_report.curriculum.levels import LEVEL_FILE_MAP, normalize_level, parse_unit


@pytest.mark.parametrize(
    "raw",
    ["Level 3", "level 3", "LEVEL 3", "L3", "l3", "L 3", "  L3  ", "Level3"],
)
def test_level_aliases_share_canonical_label(raw):
    assert normalize_level(raw) == "Level 3"


@pytest.mark.parametrize("raw, expected", [("LS", "Level S"), ("l k", "Level K"), ("level s", "Level S")])
def test_letter_levels_are_upper_cased(raw, expected):
    assert normalize_level(raw) == expected


def test_unrecognised_labels_pass_through_trimmed():
    assert normalize_level(" 启蒙 ") == "启蒙"
    assert normalize_level("Level 99") == "Level 99"
    assert normalize_level("") == ""


def test_every_canonical_label_normalises_to_itself():
    for label in LEVEL_FILE_MAP:
        assert normalize_level(label) == label


@pytest.mark.parametrize(
    "raw, expected",
    [
        (5, 5),
        ("5", 5),
        ("Unit 5", 5),
        ("unit  5", 5),
        ("U5", 5),
        ("UNIT05", 5),
        (" 5 (review)", 5),
        (5.0, 5),
    ],
)
def test_parse_unit_accepts_numbers_and_prefixed_strings(raw, expected):
    assert parse_unit(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["abc", "", "Unit", None, True, 5.5, [5], "Unit -5", "5.5", "Lesson 5"],
)
def test_parse_unit_rejects_unparseable_values(raw):
    assert parse_unit(raw) is None
