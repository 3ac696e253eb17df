# tests/test_extraction.py
from __future__ import annotations

import pytest

from errors import ExtractionError
from extraction import (
    any_affirmative,
    as_text_list,
    coerce_score,
    extract_json,
    first_present,
    is_affirmative,
)


# ---------- extract_json cascade ----------

def test_whole_text_object():
    assert extract_json('  {"a": 1}  ') == {"a": 1}


def test_fenced_json_block_inside_prose():
    raw = 'Here you go:\n```json\n{"a": 1}\n```\nThanks'
    assert extract_json(raw) == {"a": 1}


def test_fenced_json_tag_is_case_insensitive():
    assert extract_json('```JSON\n{"b": [1, 2]}\n```') == {"b": [1, 2]}


def test_untagged_fence():
    assert extract_json('Result:\n```\n{"a": 1}\n```') == {"a": 1}


def test_fence_with_other_language_tag():
    assert extract_json('```javascript\n{"a": 1}\n```') == {"a": 1}


def test_greedy_braces_in_prose():
    assert extract_json('The answer is {"a": {"b": 2}}.') == {"a": {"b": 2}}


def test_json_array_is_not_an_object():
    with pytest.raises(ExtractionError):
        extract_json("[1, 2, 3]")


def test_no_json_raises_with_raw_text():
    with pytest.raises(ExtractionError) as info:
        extract_json("No structured output here.")
    assert info.value.raw == "No structured output here."


@pytest.mark.parametrize("raw", ["", "   \n  "])
def test_blank_input_raises(raw):
    with pytest.raises(ExtractionError):
        extract_json(raw)


def test_broken_json_raises():
    with pytest.raises(ExtractionError):
        extract_json('{"a": 1,,}')


# ---------- accessors ----------

def test_first_present_follows_paths_in_order():
    data = {"case_details": {"title": "From details"}, "title": "Top level"}
    assert first_present(data, ("case.title", "case_details.title", "title")) == "From details"


def test_first_present_skips_blank_and_empty_values():
    data = {"case": {"title": "  "}, "title": "Fallback", "clues": []}
    assert first_present(data, ("case.title", "title")) == "Fallback"
    assert first_present(data, ("clues", "evidence"), default="none") == "none"


def test_first_present_keeps_zero_and_false():
    assert first_present({"score": 0}, ("score",), default=50) == 0
    assert first_present({"flag": False}, ("flag",), default=True) is False


def test_as_text_list_normalises_shapes():
    assert as_text_list("single") == ["single"]
    assert as_text_list(["a", " ", "b"]) == ["a", "b"]
    assert as_text_list([{"question": "Why?"}]) == ["Why?"]
    assert as_text_list(None) == []


@pytest.mark.parametrize(
    "value, expected",
    [
        (75, 75),
        ("150", 100),
        ("abc", 50),
        (-3, 0),
        ("80%", 80),
        (62.9, 62),
        (True, 50),
        (None, 50),
    ],
)
def test_coerce_score(value, expected):
    assert coerce_score(value) == expected


def test_affirmative_values():
    assert is_affirmative(True)
    assert is_affirmative("TRUE")
    assert is_affirmative("correct")
    assert not is_affirmative("false")
    assert not is_affirmative(1)
    assert any_affirmative({"isCorrect": True}, ("solved", "correct", "isCorrect"))
    assert not any_affirmative({"solved": False}, ("solved", "correct"))
