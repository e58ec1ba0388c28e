import pytest

from autotest.services.response_parser import extract_json_from_response, parse_json_response


def test_strips_code_fences():
    text = '```json\n{"complexity": "low"}\n```'
    assert parse_json_response(text) == {"complexity": "low"}


def test_ignores_surrounding_prose():
    text = 'Here is the analysis:\n{\n  "a": {"b": 1}\n}\nLet me know if you need more.'
    assert parse_json_response(text) == {"a": {"b": 1}}


def test_extract_keeps_nested_object_lines():
    text = '{\n  "structure": {\n    "projectType": "maven"\n  },\n  "complexity": "high"\n}'
    assert extract_json_from_response(text) == text


def test_non_json_raises_value_error():
    with pytest.raises(ValueError):
        parse_json_response("I could not analyse this input.")


def test_json_array_is_rejected():
    with pytest.raises(ValueError):
        parse_json_response("[1, 2, 3]")
