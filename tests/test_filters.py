from snapmatch import Data, NormalizeToExpected, Redactions
from snapmatch.filter.normalize import (
    apply_text_filter,
    normalize_newlines,
    normalize_paths,
    strip_ansi,
)
from snapmatch.filter.pattern import VALUE_WILDCARD


def test_strip_ansi_removes_codes():
    text = "\x1b[31merror\x1b[0m"
    assert strip_ansi(text) == "error"


def test_normalize_newlines():
    assert normalize_newlines("a\r\nb\rc\n") == "a\nb\nc\n"


def test_normalize_paths():
    assert normalize_paths("C:\\Users\\alice") == "C:/Users/alice"


def test_apply_text_filter_to_tree_keys_and_values():
    data = Data.json({"C:\\a": ["x\\y", 1]})
    filtered = apply_text_filter(data, normalize_paths)
    assert filtered.inner == {"C:/a": ["x/y", 1]}


def test_apply_text_filter_skips_binary():
    data = Data.binary(b"\x1b[31m")
    assert apply_text_filter(data, strip_ansi) is data


def test_normalize_text_data():
    pattern = Data.text("Hello\n...\n")
    actual = Data.text("Hello\nWorld\n")
    normalized = NormalizeToExpected(Redactions(), pattern).filter(actual)
    assert normalized.inner == "Hello\n...\n"


def test_normalize_text_against_json_pattern_uses_rendered_form():
    pattern = Data.json({"a": 1})
    actual = Data.text('{\n  "a": 1\n}\n')
    normalized = NormalizeToExpected(Redactions(), pattern).filter(actual)
    assert normalized.inner == '{\n  "a": 1\n}\n'


def test_normalize_json_data():
    pattern = Data.json({"a": [1, VALUE_WILDCARD], "...": VALUE_WILDCARD})
    actual = Data.json({"a": [1, 2, 3], "b": "x"})
    normalized = NormalizeToExpected(Redactions(), pattern).filter(actual)
    assert normalized.inner == {"a": [1, VALUE_WILDCARD], "...": VALUE_WILDCARD}


def test_normalize_json_lines_against_json_pattern():
    pattern = Data.json([{"event": "start"}, VALUE_WILDCARD])
    actual = Data.json_lines([{"event": "start"}, {"event": "tick"}, {"event": "stop"}])
    normalized = NormalizeToExpected(Redactions(), pattern).filter(actual)
    assert normalized.inner == [{"event": "start"}, VALUE_WILDCARD]
    assert normalized.format is actual.format


def test_json_actual_with_text_pattern_is_unchanged():
    actual = Data.json({"a": 1})
    normalized = NormalizeToExpected(Redactions(), Data.text("{...}")).filter(actual)
    assert normalized == actual


def test_binary_and_error_pass_through():
    pattern = Data.text("[..]")
    for data in (Data.binary(b"\xff"), Data.error("boom")):
        assert NormalizeToExpected(Redactions(), pattern).filter(data) is data


def test_pattern_without_text_form_leaves_text_alone():
    actual = Data.text("Hello")
    normalized = NormalizeToExpected(Redactions(), Data.binary(b"\xff\xfe")).filter(actual)
    assert normalized is actual
