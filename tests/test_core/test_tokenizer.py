"""Tests for the field tokenizer."""

from csvstream.core.tokenizer import tokenize


def test_split_on_separator():
    assert tokenize("1,Alice,30") == ["1", "Alice", "30"]


def test_empty_line_is_one_empty_field():
    assert tokenize("") == [""]
    assert tokenize("", ";") == [""]


def test_empty_fields_kept():
    assert tokenize("2,,") == ["2", "", ""]


def test_no_quoting():
    """Quotes have no special meaning."""
    assert tokenize('"a,b",c') == ['"a', 'b"', "c"]


def test_multi_character_separator():
    assert tokenize("a||b||", "||") == ["a", "b", ""]


def test_whitespace_preserved():
    assert tokenize(" a , b ") == [" a ", " b "]
