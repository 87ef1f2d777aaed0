"""Tests for the composite literal tokenizer."""

import pytest

from struct_defaults import tokenize_values, unwrap_literal


class TestTokenizeValues:
    """Test top-level comma splitting."""

    def test_flat_values(self):
        assert tokenize_values("1,2,3,4") == ["1", "2", "3", "4"]

    def test_nested_sequences_are_not_split(self):
        assert tokenize_values("[1,2],[3,4]") == ["[1,2]", "[3,4]"]

    def test_nested_maps_are_not_split(self):
        """Commas inside braces belong to the inner literal."""
        assert tokenize_values("1:{1:a,2:b},2:{3:c}") == ["1:{1:a,2:b}", "2:{3:c}"]

    def test_mixed_nesting(self):
        assert tokenize_values("{1:[a,b]},[{2:c}]") == ["{1:[a,b]}", "[{2:c}]"]

    def test_trailing_empty_token_dropped(self):
        assert tokenize_values("1,") == ["1"]

    def test_leading_and_inner_empty_tokens_kept(self):
        assert tokenize_values(",1,,2") == ["", "1", "", "2"]

    def test_empty_expression(self):
        assert tokenize_values("") == []

    def test_whitespace_is_preserved(self):
        assert tokenize_values("a, b") == ["a", " b"]


class TestUnwrapLiteral:
    """Test outer delimiter stripping and balance checks."""

    @pytest.mark.parametrize("text, body", [
        ("[1,2]", "1,2"),
        ("[]", ""),
        ("[[1],[2]]", "[1],[2]"),
    ])
    def test_sequence_literals(self, text, body):
        assert unwrap_literal(text, "[", "]") == body

    def test_map_literal(self):
        assert unwrap_literal("{1:a,2:[b]}", "{", "}") == "1:a,2:[b]"

    @pytest.mark.parametrize("text", ["1,2", "[1,2", "1,2]", "{1:a}", ""])
    def test_rejects_missing_delimiters(self, text):
        assert unwrap_literal(text, "[", "]") is None

    @pytest.mark.parametrize("text", ["[[1,2]", "[1,2]]", "[{1:a]}]", "[1]],[[2]"])
    def test_rejects_unbalanced_or_mismatched(self, text):
        """Bracket mismatch makes the whole literal invalid."""
        assert unwrap_literal(text, "[", "]") is None
