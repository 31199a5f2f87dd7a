"""Tests for newsrelay.parser."""

from newsrelay.parser import ResponseParser


class TestResponseParser:
    def test_parses_object(self) -> None:
        assert ResponseParser().parse('{"a": 1}') == {"a": 1}

    def test_none_body(self) -> None:
        assert ResponseParser().parse(None) is None

    def test_malformed_body(self) -> None:
        assert ResponseParser().parse("{not json") is None

    def test_empty_body(self) -> None:
        assert ResponseParser().parse("") is None

    def test_non_object_body(self) -> None:
        assert ResponseParser().parse("[1, 2, 3]") is None
