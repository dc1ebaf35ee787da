"""Tests for configuration helpers."""

import pytest

from recipe_finder.config import parse_api_key


@pytest.mark.parametrize("raw", [None, "", "   ", "YOUR_SPOONACULAR_API_KEY"])
def test_parse_api_key_treats_placeholders_as_unset(raw: str | None) -> None:
    assert parse_api_key(raw) is None


def test_parse_api_key_strips_whitespace() -> None:
    assert parse_api_key("  abc123 ") == "abc123"
