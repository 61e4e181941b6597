"""Tests for plugin_helpers strings module."""

from __future__ import annotations

import pytest

from plugin_helpers import strings


class TestPrefixSuffix:
    """Tests for starts_with and ends_with."""

    def test_starts_with(self) -> None:
        assert strings.starts_with("plugin_settings", "plugin_") is True
        assert strings.starts_with("plugin_settings", "settings") is False

    def test_ends_with(self) -> None:
        assert strings.ends_with("plugin_settings", "_settings") is True
        assert strings.ends_with("plugin_settings", "plugin") is False

    @pytest.mark.parametrize("haystack", ["", "abc", "ünïcode"])
    def test_empty_needle_always_matches(self, haystack) -> None:
        """An empty prefix or suffix matches any string."""
        assert strings.starts_with(haystack, "") is True
        assert strings.ends_with(haystack, "") is True

    def test_needle_longer_than_haystack(self) -> None:
        assert strings.starts_with("ab", "abc") is False
        assert strings.ends_with("bc", "abc") is False


class TestReplacePlaceholders:
    """Tests for replace_placeholders."""

    def test_replaces_all_occurrences(self) -> None:
        result = strings.replace_placeholders({"{name}": "Ada", "{day}": "Monday"}, "Hi {name}, see you {day}. Bye {name}")
        assert result == "Hi Ada, see you Monday. Bye Ada"

    def test_replacement_text_is_not_rescanned(self) -> None:
        """Substitution happens in a single pass."""
        assert strings.replace_placeholders({"a": "b", "b": "c"}, "ab") == "bc"

    def test_longest_placeholder_wins(self) -> None:
        assert strings.replace_placeholders({"{x}": "1", "{x}}": "2"}, "{x}}") == "2"

    def test_keys_are_literal(self) -> None:
        """Regex metacharacters in keys are matched literally."""
        assert strings.replace_placeholders({".*": "dot-star"}, "a.*b") == "adot-starb"

    def test_values_are_coerced_to_strings(self) -> None:
        assert strings.replace_placeholders({"%count%": 3}, "%count% items") == "3 items"

    def test_empty_mapping_and_empty_key(self) -> None:
        assert strings.replace_placeholders({}, "unchanged") == "unchanged"
        assert strings.replace_placeholders({"": "x"}, "unchanged") == "unchanged"


class TestSanitizers:
    """Tests for the sanitizing transforms."""

    def test_to_ascii_input_string_strips_control_and_high(self) -> None:
        assert strings.to_ascii_input_string("a\x00b\tc\x7fdé€f") == "abcdf"

    def test_to_ascii_input_string_keeps_punctuation(self) -> None:
        assert strings.to_ascii_input_string("a-b_c!?") == "a-b_c!?"

    def test_to_alphanumeric_ascii_string(self) -> None:
        assert strings.to_alphanumeric_ascii_string("Héllo, World_42!") == "Hllo World42"

    def test_to_alphanumeric_unicode_string(self) -> None:
        assert strings.to_alphanumeric_unicode_string("Héllo, Wörld_42! 日本") == "Héllo Wörld42 日本"

    def test_to_safe_string(self) -> None:
        unsafe = {" ": "-", "&": "and"}
        assert strings.to_safe_string("Fish & Chips Café", unsafe) == "fish-and-chips-caf"

    @pytest.mark.parametrize("value", ["Fish & Chips", "ÄÖÜ\x00 mixed Case", "already-safe"])
    def test_to_safe_string_is_idempotent(self, value) -> None:
        unsafe = {" ": "_", "&": "and"}
        once = strings.to_safe_string(value, unsafe)
        assert strings.to_safe_string(once, unsafe) == once

    def test_to_safe_string_matches_keys_against_lowercase(self) -> None:
        """Upper-case input is lowered before replacement, so a second pass changes nothing."""
        unsafe = {"a": "x"}
        once = strings.to_safe_string("A", unsafe)

        assert once == "x"
        assert strings.to_safe_string(once, unsafe) == once


class TestLetterToNumber:
    """Tests for letter_to_number."""

    @pytest.mark.parametrize(
        "size, expected",
        [
            ("4M", 4 * 1024 * 1024),
            ("4m", 4 * 1024 * 1024),
            ("1K", 1024),
            ("2G", 2 * 1024**3),
            ("1T", 1024**4),
            ("1P", 1024**5),
            ("512", 512),
            ("1.5K", 1536),
            (" 8M ", 8 * 1024 * 1024),
        ],
    )
    def test_parses_sizes(self, size, expected) -> None:
        assert strings.letter_to_number(size) == expected

    def test_unknown_suffix_is_dropped_without_multiplier(self) -> None:
        assert strings.letter_to_number("10X") == 10

    def test_empty_and_non_numeric(self) -> None:
        assert strings.letter_to_number("") == 0
        assert strings.letter_to_number("M") == 0
        assert strings.letter_to_number("abc") == 0

    def test_returns_int(self) -> None:
        assert isinstance(strings.letter_to_number("1.5K"), int)

    @pytest.mark.parametrize("size", ["1e400", "1e308K", "9e307P"])
    def test_overflowing_values_give_zero(self, size) -> None:
        assert strings.letter_to_number(size) == 0


class TestResolve:
    """Tests for resolve and validate."""

    def test_callable_is_invoked(self) -> None:
        assert strings.resolve(lambda: "computed") == "computed"

    def test_plain_value_is_stringified(self) -> None:
        assert strings.resolve(42) == "42"
        assert strings.resolve("text") == "text"

    def test_callable_returning_none_gives_empty_string(self) -> None:
        assert strings.resolve(lambda: None, "fallback") == ""

    def test_callable_returning_container_gives_default(self) -> None:
        assert strings.resolve(lambda: ["a"], "fallback") == "fallback"

    def test_object_without_string_conversion_gives_default(self) -> None:
        class Opaque:
            pass

        assert strings.resolve(Opaque(), "fallback") == "fallback"

    def test_string_names_are_not_invoked(self) -> None:
        """Only real callables are called; a function name stays text."""
        assert strings.resolve("len") == "len"

    def test_validate(self) -> None:
        assert strings.validate("abc") == "abc"
        assert strings.validate(5) is None
        assert strings.validate(5, "fallback") == "fallback"
