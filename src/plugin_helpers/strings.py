"""String predicates, sanitizers and converters."""

from __future__ import annotations

import math
import re
import string as _string
from typing import Any, Mapping, TypeVar, Union

from plugin_helpers import validation

D = TypeVar("D")

_UNIT_RANKS = {"K": 1, "M": 2, "G": 3, "T": 4, "P": 5}
_LEADING_NUMBER = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_NON_ALPHANUMERIC_ASCII = re.compile(r"[^A-Za-z0-9 ]")


def starts_with(haystack: str, needle: str) -> bool:
    """Check whether a string starts with ``needle``; an empty needle always matches."""
    return haystack.startswith(needle)


def ends_with(haystack: str, needle: str) -> bool:
    """Check whether a string ends with ``needle``; an empty needle always matches."""
    return haystack.endswith(needle)


def replace_placeholders(placeholders: Mapping[Any, Any], string: str) -> str:
    """
    Replace every placeholder key found in ``string`` with its value.

    All placeholders are replaced in a single pass over the original string,
    so replacement text is never scanned again. Where placeholders overlap the
    longest one wins.

    Args:
        placeholders: {placeholder} => {value}
        string: The string containing the placeholders

    Returns:
        Processed string with all the placeholders replaced
    """
    replacements = {
        validation.validate_string(key): validation.validate_string(value) for key, value in placeholders.items()
    }
    replacements.pop("", None)
    if not replacements:
        return string

    pattern = re.compile("|".join(re.escape(key) for key in sorted(replacements, key=len, reverse=True)))
    return pattern.sub(lambda match: replacements[match.group(0)], string)


def to_safe_string(string: str, unsafe_characters: Mapping[Any, Any]) -> str:
    """
    Transform a string into a lowercase, ASCII-only, control-free version of itself.

    The string is lower-cased before the unsafe characters are replaced, so
    mapping keys are matched against lowercase text.
    """
    return to_ascii_input_string(replace_placeholders(unsafe_characters, string.lower())).lower()


def to_alphanumeric_unicode_string(string: str) -> str:
    """Remove every character that is neither a Unicode letter/digit nor whitespace."""
    return "".join(char for char in string if char.isalnum() or char.isspace())


def to_alphanumeric_ascii_string(string: str) -> str:
    """Remove everything except ASCII letters, digits and spaces."""
    return _NON_ALPHANUMERIC_ASCII.sub("", string)


def to_ascii_input_string(string: str) -> str:
    """Remove non-ASCII characters and ASCII control characters (including DEL)."""
    return "".join(char for char in string if 32 <= ord(char) < 127)


def _leading_number(text: str) -> Union[int, float]:
    match = _LEADING_NUMBER.match(text.strip())
    if match is None:
        return 0
    token = match.group(0)
    try:
        return int(token)
    except ValueError:  # policy_guard: allow-silent-handler
        return float(token)


def letter_to_number(size: str) -> int:
    """
    Transform shorthand byte notation (like "2M" in ini files) to an integer.

    K, M, G, T and P (any case) multiply by 1024 raised to 1..5. A string ending
    in a digit has no unit. Any other trailing character is dropped without
    applying a multiplier. Values too large to represent give 0.
    """
    text = validation.validate_string(size).strip()
    if not text:
        return 0

    letter = text[-1]
    if letter in _string.digits or letter == ".":
        number, rank = _leading_number(text), 0
    else:
        number, rank = _leading_number(text[:-1]), _UNIT_RANKS.get(letter.upper(), 0)

    scaled = number * 1024**rank
    # Exponent notation can overflow to inf.
    if isinstance(scaled, float) and not math.isfinite(scaled):
        return 0
    return int(scaled)


def resolve(value: Any, default: str = "") -> str:
    """Call ``value`` if it is callable, then coerce the result to a string (``default`` on failure)."""
    if callable(value):
        value = value()
    return validation.validate_string(value, default)


def validate(value: Any, default: D = None) -> Union[str, D]:
    """Return ``value`` if it is a string, ``default`` otherwise."""
    if isinstance(value, str):
        return value
    return default


__all__ = [
    "ends_with",
    "letter_to_number",
    "replace_placeholders",
    "resolve",
    "starts_with",
    "to_alphanumeric_ascii_string",
    "to_alphanumeric_unicode_string",
    "to_ascii_input_string",
    "to_safe_string",
    "validate",
]
