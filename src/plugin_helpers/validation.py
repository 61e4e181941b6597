"""
Coercion of loosely-typed values into strictly-typed ones.

Every ``validate_*`` helper is total: when the value cannot be coerced the
caller-supplied default is returned and the fallback is logged at DEBUG
level. Callers that need diagnostics pass ``raise_on_error=True`` and get a
``CoercionError`` whose ``kind`` names the failure instead.

The ``*_input`` variants read one named variable from an ``InputSource``
(query string, form fields, cookies, server or environment variables) and
apply the matching coercion to its raw text.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping, Set
from numbers import Number
from typing import Any, Callable, Collection, Optional, TypeVar, Union

import orjson

from plugin_helpers.exceptions import CoercionError
from plugin_helpers.input_sources import InputSource, InputType, default_input_source

logger = logging.getLogger(__name__)

D = TypeVar("D")

_TRUE_STRINGS = frozenset({"1", "true", "on", "yes"})
_FALSE_STRINGS = frozenset({"0", "false", "off", "no", ""})

_DECIMAL_INT = re.compile(r"[+-]?(?:0|[1-9][0-9]*)")
_OCTAL_INT = re.compile(r"0[oO]?([0-7]+)")
_HEX_INT = re.compile(r"0[xX]([0-9a-fA-F]+)")


def _float_pattern(decimal: str, thousands: str) -> "re.Pattern[str]":
    separator = "[" + re.escape(thousands) + "]"
    integer = rf"(?:[0-9]{{1,3}}(?:{separator}[0-9]{{3}})+|[0-9]+)"
    point = re.escape(decimal)
    return re.compile(rf"[+-]?(?:{integer}(?:{point}[0-9]*)?|{point}[0-9]+)(?:[eE][+-]?[0-9]+)?")


# Tried in order: dot decimals first, comma decimals second.
_FLOAT_FORMATS = (
    (".", ",'", _float_pattern(".", ",'")),
    (",", ".'", _float_pattern(",", ".'")),
)


def _fallback(default: D, error: CoercionError, raise_on_error: bool) -> D:
    if raise_on_error:
        raise error
    logger.debug("Coercion fell back to default %r: %s", default, error)
    return default


def _decode(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return value


def _has_string_conversion(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, Number)):
        return True
    if isinstance(value, (list, tuple, Mapping, Set)):
        return False
    return type(value).__str__ is not object.__str__


def validate_string(value: Any, default: str = "", *, raise_on_error: bool = False) -> str:
    """
    Validate a string-like value.

    Args:
        value: Value to validate
        default: Returned for containers and objects without their own ``__str__``
        raise_on_error: Raise CoercionError instead of returning ``default``

    Returns:
        String form of ``value`` (``""`` for None) or ``default``
    """
    if value is None:
        return ""
    if not _has_string_conversion(value):
        return _fallback(default, CoercionError.wrong_type(value, "string"), raise_on_error)
    if isinstance(value, (bytes, bytearray)):
        return _decode(value)
    return str(value)


def validate_boolean(value: Any, default: bool, *, raise_on_error: bool = False) -> bool:
    """
    Validate a bool-like value.

    Recognises "1", "true", "on", "yes" and "0", "false", "off", "no", ""
    (case-insensitive, surrounding whitespace ignored) as well as the numbers 1 and 0.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return _fallback(default, CoercionError.missing("boolean"), raise_on_error)
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)

    value = _decode(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        return _fallback(default, CoercionError.unparseable(value, "boolean"), raise_on_error)
    if isinstance(value, (int, float)):
        return _fallback(default, CoercionError.unparseable(value, "boolean"), raise_on_error)
    return _fallback(default, CoercionError.wrong_type(value, "boolean"), raise_on_error)


def _parse_integer(text: str) -> Optional[int]:
    text = text.strip()
    if _DECIMAL_INT.fullmatch(text):
        return int(text, 10)
    hex_match = _HEX_INT.fullmatch(text)
    if hex_match:
        return int(hex_match.group(1), 16)
    octal_match = _OCTAL_INT.fullmatch(text)
    if octal_match:
        return int(octal_match.group(1), 8)
    return None


def validate_integer(value: Any, default: int, *, raise_on_error: bool = False) -> int:
    """
    Validate an int-like value.

    Strings may be decimal ("42", "-7"), octal ("017", "0o17") or hexadecimal ("0x1A").
    Floats are accepted only when they hold an integral value.
    """
    if isinstance(value, bool):
        if value:
            return 1
        return _fallback(default, CoercionError.unparseable(value, "integer"), raise_on_error)
    if isinstance(value, int):
        return value
    if value is None:
        return _fallback(default, CoercionError.missing("integer"), raise_on_error)
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        return _fallback(default, CoercionError.unparseable(value, "integer"), raise_on_error)

    value = _decode(value)
    if isinstance(value, str):
        parsed = _parse_integer(value)
        if parsed is not None:
            return parsed
        return _fallback(default, CoercionError.unparseable(value, "integer"), raise_on_error)
    return _fallback(default, CoercionError.wrong_type(value, "integer"), raise_on_error)


def _parse_float(text: str) -> Optional[float]:
    text = text.strip()
    for decimal, thousands, pattern in _FLOAT_FORMATS:
        if not pattern.fullmatch(text):
            continue
        normalized = text
        for separator in thousands:
            normalized = normalized.replace(separator, "")
        return float(normalized.replace(decimal, "."))
    return None


def validate_float(value: Any, default: float, *, raise_on_error: bool = False) -> float:
    """
    Validate a float-like value.

    Accepts "." or "," as the decimal separator with optional thousands
    separators ("1,234.5", "1.234,5", "3,14"). Dot decimals are tried first.
    A parsed zero is a valid result.
    """
    if isinstance(value, bool):
        if value:
            return 1.0
        return _fallback(default, CoercionError.unparseable(value, "float"), raise_on_error)
    if value is None:
        return _fallback(default, CoercionError.missing("float"), raise_on_error)
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:  # policy_guard: allow-silent-handler
            result = math.inf
        if math.isfinite(result):
            return result
        return _fallback(default, CoercionError.unparseable(value, "float"), raise_on_error)

    value = _decode(value)
    if isinstance(value, str):
        parsed = _parse_float(value)
        if parsed is not None and math.isfinite(parsed):
            return parsed
        return _fallback(default, CoercionError.unparseable(value, "float"), raise_on_error)
    return _fallback(default, CoercionError.wrong_type(value, "float"), raise_on_error)


def validate_callback(value: Any, default: Callable[..., Any], *, raise_on_error: bool = False) -> Callable[..., Any]:
    """
    Validate a callback.

    A string is trimmed and looked up as a named function ("len", "os.path.join",
    "package.module:Class.method"); the function it names is returned. A value
    that is already callable is returned unchanged.
    """
    from plugin_helpers.callables import NamedFunction

    if isinstance(value, str):
        resolved = NamedFunction(value.strip()).resolve()
        if resolved is not None:
            return resolved
        return _fallback(default, CoercionError.not_callable(value), raise_on_error)
    if callable(value):
        return value
    return _fallback(default, CoercionError.not_callable(value), raise_on_error)


def _is_strict_member(value: Any, allowed: Collection[Any]) -> bool:
    return any(type(candidate) is type(value) and candidate == value for candidate in allowed)


def validate_allowed_value(value: Any, allowed: Collection[Any], default: Any, *, raise_on_error: bool = False) -> Any:
    """
    Validate a value against a whitelist.

    Membership is type-strict (``1`` does not match ``"1"``). A string that does
    not match is trimmed and checked again; the trimmed form is returned on success.
    """
    if _is_strict_member(value, allowed):
        return value
    if isinstance(value, str):
        trimmed = value.strip()
        if _is_strict_member(trimmed, allowed):
            return trimmed
    return _fallback(default, CoercionError.not_allowed(value), raise_on_error)


def validate_array(value: Any, default: D, *, raise_on_error: bool = False) -> Union[list, tuple, dict, D]:
    """
    Validate an array-like value.

    Lists, tuples and dicts are returned unchanged. Text is decoded as JSON and
    accepted when it holds an array or an object.
    """
    if isinstance(value, (list, tuple, dict)):
        return value
    if value is None:
        return _fallback(default, CoercionError.missing("array"), raise_on_error)
    if not isinstance(value, (str, bytes, bytearray)):
        return _fallback(default, CoercionError.wrong_type(value, "array"), raise_on_error)

    try:
        decoded = orjson.loads(value)
    except orjson.JSONDecodeError:  # policy_guard: allow-silent-handler
        return _fallback(default, CoercionError.unparseable(value, "array"), raise_on_error)
    if isinstance(decoded, (list, dict)):
        return decoded
    return _fallback(default, CoercionError.wrong_type(decoded, "array"), raise_on_error)


def _fetch_raw(
    input_type: InputType,
    name: str,
    source: Optional[InputSource],
    target: str,
    raise_on_error: bool,
) -> Optional[str]:
    if source is None:
        source = default_input_source()
    raw = source.fetch(input_type, name)
    if raw is None:
        logger.debug("Input variable %r not present in %s input", name, input_type.name)
        if raise_on_error:
            raise CoercionError.missing(target, name)
    return raw


def validate_string_input(
    input_type: InputType,
    name: str,
    default: str = "",
    *,
    source: Optional[InputSource] = None,
    raise_on_error: bool = False,
) -> str:
    """Validate a string-like variable from an input source."""
    raw = _fetch_raw(input_type, name, source, "string", raise_on_error)
    if raw is None:
        return default
    return validate_string(raw, default, raise_on_error=raise_on_error)


def validate_boolean_input(
    input_type: InputType,
    name: str,
    default: bool,
    *,
    source: Optional[InputSource] = None,
    raise_on_error: bool = False,
) -> bool:
    """Validate a bool-like variable from an input source."""
    raw = _fetch_raw(input_type, name, source, "boolean", raise_on_error)
    if raw is None:
        return default
    return validate_boolean(raw, default, raise_on_error=raise_on_error)


def validate_integer_input(
    input_type: InputType,
    name: str,
    default: int,
    *,
    source: Optional[InputSource] = None,
    raise_on_error: bool = False,
) -> int:
    """Validate an int-like variable from an input source."""
    raw = _fetch_raw(input_type, name, source, "integer", raise_on_error)
    if raw is None:
        return default
    return validate_integer(raw, default, raise_on_error=raise_on_error)


def validate_float_input(
    input_type: InputType,
    name: str,
    default: float,
    *,
    source: Optional[InputSource] = None,
    raise_on_error: bool = False,
) -> float:
    """Validate a float-like variable from an input source."""
    raw = _fetch_raw(input_type, name, source, "float", raise_on_error)
    if raw is None:
        return default
    return validate_float(raw, default, raise_on_error=raise_on_error)


def validate_array_input(
    input_type: InputType,
    name: str,
    default: D,
    *,
    source: Optional[InputSource] = None,
    raise_on_error: bool = False,
) -> Union[list, tuple, dict, D]:
    """Validate a JSON array/object variable from an input source."""
    raw = _fetch_raw(input_type, name, source, "array", raise_on_error)
    if raw is None:
        return default
    return validate_array(raw, default, raise_on_error=raise_on_error)


__all__ = [
    "validate_allowed_value",
    "validate_array",
    "validate_array_input",
    "validate_boolean",
    "validate_boolean_input",
    "validate_callback",
    "validate_float",
    "validate_float_input",
    "validate_integer",
    "validate_integer_input",
    "validate_string",
    "validate_string_input",
]
