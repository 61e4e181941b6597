"""
Array helpers for ordered associative containers.

A container is either a ``dict`` (ordered, keyed by ``str`` or ``int``) or a
``list``/``tuple`` implicitly keyed by position. A container is map-like when at
least one key is a non-numeric string; otherwise it is list-like and positional
order is what matters.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

Container = Union[Mapping[Any, Any], Sequence[Any]]
D = TypeVar("D")

# String keys that count as integer keys ("5" yes, "05" and "-0" no).
_NUMERIC_KEY = re.compile(r"0|-?[1-9][0-9]*")


def _entries(container: Container) -> List[Tuple[Any, Any]]:
    if isinstance(container, Mapping):
        return list(container.items())
    return list(enumerate(container))


def _is_string_key(key: Any) -> bool:
    return isinstance(key, str) and _NUMERIC_KEY.fullmatch(key) is None


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _numeric_text_equals(text: str, number: Union[int, float]) -> bool:
    try:
        return float(text.strip()) == number
    except ValueError:  # policy_guard: allow-silent-handler
        return False


def loose_equals(left: Any, right: Any) -> bool:
    """
    Compare two values allowing cross-type equality.

    Booleans and None compare by truthiness ("" and "0" are falsy), numbers
    compare equal to numeric strings ("1" equals 1), everything else uses ``==``.
    """
    if type(left) is type(right):
        return left == right
    if isinstance(left, bool) or isinstance(right, bool) or left is None or right is None:
        return _truthy(left) == _truthy(right)
    if isinstance(left, str) and _is_number(right):
        return _numeric_text_equals(left, right)
    if isinstance(right, str) and _is_number(left):
        return _numeric_text_equals(right, left)
    return left == right


def strict_equals(left: Any, right: Any) -> bool:
    """Compare two values requiring identical type and equal value."""
    return type(left) is type(right) and left == right


def has_string_keys(container: Container) -> bool:
    """
    Check whether a container has any non-numeric string keys.

    Args:
        container: Mapping or sequence to check

    Returns:
        True if it has string keys (map-like), False if all keys are numeric (list-like)
    """
    if not isinstance(container, Mapping):
        return False
    return any(_is_string_key(key) for key in container)


def _position_after(entries: List[Tuple[Any, Any]], key: Any) -> int:
    for index, (candidate, _) in enumerate(entries):
        if strict_equals(candidate, key):
            return index + 1
    return len(entries)


def _splice_preserving_keys(entries: List[Tuple[Any, Any]], position: int, new_entries: Container) -> Dict[Any, Any]:
    result = dict(entries[:position])
    result.update(_entries(new_entries))
    for existing_key, value in entries[position:]:
        result.setdefault(existing_key, value)
    return result


def _splice_positional(container: Container, entries: List[Tuple[Any, Any]], position: int, new_entries: Container) -> Container:
    values = [value for _, value in entries]
    values[position:position] = [value for _, value in _entries(new_entries)]
    if isinstance(container, list):
        return values
    if isinstance(container, tuple):
        return tuple(values)
    return dict(enumerate(values))


def insert_after(container: Container, key: Any, new_entries: Container) -> Container:
    """
    Insert new entries right after a given key. If the key is not found, the
    entries are appended at the end.

    Empty containers (of any kind) and map-like dicts keep every key and give a
    dict; on a key collision the new entry wins. List-like containers get a
    positional splice: the values of ``new_entries`` are inserted and integer
    keys renumbered. The input container is never modified.

    Args:
        container: Container to insert the new entries into
        key: Key to insert the entries after (matched type-strictly)
        new_entries: Entries to insert

    Returns:
        A new dict for empty or map-like input, otherwise a container of the same kind
    """
    entries = _entries(container)
    position = _position_after(entries, key)

    if not entries or (isinstance(container, Mapping) and has_string_keys(container)):
        return _splice_preserving_keys(entries, position, new_entries)
    return _splice_positional(container, entries, position, new_entries)


def search_values(
    container: Container,
    needle: Any,
    strict: bool = True,
    callback: Optional[Callable[[Any], Any]] = None,
) -> Optional[Dict[Any, Any]]:
    """
    Return all the entries of a container whose value matches a needle.

    Args:
        container: Container to search through
        needle: The value to search for
        strict: Require identical type as well as equal value
        callback: Optional transform applied to each value before comparison

    Returns:
        Matching entries keyed as in the input, in input order, or None when nothing matches
    """
    compare = strict_equals if strict else loose_equals
    matches: Dict[Any, Any] = {}
    for key, value in _entries(container):
        candidate = callback(value) if callable(callback) else value
        if compare(needle, candidate):
            matches[key] = value
    return matches or None


def search_keys(
    container: Container,
    needle: Any,
    strict: bool = False,
    callback: Optional[Callable[[Any], Any]] = None,
) -> Optional[Dict[int, Any]]:
    """Return the keys of a container matching a needle, keyed by key position, or None."""
    return search_values([key for key, _ in _entries(container)], needle, strict, callback)


def validate(value: Any, default: D = None) -> Union[list, tuple, dict, D]:
    """Return ``value`` if it is an array-like container, ``default`` otherwise."""
    if isinstance(value, (list, tuple, dict)):
        return value
    return default


__all__ = [
    "Container",
    "has_string_keys",
    "insert_after",
    "loose_equals",
    "search_keys",
    "search_values",
    "strict_equals",
    "validate",
]
