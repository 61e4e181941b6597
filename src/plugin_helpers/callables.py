"""
Validation and conditional invocation of values that may be callables.

A raw value is classified into one of three references:

- ``FunctionRef``: the value is already callable
- ``NamedFunction``: a string naming a builtin ("len") or a dotted path into an
  already-loaded module ("os.path.join", "package.module:Class.method")
- ``BoundMethod``: an ``(object, "method_name")`` pair; a string object is
  looked up by name first, so ``("package.module.Class", "method")`` works too
"""

from __future__ import annotations

import builtins
import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from plugin_helpers import arrays, strings

logger = logging.getLogger(__name__)

_MISSING = object()


def _walk_attributes(target: Any, attributes: Sequence[str]) -> Any:
    for attribute in attributes:
        target = getattr(target, attribute, _MISSING)
        if target is _MISSING:
            return _MISSING
    return target


def _loaded_object(module_name: str, attributes: Sequence[str]) -> Any:
    # Only modules that are already loaded are searched; nothing is imported.
    module = sys.modules.get(module_name)
    if module is None:
        logger.debug("Module %r not loaded while resolving a named callable", module_name)
        return _MISSING
    return _walk_attributes(module, attributes)


def lookup_name(name: str) -> Any:
    """
    Find the object a name refers to.

    Bare names are looked up among the builtins. Dotted and ``module:qualname``
    paths are looked up in modules that are already loaded.

    Returns the object or ``None`` when the name does not resolve.
    """
    name = name.strip()
    if ":" in name:
        module_name, _, qualname = name.partition(":")
        parts = qualname.split(".")
        if not module_name or not all(part.isidentifier() for part in module_name.split(".") + parts):
            return None
        found = _loaded_object(module_name, parts)
        return None if found is _MISSING else found

    parts = name.split(".")
    if not all(part.isidentifier() for part in parts):
        return None
    if len(parts) == 1:
        return getattr(builtins, name, None)

    for split in range(len(parts) - 1, 0, -1):
        found = _loaded_object(".".join(parts[:split]), parts[split:])
        if found is not _MISSING:
            return found
    return None


@dataclass(frozen=True)
class FunctionRef:
    function: Callable[..., Any]

    def resolve(self) -> Optional[Callable[..., Any]]:
        return self.function


@dataclass(frozen=True)
class NamedFunction:
    name: str

    def resolve(self) -> Optional[Callable[..., Any]]:
        found = lookup_name(self.name)
        return found if callable(found) else None


@dataclass(frozen=True)
class BoundMethod:
    target: Any
    method_name: str

    def resolve(self) -> Optional[Callable[..., Any]]:
        target = lookup_name(self.target) if isinstance(self.target, str) else self.target
        if target is None:
            return None
        method = getattr(target, self.method_name.strip(), None)
        return method if callable(method) else None


CallableRef = Union[FunctionRef, NamedFunction, BoundMethod]


def to_callable_ref(value: Any) -> Optional[CallableRef]:
    """Classify a raw value as a callable reference, or None if it has no callable shape."""
    if callable(value):
        return FunctionRef(value)

    name = strings.validate(value)
    if name is not None:
        return NamedFunction(name.strip())

    pair = arrays.validate(value)
    if isinstance(pair, (list, tuple)) and len(pair) == 2 and isinstance(pair[1], str):
        return BoundMethod(pair[0], pair[1].strip())
    return None


def validate(maybe_callable: Any, default: Optional[Callable[..., Any]] = None) -> Optional[Callable[..., Any]]:
    """
    Return a callable for ``maybe_callable`` or ``default`` if it does not resolve to one.

    Callables are returned unchanged; names and object/method pairs are trimmed
    and resolved to the callable they refer to.
    """
    if callable(maybe_callable):
        return maybe_callable

    ref = to_callable_ref(maybe_callable)
    resolved = ref.resolve() if ref is not None else None
    return resolved if resolved is not None else default


def maybe_resolve(maybe_callable: Any, args: Sequence[Any] = ()) -> Any:
    """Return the result of calling ``maybe_callable`` with ``args`` if it is a callable, otherwise the value itself."""
    function = validate(maybe_callable)
    if function is None:
        return maybe_callable
    return function(*args)


__all__ = [
    "BoundMethod",
    "CallableRef",
    "FunctionRef",
    "NamedFunction",
    "lookup_name",
    "maybe_resolve",
    "to_callable_ref",
    "validate",
]
