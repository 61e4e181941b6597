"""Exception classes for the helper library.

Public helpers never raise by default: every coercion falls back to the
caller's default. These types surface only when a caller opts into
``raise_on_error=True`` or when configuration is malformed.

Exception classes support two patterns:
1. No-argument raise: raise ValidationError()
2. Contextual attributes: err = ValidationError(field="x", value=123); raise err
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all helper errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class ValidationError(ApplicationError):
    """Data validation failed."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Data validation failed"
        super().__init__(message, **kwargs)


class CoercionError(ValidationError):
    """A loosely-typed value could not be coerced to the requested type."""

    MISSING = "missing"
    WRONG_TYPE = "wrong_type"
    UNPARSEABLE = "unparseable"
    NOT_ALLOWED = "not_allowed"
    NOT_CALLABLE = "not_callable"

    def __init__(self, message: str = "", *, kind: str, value: Any = None, target: str = "") -> None:
        if not message:
            message = f"Cannot coerce {value!r} to {target or 'target type'} ({kind})"
        super().__init__(message, kind=kind, value=value, target=target)

    @classmethod
    def missing(cls, target: str, name: str = "") -> "CoercionError":
        if name:
            return cls(f"Input variable {name!r} is not set", kind=cls.MISSING, value=None, target=target)
        return cls(f"No value given for {target} coercion", kind=cls.MISSING, value=None, target=target)

    @classmethod
    def wrong_type(cls, value: Any, target: str) -> "CoercionError":
        return cls(
            f"Unsupported type for {target} coercion: {type(value).__name__}",
            kind=cls.WRONG_TYPE,
            value=value,
            target=target,
        )

    @classmethod
    def unparseable(cls, value: Any, target: str) -> "CoercionError":
        return cls(f"Cannot parse {target} from value: {value!r}", kind=cls.UNPARSEABLE, value=value, target=target)

    @classmethod
    def not_allowed(cls, value: Any) -> "CoercionError":
        return cls(f"Value {value!r} is not one of the allowed values", kind=cls.NOT_ALLOWED, value=value, target="allowed value")

    @classmethod
    def not_callable(cls, value: Any) -> "CoercionError":
        return cls(f"Value {value!r} does not resolve to a callable", kind=cls.NOT_CALLABLE, value=value, target="callable")


__all__ = [
    "ApplicationError",
    "CoercionError",
    "ValidationError",
]
