"""
Error capability detection.

A value counts as an error when it can describe itself with a message, and
separately may expose a captured call stack. Detection looks for callable
members on the value's type, so plain data that merely carries a field of the
same name is never mistaken for an error.
"""

from typing import Any, Optional, Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class SupportsErrorMessage(Protocol):
    """Anything that can describe itself as an error."""

    def error(self) -> str:
        ...


@runtime_checkable
class SupportsStackTrace(Protocol):
    """Anything carrying a previously captured stack snapshot."""

    def stack_trace(self) -> Sequence[int]:
        ...


def _method(value: Any, name: str) -> Any:
    """Bound method ``name`` if the value's type defines a callable one."""
    member = getattr(type(value), name, None)
    if member is None or not callable(member):
        return None
    return getattr(value, name)


def as_error_message(value: Any) -> Optional[str]:
    """
    Return the error message of ``value``, or ``None`` if it is not an error.

    Exceptions describe themselves through ``str()``; other objects through an
    ``error()`` method.
    """
    if isinstance(value, BaseException):
        return str(value)

    error = _method(value, "error")
    if error is None:
        return None
    return str(error())


def as_stack_capture(value: Any) -> Optional[Tuple[int, ...]]:
    """Return the captured program counters of ``value``, or ``None``."""
    stack_trace = _method(value, "stack_trace")
    if stack_trace is None:
        return None

    stack = stack_trace()
    return tuple(stack) if stack is not None else ()
