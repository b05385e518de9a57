"""
Core log attribute processing components.

This package contains:
- Attribute data model
- Error capability detection
- Stack capture and symbolication
- The attribute replacer and its structlog wiring
"""

from .attributes import EMPTY, LEVEL_KEY, MESSAGE_KEY, TIME_KEY, WELL_KNOWN_KEYS, Attribute, Group
from .capabilities import SupportsErrorMessage, SupportsStackTrace, as_error_message, as_stack_capture
from .replacer import AttributeReplacer
from .stacktrace import (
    UNKNOWN_FRAME,
    Frame,
    RuntimeSymbolTable,
    StackTraceResolver,
    SymbolTable,
    capture_stack,
    get_symbol_table,
    trace_lines,
)

__all__ = [
    # Data model
    "Attribute",
    "Group",
    "EMPTY",
    "TIME_KEY",
    "LEVEL_KEY",
    "MESSAGE_KEY",
    "WELL_KNOWN_KEYS",

    # Capabilities
    "SupportsErrorMessage",
    "SupportsStackTrace",
    "as_error_message",
    "as_stack_capture",

    # Stack traces
    "Frame",
    "SymbolTable",
    "RuntimeSymbolTable",
    "StackTraceResolver",
    "UNKNOWN_FRAME",
    "capture_stack",
    "get_symbol_table",
    "trace_lines",

    # Replacer
    "AttributeReplacer",
]
