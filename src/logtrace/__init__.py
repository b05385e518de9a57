"""
logtrace - Structured log attribute replacer with stack trace rendering

Rewrites log record attributes for JSON or pretty console output, turning
error values into a message plus a resolved call-stack trace.
"""

__version__ = "0.1.0"

from .core import AttributeReplacer, StackTraceResolver, capture_stack, trace_lines
from .core.pipeline import configure_logging

__all__ = ["AttributeReplacer", "StackTraceResolver", "capture_stack", "configure_logging", "trace_lines"]
