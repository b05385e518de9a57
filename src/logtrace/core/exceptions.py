"""
Custom exceptions for the logtrace service.

Every exception records the call stack starting at the code that created it,
leaving out its own constructors, so when it is logged the attribute replacer
renders both its message and its trace.
"""

import sys
from typing import Any, Dict, Optional, Tuple

from .stacktrace import capture_stack


class LogTraceException(Exception):
    """Base exception for logtrace, carrying a captured stack."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "internal_error",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        self._stack = capture_stack(skip=self._constructor_depth())

    def _constructor_depth(self) -> int:
        """Number of ``__init__`` frames of this exception's classes on the stack."""
        init_codes = set()
        for klass in type(self).__mro__:
            init = vars(klass).get("__init__")
            code = getattr(init, "__code__", None)
            if code is not None:
                init_codes.add(code)

        depth = 0
        frame = sys._getframe(1)
        while frame is not None and frame.f_code in init_codes:
            depth += 1
            frame = frame.f_back
        return depth

    def error(self) -> str:
        return self.message

    def stack_trace(self) -> Tuple[int, ...]:
        """Program counters captured when the exception was created."""
        return self._stack


class ConfigurationError(LogTraceException):
    """Raised when settings cannot be applied."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="configuration_error",
            details=details,
        )

