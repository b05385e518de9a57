"""
Call-stack capture and symbolication.

A captured stack is a tuple of opaque program counters, innermost frame first.
Each counter identifies a code object plus the instruction offset that was
executing in it. Resolution maps counters back to ``Frame`` descriptions
through a ``SymbolTable``; counters that cannot be mapped render as
``"unknown"`` and still take up their slot in the trace.
"""

import dis
import sys
import threading
import weakref
from dataclasses import dataclass
from types import CodeType
from typing import List, Optional, Protocol, Sequence, Tuple

UNKNOWN_FRAME = "unknown"

DEFAULT_STACK_DEPTH = 32

# Low bits of a program counter carry the instruction offset
_OFFSET_BITS = 32
_OFFSET_MASK = (1 << _OFFSET_BITS) - 1


@dataclass(frozen=True)
class Frame:
    """Resolved description of one program counter."""

    function: str
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.function} {self.file}:{self.line}"


class SymbolTable(Protocol):
    """Maps a program counter to a frame, or ``None`` when it is not known."""

    def lookup(self, pc: int) -> Optional[Frame]:
        ...


class RuntimeSymbolTable:
    """
    Symbol table backed by the interpreter's live code objects.

    Code objects are registered while a stack is captured and held weakly:
    once a function's code is garbage collected its counters stop resolving.
    """

    def __init__(self) -> None:
        self._code: "weakref.WeakValueDictionary[int, CodeType]" = weakref.WeakValueDictionary()
        self._lock = threading.Lock()

    def register(self, code: CodeType, offset: int) -> int:
        """Register ``code`` and return the program counter for ``offset`` inside it."""
        code_id = id(code)
        with self._lock:
            self._code[code_id] = code
        return (code_id << _OFFSET_BITS) | (max(offset, 0) & _OFFSET_MASK)

    def lookup(self, pc: int) -> Optional[Frame]:
        if pc <= 0:
            return None

        code = self._code.get(pc >> _OFFSET_BITS)
        if code is None:
            return None

        return Frame(
            function=code.co_qualname,
            file=code.co_filename,
            line=_line_for_offset(code, pc & _OFFSET_MASK),
        )


def _line_for_offset(code: CodeType, offset: int) -> int:
    """Source line of the instruction at ``offset``."""
    line = None
    for start, lineno in dis.findlinestarts(code):
        if start > offset:
            break
        if lineno is not None:
            line = lineno
    return line if line is not None else code.co_firstlineno


# Global runtime symbol table instance
_symbol_table = RuntimeSymbolTable()


def get_symbol_table() -> RuntimeSymbolTable:
    """Get the process-wide runtime symbol table."""
    return _symbol_table


def capture_stack(skip: int = 0, limit: int = DEFAULT_STACK_DEPTH) -> Tuple[int, ...]:
    """
    Capture the current call stack as program counters, innermost first.

    Args:
        skip: Number of frames above the caller to leave out
        limit: Maximum number of frames recorded; deeper frames are dropped

    Returns:
        Immutable snapshot of program counters
    """
    symbols = get_symbol_table()
    frame = sys._getframe(1)
    for _ in range(skip):
        if frame is None:
            break
        frame = frame.f_back

    stack: List[int] = []
    while frame is not None and len(stack) < limit:
        stack.append(symbols.register(frame.f_code, frame.f_lasti))
        frame = frame.f_back

    return tuple(stack)


class StackTraceResolver:
    """Turns program counter snapshots into formatted frame strings."""

    def __init__(self, symbols: Optional[SymbolTable] = None) -> None:
        self.symbols = symbols if symbols is not None else get_symbol_table()

    def resolve_frames(self, stack: Sequence[int]) -> List[Optional[Frame]]:
        """Look up every counter; unresolvable ones come back as ``None``."""
        return [self.symbols.lookup(pc) for pc in stack]

    def resolve(self, stack: Sequence[int]) -> List[str]:
        """
        Format a captured stack, one string per counter, order preserved.

        Resolved frames render as ``"<function> <file>:<line>"``, everything
        else as ``"unknown"``.
        """
        return [
            str(frame) if frame is not None else UNKNOWN_FRAME
            for frame in self.resolve_frames(stack)
        ]


def trace_lines(stack: Sequence[int]) -> List[str]:
    """Resolve ``stack`` against the runtime symbol table."""
    return StackTraceResolver().resolve(stack)
