"""
Attribute replacer.

Decides, for each attribute of a log record, what actually gets emitted:

1. In pretty mode the well-known record keys (timestamp, level, message) are
   suppressed, since the console renderer prints them in its header.
2. In structured mode the well-known keys pass through untouched.
3. Error values are rewritten into a group with ``msg`` and, when the value
   carries a captured stack, ``trace``.
4. Everything else passes through untouched.
"""

from typing import Optional, Sequence

from .attributes import EMPTY, WELL_KNOWN_KEYS, Attribute
from .capabilities import as_error_message, as_stack_capture
from .stacktrace import StackTraceResolver

MSG_KEY = "msg"
TRACE_KEY = "trace"


class AttributeReplacer:
    """
    Rewrites single attributes according to the logging mode.

    The mode is fixed at construction; instances hold no other state and can
    be shared between handlers and threads.
    """

    def __init__(self, pretty_mode: bool, resolver: Optional[StackTraceResolver] = None) -> None:
        self.pretty_mode = pretty_mode
        self.resolver = resolver if resolver is not None else StackTraceResolver()

    def __call__(self, groups: Sequence[str], attr: Attribute) -> Attribute:
        return self.replace(groups, attr)

    def replace(self, groups: Sequence[str], attr: Attribute) -> Attribute:
        """
        Return the attribute to emit in place of ``attr``.

        Args:
            groups: Names of the groups ``attr`` is nested under
            attr: The attribute about to be written

        Returns:
            The replacement; the empty attribute means "drop it"
        """
        if attr.key in WELL_KNOWN_KEYS:
            return EMPTY if self.pretty_mode else attr

        message = as_error_message(attr.value)
        if message is None:
            return attr

        fields = [Attribute(MSG_KEY, message)]

        stack = as_stack_capture(attr.value)
        if stack is not None:
            fields.append(Attribute(TRACE_KEY, self.resolver.resolve(stack)))

        return Attribute.group(attr.key, *fields)
