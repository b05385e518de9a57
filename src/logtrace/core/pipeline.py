"""
Logging pipeline wiring.

Hooks the attribute replacer into structlog's processor chain:

- Structured mode: every attribute goes through the replacer, then the record
  is rendered as a JSON line.
- Pretty mode: timestamp, level and message are printed in the console
  header; the remaining attributes go through the replacer and are appended.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from ..config import Settings
from .attributes import LEVEL_KEY, MESSAGE_KEY, TIME_KEY, Attribute, Group
from .exceptions import ConfigurationError
from .replacer import AttributeReplacer

# Keys the console renderer formats itself
_CONSOLE_KEYS = (TIME_KEY, LEVEL_KEY, MESSAGE_KEY, "exc_info")


def replace_event_dict(
    replacer: AttributeReplacer,
    event_dict: Dict[str, Any],
    groups: Sequence[str] = (),
) -> Dict[str, Any]:
    """
    Run ``replacer`` over every attribute of ``event_dict``.

    Nested dicts are treated as groups: the replacer is applied to their
    members with the group path extended. Suppressed attributes are dropped
    and rewritten groups are flattened back into dicts.
    """
    result: Dict[str, Any] = {}
    for key, value in event_dict.items():
        if isinstance(value, dict):
            result[key] = replace_event_dict(replacer, value, (*groups, key))
            continue

        replaced = replacer(groups, Attribute(key, value))
        if replaced.is_empty():
            continue

        if isinstance(replaced.value, Group):
            result[replaced.key] = replaced.value.to_dict()
        else:
            result[replaced.key] = replaced.value

    return result


class ReplaceAttributes:
    """structlog processor applying the attribute replacer to a record."""

    def __init__(self, replacer: AttributeReplacer) -> None:
        self.replacer = replacer

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        return replace_event_dict(self.replacer, event_dict)


class PrettyRenderer:
    """
    Console renderer for pretty mode.

    The well-known fields and ``exc_info`` are handed to the console renderer
    as-is; the replacer decides what happens to every other attribute.
    """

    def __init__(self, replacer: AttributeReplacer, colors: bool = True) -> None:
        self.replacer = replacer
        self._console = structlog.dev.ConsoleRenderer(colors=colors)

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        header = {
            key: event_dict[key]
            for key in _CONSOLE_KEYS
            if key in event_dict
        }
        attributes = replace_event_dict(self.replacer, event_dict)
        return self._console(logger, method_name, {**attributes, **header})


def build_processors(settings: Settings) -> List[Processor]:
    """Build the structlog processor chain for the configured mode."""
    pretty_mode = settings.logging.pretty_mode
    replacer = AttributeReplacer(pretty_mode=pretty_mode)

    processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if pretty_mode:
        processors.append(PrettyRenderer(replacer, colors=settings.logging.colors))
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            ReplaceAttributes(replacer),
            structlog.processors.JSONRenderer(),
        ])

    return processors


def configure_logging(settings: Settings, log_level: Optional[str] = None) -> None:
    """
    Configure structured logging for the application.

    Args:
        settings: Application settings; ``settings.logging`` selects the mode
        log_level: Overrides ``settings.log_level`` when given

    Raises:
        ConfigurationError: If the log level is not a known level name
    """
    level_name = (log_level or settings.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level '{level_name}'",
            details={"log_level": level_name},
        )

    # Configure stdlib logging but silence watchfiles spam
    logging.basicConfig(format="%(message)s", level=level, force=True)
    logging.getLogger("watchfiles").setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(settings),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
