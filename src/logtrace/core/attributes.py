"""
Attribute data model.

An attribute is a single key/value pair of a structured log record. Values are
scalars, groups of nested attributes, or arbitrary objects handed over by the
caller.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Tuple

# Well-known record keys, as laid out by structlog's processor chain
TIME_KEY = "timestamp"
LEVEL_KEY = "level"
MESSAGE_KEY = "event"

WELL_KNOWN_KEYS = frozenset({TIME_KEY, LEVEL_KEY, MESSAGE_KEY})


@dataclass(frozen=True)
class Attribute:
    """Key/value pair of a log record. The empty attribute means "suppress"."""

    key: str = ""
    value: Any = None

    def is_empty(self) -> bool:
        return self.key == "" and self.value is None

    @classmethod
    def group(cls, key: str, *attrs: "Attribute") -> "Attribute":
        """Build an attribute whose value is a group of ``attrs``."""
        return cls(key=key, value=Group(attrs))


EMPTY = Attribute()


@dataclass(frozen=True)
class Group:
    """Ordered sequence of attributes. The group's own key lives on its parent."""

    attrs: Tuple[Attribute, ...] = ()

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.attrs)

    def __len__(self) -> int:
        return len(self.attrs)

    def keys(self) -> Tuple[str, ...]:
        return tuple(attr.key for attr in self.attrs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict, recursing into nested groups."""
        result: Dict[str, Any] = {}
        for attr in self.attrs:
            if isinstance(attr.value, Group):
                result[attr.key] = attr.value.to_dict()
            else:
                result[attr.key] = attr.value
        return result
