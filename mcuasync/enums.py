"""Name and value lookups for enumerations."""

from __future__ import annotations

import enum
from typing import TypeVar

E = TypeVar("E", bound=enum.Enum)


def enum_str(value: enum.Enum) -> str:
    """The member's name, or an empty string when it has none."""
    return value.name or ""


def enum_cast(name: str, default: E) -> E:
    """The member of ``default``'s enumeration called ``name``, else ``default``."""
    member = type(default).__members__.get(name)
    return member if member is not None else default


def enum_values(enum_cls: type[E]) -> tuple[E, ...]:
    return tuple(enum_cls)


def enum_names(enum_cls: type[E]) -> tuple[str, ...]:
    return tuple(member.name for member in enum_cls)


def enum_entries(enum_cls: type[E]) -> tuple[tuple[E, str], ...]:
    return tuple((member, member.name) for member in enum_cls)


def enum_count(enum_cls: type[enum.Enum]) -> int:
    return len(enum_cls)