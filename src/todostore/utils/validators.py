"""Input normalization for todo items.

The ``completed`` flag arrives from callers in many shapes (bool, number,
string, None) and is stored as INTEGER 0/1. ``coerce_completed`` maps any raw
value onto a three-valued ``Completion``; callers decide what UNSPECIFIED
means in their context (false on insert, keep-existing on update).

Functions:
- coerce_completed(value) -> Completion
- from_db_bool(value) -> bool
- validate_title(title) -> str
"""

from __future__ import annotations

import numbers
from enum import Enum
from typing import Any

from todostore.db.errors import TodoValidationError

_TRUE_STRINGS = frozenset({"true", "1"})
_FALSE_STRINGS = frozenset({"false", "0"})


class Completion(Enum):
    """Result of coercing a raw ``completed`` value."""

    TRUE = 1
    FALSE = 0
    UNSPECIFIED = None

    def to_db(self) -> int:
        """Storage value (0/1). UNSPECIFIED has none."""
        if self is Completion.UNSPECIFIED:
            raise ValueError("UNSPECIFIED has no storage value; resolve() it first")
        return self.value

    def resolve(self, default: int | bool) -> int:
        """Storage value, substituting ``default`` when unspecified."""
        if self is Completion.UNSPECIFIED:
            return 1 if default else 0
        return self.to_db()


def coerce_completed(value: Any) -> Completion:
    """Coerce a raw ``completed`` input.

    Args:
        value: bool, number, string or anything else

    Returns:
        Completion.TRUE / FALSE, or UNSPECIFIED for None and unrecognized input
    """
    # bool is an int subclass, check it first
    if value is True:
        return Completion.TRUE
    if value is False:
        return Completion.FALSE

    if isinstance(value, numbers.Number):
        # NaN counts as zero
        if value != value or value == 0:
            return Completion.FALSE
        return Completion.TRUE

    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_STRINGS:
            return Completion.TRUE
        if v in _FALSE_STRINGS:
            return Completion.FALSE

    return Completion.UNSPECIFIED


def from_db_bool(value: Any) -> bool:
    """Normalize a stored completed value (0/1 or legacy bool) to bool."""
    return value == 1


def validate_title(title: Any) -> str:
    """Check that ``title`` is a non-blank string.

    Returns:
        The title unchanged (not trimmed)

    Raises:
        TodoValidationError: If title is missing, not a string or blank
    """
    if not isinstance(title, str) or not title.strip():
        raise TodoValidationError("title is required")
    return title
