"""
Canonical identifier handling.

Users and jobs are keyed by positive integers. The canonical string form is the
plain decimal with no sign or leading zeros, so 7, "7" and "007" all map to "7".
"""
from __future__ import annotations

import re
from typing import Iterable, List

from core.notifications.errors import InvalidArgument

_DIGITS_RE = re.compile(r"^[0-9]{1,19}$")
_MAX_ID = 2**63 - 1


def canonical_id(value, field: str = "id") -> str:
    """Return the canonical string for `value` or raise InvalidArgument."""
    # bool is an int subclass; True must not become user 1
    if isinstance(value, bool):
        raise InvalidArgument(f"{field} must be a positive integer id, got {value!r}")

    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DIGITS_RE.match(value.strip()):
        number = int(value.strip())
    else:
        raise InvalidArgument(f"{field} must be a positive integer id, got {value!r}")

    if number <= 0 or number > _MAX_ID:
        raise InvalidArgument(f"{field} is out of range: {value!r}")
    return str(number)


def id_sort_key(identifier: str):
    # numeric order for canonical decimals without converting
    return len(identifier), identifier


def sorted_ids(identifiers: Iterable[str]) -> List[str]:
    return sorted(identifiers, key=id_sort_key)


__all__ = ["canonical_id", "id_sort_key", "sorted_ids"]
