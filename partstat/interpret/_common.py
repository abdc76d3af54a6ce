from __future__ import annotations

from typing import Any, Iterable, Optional

NA = "N/A"
NULL = "(null)"
INFINITE = "infinite"
UNLIMITED = "UNLIMITED"
NONE = "NONE"
YES = "yes"
NO = "no"


def any_none(_value: Iterable[Optional[Any]]) -> bool:
    for v in _value:
        if v is None:
            return True
    return False
