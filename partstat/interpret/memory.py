from __future__ import annotations

import re
from typing import NamedTuple, Optional

from partstat.interpret import _safe_convert

MB_PER_GB = 1000

AT_LEAST = "+"

_MEMORY_MB_REGEX_STRING = r"^([0-9]+)(\+?)$"
_MEMORY_MB_REGEX = re.compile(_MEMORY_MB_REGEX_STRING)


class MemoryValue(NamedTuple):
    """
    Per-node memory of a sinfo row in whole GB. The at_least marker is set when
    sinfo reports a range of sizes, e.g. "16000+".
    """

    gb: int
    at_least: bool

    def __str__(self) -> str:
        marker = AT_LEAST if self.at_least else ""
        return f"{self.gb}{marker}"

    @classmethod
    def from_string(cls, _v: str) -> Optional[MemoryValue]:
        """
        "16000" -> MemoryValue(16, False)
        "191000+" -> MemoryValue(191, True)
        """
        match = _MEMORY_MB_REGEX.match(_v)
        if not match:
            return None

        mb = _safe_convert.type_cast_int_unsafe_to_none(match.group(1))
        if mb is None:
            return None

        return cls(mb_to_gb(mb), match.group(2) == AT_LEAST)


def mb_to_gb(_mb: int) -> int:
    return _mb // MB_PER_GB
